from __future__ import annotations

"""Metalink records referenced by a repository's ``metalink`` option.

Plain data only; fetching and parsing metalink documents happens in the
download layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

__all__ = ["MetalinkHash", "MetalinkUrl", "Metalink"]


@dataclass
class MetalinkHash:
    """Single checksum of the target file."""

    type: str   # "md5", "sha1", "sha256", ...
    value: str


@dataclass
class MetalinkUrl:
    """Single mirror URL of the target file."""

    url: str
    protocol: Optional[str] = None   # "http", "ftp", "rsync", ...
    type: Optional[str] = None
    location: Optional[str] = None   # ISO 3166-1 alpha-2 code
    preference: int = 0              # 1-100, higher is better


@dataclass
class Metalink:
    """Target file description: name, size, checksums and mirrors."""

    filename: Optional[str] = None
    timestamp: int = 0
    size: int = 0
    hashes: List[MetalinkHash] = field(default_factory=list)
    urls: List[MetalinkUrl] = field(default_factory=list)

    def urls_by_preference(self) -> List[MetalinkUrl]:
        """Mirrors ordered best first; equal preferences keep document order."""
        return sorted(self.urls, key=lambda url: url.preference, reverse=True)

    def get_hash(self, hash_type: str) -> Optional[str]:
        """Return the checksum value for *hash_type*, if listed."""
        for item in self.hashes:
            if item.type == hash_type:
                return item.value
        return None
