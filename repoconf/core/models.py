from __future__ import annotations

"""Resolved, read-only view of one repository section.

:class:`RepoSettings` holds every option of a section at once, with unset
options replaced by their default or by the library fallback below, which
is what a download client would use when the file says nothing.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .exceptions import NotSetError
from .options import OPTIONS, IpResolve, Option, OptionKind

if TYPE_CHECKING:
    from .repoconf import RepoConf

__all__ = ["RepoSettings", "FALLBACK_VALUES"]

FALLBACK_VALUES: Dict[str, Any] = {
    "bandwidth": 0,
    "ip_resolve": IpResolve.WHATEVER,
    "metadata_expire": 60 * 60 * 48,
    "cost": 1000,
    "priority": 99,
}


def _fallback(option: Option) -> Any:
    if option.has_default:
        return option.default
    if option.key in FALLBACK_VALUES:
        return FALLBACK_VALUES[option.key]
    if option.kind is OptionKind.LIST:
        return []
    if option.kind is OptionKind.BOOL:
        return False
    return None


@dataclass(frozen=True)
class RepoSettings:
    """All options of one repository section, unset ones filled in."""

    id: str
    name: Optional[str]
    enabled: bool
    baseurl: List[str]
    mirrorlist: Optional[str]
    metalink: Optional[str]
    mediaid: Optional[str]
    gpgkey: List[str]
    gpgcakey: List[str]
    exclude: List[str]
    include: List[str]
    fastestmirror: bool
    proxy: Optional[str]
    proxy_username: Optional[str]
    proxy_password: Optional[str]
    username: Optional[str]
    password: Optional[str]
    gpgcheck: bool
    repo_gpgcheck: bool
    enablegroups: bool
    bandwidth: int
    throttle: Optional[str]
    ip_resolve: IpResolve
    metadata_expire: int
    cost: int
    priority: int
    sslcacert: Optional[str]
    sslverify: bool
    sslclientcert: Optional[str]
    sslclientkey: Optional[str]
    deltarepobaseurl: List[str]

    @classmethod
    def from_repo(cls, repo: "RepoConf") -> "RepoSettings":
        """Read every option of *repo*.

        Raises:
            OptionValueError: A configured value is invalid for its option
        """
        values: Dict[str, Any] = {}
        for option in OPTIONS:
            try:
                values[option.key] = repo.get(option)
            except NotSetError:
                values[option.key] = _fallback(option)
        return cls(**values)

    def has_source(self) -> bool:
        """True if at least one way to locate repository metadata is set."""
        return bool(self.baseurl or self.mirrorlist or self.metalink)
