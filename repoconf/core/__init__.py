from __future__ import annotations

"""Repository configuration core.

This package provides:
- continuation-line normalisation of ``.repo`` files
- the key file storage backend
- unit converters for intervals and bandwidths
- the typed option registry and per-repository accessor
- the ordered store of loaded files and repositories
"""

from . import options
from .exceptions import (
    RepoConfError,
    RepoFileError,
    KeyFileError,
    BadArgumentError,
    OptionValueError,
    BadOptionArgumentError,
    NotSetError,
)
from .keyfile import KeyFile
from .metalink import Metalink, MetalinkHash, MetalinkUrl
from .models import RepoSettings
from .multiline import load_multiline_key_file, normalize_multiline
from .options import IpResolve, Option, OptionKind, OPTIONS, get_option
from .repoconf import REPO_FILE_SUFFIX, RepoConf, RepoConfs, RepoFile
from .units import parse_bandwidth, parse_interval

__all__ = [
    # Store and entries
    "RepoConfs",
    "RepoConf",
    "RepoFile",
    "RepoSettings",
    "REPO_FILE_SUFFIX",

    # Options
    "options",
    "Option",
    "OptionKind",
    "IpResolve",
    "OPTIONS",
    "get_option",

    # Parsing helpers
    "KeyFile",
    "normalize_multiline",
    "load_multiline_key_file",
    "parse_interval",
    "parse_bandwidth",

    # Metalink records
    "Metalink",
    "MetalinkHash",
    "MetalinkUrl",

    # Exceptions
    "RepoConfError",
    "RepoFileError",
    "KeyFileError",
    "BadArgumentError",
    "OptionValueError",
    "BadOptionArgumentError",
    "NotSetError",
]
