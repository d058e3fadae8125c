"""Top-level package for repoconf.

Reads and writes ``.repo`` files describing package repositories and gives
typed access to their options. Callers should depend on the names exported
here rather than importing internal modules directly.
"""

from .core import (
    OPTIONS,
    BadArgumentError,
    BadOptionArgumentError,
    IpResolve,
    KeyFileError,
    NotSetError,
    OptionValueError,
    RepoConf,
    RepoConfError,
    RepoConfs,
    RepoFile,
    RepoFileError,
    RepoSettings,
    get_option,
    options,
)

__all__: list[str] = [
    "RepoConfs",
    "RepoConf",
    "RepoFile",
    "RepoSettings",
    "options",
    "OPTIONS",
    "IpResolve",
    "get_option",
    "RepoConfError",
    "RepoFileError",
    "KeyFileError",
    "BadArgumentError",
    "OptionValueError",
    "BadOptionArgumentError",
    "NotSetError",
]
