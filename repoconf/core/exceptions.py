from __future__ import annotations

"""Repository configuration exception classes.

Every failure raised by the package derives from :class:`RepoConfError` so
callers can catch the whole family at once, while the concrete subclass
names a stable error category (unreadable file, malformed key file, bad
call argument, invalid value, read-only option, unset option).
"""

from typing import Optional


class RepoConfError(Exception):
    """Base exception for all repository configuration errors.

    Carries the offending file path and option key when they are known,
    and the lower-level exception that triggered it.
    """

    def __init__(self, message: str, path: Optional[str] = None,
                 option: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.option = option
        self.cause = cause

    def __str__(self) -> str:
        if self.path:
            return f"[{self.path}] {self.message}"
        return self.message


class RepoFileError(RepoConfError):
    """Raised when a repository file cannot be read or written."""
    pass


class KeyFileError(RepoConfError):
    """Raised when key file content is malformed or the backend fails.

    This covers grammar errors in the normalized text, directories that
    cannot be opened, and lookups against a section that no longer exists.
    """
    pass


class BadArgumentError(RepoConfError):
    """Raised when a call receives a missing or ill-typed argument."""
    pass


class OptionValueError(RepoConfError, ValueError):
    """Raised when a configured value is present but invalid for its kind.

    Also a :class:`ValueError`, so generic value handling keeps working.
    """
    pass


class BadOptionArgumentError(RepoConfError):
    """Raised when writing to a read-only option such as the repo id."""
    pass


class NotSetError(RepoConfError):
    """Raised when an option without a default is absent from its section.

    Lets callers tell "never configured" apart from a corrupt or
    unreadable value (:class:`KeyFileError`, :class:`OptionValueError`).
    """
    pass
