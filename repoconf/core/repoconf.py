from __future__ import annotations

"""Loaded repository files and the repository sections they declare.

:class:`RepoConfs` owns an ordered list of :class:`RepoFile` objects (one per
parsed ``.repo`` file) and an ordered list of :class:`RepoConf` entries (one
per section). Entries are looked up by object, never by name: two files may
both declare ``[updates]`` and both entries coexist.

Typical use::

    repos = RepoConfs()
    repos.load_dir("/etc/yum.repos.d")
    for repo in repos:
        if repo.get(options.ENABLED):
            print(repo.id, repo.get(options.BASEURL))
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, TypeVar, Union

from repoconf.config import ConfigManager

from .exceptions import BadArgumentError, KeyFileError, NotSetError, OptionValueError, RepoFileError
from .keyfile import KeyFile
from .models import RepoSettings
from .multiline import load_multiline_key_file
from .options import Option, is_registered

logger = logging.getLogger(__name__)

__all__ = ["RepoFile", "RepoConf", "RepoConfs", "REPO_FILE_SUFFIX"]

T = TypeVar("T")

REPO_FILE_SUFFIX = ".repo"

PathLike = Union[str, "os.PathLike[str]"]


class RepoFile:
    """One parsed repository file and the key file holding its content."""

    def __init__(self, path: PathLike, keyfile: KeyFile) -> None:
        self.path = Path(path)
        self.keyfile = keyfile

    def save(self, path: Optional[PathLike] = None) -> Path:
        """Write the key file to *path* (default: where it was loaded from).

        The text is written to a sibling temporary file first and then moved
        over the target.

        Raises:
            RepoFileError: The file cannot be written
        """
        target = Path(path) if path is not None else self.path
        tmp = target.with_name(target.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as fh:
                fh.write(self.keyfile.to_data())
            tmp.replace(target)
        except OSError as exc:
            raise RepoFileError(
                f"Cannot write {target}: {exc}", path=str(target), cause=exc
            ) from exc
        logger.info("Saved repository file: %s", target)
        return target

    def __repr__(self) -> str:
        return f"<RepoFile {str(self.path)!r}>"


class RepoConf:
    """A single repository section inside a :class:`RepoFile`."""

    def __init__(self, repofile: RepoFile, repo_id: str) -> None:
        self._file: Optional[RepoFile] = repofile
        self._id = repo_id

    @property
    def id(self) -> str:
        """Section name; read only."""
        return self._id

    @property
    def file(self) -> RepoFile:
        """The owning file.

        Raises:
            BadArgumentError: The file was removed from its store
        """
        if self._file is None:
            raise BadArgumentError(
                f"No keyfile available for repo '{self._id}'", option="id"
            )
        return self._file

    @property
    def is_attached(self) -> bool:
        return self._file is not None

    def _detach(self) -> None:
        self._file = None

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------
    def get(self, option: Option[T]) -> T:
        """Return the value of *option* for this repository.

        Raises:
            NotSetError: The key is absent and the option has no default
            OptionValueError: The stored text is invalid for the option
            KeyFileError: The section can no longer be read
            BadArgumentError: *option* is not a registered option, or the
                entry is detached from its file
        """
        self._check_option(option)
        repofile = self.file
        try:
            return option.read(repofile.keyfile, self._id)
        except configparser.NoOptionError as exc:
            if option.has_default:
                return option.default  # type: ignore[return-value]
            raise NotSetError(
                f"Value of option '{option.key}' is not set",
                path=str(repofile.path),
                option=option.key,
                cause=exc,
            ) from exc
        except configparser.Error as exc:
            raise KeyFileError(
                f"Cannot get value of option '{option.key}': {exc}",
                path=str(repofile.path),
                option=option.key,
                cause=exc,
            ) from exc
        except OptionValueError as exc:
            raise OptionValueError(
                exc.message,
                path=str(repofile.path),
                option=option.key,
                cause=exc.cause or exc,
            ) from exc

    def set(self, option: Option[T], value: Optional[T]) -> None:
        """Store *value* for *option*.

        ``None`` (and an empty list for list options) removes the key, so an
        unset value and an explicitly empty one read back the same way.

        Raises:
            BadOptionArgumentError: *option* is read only (``id``)
            BadArgumentError: *value* has the wrong type or range, *option*
                is not registered, or the entry is detached
        """
        self._check_option(option)
        repofile = self.file
        option.write(repofile.keyfile, self._id, value)
        logger.debug("Set %s.%s in %s", self._id, option.key, repofile.path)

    def snapshot(self) -> RepoSettings:
        """Read all options at once, filling unset ones with fallbacks."""
        return RepoSettings.from_repo(self)

    @staticmethod
    def _check_option(option: object) -> None:
        if not is_registered(option):
            raise BadArgumentError(f"Unknown option {option!r}")

    def __repr__(self) -> str:
        source = str(self._file.path) if self._file is not None else "detached"
        return f"<RepoConf {self._id!r} ({source})>"


class RepoConfs:
    """Ordered collection of loaded repository files and their sections.

    Not thread safe; callers serialise access.
    """

    def __init__(self) -> None:
        self._files: List[RepoFile] = []
        self._repos: List[RepoConf] = []
        self._logger = logging.getLogger(f"{__name__}.RepoConfs")

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def files(self) -> List[RepoFile]:
        """Loaded files in load order (a copy)."""
        return list(self._files)

    @property
    def repos(self) -> List[RepoConf]:
        """Repository entries in file order, then section order (a copy)."""
        return list(self._repos)

    def __iter__(self) -> Iterator[RepoConf]:
        return iter(list(self._repos))

    def __len__(self) -> int:
        return len(self._repos)

    def find(self, repo_id: str) -> List[RepoConf]:
        """All entries named *repo_id*, in load order."""
        return [repo for repo in self._repos if repo.id == repo_id]

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def parse(self, path: PathLike) -> List[RepoConf]:
        """Load one repository file and register its sections.

        The store is left untouched when reading or parsing fails.

        Returns:
            The entries created for this file

        Raises:
            RepoFileError: The file cannot be read
            KeyFileError: The file is not a valid key file
        """
        keyfile = load_multiline_key_file(path)

        repofile = RepoFile(path, keyfile)
        added = [RepoConf(repofile, group) for group in keyfile.groups()]
        self._files.append(repofile)
        self._repos.extend(added)

        self._logger.debug("Loaded %s: %s", repofile.path,
                           ", ".join(repo.id for repo in added) or "no sections")
        return added

    def load_dir(self, path: PathLike, suffix: str = REPO_FILE_SUFFIX) -> List[RepoConf]:
        """Parse every entry of *path* whose name ends with *suffix*.

        Entries are visited in the order the operating system lists them,
        not sorted. The first file that fails aborts the call; files parsed
        before it stay loaded.

        Returns:
            The entries created by this call

        Raises:
            KeyFileError: *path* cannot be opened, or a file does not parse
            RepoFileError: A matching file cannot be read
        """
        added: List[RepoConf] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if not entry.name.endswith(suffix):
                        continue
                    try:
                        added.extend(self.parse(entry.path))
                    except (RepoFileError, KeyFileError) as exc:
                        self._logger.error("Failed to load repository file %s: %s",
                                           entry.path, exc)
                        raise
        except OSError as exc:
            raise KeyFileError(
                f"Cannot open dir {path}: {exc}", path=str(path), cause=exc
            ) from exc

        self._logger.info("Loaded %d repositories from %s", len(added), path)
        return added

    def load_configured_dirs(self) -> List[RepoConf]:
        """Load every repository directory listed in the ``repoconf`` settings.

        Directories that do not exist are skipped.
        """
        settings = ConfigManager().get_repoconf_settings()
        suffix = settings.get("repo_file_suffix") or REPO_FILE_SUFFIX
        added: List[RepoConf] = []
        for directory in settings.get("reposdir") or []:
            if not Path(directory).is_dir():
                self._logger.info("Skipping missing repository directory: %s", directory)
                continue
            added.extend(self.load_dir(directory, suffix=suffix))
        return added

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def remove_file(self, repofile: RepoFile) -> List[RepoConf]:
        """Drop *repofile* and detach every entry it declared.

        Raises:
            BadArgumentError: *repofile* is not part of this store
        """
        if not any(item is repofile for item in self._files):
            raise BadArgumentError(f"{repofile!r} is not loaded in this store")

        removed = [repo for repo in self._repos if repo._file is repofile]
        self._repos = [repo for repo in self._repos if repo._file is not repofile]
        self._files = [item for item in self._files if item is not repofile]
        for repo in removed:
            repo._detach()

        self._logger.debug("Removed %s (%d repositories)", repofile.path, len(removed))
        return removed

    def save(self) -> List[Path]:
        """Write every loaded file back to its own path."""
        return [repofile.save() for repofile in self._files]
