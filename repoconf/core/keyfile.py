from __future__ import annotations

"""Ordered key file storage backed by :mod:`configparser`.

:class:`KeyFile` is the storage contract the rest of the package relies on:
parse from text, enumerate groups (sections) in declaration order, and query
or mutate values by group and key. Lookups surface
:class:`configparser.NoSectionError` / :class:`configparser.NoOptionError`
unchanged so callers can tell a missing key from a missing group.

Grammar accepted: ``[group]`` headers, ``key = value`` lines and ``#``
comments. Continuation lines must already have been folded by
:func:`repoconf.core.multiline.normalize_multiline`.

Comment lines are kept and written back by :meth:`KeyFile.to_data`, each
above the group header or key it preceded in the parsed text. Comments of a
removed key are dropped together with the key; blank lines are not kept.
"""

import configparser
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .exceptions import KeyFileError

logger = logging.getLogger(__name__)

__all__ = ["KeyFile", "LIST_SEPARATOR"]

LIST_SEPARATOR = ";"

# A header line can never contain a newline, so no file can declare this
# group and ConfigParser's implicit DEFAULT inheritance stays unused.
_NO_DEFAULT_SECTION = "\n"

COMMENT_PREFIX = "#"

# (group, None) anchors comments above a header, (group, key) above a key
_Anchor = Tuple[str, Optional[str]]


class KeyFile:
    """Key/value file grouped by section, preserving declaration order."""

    def __init__(self) -> None:
        self._parser = self._new_parser()
        self._comments: Dict[_Anchor, List[str]] = {}
        self._trailing_comments: List[str] = []

    @staticmethod
    def _new_parser() -> configparser.ConfigParser:
        parser = configparser.ConfigParser(
            interpolation=None,
            strict=False,
            delimiters=("=",),
            comment_prefixes=("#",),
            empty_lines_in_values=False,
            default_section=_NO_DEFAULT_SECTION,
        )
        # Keys are case sensitive
        parser.optionxform = str  # type: ignore[assignment, method-assign]
        return parser

    # ------------------------------------------------------------------
    # Loading / serialising
    # ------------------------------------------------------------------
    @classmethod
    def load_from_data(cls, data: str, source: str = "<string>") -> "KeyFile":
        """Parse *data* into a new key file.

        Raises:
            KeyFileError: If *data* does not follow the key file grammar
        """
        keyfile = cls()
        try:
            keyfile._parser.read_string(data, source=source)
        except configparser.Error as exc:
            raise KeyFileError(
                f"Cannot parse key file {source}: {exc}",
                path=source,
                cause=exc,
            ) from exc
        keyfile._collect_comments(data)
        logger.debug("Parsed key file %s (%d groups, %d comment lines)", source,
                     len(keyfile.groups()), keyfile._count_comments())
        return keyfile

    def to_data(self) -> str:
        """Serialise to strict ``key = value`` text, comments included."""
        lines: List[str] = []
        for group in self._parser.sections():
            lines.extend(self._comments.get((group, None), []))
            lines.append(f"[{group}]")
            section = self._parser[group]
            for key in self._parser.options(group):
                lines.extend(self._comments.get((group, key), []))
                lines.append(f"{key} = {section[key]}")
            lines.append("")
        lines.extend(self._trailing_comments)
        if lines and lines[-1] != "":
            lines.append("")
        return "\n".join(lines)

    def _collect_comments(self, data: str) -> None:
        """Attach every comment line of *data* to the entry that follows it.

        *data* has already been accepted by the parser, so each other
        non-blank line is either a group header or a ``key = value`` line.
        """
        pending: List[str] = []
        group: Optional[str] = None
        for line in data.split("\n"):
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith(COMMENT_PREFIX):
                pending.append(stripped)
                continue
            header = self._parser.SECTCRE.match(stripped)
            if header:
                group = header.group("header")
                anchor: _Anchor = (group, None)
            elif group is not None:
                anchor = (group, stripped.split("=", 1)[0].strip())
            else:
                continue
            if pending:
                self._comments.setdefault(anchor, []).extend(pending)
                pending = []
        self._trailing_comments = pending

    def _count_comments(self) -> int:
        return (sum(len(block) for block in self._comments.values())
                + len(self._trailing_comments))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def groups(self) -> List[str]:
        return self._parser.sections()

    def has_group(self, group: str) -> bool:
        return self._parser.has_section(group)

    def has_key(self, group: str, key: str) -> bool:
        return self._parser.has_option(group, key)

    def get_string(self, group: str, key: str) -> str:
        """Return the raw value of *key* in *group*.

        Raises:
            configparser.NoSectionError: *group* does not exist
            configparser.NoOptionError: *key* is not set in *group*
        """
        return self._parser.get(group, key)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set_string(self, group: str, key: str, value: str) -> None:
        """Store *value*, creating *group* when needed."""
        if not self._parser.has_section(group):
            self._parser.add_section(group)
        self._parser.set(group, key, value)

    def set_string_list(self, group: str, key: str, values: Iterable[str]) -> None:
        self.set_string(group, key, LIST_SEPARATOR.join(values))

    def set_boolean(self, group: str, key: str, value: bool) -> None:
        self.set_string(group, key, "true" if value else "false")

    def set_integer(self, group: str, key: str, value: int) -> None:
        self.set_string(group, key, str(value))

    def remove_key(self, group: str, key: str) -> None:
        """Drop *key* from *group*; missing groups or keys are ignored."""
        if self._parser.has_section(group):
            self._parser.remove_option(group, key)
            self._comments.pop((group, key), None)
