from __future__ import annotations

"""Typed option registry for repository sections.

Every recognised ``.repo`` key is described by one :class:`Option` object
that knows its key, its value kind, its optional default, and how to read
and write the value through a :class:`~repoconf.core.keyfile.KeyFile`.
Options are generic in their Python value type, so
``repo.get(options.COST)`` is an ``int`` and ``repo.set(options.ENABLED,
"yes")`` is rejected by a type checker as well as at runtime.

The set of options is closed: :data:`OPTIONS` lists all of them in their
canonical order and :func:`get_option` resolves a key name.
"""

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from .exceptions import (
    BadArgumentError,
    BadOptionArgumentError,
    OptionValueError,
    RepoConfError,
)
from .keyfile import KeyFile
from .units import INT64_MAX, INT64_MIN, UINT64_MAX, parse_bandwidth, parse_interval

T = TypeVar("T")

INT32_MAX = 2 ** 31 - 1
INT32_MIN = -(2 ** 31)

TRUE_STRINGS = frozenset({"1", "yes", "true"})

_LIST_SPLIT_RE = re.compile(r"[ ,;]")
_INTEGER_RE = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)


class IpResolve(Enum):
    """Address family used when resolving mirror host names."""

    V4 = "ipv4"
    V6 = "ipv6"
    WHATEVER = "whatever"


class OptionKind(Enum):
    """Value kind bound to an option."""

    ID = "id"
    TEXT = "text"
    LIST = "list"
    BOOL = "bool"
    INT32 = "int32"
    INTERVAL = "interval"      # signed 64-bit seconds
    BANDWIDTH = "bandwidth"    # unsigned 64-bit bytes
    IP_RESOLVE = "ip_resolve"


class Option(ABC, Generic[T]):
    """A single recognised key of a repository section.

    Subclasses implement :meth:`decode` (raw text to value),
    :meth:`validate` (caller-supplied value check) and :meth:`store`
    (write through the key file's typed setter).
    """

    kind: ClassVar[OptionKind]
    read_only: ClassVar[bool] = False

    def __init__(self, key: str, default: Optional[T] = None) -> None:
        self.key = key
        self.default = default

    @property
    def has_default(self) -> bool:
        return self.default is not None

    # -------------------------------------------------------------------------
    # Access through a key file
    # -------------------------------------------------------------------------

    def read(self, keyfile: KeyFile, group: str) -> T:
        """Read and decode the value.

        Backend lookup errors (:mod:`configparser` ``NoSectionError`` /
        ``NoOptionError``) propagate unchanged.
        """
        return self.decode(keyfile.get_string(group, self.key))

    def write(self, keyfile: KeyFile, group: str, value: Optional[T]) -> None:
        """Validate and store *value*; ``None`` or an empty value removes the key."""
        if value is None or self.is_empty(value):
            keyfile.remove_key(group, self.key)
            return
        self.store(keyfile, group, self.validate(value))

    def is_empty(self, value: T) -> bool:
        return False

    # -------------------------------------------------------------------------
    # Kind specific behaviour
    # -------------------------------------------------------------------------

    @abstractmethod
    def decode(self, raw: str) -> T:
        """Convert stored text to a value, raising :class:`OptionValueError`."""

    @abstractmethod
    def validate(self, value: object) -> T:
        """Check a caller-supplied value, raising :class:`BadArgumentError`."""

    @abstractmethod
    def store(self, keyfile: KeyFile, group: str, value: T) -> None:
        """Write an already validated value."""

    def _bad_type(self, value: object, expected: str) -> BadArgumentError:
        return BadArgumentError(
            f"Option '{self.key}' expects {expected}, got {type(value).__name__}",
            option=self.key,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key!r}>"


class IdOption(Option[str]):
    """The section name itself; readable, never writable."""

    kind = OptionKind.ID
    read_only = True

    def __init__(self) -> None:
        super().__init__("id")

    def read(self, keyfile: KeyFile, group: str) -> str:
        return group

    def write(self, keyfile: KeyFile, group: str, value: Optional[str]) -> None:
        raise BadOptionArgumentError("ID is read only option", option=self.key)

    def decode(self, raw: str) -> str:
        return raw

    def validate(self, value: object) -> str:
        raise BadOptionArgumentError("ID is read only option", option=self.key)

    def store(self, keyfile: KeyFile, group: str, value: str) -> None:
        raise BadOptionArgumentError("ID is read only option", option=self.key)


class TextOption(Option[str]):
    kind = OptionKind.TEXT

    def decode(self, raw: str) -> str:
        return raw

    def validate(self, value: object) -> str:
        if not isinstance(value, str):
            raise self._bad_type(value, "a string")
        # Saved text is reloaded with tabs turned into spaces and values
        # stripped
        if value and value.splitlines() != [value]:
            raise BadArgumentError(
                f"Option '{self.key}' cannot contain a line break", option=self.key
            )
        if "\t" in value or value != value.strip():
            raise BadArgumentError(
                f"Option '{self.key}' cannot contain tabs or leading/trailing "
                f"whitespace",
                option=self.key,
            )
        return value

    def store(self, keyfile: KeyFile, group: str, value: str) -> None:
        keyfile.set_string(group, self.key, value)


class ListOption(Option[List[str]]):
    """Space, comma or semicolon separated list of strings."""

    kind = OptionKind.LIST

    def decode(self, raw: str) -> List[str]:
        items = (item.strip() for item in _LIST_SPLIT_RE.split(raw))
        return [item for item in items if item]

    def is_empty(self, value: List[str]) -> bool:
        return (isinstance(value, Sequence)
                and not isinstance(value, (str, bytes))
                and len(value) == 0)

    def validate(self, value: object) -> List[str]:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise self._bad_type(value, "a list of strings")
        items: List[str] = []
        for item in value:
            if not isinstance(item, str):
                raise self._bad_type(item, "a list of strings")
            if not item or any(ch.isspace() for ch in item) or _LIST_SPLIT_RE.search(item):
                raise BadArgumentError(
                    f"Option '{self.key}' item {item!r} is empty or contains a "
                    f"list separator",
                    option=self.key,
                )
            items.append(item)
        return items

    def store(self, keyfile: KeyFile, group: str, value: List[str]) -> None:
        keyfile.set_string_list(group, self.key, value)


class BoolOption(Option[bool]):
    """``1``, ``yes`` and ``true`` (any case) read as True, anything else False."""

    kind = OptionKind.BOOL

    def decode(self, raw: str) -> bool:
        return raw.lower() in TRUE_STRINGS

    def validate(self, value: object) -> bool:
        if not isinstance(value, bool):
            raise self._bad_type(value, "a bool")
        return value

    def store(self, keyfile: KeyFile, group: str, value: bool) -> None:
        keyfile.set_boolean(group, self.key, value)


class _IntegerOption(Option[int]):
    minimum: ClassVar[int]
    maximum: ClassVar[int]

    def validate(self, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._bad_type(value, "an int")
        if not self.minimum <= value <= self.maximum:
            raise BadArgumentError(
                f"Option '{self.key}' value {value} is out of range "
                f"[{self.minimum}, {self.maximum}]",
                option=self.key,
            )
        return value

    def store(self, keyfile: KeyFile, group: str, value: int) -> None:
        keyfile.set_integer(group, self.key, value)


class Int32Option(_IntegerOption):
    kind = OptionKind.INT32
    minimum = INT32_MIN
    maximum = INT32_MAX

    def decode(self, raw: str) -> int:
        if not _INTEGER_RE.fullmatch(raw):
            raise OptionValueError(
                f"Value '{raw}' of option '{self.key}' is not an integer",
                option=self.key,
            )
        value = int(raw)
        if not self.minimum <= value <= self.maximum:
            raise OptionValueError(
                f"Value '{raw}' of option '{self.key}' is out of 32-bit range",
                option=self.key,
            )
        return value


class IntervalOption(_IntegerOption):
    """Seconds; stored text may carry an ``s``/``m``/``h``/``d`` unit."""

    kind = OptionKind.INTERVAL
    minimum = INT64_MIN
    maximum = INT64_MAX

    def decode(self, raw: str) -> int:
        try:
            return parse_interval(raw)
        except RepoConfError as exc:
            raise OptionValueError(exc.message, option=self.key, cause=exc) from exc


class BandwidthOption(_IntegerOption):
    """Bytes; stored text may carry a ``k``/``m``/``g`` unit."""

    kind = OptionKind.BANDWIDTH
    minimum = 0
    maximum = UINT64_MAX

    def decode(self, raw: str) -> int:
        try:
            return parse_bandwidth(raw)
        except RepoConfError as exc:
            raise OptionValueError(exc.message, option=self.key, cause=exc) from exc


class IpResolveOption(Option[IpResolve]):
    kind = OptionKind.IP_RESOLVE

    def decode(self, raw: str) -> IpResolve:
        try:
            return IpResolve(raw.lower())
        except ValueError as exc:
            raise OptionValueError(
                f"Unknown ip_resolve value '{raw}'", option=self.key, cause=exc
            ) from exc

    def validate(self, value: object) -> IpResolve:
        if not isinstance(value, IpResolve):
            raise self._bad_type(value, "an IpResolve")
        return value

    def store(self, keyfile: KeyFile, group: str, value: IpResolve) -> None:
        keyfile.set_string(group, self.key, value.value)


# -------------------------------------------------------------------------
# The closed option set
# -------------------------------------------------------------------------

ID = IdOption()
NAME = TextOption("name")
ENABLED = BoolOption("enabled", default=True)
BASEURL = ListOption("baseurl")
MIRRORLIST = TextOption("mirrorlist")
METALINK = TextOption("metalink")
MEDIAID = TextOption("mediaid")
GPGKEY = ListOption("gpgkey")
GPGCAKEY = ListOption("gpgcakey")
EXCLUDE = ListOption("exclude")
INCLUDE = ListOption("include")
FASTESTMIRROR = BoolOption("fastestmirror")
PROXY = TextOption("proxy")
PROXY_USERNAME = TextOption("proxy_username")
PROXY_PASSWORD = TextOption("proxy_password")
USERNAME = TextOption("username")
PASSWORD = TextOption("password")
GPGCHECK = BoolOption("gpgcheck")
REPO_GPGCHECK = BoolOption("repo_gpgcheck")
ENABLEGROUPS = BoolOption("enablegroups", default=True)
BANDWIDTH = BandwidthOption("bandwidth")
THROTTLE = TextOption("throttle")
IP_RESOLVE = IpResolveOption("ip_resolve")
METADATA_EXPIRE = IntervalOption("metadata_expire")
COST = Int32Option("cost")
PRIORITY = Int32Option("priority")
SSLCACERT = TextOption("sslcacert")
SSLVERIFY = BoolOption("sslverify", default=True)
SSLCLIENTCERT = TextOption("sslclientcert")
SSLCLIENTKEY = TextOption("sslclientkey")
DELTAREPOBASEURL = ListOption("deltarepobaseurl")

OPTIONS: Tuple[Option, ...] = (
    ID,
    NAME,
    ENABLED,
    BASEURL,
    MIRRORLIST,
    METALINK,
    MEDIAID,
    GPGKEY,
    GPGCAKEY,
    EXCLUDE,
    INCLUDE,
    FASTESTMIRROR,
    PROXY,
    PROXY_USERNAME,
    PROXY_PASSWORD,
    USERNAME,
    PASSWORD,
    GPGCHECK,
    REPO_GPGCHECK,
    ENABLEGROUPS,
    BANDWIDTH,
    THROTTLE,
    IP_RESOLVE,
    METADATA_EXPIRE,
    COST,
    PRIORITY,
    SSLCACERT,
    SSLVERIFY,
    SSLCLIENTCERT,
    SSLCLIENTKEY,
    DELTAREPOBASEURL,
)

_OPTIONS_BY_KEY: Dict[str, Option] = {option.key: option for option in OPTIONS}
assert len(_OPTIONS_BY_KEY) == len(OPTIONS), "duplicate option key"


def get_option(key: str) -> Option:
    """Return the registered option for *key*.

    Raises:
        BadArgumentError: *key* is not a recognised option
    """
    try:
        return _OPTIONS_BY_KEY[key]
    except KeyError:
        raise BadArgumentError(f"Unknown option '{key}'", option=key) from None


def is_registered(option: object) -> bool:
    """True if *option* is one of the objects in :data:`OPTIONS`."""
    return isinstance(option, Option) and _OPTIONS_BY_KEY.get(option.key) is option
