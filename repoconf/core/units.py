from __future__ import annotations

"""Unit-suffixed numeric converters for repository options.

``metadata_expire`` takes a time interval (``90``, ``30m``, ``2h``, ``1d``)
and ``bandwidth`` a byte count (``512k``, ``10M``, ``1g``). Both share one
parsing skeleton: a locale-independent decimal magnitude followed by at most
one case-insensitive unit character.
"""

import math
import re
from typing import Dict, Union

from .exceptions import BadArgumentError, OptionValueError

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "UINT64_MAX",
    "INTERVAL_UNITS",
    "BANDWIDTH_UNITS",
    "parse_interval",
    "parse_bandwidth",
]

INT64_MAX = 2 ** 63 - 1
INT64_MIN = -(2 ** 63)
UINT64_MAX = 2 ** 64 - 1

INTERVAL_UNITS: Dict[str, int] = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 60 * 60 * 24,
}

BANDWIDTH_UNITS: Dict[str, int] = {
    "k": 1024,
    "m": 1024 * 1024,
    "g": 1024 * 1024 * 1024,
}

# Same prefix strtod() would consume, minus hex floats and inf/nan literals.
_MAGNITUDE_RE = re.compile(
    r"\s*(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)
_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)


def _parse_magnitude(text: str, units: Dict[str, int], what: str,
                     target: str) -> Union[int, float]:
    """Return ``magnitude * unit`` for *text*, before any truncation.

    Integer magnitudes stay exact; anything with a fraction or exponent is
    computed in floating point.
    """
    match = _MAGNITUDE_RE.match(text)
    if match is None:
        raise OptionValueError(f"Couldn't convert '{text}' to {target}")

    number = match.group("number")
    exact = _INTEGER_RE.fullmatch(number) is not None
    magnitude: Union[int, float] = int(number) if exact else float(number)
    if not exact and math.isinf(magnitude):
        raise OptionValueError(f"Too big {what} value '{text}'")

    remainder = text[match.end():]
    multiplier = 1
    if remainder:
        unit = remainder.lower()
        if len(remainder) != 1 or unit not in units:
            raise OptionValueError(f"Unknown {what} unit '{remainder}'")
        multiplier = units[unit]

    value = magnitude * multiplier
    if not exact and math.isinf(value):
        raise OptionValueError(f"Too big {what} value '{text}'")
    return value


def parse_interval(text: str) -> int:
    """Convert a time interval such as ``"2h"`` to whole seconds.

    Units: ``s`` seconds, ``m`` minutes, ``h`` hours, ``d`` days; a bare
    number means seconds. Fractions are truncated toward zero. Negative
    intervals are returned as-is.

    Raises:
        BadArgumentError: *text* is ``None`` or empty
        OptionValueError: no leading number, unknown unit, or the value
            does not fit a signed 64-bit integer
    """
    if not text:
        raise BadArgumentError("No time interval value specified")

    value = _parse_magnitude(text, INTERVAL_UNITS, "time interval", "seconds")
    seconds = int(value)
    if not INT64_MIN <= seconds <= INT64_MAX:
        raise OptionValueError(f"Too big time interval value '{text}'")
    return seconds


def parse_bandwidth(text: str) -> int:
    """Convert a bandwidth such as ``"10M"`` to bytes.

    Units are powers of 1024: ``k``, ``m``, ``g``; a bare number means
    bytes. Fractions are truncated toward zero.

    Raises:
        BadArgumentError: *text* is ``None`` or empty
        OptionValueError: no leading number, unknown unit, negative value,
            or the value does not fit an unsigned 64-bit integer
    """
    if not text:
        raise BadArgumentError("No bandwidth value specified")

    value = _parse_magnitude(text, BANDWIDTH_UNITS, "bandwidth", "number")
    if value < 0:
        raise OptionValueError(f"Bytes value may not be negative '{text}'")
    nbytes = int(value)
    if nbytes > UINT64_MAX:
        raise OptionValueError(f"Too big bandwidth value '{text}'")
    return nbytes
