from __future__ import annotations

"""Continuation-line support for ``.repo`` files.

Repository files allow a value to continue on following lines as long as
those lines start with whitespace::

    baseurl = http://mirror-a/os/
              http://mirror-b/os/

The key file grammar has no such notion, so the text is folded into one
logical line per key before parsing. Extra lines are joined with ``;``,
which is also the list separator understood by list options.
"""

import logging
from pathlib import Path
from typing import List, Union

from .exceptions import RepoFileError
from .keyfile import KeyFile, LIST_SEPARATOR

logger = logging.getLogger(__name__)

__all__ = ["normalize_multiline", "load_multiline_key_file"]


def normalize_multiline(text: str) -> str:
    """Fold continuation lines of *text* into their key's line.

    Tabs become spaces. A line starting with a space extends the previous
    output line: directly after a bare ``=``, otherwise separated by ``;``.
    The first line is never treated as a continuation.
    """
    out: List[str] = []
    for line in text.split("\n"):
        line = line.replace("\t", " ")
        if line.startswith(" ") and out:
            previous = out[-1]
            stripped = line.lstrip()
            # only add a separator once something follows the '='
            if previous.endswith("="):
                out[-1] = previous + stripped
            else:
                out[-1] = previous + LIST_SEPARATOR + stripped
        else:
            out.append(line)
    return "\n".join(out)


def load_multiline_key_file(path: Union[str, Path]) -> KeyFile:
    """Read *path*, fold its continuation lines and parse it.

    Raises:
        RepoFileError: The file cannot be read
        KeyFileError: The folded text is not a valid key file
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise RepoFileError(
            f"Cannot load content of {path}: {exc}",
            path=str(path),
            cause=exc,
        ) from exc

    normalized = normalize_multiline(data)
    logger.debug("Normalized %s (%d -> %d lines)", path,
                 data.count("\n") + 1, normalized.count("\n") + 1)
    return KeyFile.load_from_data(normalized, source=str(path))
