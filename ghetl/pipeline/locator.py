"""Discovery and ordering of input archives.

Archives are ordered by the integer that trails their stem, so exports
named ``events-2.json`` ... ``events-10.json`` are processed numerically
rather than lexically. Stems without a trailing integer sort as ``0``.
"""

from __future__ import annotations

import re
import typing as typ

from .errors import PathError

if typ.TYPE_CHECKING:
    from pathlib import Path

EVENT_FILE_SUFFIX = ".json"

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def file_sort_key(path: Path) -> int:
    """Return the ordering key for an archive path.

    The stem is split on ``-`` and the last segment parsed as a signed
    32-bit integer. Anything else, including out-of-range values, yields 0.

    >>> from pathlib import Path
    >>> file_sort_key(Path("2015-01-01-15.json"))
    15
    >>> file_sort_key(Path("events.json"))
    0

    """
    segment = path.stem.rsplit("-", 1)[-1]
    if not _SIGNED_INT.fullmatch(segment):
        return 0
    value = int(segment)
    if not _INT32_MIN <= value <= _INT32_MAX:
        return 0
    return value


def locate_event_files(directory: Path) -> list[Path]:
    """List the ``*.json`` regular files directly inside ``directory``.

    Files are ordered by ``file_sort_key``; files sharing a key are ordered
    by name.

    Raises
    ------
    PathError
        If the directory does not exist, is not a directory, or cannot be
        read.

    """
    try:
        candidates = [
            entry
            for entry in directory.iterdir()
            if entry.suffix == EVENT_FILE_SUFFIX and entry.is_file()
        ]
    except OSError as exc:
        raise PathError.unreadable(directory, exc) from exc

    return sorted(candidates, key=lambda entry: (file_sort_key(entry), entry.name))
