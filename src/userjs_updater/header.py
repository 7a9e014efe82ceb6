"""Parser for the identity banner at the top of a user.js file.

The banner of the upstream script starts like this::

    /******
    * name: ghacks user.js
    * date: 14 February 2020
    * version 73-beta: Parent Soul

Only the first four lines are read. Everything after the marker on each line
is taken verbatim (minus the line ending).
"""

from __future__ import annotations

import io
from itertools import islice
from typing import TYPE_CHECKING

from userjs_updater.errors import ParseError
from userjs_updater.models import VersionRecord


if TYPE_CHECKING:
    from collections.abc import Iterable
    from os import PathLike


RECOGNITION_TOKEN = "ghacks"
NAME_MARKER = "name: "
DATE_MARKER = "date: "
VERSION_MARKER = "version "

# Line 1 opens the comment and carries no data.
_FIELD_LINES = ((2, NAME_MARKER), (3, DATE_MARKER), (4, VERSION_MARKER))


def _field(line: str | None, line_no: int, marker: str) -> str:
    if line is None:
        msg = f"Missing header line {line_no}"
        raise ParseError(msg)
    _, found, value = line.partition(marker)
    if not found:
        msg = f"Header line {line_no} lacks marker {marker!r}: {line.rstrip()!r}"
        raise ParseError(msg)
    return value.rstrip("\r\n")


def parse_version(source: str | Iterable[str]) -> VersionRecord:
    """Extract the version record from the first four lines of a script.

    Args:
        source: Full text, or any iterable of lines such as an open text file.
            Iterables are consumed for at most four lines.

    Raises:
        ParseError: A line is missing, lacks its marker, or the name does not
            identify a supported script family.
    """
    lines = io.StringIO(source) if isinstance(source, str) else source
    head: list[str | None] = list(islice(lines, 4))
    head.extend([None] * (4 - len(head)))

    name, date, version = (_field(head[idx - 1], idx, marker) for idx, marker in _FIELD_LINES)
    if RECOGNITION_TOKEN not in name:
        msg = "Version not recognized"
        raise ParseError(msg)
    return VersionRecord(name=name, version=version, date=date)


def read_version(path: str | PathLike[str]) -> VersionRecord:
    """Open a script file and parse its banner.

    FileNotFoundError and other OS errors are left to the caller.
    """
    with open(path, encoding="utf-8") as file:  # noqa: PTH123
        return parse_version(file)
