"""Merging of upstream preferences with user overrides."""

from __future__ import annotations

from typing import TYPE_CHECKING

from userjs_updater.errors import ParseError
from userjs_updater.log import get_logger
from userjs_updater.models import PreferenceEntry, PreferenceSet


if TYPE_CHECKING:
    from collections.abc import Iterable


logger = get_logger(__name__)

HEADER_LINES = 76
"""Length of the upstream comment banner that is copied verbatim."""

PREF_PREFIX = "user_pref("


def split_lines(text: str) -> list[str]:
    r"""Split text at "\n" only, dropping a trailing "\r" from each line.

    A final line ending does not produce an empty last line. Other Unicode
    line separators (form feed, U+2028, ...) stay inside their line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def extract_pref(line: str, where: str = "declaration") -> PreferenceEntry:
    """Split a `user_pref(...)` line into key and raw value.

    The declaration runs up to the first closing parenthesis and is split on
    its first comma. Quotes are removed from the key only; the value keeps its
    exact text.

    Raises:
        ParseError: The declaration has no closing parenthesis or no comma.
    """
    body, closed, _ = line[len(PREF_PREFIX) :].partition(")")
    if not closed:
        msg = f"Unterminated preference on {where}: {line!r}"
        raise ParseError(msg)
    raw_key, comma, raw_value = body.partition(",")
    if not comma:
        msg = f"Preference without value on {where}: {line!r}"
        raise ParseError(msg)
    key = raw_key.strip().strip("\"'").strip()
    return PreferenceEntry(key=key, value=raw_value.strip())


def collect_prefs(
    lines: Iterable[str],
    into: PreferenceSet | None = None,
    source: str = "input",
) -> PreferenceSet:
    """Parse every declaration line, in order, into a preference set.

    Args:
        lines: Lines to scan; only lines starting with `user_pref(` are used
        into: Existing set to overlay onto (default: a new empty set)
        source: Document name used in error messages
    """
    prefs = into if into is not None else PreferenceSet()
    for line_no, line in enumerate(lines, start=1):
        if line.startswith(PREF_PREFIX):
            prefs.add(extract_pref(line, f"{source} line {line_no}"))
    return prefs


def merge(
    base_text: str,
    override_text: str,
    *,
    header_lines: int = HEADER_LINES,
) -> str:
    """Build a minified script from upstream text and user overrides.

    The output is the first `header_lines` lines of `base_text`, a blank line,
    then one declaration per preference. Overrides win on key conflicts.
    Comments and other text outside the banner are dropped.

    Raises:
        ParseError: Any declaration in either document is malformed. No
            partial output is produced.
    """
    base_lines = split_lines(base_text)
    header = "\n".join(base_lines[:header_lines])

    prefs = collect_prefs(base_lines, source="upstream")
    upstream_count = len(prefs)
    collect_prefs(split_lines(override_text), into=prefs, source="overrides")
    logger.debug(
        "Merged preferences",
        upstream=upstream_count,
        added=len(prefs) - upstream_count,
        total=len(prefs),
    )
    return f"{header}\n\n{prefs.render()}"


def append(base_text: str, override_text: str) -> str:
    """Concatenate upstream text and overrides with a blank line between."""
    if not base_text.endswith("\n"):
        base_text += "\n"
    return f"{base_text}\n{override_text}"
