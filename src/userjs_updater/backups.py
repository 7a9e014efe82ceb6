"""Naming and retention of user.js backups."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from userjs_updater.log import get_logger


if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path


logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
DEFAULT_PREFIX = "user-backup-"
DEFAULT_SUFFIX = ".js"
BACKUP_PATTERN = re.compile(r"^user-backup-\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}\.js$")


def backup_name(
    now: datetime,
    prefix: str = DEFAULT_PREFIX,
    suffix: str = DEFAULT_SUFFIX,
) -> str:
    """Return the backup filename for a commit made at `now`."""
    return f"{prefix}{now.strftime(TIMESTAMP_FORMAT)}{suffix}"


def _pattern(prefix: str, suffix: str) -> re.Pattern[str]:
    if prefix == DEFAULT_PREFIX and suffix == DEFAULT_SUFFIX:
        return BACKUP_PATTERN
    stamp = r"\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}"
    return re.compile(f"^{re.escape(prefix)}{stamp}{re.escape(suffix)}$")


def list_backups(
    directory: Path,
    prefix: str = DEFAULT_PREFIX,
    suffix: str = DEFAULT_SUFFIX,
) -> list[Path]:
    """List timestamped backups in a directory, oldest first."""
    pattern = _pattern(prefix, suffix)
    found = [p for p in directory.iterdir() if p.is_file() and pattern.match(p.name)]
    return sorted(found, key=lambda p: p.name)


def prune_backups(
    directory: Path,
    keep: Path,
    prefix: str = DEFAULT_PREFIX,
    suffix: str = DEFAULT_SUFFIX,
) -> list[Path]:
    """Delete every timestamped backup except `keep`.

    Returns:
        Paths that were removed.
    """
    removed: list[Path] = []
    for path in list_backups(directory, prefix, suffix):
        if path.name == keep.name:
            continue
        path.unlink()
        removed.append(path)
        logger.debug("Removed old backup", path=str(path))
    return removed
