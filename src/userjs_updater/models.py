"""Core models for version headers, preferences and update runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path


@dataclass(frozen=True)
class VersionRecord:
    """Identity triple read from the comment banner of a user.js file."""

    name: str
    """Script family name, e.g. 'ghacks user.js'."""

    version: str
    """Version string exactly as written after the 'version ' marker."""

    date: str
    """Release date exactly as written after the 'date: ' marker."""

    def __str__(self) -> str:
        return f"{self.name}: {self.version} from {self.date}"


@dataclass(frozen=True)
class PreferenceEntry:
    """A single user_pref declaration."""

    key: str
    """Preference name, without quotes."""

    value: str
    """Raw value expression, kept verbatim."""

    def render(self) -> str:
        return f'user_pref("{self.key}", {self.value});'


class PreferenceSet:
    """Ordered preference mapping with override-wins insertion.

    Keys keep the position of their first appearance; a later value for the
    same key replaces the old value in place.
    """

    def __init__(self, entries: Iterable[PreferenceEntry] = ()):
        self._values: dict[str, str] = {}
        self.update(entries)

    def add(self, entry: PreferenceEntry) -> None:
        """Insert an entry, replacing the value of an existing key."""
        self._values[entry.key] = entry.value

    def update(self, entries: Iterable[PreferenceEntry]) -> None:
        """Insert several entries in order."""
        for entry in entries:
            self.add(entry)

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def keys(self) -> list[str]:
        return list(self._values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[PreferenceEntry]:
        for key, value in self._values.items():
            yield PreferenceEntry(key=key, value=value)

    def __repr__(self) -> str:
        return f"PreferenceSet({len(self)} entries)"

    def render(self) -> str:
        """Serialize all entries, one declaration per line."""
        return "\n".join(entry.render() for entry in self)


class BuildMode(Enum):
    """How the candidate file is assembled from upstream and overrides."""

    APPEND = "append"
    """Upstream text followed by the overrides file, verbatim."""

    MERGE = "merge"
    """Banner plus a single deduplicated set of declarations."""


class Outcome(Enum):
    """Terminal state of an update run."""

    COMMITTED = "committed"
    DISCARDED = "discarded"
    FAILED = "failed"


@dataclass
class UpdateAttempt:
    """Transient record of one workflow run."""

    staging_path: Path
    """Where the candidate file is written before promotion."""

    mode: BuildMode
    """Build mode used for the candidate."""

    old_version: VersionRecord | None = None
    """Header of the live file."""

    new_version: VersionRecord | None = None
    """Header of the staged candidate."""

    outcome: Outcome | None = None
    """Final state, None while the run is in progress."""

    backup_path: Path | None = None
    """Backup created on commit."""

    removed_backups: list[Path] = field(default_factory=list)
    """Older backups deleted by the single-backup policy."""

    @property
    def committed(self) -> bool:
        return self.outcome is Outcome.COMMITTED
