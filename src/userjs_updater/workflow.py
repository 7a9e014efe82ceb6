"""Version-gated, atomic replacement of a profile's user.js."""

from __future__ import annotations

import contextlib
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from userjs_updater import merger
from userjs_updater.backups import backup_name, prune_backups
from userjs_updater.config import CommitPolicy, UpdaterConfig
from userjs_updater.errors import (
    MissingOverridesError,
    MissingScriptError,
    ParseError,
    UpdaterError,
    UpdaterIOError,
)
from userjs_updater.fetch import fetch_script
from userjs_updater.header import read_version
from userjs_updater.log import get_logger
from userjs_updater.models import BuildMode, Outcome, UpdateAttempt


if TYPE_CHECKING:
    from collections.abc import Callable

    from userjs_updater.fetch import Fetcher
    from userjs_updater.models import VersionRecord


logger = get_logger(__name__)


class UpdateWorkflow:
    """Replaces the live user.js with a rebuilt upstream copy.

    One call to `run` walks through: read the live header, fetch upstream,
    read overrides, build the candidate into a staging file, read the staged
    header, then either commit (backup + rename) or discard the candidate.
    The live file is only touched by the two renames of the commit.
    """

    def __init__(
        self,
        directory: Path | str,
        config: UpdaterConfig | None = None,
        *,
        fetcher: Fetcher | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the workflow.

        Args:
            directory: Firefox profile directory holding user.js
            config: Run settings (default: UpdaterConfig())
            fetcher: Async callable returning upstream text for a URL
                (default: fetch over HTTP)
            clock: Source of the local time used in backup names
        """
        self.directory = Path(directory).resolve()
        self.config = config or UpdaterConfig()
        self._fetcher = fetcher
        self._clock = clock

    @property
    def script_path(self) -> Path:
        return self.directory / self.config.script_file

    @property
    def overrides_path(self) -> Path:
        return self.directory / self.config.overrides_file

    @property
    def staging_path(self) -> Path:
        return self.directory / self.config.staging_file

    def read_local_version(self) -> VersionRecord:
        """Parse the header of the live script."""
        try:
            return read_version(self.script_path)
        except FileNotFoundError as e:
            raise MissingScriptError(self.config.script_file) from e
        except UnicodeDecodeError as e:
            msg = f"{self.config.script_file} is not valid UTF-8"
            raise ParseError(msg) from e
        except OSError as e:
            msg = f"Cannot read {self.script_path}: {e}"
            raise UpdaterIOError(msg) from e

    async def fetch_candidate(self) -> str:
        """Get the upstream script text."""
        if self._fetcher is not None:
            return await self._fetcher(self.config.url)
        return await fetch_script(self.config.url, timeout=self.config.timeout)

    def read_overrides(self) -> str:
        """Read the user's overrides file, which must exist."""
        path = self.overrides_path
        if not path.exists():
            raise MissingOverridesError(self.config.overrides_file)
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            msg = f"{self.config.overrides_file} is not valid UTF-8"
            raise ParseError(msg) from e
        except OSError as e:
            msg = f"Cannot read {path}: {e}"
            raise UpdaterIOError(msg) from e

    def build_candidate(self, candidate_text: str, overrides_text: str) -> str:
        """Combine upstream text and overrides according to the build mode."""
        if self.config.mode is BuildMode.MERGE:
            return merger.merge(
                candidate_text,
                overrides_text,
                header_lines=self.config.header_lines,
            )
        return merger.append(candidate_text, overrides_text)

    def should_commit(self, old: VersionRecord, new: VersionRecord) -> bool:
        """Apply the configured commit policy to the two headers."""
        same = old == new
        if self.config.commit_policy is CommitPolicy.SAME_VERSION:
            return same
        return not same

    def _stage(self, text: str) -> None:
        try:
            self.staging_path.write_text(text, encoding="utf-8")
        except OSError as e:
            self._discard()
            msg = f"Cannot write {self.staging_path}: {e}"
            raise UpdaterIOError(msg) from e

    def _read_staged_version(self) -> VersionRecord:
        try:
            return read_version(self.staging_path)
        except ParseError:
            self._discard()
            raise
        except (OSError, UnicodeDecodeError) as e:
            self._discard()
            msg = f"Cannot read staged file {self.staging_path}: {e}"
            raise UpdaterIOError(msg) from e

    def _discard(self) -> None:
        with contextlib.suppress(FileNotFoundError):
            self.staging_path.unlink()

    def _commit(self, attempt: UpdateAttempt) -> None:
        backup = self.directory / backup_name(
            self._clock(),
            self.config.backup_prefix,
            self.config.backup_suffix,
        )
        if backup.exists():
            self._discard()
            msg = f"Backup {backup.name} already exists; refusing to overwrite it"
            raise UpdaterIOError(msg)
        logger.info("Backing up live script", backup=backup.name)
        try:
            self.script_path.rename(backup)
        except OSError as e:
            self._discard()
            msg = f"Cannot back up {self.script_path} to {backup.name}: {e}"
            raise UpdaterIOError(msg) from e

        # Live file is now absent until the promote below succeeds.
        try:
            self.staging_path.replace(self.script_path)
        except OSError as e:
            msg = (
                f"Backup saved as {backup.name} but {self.staging_path.name} "
                f"could not be renamed to {self.script_path.name}: {e}"
            )
            raise UpdaterIOError(msg) from e
        attempt.backup_path = backup

        if self.config.single_backup:
            try:
                attempt.removed_backups = prune_backups(
                    self.directory,
                    keep=backup,
                    prefix=self.config.backup_prefix,
                    suffix=self.config.backup_suffix,
                )
            except OSError as e:
                msg = f"Update committed but old backups could not be removed: {e}"
                raise UpdaterIOError(msg) from e

    async def run(self) -> UpdateAttempt:
        """Run one update attempt.

        Returns:
            The attempt record with outcome COMMITTED or DISCARDED.

        Raises:
            UpdaterError: Any step failed. The live script is untouched unless
                the failure happened between the two commit renames.
        """
        attempt = UpdateAttempt(staging_path=self.staging_path, mode=self.config.mode)
        log = logger.bind(directory=str(self.directory), mode=attempt.mode.value)
        try:
            attempt.old_version = self.read_local_version()
            log.debug("Read live version", version=str(attempt.old_version))

            candidate = await self.fetch_candidate()
            log.debug("Fetched candidate", size=len(candidate))

            overrides = self.read_overrides()
            log.debug("Read overrides", size=len(overrides))

            self._stage(self.build_candidate(candidate, overrides))
            log.debug("Staged candidate", path=str(self.staging_path))

            attempt.new_version = self._read_staged_version()
            log.debug("Read candidate version", version=str(attempt.new_version))

            if self.should_commit(attempt.old_version, attempt.new_version):
                self._commit(attempt)
                attempt.outcome = Outcome.COMMITTED
            else:
                self._discard()
                attempt.outcome = Outcome.DISCARDED
        except UpdaterError as e:
            attempt.outcome = Outcome.FAILED
            log.warning("Update failed", error=str(e), old_version=str(attempt.old_version))
            raise

        log.info(
            "Update finished",
            outcome=attempt.outcome.value,
            old_version=str(attempt.old_version),
            new_version=str(attempt.new_version),
        )
        return attempt
