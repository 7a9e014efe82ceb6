"""Configuration model for update runs.

Values can come from CLI flags or from a YAML file:

    unattended: true
    minify: true
    single_backup: true
    commit_policy: version_changed
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from userjs_updater.backups import DEFAULT_PREFIX, DEFAULT_SUFFIX
from userjs_updater.errors import ParseError, UpdaterIOError
from userjs_updater.fetch import DEFAULT_TIMEOUT, DEFAULT_URL
from userjs_updater.merger import HEADER_LINES
from userjs_updater.models import BuildMode


if TYPE_CHECKING:
    from os import PathLike


class CommitPolicy(Enum):
    """When a built candidate replaces the live script."""

    SAME_VERSION = "same_version"
    """Commit when the candidate's header equals the live header."""

    VERSION_CHANGED = "version_changed"
    """Commit only when the candidate's header differs from the live header."""


class UpdaterConfig(BaseModel):
    """Settings for a single update run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    unattended: bool = False
    """Skip the banner and the interactive menu."""

    minify: bool = False
    """Merge overrides into a deduplicated script instead of appending them."""

    single_backup: bool = False
    """Keep only the newest backup after a successful commit."""

    url: str = DEFAULT_URL
    """Upstream location of the script."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    """Network timeout in seconds."""

    commit_policy: CommitPolicy = CommitPolicy.SAME_VERSION
    """Decision rule comparing live and candidate headers."""

    script_file: str = "user.js"
    overrides_file: str = "user-overrides.js"
    staging_file: str = "user.js.new"
    backup_prefix: str = DEFAULT_PREFIX
    backup_suffix: str = DEFAULT_SUFFIX

    header_lines: int = Field(default=HEADER_LINES, ge=0)
    """Banner lines kept verbatim in merge mode."""

    @property
    def mode(self) -> BuildMode:
        return BuildMode.MERGE if self.minify else BuildMode.APPEND

    @classmethod
    def from_file(cls, path: str | PathLike[str], **overrides: object) -> UpdaterConfig:
        """Load settings from a YAML file.

        Args:
            path: YAML file containing a mapping of settings
            overrides: Values taking precedence over the file (e.g. CLI flags)
        """
        try:
            with open(path, encoding="utf-8") as file:  # noqa: PTH123
                data = yaml.safe_load(file) or {}
        except OSError as e:
            msg = f"Cannot read config {path}: {e}"
            raise UpdaterIOError(msg) from e
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise ParseError(msg) from e

        if not isinstance(data, dict):
            msg = f"Config {path} must contain a mapping"
            raise ParseError(msg)
        data.update(overrides)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            msg = f"Invalid config {path}: {e}"
            raise ParseError(msg) from e
