"""Keep a Firefox user.js synchronized with upstream.

This package provides:
- Parsing of the identity banner at the top of a user.js
- Override-wins merging of user_pref declarations
- A version-gated update workflow with backup and atomic promotion
"""

from __future__ import annotations

from userjs_updater.config import CommitPolicy, UpdaterConfig
from userjs_updater.errors import (
    MissingOverridesError,
    MissingScriptError,
    NetworkError,
    ParseError,
    UpdaterError,
    UpdaterIOError,
)
from userjs_updater.fetch import DEFAULT_URL, fetch_script
from userjs_updater.header import RECOGNITION_TOKEN, parse_version, read_version
from userjs_updater.merger import HEADER_LINES, append, collect_prefs, extract_pref, merge
from userjs_updater.models import (
    BuildMode,
    Outcome,
    PreferenceEntry,
    PreferenceSet,
    UpdateAttempt,
    VersionRecord,
)
from userjs_updater.workflow import UpdateWorkflow

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_URL",
    "HEADER_LINES",
    "RECOGNITION_TOKEN",
    "BuildMode",
    "CommitPolicy",
    "MissingOverridesError",
    "MissingScriptError",
    "NetworkError",
    "Outcome",
    "ParseError",
    "PreferenceEntry",
    "PreferenceSet",
    "UpdateAttempt",
    "UpdateWorkflow",
    "UpdaterConfig",
    "UpdaterError",
    "UpdaterIOError",
    "VersionRecord",
    "append",
    "collect_prefs",
    "extract_pref",
    "fetch_script",
    "merge",
    "parse_version",
    "read_version",
]
