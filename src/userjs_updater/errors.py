"""Exceptions raised by the updater."""

from __future__ import annotations


class UpdaterError(Exception):
    """Base class for all updater failures."""


class MissingScriptError(UpdaterError):
    """Raised when the live user.js is not present."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} not detected in the profile directory.")


class MissingOverridesError(UpdaterError):
    """Raised when the overrides file is not present."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} not detected in the profile directory.")


class ParseError(UpdaterError):
    """Raised when a header or a preference declaration cannot be parsed."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(f"Error parsing input: {context}")


class UpdaterIOError(UpdaterError):
    """Raised when a filesystem operation fails."""

    def __init__(self, message: str):
        super().__init__(f"IO Error: {message}")


class NetworkError(UpdaterError):
    """Raised when the upstream script cannot be retrieved."""

    def __init__(self, message: str):
        super().__init__(f"Network error: {message}")
