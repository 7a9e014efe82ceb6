"""Test configuration and shared fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from userjs_updater.log import configure_logging


if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def debug_logging():
    """Route structlog through stdlib logging at debug level for each test."""
    configure_logging("DEBUG", use_colors=False)


def _make_script(
    body: str = "",
    *,
    name: str = "ghacks user.js",
    date: str = "14 February 2020",
    version: str = "73-beta: Parent Soul",
) -> str:
    header = f"/******\n* name: {name}\n* date: {date}\n* version {version}\n******/\n"
    return header + body


@pytest.fixture
def make_script() -> Callable[..., str]:
    """Factory building a user.js text with a recognizable banner."""
    return _make_script


class FakeFetcher:
    """Async fetcher returning canned text and recording requested URLs."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[str] = []

    async def __call__(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_fetcher() -> type[FakeFetcher]:
    return FakeFetcher


@pytest.fixture
def profile(tmp_path: Path) -> Path:
    """Profile directory with a live user.js and a user-overrides.js."""
    (tmp_path / "user.js").write_text(
        _make_script('user_pref("browser.startup.page", 0);\nuser_pref("a.b", true);\n'),
        encoding="utf-8",
    )
    (tmp_path / "user-overrides.js").write_text(
        '// my overrides\nuser_pref("a.b", false);\nuser_pref("e.f", "x");\n',
        encoding="utf-8",
    )
    return tmp_path
