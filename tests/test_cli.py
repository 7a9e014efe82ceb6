"""Tests for the command line interface."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from userjs_updater import workflow
from userjs_updater.backups import list_backups
from userjs_updater.cli import cli
from userjs_updater.errors import NetworkError


runner = CliRunner()


@pytest.fixture
def upstream(monkeypatch, make_script):
    """Replace the network fetch with a canned upstream script."""
    calls: list[str] = []
    text = make_script('user_pref("upstream.only", 1);\n')

    async def fake_fetch(url: str, *, timeout: float) -> str:
        calls.append(url)
        return text

    monkeypatch.setattr(workflow, "fetch_script", fake_fetch)
    return calls


def test_unattended_update(profile, upstream):
    result = runner.invoke(cli, ["-d", str(profile), "--unattended"])
    assert result.exit_code == 0, result.output
    assert "Found version: ghacks user.js: 73-beta: Parent Soul" in result.output
    assert "Update complete!" in result.output
    assert len(upstream) == 1
    assert len(list_backups(profile)) == 1


def test_minify_flag(profile, upstream):
    result = runner.invoke(cli, ["-d", str(profile), "-u", "-m"])
    assert result.exit_code == 0, result.output
    live = (profile / "user.js").read_text()
    assert "// my overrides" not in live
    assert 'user_pref("e.f", "x");' in live


def test_menu_exit(profile, upstream):
    result = runner.invoke(cli, ["-d", str(profile)], input="3\n")
    assert result.exit_code == 0
    assert "Start" in result.output
    assert upstream == []
    assert list_backups(profile) == []


def test_menu_help(profile, upstream):
    result = runner.invoke(cli, ["-d", str(profile)], input="help\n")
    assert result.exit_code == 0
    assert "--singlebackup" in result.output
    assert upstream == []


def test_menu_start_after_invalid_choice(profile, upstream):
    result = runner.invoke(cli, ["-d", str(profile)], input="9\n1\n")
    assert result.exit_code == 0, result.output
    assert "Invalid choice" in result.output
    assert len(upstream) == 1


def test_missing_script(tmp_path, upstream):
    result = runner.invoke(cli, ["-d", str(tmp_path), "-u"])
    assert result.exit_code == 1
    assert "An error occurred during execution" in result.output
    assert "user.js not detected" in result.output
    assert upstream == []


def test_network_failure(profile, monkeypatch):
    async def offline(url: str, *, timeout: float) -> str:
        raise NetworkError("offline")

    monkeypatch.setattr(workflow, "fetch_script", offline)
    result = runner.invoke(cli, ["-d", str(profile), "-u"])
    assert result.exit_code == 1
    assert "Network error: offline" in result.output


def test_config_file(profile, upstream, tmp_path_factory):
    config = tmp_path_factory.mktemp("cfg") / "updater.yml"
    config.write_text("unattended: true\ncommit_policy: version_changed\n")
    result = runner.invoke(cli, ["-d", str(profile), "-c", str(config)])
    assert result.exit_code == 0, result.output
    assert "Update completed without any changes" in result.output
    assert list_backups(profile) == []


def test_undecodable_overrides(profile, upstream):
    (profile / "user-overrides.js").write_bytes(b'user_pref("a", "\xff");\n')
    result = runner.invoke(cli, ["-d", str(profile), "-u"])
    assert result.exit_code == 1
    assert "user-overrides.js is not valid UTF-8" in result.output
