"""Tests for backup naming and the single-backup policy."""

from __future__ import annotations

from datetime import datetime

from userjs_updater.backups import BACKUP_PATTERN, backup_name, list_backups, prune_backups


def test_backup_name_format():
    name = backup_name(datetime(2020, 2, 14, 9, 5, 3))
    assert name == "user-backup-2020-02-14_09-05-03.js"
    assert BACKUP_PATTERN.match(name)


def test_custom_prefix_and_suffix(tmp_path):
    (tmp_path / "prefs-2020-01-01_00-00-00.bak").write_text("x")
    (tmp_path / "user-backup-2020-01-01_00-00-00.js").write_text("x")
    found = list_backups(tmp_path, prefix="prefs-", suffix=".bak")
    assert [p.name for p in found] == ["prefs-2020-01-01_00-00-00.bak"]


def test_list_backups_sorted_and_filtered(tmp_path):
    for name in (
        "user-backup-2021-05-01_10-00-00.js",
        "user-backup-2020-01-01_00-00-00.js",
        "user-backup-notes.js",
        "user.js",
    ):
        (tmp_path / name).write_text("x")
    names = [p.name for p in list_backups(tmp_path)]
    assert names == ["user-backup-2020-01-01_00-00-00.js", "user-backup-2021-05-01_10-00-00.js"]


def test_prune_keeps_only_given_backup(tmp_path):
    old = tmp_path / "user-backup-2020-01-01_00-00-00.js"
    new = tmp_path / "user-backup-2024-03-01_12-30-45.js"
    unrelated = tmp_path / "user-overrides.js"
    for path in (old, new, unrelated):
        path.write_text("x")

    removed = prune_backups(tmp_path, keep=new)

    assert removed == [old]
    assert not old.exists()
    assert new.exists()
    assert unrelated.exists()
