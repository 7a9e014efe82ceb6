"""Tests for logger naming."""

from __future__ import annotations

import logging

from userjs_updater.log import get_logger


def test_module_names_are_namespaced(caplog):
    with caplog.at_level(logging.DEBUG, logger="userjs_updater"):
        get_logger("merger").debug("hello", count=1)
    record = caplog.records[-1]
    assert record.name == "userjs_updater.merger"
    assert "hello" in record.getMessage()
