"""Tests for the logging helper."""

import logging

import pytest

from log import configure, get_logger


@pytest.fixture
def restore_root():
    root = logging.getLogger("padexp")
    level = root.level
    yield root
    configure(logging.getLevelName(level))


def test_hierarchy():
    logger = get_logger("core.expm")
    assert logger.name == "padexp.core.expm"
    assert logging.getLogger("padexp").handlers


def test_configured_once():
    get_logger("a")
    handlers = list(logging.getLogger("padexp").handlers)
    get_logger("b")
    assert logging.getLogger("padexp").handlers == handlers


def test_reconfigure_replaces_handlers(restore_root):
    configure("DEBUG")
    configure("WARNING")
    assert len(restore_root.handlers) == 1
    assert restore_root.level == logging.WARNING


def test_unknown_level_falls_back_to_info(restore_root):
    configure("LOUD")
    assert restore_root.level == logging.INFO


def test_env_level(restore_root, monkeypatch):
    monkeypatch.setenv("PADEXP_LOG_LEVEL", "error")
    configure()
    assert restore_root.level == logging.ERROR


def test_log_file(restore_root, tmp_path):
    path = tmp_path / "padexp.log"
    configure("INFO", str(path))
    get_logger("tests").info("written %d", 7)
    for handler in restore_root.handlers:
        handler.flush()
    text = path.read_text()
    assert "INFO padexp.tests: written 7" in text
    assert "\033[" not in text
