"""Tests for configuration resolution and log setup."""

import logging

from deliverybook import config
from deliverybook.logging_setup import configure_logging


def test_db_path_resolution(monkeypatch):
    monkeypatch.delenv("DELIVERYBOOK_DB_PATH", raising=False)
    assert config.resolve_db_path() == config.DB_PATH

    monkeypatch.setenv("DELIVERYBOOK_DB_PATH", "/tmp/from-env.db")
    assert config.resolve_db_path() == "/tmp/from-env.db"
    assert config.resolve_db_path("cli.db") == "cli.db"


def test_blank_env_falls_back(monkeypatch):
    monkeypatch.setenv("DELIVERYBOOK_LOG_PATH", "   ")
    monkeypatch.setenv("DELIVERYBOOK_LOG_LEVEL", "debug")
    assert config.resolve_log_path() == config.LOG_PATH
    assert config.resolve_log_level() == "DEBUG"


def test_configure_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "deliverybook.log"
    configure_logging(str(log_file), "INFO")

    logging.getLogger("deliverybook.logic").info("hello from test")
    for handler in logging.getLogger("deliverybook").handlers:
        handler.flush()

    assert "hello from test" in log_file.read_text(encoding="utf-8")
