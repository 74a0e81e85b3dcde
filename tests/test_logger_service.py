"""Tests for logging helpers."""

import logging
import os
import time
from logging.handlers import RotatingFileHandler

from framepool.config import settings
from framepool.services.logger_service import (
    cleanup_old_logs,
    log_api_call,
    log_performance,
    setup_logging,
)

logger = logging.getLogger("framepool.tests")


def test_log_api_call_levels(caplog):
    caplog.set_level(logging.DEBUG, logger="framepool.tests")

    log_api_call("Immich", "GET /api/albums/1", logger=logger)
    log_api_call("Immich", "POST /api/search/metadata", "retry", "HTTP 503", logger)
    log_api_call("Immich", "GET /api/albums/2", "error", "HTTP 404", logger)

    levels = [record.levelno for record in caplog.records]
    assert levels == [logging.DEBUG, logging.WARNING, logging.ERROR]
    assert caplog.records[1].getMessage() == "[API] Immich | POST /api/search/metadata | RETRY | HTTP 503"


def test_log_performance_reports_completion(caplog):
    caplog.set_level(logging.INFO, logger="framepool.tests")

    with log_performance("Load album", logger):
        pass

    assert "[Load album] Completed in" in caplog.text


def test_cleanup_old_logs(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "log_dir", tmp_path)
    old = tmp_path / "framepool_20200101_000000.log"
    fresh = tmp_path / "framepool_20990101_000000.log"
    unrelated = tmp_path / "other.log"
    for path in (old, fresh, unrelated):
        path.write_text("x")
    ten_days_ago = time.time() - 10 * 24 * 60 * 60
    os.utime(old, (ten_days_ago, ten_days_ago))
    os.utime(unrelated, (ten_days_ago, ten_days_ago))

    assert cleanup_old_logs(max_age_days=7) == 1
    assert not old.exists()
    assert fresh.exists()
    assert unrelated.exists()


def test_cleanup_old_logs_in_given_directory(tmp_path):
    stale = tmp_path / "framepool_20200101_000000.log.1"
    stale.write_text("x")
    long_ago = time.time() - 40 * 24 * 60 * 60
    os.utime(stale, (long_ago, long_ago))

    assert cleanup_old_logs(max_age_days=30, log_dir=tmp_path) == 1
    assert cleanup_old_logs(max_age_days=30, log_dir=tmp_path / "missing") == 0


def test_setup_logging_writes_file_when_enabled(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "log_to_file", True)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        log_file = setup_logging(verbose=True, log_dir=tmp_path)

        assert log_file is not None and log_file.parent == tmp_path
        assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_setup_logging_console_only_by_default(monkeypatch):
    monkeypatch.setattr(settings, "log_to_file", False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        assert setup_logging() is None
        assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
