"""Unit tests for queue-backed logging setup."""

from __future__ import annotations

import logging
import logging.handlers

from app.core.logging import configure_logging
from app.core.logging import shutdown_logging


def _queue_handlers() -> list[logging.Handler]:
    return [handler for handler in logging.getLogger().handlers if isinstance(handler, logging.handlers.QueueHandler)]


def test_configure_logging_installs_single_queue_handler() -> None:
    try:
        configure_logging("debug")
        configure_logging("info")

        assert len(_queue_handlers()) == 1
        assert logging.getLogger().level == logging.INFO
    finally:
        shutdown_logging()

    assert _queue_handlers() == []


def test_records_reach_stdout_through_listener(capsys) -> None:
    configure_logging("info")
    try:
        logging.getLogger("tests.logging").info("queued message=%s", 42)
    finally:
        shutdown_logging()

    out = capsys.readouterr().out
    assert "queued message=42" in out
    assert "| INFO     | tests.logging |" in out
