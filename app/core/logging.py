"""Logging configuration for the application.

Records are handed to a queue on the calling thread and written to stdout by
a background listener, so building a response never waits on the log sink.
"""

from __future__ import annotations

import logging
import logging.handlers
import queue
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_queue_handler: logging.handlers.QueueHandler | None = None
_listener: logging.handlers.QueueListener | None = None


def configure_logging(level: str = "INFO") -> logging.handlers.QueueListener:
    """Route root logging through a queue drained by a stdout listener."""
    global _queue_handler, _listener

    shutdown_logging()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    _queue_handler = logging.handlers.QueueHandler(log_queue)

    root = logging.getLogger()
    root.addHandler(_queue_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _listener = logging.handlers.QueueListener(log_queue, stream_handler, respect_handler_level=True)
    _listener.start()
    return _listener


def shutdown_logging() -> None:
    """Flush queued records, stop the listener and detach the queue handler."""
    global _queue_handler, _listener

    if _listener is not None:
        _listener.stop()
        _listener = None
    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None
