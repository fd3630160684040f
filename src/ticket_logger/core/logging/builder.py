"""
Logging builder: build and apply the dictConfig for the ticket logger API and,
optionally, move handler IO to a background QueueListener.

Settings knobs: LOG_LEVEL, LOG_FORMAT ("text" | "json"), LOG_TO_STDOUT, LOG_DIR,
LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENABLE_SQL_LOGGING, LOG_USE_QUEUE,
LOG_QUEUE_MAX_SIZE (0 = unbounded), LOG_QUEUE_BLOCKING.
"""

from __future__ import annotations

import logging
import logging.config
import queue as _queue
import threading
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Optional

from ticket_logger.config.settings import Settings
from ticket_logger.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"

_QUEUE_LISTENER: Optional[QueueListener] = None
_QUEUE: Optional[_queue.Queue] = None

_DROPPED_LOGS_COUNT = 0
_DROPPED_LOGS_LOCK = threading.Lock()


class NonBlockingQueueHandler(QueueHandler):
    """
    QueueHandler that drops (and counts) records when a bounded queue is full
    instead of blocking the producing request.
    """

    def emit(self, record: logging.LogRecord) -> None:
        global _DROPPED_LOGS_COUNT
        try:
            self.queue.put_nowait(self.prepare(record))
        except _queue.Full:
            with _DROPPED_LOGS_LOCK:
                _DROPPED_LOGS_COUNT += 1


def get_queue_stats() -> dict:
    with _DROPPED_LOGS_LOCK:
        return {"dropped_logs": _DROPPED_LOGS_COUNT, "queue_present": _QUEUE is not None}


def _file_logging_enabled(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    dictConfig mapping for `settings`:

      - formatters: "standard" (colour in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: console + (file, error_file) when writing files, else console + error_console
      - loggers: root, ticket_logger, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": TEXT_FORMAT,
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _file_logging_enabled(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    handler_names = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": handler_names,
                "level": settings.LOG_LEVEL,
            },
            # app loggers propagate to root; the level is what matters here
            "ticket_logger": {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": handler_names,
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL echo may contain row values
            "sqlalchemy.engine": {
                "level": "INFO" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def _install_queue(settings: Settings) -> None:
    """Move the root handlers behind a QueueListener and enqueue from producers."""
    global _QUEUE_LISTENER, _QUEUE

    root_logger = logging.getLogger()
    real_handlers = list(root_logger.handlers)
    if not real_handlers:
        return

    # detach the real handlers everywhere so they only run in the listener thread
    moved = set(real_handlers)
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            for h in list(logger_obj.handlers):
                if h in moved:
                    logger_obj.removeHandler(h)
    for h in real_handlers:
        root_logger.removeHandler(h)

    max_size = settings.LOG_QUEUE_MAX_SIZE or 0
    log_queue: _queue.Queue = _queue.Queue(max_size)

    if max_size > 0 and not settings.LOG_QUEUE_BLOCKING:
        queue_handler: QueueHandler = NonBlockingQueueHandler(log_queue)
    else:
        queue_handler = QueueHandler(log_queue)

    # request id and redaction must run in the producer (contextvars live there)
    queue_handler.addFilter(RequestIdFilter())
    queue_handler.addFilter(RedactFilter())

    listener = QueueListener(log_queue, *real_handlers, respect_handler_level=True)
    listener.start()
    root_logger.addHandler(queue_handler)

    _QUEUE_LISTENER = listener
    _QUEUE = log_queue


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration for `settings`. Safe to call more than once
    (tests and the app factory both call it); a previous queue listener is stopped first.
    """
    stop_queue_logging()

    if _file_logging_enabled(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    # keeps %(request_id)s resolvable for records that bypass the handler filters
    logging.getLogger().addFilter(RequestIdFilter())

    if settings.LOG_USE_QUEUE:
        _install_queue(settings)


def stop_queue_logging() -> None:
    """Flush and stop the background listener, if one is running."""
    global _QUEUE_LISTENER, _QUEUE
    listener = _QUEUE_LISTENER
    if listener is None:
        return

    try:
        listener.stop()
    except Exception:
        logging.getLogger(__name__).exception("logging.queue.stop_failed")
    finally:
        _QUEUE_LISTENER = None
        _QUEUE = None
