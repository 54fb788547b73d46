# src/shopcart/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration and
optionally move handler IO onto a background QueueListener.

Configuration knobs (read from the Settings object, or any object exposing the
same attributes):
 - LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR, LOG_MAX_BYTES,
   LOG_BACKUP_COUNT, ENV
 - LOG_USE_QUEUE: enqueue records on the producer side and let a
   QueueListener thread run the real handlers.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config
import queue as _queue
from logging.handlers import QueueHandler, QueueListener

from shopcart.utils.project import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import CorrelationIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Imported for annotations only; get_settings() is never called here.
from shopcart.config.settings import Settings

# Running listener and its queue, kept so stop_queue_logging() can flush them.
_QUEUE_LISTENER: QueueListener | None = None
_QUEUE: _queue.Queue | None = None

# Third-party loggers that are too chatty at DEBUG.
QUIET_LOGGERS = ("faker", "faker.factory", "asyncio")


def _file_logging_enabled(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (colored in text mode) and "json"
      - filters: "correlation_id", "redact"
      - handlers: "console" always; "file" + "error_file" when writing to
        LOG_DIR, otherwise "error_console"
      - loggers: root, "shopcart", and the quietened third-party loggers
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "correlation_id": {"()": CorrelationIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if _file_logging_enabled(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    loggers: dict[str, dict] = {
        "": {
            "handlers": list(handlers.keys()),
            "level": settings.LOG_LEVEL,
        },
        # Library code logs under "shopcart.*" and propagates to root.
        "shopcart": {
            "level": settings.LOG_LEVEL,
            "propagate": True,
        },
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"level": "WARNING"}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

    Steps:
      1. Create LOG_DIR when file logging is enabled.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Attach a CorrelationIdFilter to the root logger so `%(correlation_id)s`
         never raises KeyError.
      4. With LOG_USE_QUEUE, detach the real handlers from the root logger, run
         them on a QueueListener thread, and put a QueueHandler on root. The
         correlation and redaction filters go on the QueueHandler so they run in
         the producer's context, where the contextvar holds the right id.
    """
    global _QUEUE_LISTENER, _QUEUE

    # A previous queue-mode setup must be flushed before handlers are replaced.
    stop_queue_logging()

    if _file_logging_enabled(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root_logger = logging.getLogger()
    root_logger.addFilter(CorrelationIdFilter())

    if not getattr(settings, "LOG_USE_QUEUE", False):
        return

    real_handlers = list(root_logger.handlers)
    if not real_handlers:
        return

    for h in real_handlers:
        root_logger.removeHandler(h)

    log_queue: _queue.Queue = _queue.Queue()
    listener = QueueListener(log_queue, *real_handlers, respect_handler_level=True)
    listener.start()

    queue_handler = QueueHandler(log_queue)
    queue_handler.addFilter(CorrelationIdFilter())
    queue_handler.addFilter(RedactFilter())
    root_logger.addHandler(queue_handler)

    _QUEUE_LISTENER = listener
    _QUEUE = log_queue


def stop_queue_logging() -> None:
    """
    Flush and stop the QueueListener started by setup_logging(), if any.
    """
    global _QUEUE_LISTENER, _QUEUE
    listener = _QUEUE_LISTENER
    if listener is None:
        return

    try:
        # stop() enqueues a sentinel and joins the listener thread.
        listener.stop()
    finally:
        _QUEUE_LISTENER = None
        _QUEUE = None
