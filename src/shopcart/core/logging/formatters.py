# src/shopcart/core/logging/formatters.py

"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line, for log collectors. It never
    raises: extras that are not JSON-serializable are stringified.

  - ColorFormatter: compact, ANSI-colored lines for a developer terminal.

The builder (dictConfig) picks between them from settings.LOG_FORMAT.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from shopcart.utils.project import get_project_version

PROJECT_VERSION = get_project_version()

# Standard LogRecord attributes; anything else on a record came in via `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "correlation_id"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name (e.g. "development" | "production"); optional.
      - service: logical service name to include in logs.
      - datefmt: optional date format passed to logging.Formatter.formatTime.

    Output fields: timestamp, level, logger, message, module, lineno,
    correlation_id, service, env, version, exc_info/stack_info when present,
    plus every `extra=` attribute.
    """

    def __init__(self, *, env: str | None = None, service: str | None = "shopcart", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "lineno": record.lineno,
            "correlation_id": getattr(record, "correlation_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter.

    Line shape: TIMESTAMP | LEVEL | LOGGER | CORRELATION_ID | MESSAGE, with the
    level wrapped in ANSI color codes and the traceback appended when present.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)
        base = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<28} | "
            f"{getattr(record, 'correlation_id', '-'):<28} | "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)
        return base
