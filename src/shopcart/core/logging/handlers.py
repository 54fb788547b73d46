# src/shopcart/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a plain handler configuration dict; builder.py decides
which of them are wired in. Formatter and filter names refer to entries the
builder declares ("json"/"standard", "correlation_id"/"redact").
"""

from pathlib import Path

from shopcart.config.settings import Settings

_FILTERS = ("correlation_id", "redact")


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def _stream(formatter: str, level: str) -> dict:
    # No "stream" key: StreamHandler binds sys.stderr when dictConfig builds it.
    return {
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "level": level,
        "filters": list(_FILTERS),
    }


def _rotating_file(settings: Settings, filename: str, formatter: str, level: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "formatter": formatter,
        "level": level,
        "filters": list(_FILTERS),
    }


def get_console_handler(settings: Settings) -> dict:
    """Every record at or above LOG_LEVEL, to stderr."""
    return _stream(_formatter_name(settings), settings.LOG_LEVEL)


def get_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "app.log", _formatter_name(settings), settings.LOG_LEVEL)


# Errors get their own file, always structured.
def get_error_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "errors.log", "json", "ERROR")


def get_error_console_handler(settings: Settings) -> dict:
    return _stream("json", "ERROR")
