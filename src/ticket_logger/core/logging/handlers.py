"""
Handler factories for logging.dictConfig.

Each function returns a plain handler config dict; formatter and filter names
refer to entries that `builder.make_dict_config` defines.
"""

from pathlib import Path

from ticket_logger.config.settings import Settings

APP_LOG_FILE = "ticket-logger.log"
ERROR_LOG_FILE = "errors.log"

_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    """All records >= LOG_LEVEL to the console (stdout when LOG_TO_STDOUT, else stderr)."""
    handler = {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": list(_FILTERS),
    }
    if settings.LOG_TO_STDOUT:
        handler["stream"] = "ext://sys.stdout"
    return handler


def _rotating_file(settings: Settings, file_name: str, level: str, formatter: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": formatter,
        "level": level,
        "filename": str(Path(settings.LOG_DIR) / file_name),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(_FILTERS),
    }


def get_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, APP_LOG_FILE, settings.LOG_LEVEL, _formatter_name(settings))


def get_error_file_handler(settings: Settings) -> dict:
    # error files stay structured regardless of LOG_FORMAT
    return _rotating_file(settings, ERROR_LOG_FILE, "ERROR", "json")


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(_FILTERS),
    }
