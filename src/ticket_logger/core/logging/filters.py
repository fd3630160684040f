"""
Logging filters.

- RequestIdFilter: stamps every record with the current request id (or "-"),
  read from a ContextVar so it survives awaits and never leaks across requests.
- RedactFilter: masks sensitive attributes passed through `extra=`.

Both always return True; they annotate records and never drop them.
"""

import contextvars
import logging
import re
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

# incoming X-Request-ID values end up in log lines: no whitespace/control chars
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def is_valid_request_id(value: str | None) -> bool:
    return bool(value) and bool(_SAFE_REQUEST_ID.match(value))


def set_request_id(request_id: str | None):
    """Set the request id for the current context; returns the token for `reset_request_id`."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee `record.request_id`:
    explicit `extra={"request_id": ...}` first, then the contextvar, then "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = frozenset({
        "password",
        "hashed_password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "keystore_password",
    })
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
