"""
Classify a SQLAlchemy `IntegrityError` into the kind of constraint that failed.

These classes are internal labels only; `mapper.raise_mapped_integrity_error`
turns them into the public `ConflictError` / `ValidationError` / `RepositoryError`.
"""

import logging
from enum import Enum
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)


class ConstraintViolationError(RepositoryError):
    """Base for integrity/constraint violations."""


class UniqueConstraintError(ConstraintViolationError):
    pass


class NotNullConstraintError(ConstraintViolationError):
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP: dict[str, Type[ConstraintViolationError]] = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION.value: CheckConstraintError,
}

# (keywords, class) in priority order; matched against the lower-cased driver message
MESSAGE_KEYWORDS: list[tuple[tuple[str, ...], Type[ConstraintViolationError]]] = [
    (("unique constraint", "unique failed", "unique violation", "duplicate"), UniqueConstraintError),
    (("not null constraint", "null value in column"), NotNullConstraintError),
    (("foreign key constraint", "foreign key", "is not present in table"), ForeignKeyConstraintError),
    (("check constraint", "check failed"), CheckConstraintError),
]


def _sqlstate(orig) -> str | None:
    # psycopg 3 exposes `sqlstate`, psycopg2 exposes `pgcode`
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    code = _sqlstate(orig)
    if not code:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    exception_class = PGCODE_EXCEPTION_MAP.get(code)
    if exception_class:
        logger.debug("integrity.classified.sqlstate",
                     extra={"sqlstate": code, "constraint_name": constraint_name})
        return exception_class, constraint_name

    logger.warning("integrity.unknown_sqlstate",
                   extra={"sqlstate": code, "constraint_name": constraint_name})
    return UnknownIntegrityError, constraint_name


def _classify_from_generic_message(msg: str) -> tuple[Type[ConstraintViolationError], None]:
    """Fallback for SQLite / MySQL, which carry no SQLSTATE on the driver error."""
    normalized = (msg or "").lower()

    for keywords, exception_class in MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return exception_class, None

    logger.warning("integrity.unknown_message", extra={"message_snippet": (msg or "")[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Return (ConstraintViolationError subclass, constraint name if the driver reports one).
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    return _classify_from_generic_message(str(orig))
