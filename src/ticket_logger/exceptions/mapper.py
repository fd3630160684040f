import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import AppError, ConflictError, RepositoryError, ValidationError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_PG_NOT_NULL = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
_PG_KEY = re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE)
_SQLITE_FAILED = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE | re.MULTILINE)
_MYSQL_KEY = re.compile(r"Duplicate entry .* for key '?(?P<key>[^']+)'?", re.IGNORECASE)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the driver message.

      - Postgres: 'null value in column "code"' / 'Key (code)=(23) already exists.'
      - SQLite:   'UNIQUE constraint failed: provinces.code'
      - MySQL:    "Duplicate entry '23' for key 'provinces.code'"
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)
    if not msg:
        return None

    m = _PG_NOT_NULL.search(msg)
    if m:
        return [m.group("col")]

    m = _PG_KEY.search(msg)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = _SQLITE_FAILED.search(msg)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols").strip())]

    m = _MYSQL_KEY.search(msg)
    if m:
        return [m.group("key").split(".")[-1]]

    return None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Map a SQLAlchemy IntegrityError to an app-level exception and raise it.

    unique -> ConflictError, not-null / foreign key / check -> ValidationError,
    anything else -> RepositoryError. Raw DB text never reaches the message.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"
    context = {"model": model_part, "fields": columns, "constraint": constraint_name}

    if exc_cls is UniqueConstraintError:
        # expected client-level scenario (lost check-then-act race)
        logger.info("mapper.duplicate_detected", extra=context)
        if columns:
            raise ConflictError(f"{model_part} already exists for field(s): {', '.join(columns)}",
                                fields=columns, constraint=constraint_name) from exc
        raise ConflictError(f"{model_part} already exists", constraint=constraint_name) from exc

    if exc_cls is NotNullConstraintError:
        logger.info("mapper.not_null_violation", extra=context)
        detail = f"Missing required field(s) for {model_part}"
        if columns:
            detail = f"Missing required field(s): {', '.join(columns)} for {model_part}"
        raise ValidationError(detail, fields=columns, constraint=constraint_name) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info("mapper.foreign_key_violation", extra=context)
        raise ValidationError(f"{model_part} references a row that does not exist",
                              fields=columns, constraint=constraint_name) from exc

    if exc_cls is CheckConstraintError:
        logger.info("mapper.check_constraint_failure", extra=context)
        raise ValidationError(f"{model_part} business rule violated", constraint=constraint_name) from exc

    logger.warning("mapper.unknown_integrity_error", extra=context)
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})
    raise RepositoryError(f"{model_part} database integrity error") from exc


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("mapper.rollback_failed", extra={"model": model_name})


# -----------------------
# Async context manager to DRY error handling in repositories and services
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None, operation: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__, "create"):
            ... flush() / commit() ...

    Rolls back on error and raises a mapped app-level exception. AppErrors raised
    inside the block are re-raised unchanged after the rollback.
    """
    try:
        yield
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except AppError:
        await _safe_rollback(db, model_name)
        raise
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("mapper.unexpected_db_error",
                         extra={"model": model_name, "operation": operation})
        raise RepositoryError(f"Failed to {operation or 'operate on'} {model_name or 'database'}") from exc
