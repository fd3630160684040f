from .base import (
    AppError,
    AuthenticationError,
    ConflictError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
    StorageError,
    UnexpectedError,
    ValidationError,
)
from .mapper import db_error_handler, raise_mapped_integrity_error

__all__ = [
    "AppError",
    "AuthenticationError",
    "ConflictError",
    "InvalidFieldError",
    "NotFoundError",
    "RepositoryError",
    "StorageError",
    "UnexpectedError",
    "ValidationError",
    "db_error_handler",
    "raise_mapped_integrity_error",
]
