"""
Application-level exceptions raised by repositories and services.

Every error carries a canonical `error_code`; the HTTP layer only looks at that
code (through `http_status()`) and at `to_payload()`, so services never import
anything from FastAPI.
"""

from typing import Iterable


class AppError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['code'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'duplicate', 'not_found') used by clients
    """

    # canonical error_code -> HTTP status
    ERROR_CODE_TO_STATUS = {
        "validation": 400,
        "invalid_field": 400,
        "duplicate": 400,
        "bad_credentials": 400,
        "not_found": 404,
        "storage_error": 500,
        "unexpected_error": 500,
    }

    default_error_code: str | None = None

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code or self.default_error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

            {
                "detail": "Province code already exists",
                "code": "duplicate",
                "fields": ["code"],
            }

        `constraint` is never part of the payload.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """Status for `error_code`; 400 when the code is unknown or missing."""
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class ValidationError(AppError):
    """Missing/oversized field or a reference to a row that does not exist."""
    default_error_code = "validation"


class InvalidFieldError(ValidationError):
    """Raised when the caller passes unexpected/unknown fields to repository methods."""
    default_error_code = "invalid_field"


class ConflictError(AppError):
    """A uniqueness rule was violated (duplicate code, product already on ticket)."""
    default_error_code = "duplicate"


class AuthenticationError(AppError):
    default_error_code = "bad_credentials"


class NotFoundError(AppError):
    default_error_code = "not_found"

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


class StorageError(AppError):
    """The file storage collaborator failed to save or delete a file."""
    default_error_code = "storage_error"


class RepositoryError(AppError):
    """Catch-all for persistence faults that the client cannot correct."""
    default_error_code = "unexpected_error"


class UnexpectedError(AppError):
    default_error_code = "unexpected_error"

    def __init__(self, message: str = "An unexpected error occurred", **kwargs):
        super().__init__(message, **kwargs)


__all__ = [
    "AppError",
    "ValidationError",
    "InvalidFieldError",
    "ConflictError",
    "AuthenticationError",
    "NotFoundError",
    "StorageError",
    "RepositoryError",
    "UnexpectedError",
]
