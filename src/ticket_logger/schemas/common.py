# ticket_logger/schemas/common.py

from math import ceil
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


# ---------------------------------------------------------------------------
# Base / shared types
# ---------------------------------------------------------------------------


class APIModel(BaseModel):
    """
    Base Pydantic model for all HTTP API schemas.

    - from_attributes so read models can be built straight from ORM rows
    - unknown request fields are ignored
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")


# Required text: stripped, non-empty, bounded
Code = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
LongText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class IdRef(APIModel):
    """Reference to an existing row by id, e.g. {"id": 1}."""

    id: int = Field(..., ge=1)


T = TypeVar("T")


class Page(APIModel, Generic[T]):
    """
    One page of a listing. `page` is zero-based.
    """

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def build(cls, content: list[T], page: int, size: int, total: int) -> "Page[T]":
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=ceil(total / size) if size else 0,
        )


class FieldErrorModel(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str
    code: str | None = None
    fields: list[str] | None = None
    errors: list[FieldErrorModel] | None = None
