"""
Region DTOs.

Regions are written with multipart forms (code, name and an optional image file),
so there is no JSON create model; `RegionForm` is what the route hands to the service.
"""

from pydantic import Field

from .common import APIModel, Code, Name


class RegionForm(APIModel):
    code: Code
    name: Name


class RegionSummary(APIModel):
    """Region as embedded inside a province."""

    id: int
    code: str
    name: str


class RegionRead(RegionSummary):
    image_path: str | None = Field(
        default=None,
        description="Stored file name, served under the upload URL prefix.",
    )
