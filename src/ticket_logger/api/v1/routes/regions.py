# ticket_logger/api/v1/routes/regions.py

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from ticket_logger.core.dependencies import get_region_service
from ticket_logger.schemas import ErrorResponse, Page, RegionForm, RegionRead
from ticket_logger.services import ImageUpload, RegionService

router = APIRouter(prefix="/api/regions", tags=["regions"])


def region_form(
    code: str = Form(..., description='Two-character code, e.g. "01"'),
    name: str = Form(...),
) -> RegionForm:
    """Multipart fields -> RegionForm; blank values fail like any other request validation."""
    try:
        return RegionForm(code=code, name=name)
    except PydanticValidationError as exc:
        raise RequestValidationError(
            [{**err, "loc": ("form", *err["loc"])} for err in exc.errors(include_url=False, include_context=False)]
        ) from exc


async def read_upload(image_file: UploadFile | None = File(default=None)) -> ImageUpload | None:
    if image_file is None:
        return None
    content = await image_file.read()
    if not content:
        return None
    return ImageUpload(
        filename=image_file.filename or "image",
        content=content,
        content_type=image_file.content_type,
    )


@router.get("", response_model=Page[RegionRead], summary="List regions (paged)")
async def list_regions(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(20, ge=1, le=100),
    sort: str | None = Query(None, description='e.g. "name" or "code,desc"'),
    service: RegionService = Depends(get_region_service),
) -> Page[RegionRead]:
    return await service.list_regions(page=page, size=size, sort=sort)


@router.get("/{region_id}", response_model=RegionRead, responses={404: {"model": ErrorResponse}})
async def get_region(region_id: int, service: RegionService = Depends(get_region_service)) -> RegionRead:
    return await service.get_region(region_id)


@router.post(
    "",
    response_model=RegionRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create a region (multipart: code, name, optional image_file)",
)
async def create_region(
    form: RegionForm = Depends(region_form),
    image: ImageUpload | None = Depends(read_upload),
    service: RegionService = Depends(get_region_service),
) -> RegionRead:
    return await service.create_region(form, image)


@router.put(
    "/{region_id}",
    response_model=RegionRead,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update a region; a new image_file replaces the stored one",
)
async def update_region(
    region_id: int,
    form: RegionForm = Depends(region_form),
    image: ImageUpload | None = Depends(read_upload),
    service: RegionService = Depends(get_region_service),
) -> RegionRead:
    return await service.update_region(region_id, form, image)


@router.delete("/{region_id}", status_code=status.HTTP_204_NO_CONTENT, responses={404: {"model": ErrorResponse}})
async def delete_region(region_id: int, service: RegionService = Depends(get_region_service)) -> Response:
    """Deletes the region, its image, its provinces and their locations."""
    await service.delete_region(region_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
