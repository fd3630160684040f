# ticket_logger/api/v1/routes/provinces.py

from fastapi import APIRouter, Depends, Response, status

from ticket_logger.core.dependencies import get_province_service
from ticket_logger.schemas import ErrorResponse, ProvinceCreate, ProvinceRead, ProvinceUpdate
from ticket_logger.services import ProvinceService

router = APIRouter(prefix="/api/provinces", tags=["provinces"])


@router.get("", response_model=list[ProvinceRead])
async def list_provinces(service: ProvinceService = Depends(get_province_service)) -> list[ProvinceRead]:
    return await service.list_provinces()


@router.get("/{province_id}", response_model=ProvinceRead, responses={404: {"model": ErrorResponse}})
async def get_province(province_id: int, service: ProvinceService = Depends(get_province_service)) -> ProvinceRead:
    return await service.get_province(province_id)


@router.post(
    "",
    response_model=ProvinceRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_province(
    payload: ProvinceCreate,
    service: ProvinceService = Depends(get_province_service),
) -> ProvinceRead:
    return await service.create_province(payload)


@router.put(
    "/{province_id}",
    response_model=ProvinceRead,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_province(
    province_id: int,
    payload: ProvinceUpdate,
    service: ProvinceService = Depends(get_province_service),
) -> ProvinceRead:
    return await service.update_province(province_id, payload)


@router.delete("/{province_id}", status_code=status.HTTP_204_NO_CONTENT, responses={404: {"model": ErrorResponse}})
async def delete_province(province_id: int, service: ProvinceService = Depends(get_province_service)) -> Response:
    await service.delete_province(province_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
