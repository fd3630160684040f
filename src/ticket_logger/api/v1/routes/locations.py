# ticket_logger/api/v1/routes/locations.py

from fastapi import APIRouter, Depends, Response, status

from ticket_logger.core.dependencies import get_location_service
from ticket_logger.schemas import ErrorResponse, LocationCreate, LocationRead, LocationUpdate
from ticket_logger.services import LocationService

router = APIRouter(prefix="/api/locations", tags=["locations"])


@router.get("", response_model=list[LocationRead])
async def list_locations(service: LocationService = Depends(get_location_service)) -> list[LocationRead]:
    return await service.list_locations()


@router.get("/{location_id}", response_model=LocationRead, responses={404: {"model": ErrorResponse}})
async def get_location(location_id: int, service: LocationService = Depends(get_location_service)) -> LocationRead:
    return await service.get_location(location_id)


@router.post(
    "",
    response_model=LocationRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_location(
    payload: LocationCreate,
    service: LocationService = Depends(get_location_service),
) -> LocationRead:
    return await service.create_location(payload)


@router.put(
    "/{location_id}",
    response_model=LocationRead,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_location(
    location_id: int,
    payload: LocationUpdate,
    service: LocationService = Depends(get_location_service),
) -> LocationRead:
    return await service.update_location(location_id, payload)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT, responses={404: {"model": ErrorResponse}})
async def delete_location(location_id: int, service: LocationService = Depends(get_location_service)) -> Response:
    await service.delete_location(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
