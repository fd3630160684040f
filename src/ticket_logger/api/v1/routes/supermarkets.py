# ticket_logger/api/v1/routes/supermarkets.py

from fastapi import APIRouter, Depends, Response, status

from ticket_logger.core.dependencies import get_supermarket_service
from ticket_logger.schemas import ErrorResponse, SupermarketCreate, SupermarketRead, SupermarketUpdate
from ticket_logger.services import SupermarketService

router = APIRouter(prefix="/api/supermarkets", tags=["supermarkets"])


@router.get("", response_model=list[SupermarketRead])
async def list_supermarkets(service: SupermarketService = Depends(get_supermarket_service)) -> list[SupermarketRead]:
    return await service.list_supermarkets()


@router.get("/{supermarket_id}", response_model=SupermarketRead, responses={404: {"model": ErrorResponse}})
async def get_supermarket(
    supermarket_id: int,
    service: SupermarketService = Depends(get_supermarket_service),
) -> SupermarketRead:
    return await service.get_supermarket(supermarket_id)


@router.post("", response_model=SupermarketRead, status_code=status.HTTP_201_CREATED)
async def create_supermarket(
    payload: SupermarketCreate,
    service: SupermarketService = Depends(get_supermarket_service),
) -> SupermarketRead:
    return await service.create_supermarket(payload)


@router.put("/{supermarket_id}", response_model=SupermarketRead, responses={404: {"model": ErrorResponse}})
async def update_supermarket(
    supermarket_id: int,
    payload: SupermarketUpdate,
    service: SupermarketService = Depends(get_supermarket_service),
) -> SupermarketRead:
    return await service.update_supermarket(supermarket_id, payload)


@router.delete("/{supermarket_id}", status_code=status.HTTP_204_NO_CONTENT, responses={404: {"model": ErrorResponse}})
async def delete_supermarket(
    supermarket_id: int,
    service: SupermarketService = Depends(get_supermarket_service),
) -> Response:
    await service.delete_supermarket(supermarket_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
