# ticket_logger/api/v1/routes/tickets.py

from fastapi import APIRouter, Depends, Query, Response, status

from ticket_logger.core.dependencies import get_ticket_service
from ticket_logger.schemas import (
    ErrorResponse,
    ProductCreate,
    ProductRead,
    TicketCreate,
    TicketRead,
    TicketUpdate,
)
from ticket_logger.services import TicketService

router = APIRouter(prefix="/api/tickets", tags=["tickets"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST_OR_NOT_FOUND = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


# ---------------------------------------------------------------------------
# Tickets
# ---------------------------------------------------------------------------

@router.get("", response_model=list[TicketRead])
async def list_tickets(service: TicketService = Depends(get_ticket_service)) -> list[TicketRead]:
    return await service.list_tickets()


@router.get("/{ticket_id}", response_model=TicketRead, responses=NOT_FOUND)
async def get_ticket(ticket_id: int, service: TicketService = Depends(get_ticket_service)) -> TicketRead:
    return await service.get_ticket(ticket_id)


@router.post("", response_model=TicketRead, status_code=status.HTTP_201_CREATED, responses={400: {"model": ErrorResponse}})
async def create_ticket(payload: TicketCreate, service: TicketService = Depends(get_ticket_service)) -> TicketRead:
    return await service.create_ticket(payload)


@router.put("/{ticket_id}", response_model=TicketRead, responses=BAD_REQUEST_OR_NOT_FOUND)
async def update_ticket(
    ticket_id: int,
    payload: TicketUpdate,
    service: TicketService = Depends(get_ticket_service),
) -> TicketRead:
    return await service.update_ticket(ticket_id, payload)


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_ticket(ticket_id: int, service: TicketService = Depends(get_ticket_service)) -> Response:
    await service.delete_ticket(ticket_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Products on a ticket
# ---------------------------------------------------------------------------

@router.get(
    "/{ticket_id}/products/search",
    response_model=list[ProductRead],
    responses=NOT_FOUND,
    summary="Search products by name (case-insensitive substring)",
)
async def search_products(
    ticket_id: int,
    q: str = Query("", max_length=100),
    service: TicketService = Depends(get_ticket_service),
) -> list[ProductRead]:
    return await service.search_products(ticket_id, q)


@router.post(
    "/{ticket_id}/products",
    response_model=TicketRead,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST_OR_NOT_FOUND,
    summary="Create a product and add it to the ticket",
)
async def add_new_product(
    ticket_id: int,
    payload: ProductCreate,
    service: TicketService = Depends(get_ticket_service),
) -> TicketRead:
    return await service.add_new_product(ticket_id, payload)


@router.post(
    "/{ticket_id}/products/{product_id}",
    response_model=TicketRead,
    responses=BAD_REQUEST_OR_NOT_FOUND,
    summary="Add an existing product to the ticket",
)
async def add_existing_product(
    ticket_id: int,
    product_id: int,
    service: TicketService = Depends(get_ticket_service),
) -> TicketRead:
    return await service.add_existing_product(ticket_id, product_id)


@router.delete(
    "/{ticket_id}/products/{product_id}",
    response_model=TicketRead,
    responses=NOT_FOUND,
    summary="Remove a product from the ticket",
)
async def remove_product(
    ticket_id: int,
    product_id: int,
    service: TicketService = Depends(get_ticket_service),
) -> TicketRead:
    return await service.remove_product(ticket_id, product_id)
