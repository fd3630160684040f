"""
Ticket use-cases, including the ticket <-> product association workflow.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.base import ConflictError, ValidationError
from ticket_logger.i18n import DEFAULT_LOCALE
from ticket_logger.mappers import to_product_read, to_ticket_read
from ticket_logger.models import Product, Ticket
from ticket_logger.repositories import ProductRepository, TicketRepository
from ticket_logger.schemas import ProductCreate, ProductRead, TicketCreate, TicketRead, TicketUpdate
from .base_service import BaseService

logger = logging.getLogger(__name__)


class TicketService(BaseService):

    model_name = "Ticket"

    def __init__(self, db: AsyncSession, locale: str = DEFAULT_LOCALE):
        super().__init__(db, locale)
        self.tickets = TicketRepository(db)
        self.products = ProductRepository(db)

    async def _get_ticket(self, ticket_id: int) -> Ticket:
        return await self.tickets.get_by_id_or_raise(ticket_id, self.msg("ticket.not_found"))

    async def _get_product(self, product_id: int) -> Product:
        return await self.products.get_by_id_or_raise(product_id, self.msg("product.not_found"))

    async def _resolve_products(self, payload: TicketCreate) -> list[Product]:
        # keep the request order, drop repeated ids
        wanted = list(dict.fromkeys(ref.id for ref in payload.products))
        found = {p.id: p for p in await self.products.get_many(wanted)}
        missing = [pid for pid in wanted if pid not in found]
        if missing:
            logger.info("service.ticket.unknown_products", extra={"product_ids": missing})
            raise ValidationError(
                f"{self.msg('ticket.products.not_found')}: {', '.join(map(str, missing))}",
                fields=["products"],
            )
        return [found[pid] for pid in wanted]

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def list_tickets(self) -> list[TicketRead]:
        return [to_ticket_read(t) for t in await self.tickets.get_all()]

    async def get_ticket(self, ticket_id: int) -> TicketRead:
        return to_ticket_read(await self._get_ticket(ticket_id))

    async def create_ticket(self, payload: TicketCreate) -> TicketRead:
        products = await self._resolve_products(payload)
        ticket = await self.tickets.create(date=payload.date, products=products)
        await self.commit("create")
        logger.info("service.ticket.create.success", extra={"id": ticket.id, "products": len(products)})
        return to_ticket_read(ticket)

    async def update_ticket(self, ticket_id: int, payload: TicketUpdate) -> TicketRead:
        ticket = await self._get_ticket(ticket_id)
        products = await self._resolve_products(payload)
        ticket.date = payload.date
        ticket.products = products
        await self.tickets.save(ticket)
        await self.commit("update")
        return to_ticket_read(ticket)

    async def delete_ticket(self, ticket_id: int) -> None:
        """Deletes the ticket and its association rows; the products themselves remain."""
        await self._get_ticket(ticket_id)
        await self.tickets.delete_cascade(ticket_id)
        await self.commit("delete")
        logger.info("service.ticket.delete.success", extra={"id": ticket_id})

    # -------------------------------------------------------------------------
    # Ticket <-> Product
    # -------------------------------------------------------------------------

    async def search_products(self, ticket_id: int, query: str) -> list[ProductRead]:
        """All products whose name contains `query` (case-insensitive); the ticket must exist."""
        await self._get_ticket(ticket_id)
        return [to_product_read(p) for p in await self.products.search_by_name(query or "")]

    async def add_existing_product(self, ticket_id: int, product_id: int) -> TicketRead:
        ticket = await self._get_ticket(ticket_id)
        product = await self._get_product(product_id)

        if any(p.id == product.id for p in ticket.products):
            logger.info("service.ticket.product.duplicate", extra={"id": ticket_id, "product_id": product_id})
            raise ConflictError(self.msg("ticket.product.duplicate"), fields=["product"])

        ticket.products.append(product)
        try:
            await self.tickets.save(ticket)
            await self.commit("add_product")
        except ConflictError as exc:
            raise ConflictError(self.msg("ticket.product.duplicate"), fields=["product"]) from exc

        logger.info("service.ticket.product.added", extra={"id": ticket_id, "product_id": product_id})
        return to_ticket_read(ticket)

    async def add_new_product(self, ticket_id: int, payload: ProductCreate) -> TicketRead:
        """
        Create a product and attach it. A product with the same name (ignoring case)
        already on the ticket is rejected.
        """
        ticket = await self._get_ticket(ticket_id)
        name = payload.name.strip()

        if any(p.name.strip().lower() == name.lower() for p in ticket.products):
            logger.info("service.ticket.product.name_exists", extra={"id": ticket_id})
            raise ConflictError(self.msg("ticket.product.name_exists"), fields=["name"])

        product = await self.products.create(name=name)
        ticket.products.append(product)
        await self.tickets.save(ticket)
        await self.commit("add_new_product")

        logger.info("service.ticket.product.created", extra={"id": ticket_id, "product_id": product.id})
        return to_ticket_read(ticket)

    async def remove_product(self, ticket_id: int, product_id: int) -> TicketRead:
        """Detach the product. Removing a product that is not on the ticket changes nothing."""
        ticket = await self._get_ticket(ticket_id)
        product = await self._get_product(product_id)

        remaining = [p for p in ticket.products if p.id != product.id]
        if len(remaining) != len(ticket.products):
            ticket.products = remaining
            await self.tickets.save(ticket)
            await self.commit("remove_product")
            logger.info("service.ticket.product.removed", extra={"id": ticket_id, "product_id": product_id})

        return to_ticket_read(ticket)
