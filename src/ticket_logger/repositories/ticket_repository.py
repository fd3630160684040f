import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.models.product import ticket_products
from ticket_logger.models.ticket import Ticket
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TicketRepository(BaseRepository[Ticket]):
    """
    Ticket persistence. Products attached to a ticket are managed through the
    `Ticket.products` collection; the association rows are the only thing a
    ticket delete removes besides the ticket itself.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Ticket, db)

    async def delete_cascade(self, ticket_id: int) -> bool:
        """Delete the ticket's association rows, then the ticket. Products survive."""
        async with db_error_handler(self.db, self.model_name, "delete_cascade"):
            links = await self.db.execute(
                delete(ticket_products).where(ticket_products.c.ticket_id == ticket_id)
            )
            tickets = await self.db.execute(
                delete(Ticket)
                .where(Ticket.id == ticket_id)
                .execution_options(synchronize_session="fetch")
            )

        logger.info(
            "repo.ticket.delete_cascade",
            extra={"model": self.model_name, "id": ticket_id, "deleted_links": links.rowcount},
        )
        return tickets.rowcount > 0

    async def save(self, ticket: Ticket) -> Ticket:
        """Flush pending changes on an already-loaded ticket (e.g. its products collection)."""
        async with db_error_handler(self.db, self.model_name, "save"):
            await self.db.flush()
            await self.db.refresh(ticket)
        return ticket
