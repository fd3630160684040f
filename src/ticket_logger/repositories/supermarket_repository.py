import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.models.location import Location
from ticket_logger.models.supermarket import Supermarket
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SupermarketRepository(BaseRepository[Supermarket]):

    def __init__(self, db: AsyncSession):
        super().__init__(Supermarket, db)

    async def delete_cascade(self, supermarket_id: int) -> bool:
        """Delete the supermarket's locations, then the supermarket. The caller commits."""
        async with db_error_handler(self.db, self.model_name, "delete_cascade"):
            locations = await self.db.execute(
                delete(Location)
                .where(Location.supermarket_id == supermarket_id)
                .execution_options(synchronize_session="fetch")
            )
            supermarkets = await self.db.execute(
                delete(Supermarket)
                .where(Supermarket.id == supermarket_id)
                .execution_options(synchronize_session="fetch")
            )

        logger.info(
            "repo.supermarket.delete_cascade",
            extra={"model": self.model_name, "id": supermarket_id, "deleted_locations": locations.rowcount},
        )
        return supermarkets.rowcount > 0
