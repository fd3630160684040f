import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.i18n import DEFAULT_LOCALE
from ticket_logger.mappers import to_supermarket_read
from ticket_logger.repositories import SupermarketRepository
from ticket_logger.schemas import SupermarketCreate, SupermarketRead, SupermarketUpdate
from .base_service import BaseService

logger = logging.getLogger(__name__)


class SupermarketService(BaseService):

    model_name = "Supermarket"

    def __init__(self, db: AsyncSession, locale: str = DEFAULT_LOCALE):
        super().__init__(db, locale)
        self.supermarkets = SupermarketRepository(db)

    async def list_supermarkets(self) -> list[SupermarketRead]:
        return [to_supermarket_read(s) for s in await self.supermarkets.get_all()]

    async def get_supermarket(self, supermarket_id: int) -> SupermarketRead:
        supermarket = await self.supermarkets.get_by_id_or_raise(supermarket_id, self.msg("supermarket.not_found"))
        return to_supermarket_read(supermarket)

    async def create_supermarket(self, payload: SupermarketCreate) -> SupermarketRead:
        supermarket = await self.supermarkets.create(name=payload.name)
        await self.commit("create")
        logger.info("service.supermarket.create.success", extra={"id": supermarket.id})
        return to_supermarket_read(supermarket)

    async def update_supermarket(self, supermarket_id: int, payload: SupermarketUpdate) -> SupermarketRead:
        await self.supermarkets.get_by_id_or_raise(supermarket_id, self.msg("supermarket.not_found"))
        supermarket = await self.supermarkets.update(supermarket_id, name=payload.name)
        await self.commit("update")
        return to_supermarket_read(supermarket)

    async def delete_supermarket(self, supermarket_id: int) -> None:
        """Deletes the supermarket and every location that belongs to it."""
        await self.supermarkets.get_by_id_or_raise(supermarket_id, self.msg("supermarket.not_found"))
        await self.supermarkets.delete_cascade(supermarket_id)
        await self.commit("delete")
        logger.info("service.supermarket.delete.success", extra={"id": supermarket_id})
