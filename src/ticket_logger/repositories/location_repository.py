from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.models.location import Location
from .base_repository import BaseRepository


class LocationRepository(BaseRepository[Location]):

    def __init__(self, db: AsyncSession):
        super().__init__(Location, db)

    async def list_by_province(self, province_id: int) -> list[Location]:
        async with db_error_handler(self.db, self.model_name, "list_by_province"):
            result = await self.db.execute(
                select(Location).where(Location.province_id == province_id).order_by(Location.id)
            )
            return list(result.scalars().all())
