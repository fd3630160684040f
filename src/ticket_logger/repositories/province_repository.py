import logging

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.models.location import Location
from ticket_logger.models.province import Province
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProvinceRepository(BaseRepository[Province]):
    """Province queries: code uniqueness, Province -> Location cascade."""

    def __init__(self, db: AsyncSession):
        super().__init__(Province, db)

    async def exists_by_code(self, code: str) -> bool:
        async with db_error_handler(self.db, self.model_name, "exists_by_code"):
            result = await self.db.execute(select(exists().where(Province.code == code)))
            return bool(result.scalar())

    async def exists_by_code_and_not_id(self, code: str, province_id: int) -> bool:
        async with db_error_handler(self.db, self.model_name, "exists_by_code"):
            result = await self.db.execute(
                select(exists().where(Province.code == code, Province.id != province_id))
            )
            return bool(result.scalar())

    async def delete_cascade(self, province_id: int) -> bool:
        """Delete the province's locations, then the province. The caller commits."""
        async with db_error_handler(self.db, self.model_name, "delete_cascade"):
            locations = await self.db.execute(
                delete(Location)
                .where(Location.province_id == province_id)
                .execution_options(synchronize_session="fetch")
            )
            provinces = await self.db.execute(
                delete(Province)
                .where(Province.id == province_id)
                .execution_options(synchronize_session="fetch")
            )

        logger.info(
            "repo.province.delete_cascade",
            extra={"model": self.model_name, "id": province_id, "deleted_locations": locations.rowcount},
        )
        return provinces.rowcount > 0
