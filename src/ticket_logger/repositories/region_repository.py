"""
Region repository: code uniqueness checks and the Region -> Province -> Location cascade.
"""

import logging

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.models.location import Location
from ticket_logger.models.province import Province
from ticket_logger.models.region import Region
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class RegionRepository(BaseRepository[Region]):

    def __init__(self, db: AsyncSession):
        super().__init__(Region, db)

    async def exists_by_code(self, code: str) -> bool:
        """True when any region already uses `code`."""
        async with db_error_handler(self.db, self.model_name, "exists_by_code"):
            result = await self.db.execute(select(exists().where(Region.code == code)))
            return bool(result.scalar())

    async def exists_by_code_and_not_id(self, code: str, region_id: int) -> bool:
        """True when a region other than `region_id` uses `code`."""
        async with db_error_handler(self.db, self.model_name, "exists_by_code"):
            result = await self.db.execute(
                select(exists().where(Region.code == code, Region.id != region_id))
            )
            return bool(result.scalar())

    async def delete_cascade(self, region_id: int) -> bool:
        """
        Delete the region, its provinces and their locations, children first.

        Only flushes statements; the caller commits. Returns False when the region
        row did not exist.
        """
        province_ids = select(Province.id).where(Province.region_id == region_id)

        async with db_error_handler(self.db, self.model_name, "delete_cascade"):
            locations = await self.db.execute(
                delete(Location)
                .where(Location.province_id.in_(province_ids))
                .execution_options(synchronize_session="fetch")
            )
            provinces = await self.db.execute(
                delete(Province)
                .where(Province.region_id == region_id)
                .execution_options(synchronize_session="fetch")
            )
            regions = await self.db.execute(
                delete(Region)
                .where(Region.id == region_id)
                .execution_options(synchronize_session="fetch")
            )

        logger.info(
            "repo.region.delete_cascade",
            extra={
                "model": self.model_name,
                "id": region_id,
                "deleted_provinces": provinces.rowcount,
                "deleted_locations": locations.rowcount,
            },
        )
        return regions.rowcount > 0
