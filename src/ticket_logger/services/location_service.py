import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.base import ValidationError
from ticket_logger.i18n import DEFAULT_LOCALE
from ticket_logger.mappers import to_location_read
from ticket_logger.repositories import LocationRepository, ProvinceRepository, SupermarketRepository
from ticket_logger.schemas import LocationCreate, LocationRead, LocationUpdate
from .base_service import BaseService

logger = logging.getLogger(__name__)


class LocationService(BaseService):

    model_name = "Location"

    def __init__(self, db: AsyncSession, locale: str = DEFAULT_LOCALE):
        super().__init__(db, locale)
        self.locations = LocationRepository(db)
        self.supermarkets = SupermarketRepository(db)
        self.provinces = ProvinceRepository(db)

    async def _check_references(self, payload: LocationCreate) -> None:
        """Both referenced rows must exist; reports every missing one at once."""
        errors = []
        if not await self.supermarkets.exists(payload.supermarket.id):
            errors.append(("supermarket", self.msg("location.supermarket.not_found")))
        if not await self.provinces.exists(payload.province.id):
            errors.append(("province", self.msg("location.province.not_found")))
        if errors:
            raise ValidationError("; ".join(m for _, m in errors), fields=[f for f, _ in errors])

    async def list_locations(self) -> list[LocationRead]:
        return [to_location_read(loc) for loc in await self.locations.get_all()]

    async def get_location(self, location_id: int) -> LocationRead:
        location = await self.locations.get_by_id_or_raise(location_id, self.msg("location.not_found"))
        return to_location_read(location)

    async def create_location(self, payload: LocationCreate) -> LocationRead:
        await self._check_references(payload)
        location = await self.locations.create(
            address=payload.address,
            city=payload.city,
            supermarket_id=payload.supermarket.id,
            province_id=payload.province.id,
        )
        await self.commit("create")
        logger.info("service.location.create.success", extra={"id": location.id})
        return to_location_read(location)

    async def update_location(self, location_id: int, payload: LocationUpdate) -> LocationRead:
        await self.locations.get_by_id_or_raise(location_id, self.msg("location.not_found"))
        await self._check_references(payload)
        location = await self.locations.update(
            location_id,
            address=payload.address,
            city=payload.city,
            supermarket_id=payload.supermarket.id,
            province_id=payload.province.id,
        )
        await self.commit("update")
        return to_location_read(location)

    async def delete_location(self, location_id: int) -> None:
        await self.locations.get_by_id_or_raise(location_id, self.msg("location.not_found"))
        await self.locations.delete(location_id)
        await self.commit("delete")
        logger.info("service.location.delete.success", extra={"id": location_id})
