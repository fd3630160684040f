import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.base import ConflictError, ValidationError
from ticket_logger.i18n import DEFAULT_LOCALE
from ticket_logger.mappers import to_province_read
from ticket_logger.repositories import ProvinceRepository, RegionRepository
from ticket_logger.schemas import ProvinceCreate, ProvinceRead, ProvinceUpdate
from .base_service import BaseService

logger = logging.getLogger(__name__)


class ProvinceService(BaseService):
    """
    Province use-cases. Codes are unique across provinces; the referenced region must exist.
    """

    model_name = "Province"

    def __init__(self, db: AsyncSession, locale: str = DEFAULT_LOCALE):
        super().__init__(db, locale)
        self.provinces = ProvinceRepository(db)
        self.regions = RegionRepository(db)

    async def list_provinces(self) -> list[ProvinceRead]:
        return [to_province_read(p) for p in await self.provinces.get_all()]

    async def get_province(self, province_id: int) -> ProvinceRead:
        province = await self.provinces.get_by_id_or_raise(province_id, self.msg("province.not_found"))
        return to_province_read(province)

    def _code_conflict(self, cause: ConflictError | None = None) -> ConflictError:
        return ConflictError(
            self.msg("province.code.exists"),
            fields=["code"],
            constraint=cause.constraint if cause else None,
        )

    async def _require_region(self, region_id: int) -> None:
        if not await self.regions.exists(region_id):
            raise ValidationError(self.msg("province.region.not_found"), fields=["region"])

    async def create_province(self, payload: ProvinceCreate) -> ProvinceRead:
        if await self.provinces.exists_by_code(payload.code):
            logger.info("service.province.create.duplicate_code", extra={"code": payload.code})
            raise self._code_conflict()
        await self._require_region(payload.region.id)

        try:
            province = await self.provinces.create(
                code=payload.code,
                name=payload.name,
                region_id=payload.region.id,
            )
            await self.commit("create")
        except ConflictError as exc:
            raise self._code_conflict(exc) from exc

        logger.info("service.province.create.success", extra={"id": province.id, "region_id": payload.region.id})
        return to_province_read(province)

    async def update_province(self, province_id: int, payload: ProvinceUpdate) -> ProvinceRead:
        await self.provinces.get_by_id_or_raise(province_id, self.msg("province.not_found"))

        if await self.provinces.exists_by_code_and_not_id(payload.code, province_id):
            logger.info("service.province.update.duplicate_code", extra={"id": province_id, "code": payload.code})
            raise self._code_conflict()
        await self._require_region(payload.region.id)

        try:
            province = await self.provinces.update(
                province_id,
                code=payload.code,
                name=payload.name,
                region_id=payload.region.id,
            )
            await self.commit("update")
        except ConflictError as exc:
            raise self._code_conflict(exc) from exc

        logger.info("service.province.update.success", extra={"id": province_id})
        return to_province_read(province)

    async def delete_province(self, province_id: int) -> None:
        await self.provinces.get_by_id_or_raise(province_id, self.msg("province.not_found"))
        await self.provinces.delete_cascade(province_id)
        await self.commit("delete")
        logger.info("service.province.delete.success", extra={"id": province_id})
