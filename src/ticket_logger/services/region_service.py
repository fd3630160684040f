"""
Region use-cases: code uniqueness, the image file lifecycle and the cascade delete.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.base import ConflictError
from ticket_logger.i18n import DEFAULT_LOCALE
from ticket_logger.mappers import to_region_read
from ticket_logger.repositories import RegionRepository
from ticket_logger.schemas import Page, RegionForm, RegionRead
from .base_service import BaseService
from .file_storage_service import FileStorageService, ImageUpload

logger = logging.getLogger(__name__)


class RegionService(BaseService):
    """
    Create / update / delete regions.

    Ordering rules:
    - create: the image is saved before the insert and removed again if the insert fails.
    - update: a replaced image is deleted only after the new row state is committed.
    - delete: the image is deleted before the rows (region, provinces, locations).
    """

    model_name = "Region"

    def __init__(self, db: AsyncSession, storage: FileStorageService, locale: str = DEFAULT_LOCALE):
        super().__init__(db, locale)
        self.regions = RegionRepository(db)
        self.storage = storage

    async def list_regions(self, page: int = 0, size: int = 20, sort: str | None = None) -> Page[RegionRead]:
        items, total = await self.regions.get_page(page=page, size=size, sort=sort)
        return Page[RegionRead].build([to_region_read(r) for r in items], page=page, size=size, total=total)

    async def get_region(self, region_id: int) -> RegionRead:
        region = await self.regions.get_by_id_or_raise(region_id, self.msg("region.not_found"))
        return to_region_read(region)

    def _code_conflict(self, cause: ConflictError | None = None) -> ConflictError:
        return ConflictError(
            self.msg("region.code.exists"),
            fields=["code"],
            constraint=cause.constraint if cause else None,
        )

    async def create_region(self, form: RegionForm, image: ImageUpload | None = None) -> RegionRead:
        if await self.regions.exists_by_code(form.code):
            logger.info("service.region.create.duplicate_code", extra={"code": form.code})
            raise self._code_conflict()

        image_path = None
        if image is not None and not image.is_empty:
            image_path = await self.storage.save_file(image)

        try:
            region = await self.regions.create(code=form.code, name=form.name, image_path=image_path)
            await self.commit("create")
        except ConflictError as exc:
            # lost the check-then-act race against another insert
            await self._discard(image_path)
            raise self._code_conflict(exc) from exc
        except Exception:
            await self._discard(image_path)
            raise

        logger.info("service.region.create.success", extra={"id": region.id, "has_image": image_path is not None})
        return to_region_read(region)

    async def update_region(self, region_id: int, form: RegionForm, image: ImageUpload | None = None) -> RegionRead:
        region = await self.regions.get_by_id_or_raise(region_id, self.msg("region.not_found"))

        if await self.regions.exists_by_code_and_not_id(form.code, region_id):
            logger.info("service.region.update.duplicate_code", extra={"id": region_id, "code": form.code})
            raise self._code_conflict()

        previous_image = region.image_path
        new_image = None
        if image is not None and not image.is_empty:
            new_image = await self.storage.save_file(image)

        changes = {"code": form.code, "name": form.name}
        if new_image is not None:
            changes["image_path"] = new_image

        try:
            region = await self.regions.update(region_id, **changes)
            await self.commit("update")
        except ConflictError as exc:
            await self._discard(new_image)
            raise self._code_conflict(exc) from exc
        except Exception:
            await self._discard(new_image)
            raise

        if new_image is not None and previous_image:
            await self._discard(previous_image)

        logger.info("service.region.update.success", extra={"id": region_id, "image_replaced": new_image is not None})
        return to_region_read(region)

    async def delete_region(self, region_id: int) -> None:
        region = await self.regions.get_by_id_or_raise(region_id, self.msg("region.not_found"))

        if region.image_path:
            await self.storage.delete_file(region.image_path)

        await self.regions.delete_cascade(region_id)
        await self.commit("delete")
        logger.info("service.region.delete.success", extra={"id": region_id})

    async def _discard(self, file_name: str | None) -> None:
        """Best-effort removal of a file that is no longer referenced."""
        if not file_name:
            return
        try:
            await self.storage.delete_file(file_name)
        except Exception:
            logger.exception("service.region.image.cleanup_failed", extra={"file_name": file_name})
