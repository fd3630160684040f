import pytest

from ticket_logger.exceptions import ConflictError, NotFoundError, ValidationError
from ticket_logger.models import Location, Province
from ticket_logger.schemas import IdRef, ProvinceCreate
from ticket_logger.services import ProvinceService


def payload(code: str, name: str, region_id: int) -> ProvinceCreate:
    return ProvinceCreate(code=code, name=name, region=IdRef(id=region_id))


@pytest.fixture
def service(db_session) -> ProvinceService:
    return ProvinceService(db_session)


@pytest.mark.asyncio
class TestProvinceService:

    async def test_create_returns_province_with_region(self, service, create_region):
        region = await create_region(code="01", name="Andalucía")

        province = await service.create_province(payload("23", "Jaén", region.id))

        assert province.code == "23"
        assert province.region.id == region.id
        assert province.region.code == "01"

    async def test_create_duplicate_code(self, service, create_region):
        region = await create_region()
        await service.create_province(payload("23", "Jaén", region.id))

        with pytest.raises(ConflictError) as exc_info:
            await service.create_province(payload("23", "Otra", region.id))

        assert exc_info.value.message == "Province code already exists"
        assert exc_info.value.fields == ["code"]

    async def test_create_with_missing_region(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_province(payload("23", "Jaén", 999))
        assert exc_info.value.fields == ["region"]

    async def test_update_keeping_own_code(self, service, create_province):
        province = await create_province(code="23", name="Jaen")

        updated = await service.update_province(province.id, payload("23", "Jaén", province.region_id))

        assert updated.name == "Jaén"
        assert updated.code == "23"

    async def test_update_to_taken_code(self, service, create_province):
        await create_province(code="23")
        mine = await create_province(code="18")

        with pytest.raises(ConflictError):
            await service.update_province(mine.id, payload("23", "Granada", mine.region_id))

    async def test_update_moves_to_other_region(self, service, create_province, create_region):
        province = await create_province(code="23")
        target = await create_region(code="09", name="Cataluña")

        updated = await service.update_province(province.id, payload("23", "Jaén", target.id))

        assert updated.region.id == target.id
        assert updated.region.name == "Cataluña"

    async def test_localised_messages(self, db_session, create_province):
        province = await create_province(code="23")
        service = ProvinceService(db_session, locale="es")

        with pytest.raises(ConflictError) as exc_info:
            await service.create_province(payload("23", "Otra", province.region_id))
        assert exc_info.value.message == "El código de la provincia ya existe"

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_province(999)
        assert exc_info.value.message == "La provincia no existe"

    async def test_delete_removes_locations(self, service, create_province, create_location, db_session):
        province = await create_province()
        location = await create_location(province=province)

        await service.delete_province(province.id)

        assert await db_session.get(Province, province.id) is None
        assert await db_session.get(Location, location.id) is None

    async def test_delete_missing(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_province(999)
        assert exc_info.value.message == "Province not found"
