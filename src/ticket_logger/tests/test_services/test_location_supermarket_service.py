import pytest

from ticket_logger.exceptions import NotFoundError, ValidationError
from ticket_logger.models import Location
from ticket_logger.schemas import IdRef, LocationCreate, SupermarketCreate
from ticket_logger.services import LocationService, SupermarketService


@pytest.mark.asyncio
class TestSupermarketService:

    async def test_crud(self, db_session):
        service = SupermarketService(db_session)

        created = await service.create_supermarket(SupermarketCreate(name="Mercadona"))
        assert (await service.get_supermarket(created.id)).name == "Mercadona"

        updated = await service.update_supermarket(created.id, SupermarketCreate(name="Dia"))
        assert updated.name == "Dia"
        assert [s.name for s in await service.list_supermarkets()] == ["Dia"]

        await service.delete_supermarket(created.id)
        with pytest.raises(NotFoundError):
            await service.get_supermarket(created.id)

    async def test_delete_removes_its_locations(self, db_session, create_supermarket, create_location, create_province):
        supermarket = await create_supermarket()
        location = await create_location(province=await create_province(), supermarket=supermarket)

        await SupermarketService(db_session).delete_supermarket(supermarket.id)

        assert await db_session.get(Location, location.id) is None


@pytest.mark.asyncio
class TestLocationService:

    async def test_create_nests_supermarket_and_province(self, db_session, create_supermarket, create_province):
        supermarket = await create_supermarket(name="Mercadona")
        province = await create_province(code="23")

        location = await LocationService(db_session).create_location(
            LocationCreate(
                address="Calle Mayor 1",
                city="Jaén",
                supermarket=IdRef(id=supermarket.id),
                province=IdRef(id=province.id),
            )
        )

        assert location.supermarket.name == "Mercadona"
        assert location.province.code == "23"

    async def test_reports_every_missing_reference(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await LocationService(db_session).create_location(
                LocationCreate(address="Calle Mayor 1", city="Jaén", supermarket=IdRef(id=998), province=IdRef(id=999))
            )
        assert exc_info.value.fields == ["supermarket", "province"]

    async def test_update_and_delete(self, db_session, create_location, create_province, create_supermarket):
        province = await create_province()
        location = await create_location(province=province)
        other_supermarket = await create_supermarket(name="Lidl")
        service = LocationService(db_session)

        updated = await service.update_location(
            location.id,
            LocationCreate(
                address="Avenida 2",
                city="Baeza",
                supermarket=IdRef(id=other_supermarket.id),
                province=IdRef(id=province.id),
            ),
        )
        assert updated.address == "Avenida 2"
        assert updated.supermarket.name == "Lidl"

        await service.delete_location(location.id)
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_location(location.id)
        assert exc_info.value.message == "Location not found"
