"""Fixtures for repository and service tests."""

import datetime as dt
import string

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.models import Location, Product, Province, Region, Supermarket, Ticket
from ticket_logger.repositories import (
    BaseRepository,
    LocationRepository,
    ProductRepository,
    ProvinceRepository,
    RegionRepository,
    SupermarketRepository,
    TicketRepository,
    UserRepository,
)

fake = Faker()
Faker.seed(1234)


def _code_sequence(prefix: str):
    # "RA", "RB", ... never collide with the numeric codes tests pass explicitly
    return (f"{prefix}{c}" for c in string.ascii_uppercase + string.digits)


@pytest.fixture
async def base_repo(db_session: AsyncSession) -> BaseRepository[Region]:
    """
    A plain BaseRepository bound to Region, for the generic CRUD tests.

    All DB actions run on the `db_session` fixture's session.
    """
    return BaseRepository(Region, db_session)


@pytest.fixture
async def region_repository(db_session: AsyncSession) -> RegionRepository:
    return RegionRepository(db_session)


@pytest.fixture
async def province_repository(db_session: AsyncSession) -> ProvinceRepository:
    return ProvinceRepository(db_session)


@pytest.fixture
async def supermarket_repository(db_session: AsyncSession) -> SupermarketRepository:
    return SupermarketRepository(db_session)


@pytest.fixture
async def location_repository(db_session: AsyncSession) -> LocationRepository:
    return LocationRepository(db_session)


@pytest.fixture
async def product_repository(db_session: AsyncSession) -> ProductRepository:
    return ProductRepository(db_session)


@pytest.fixture
async def ticket_repository(db_session: AsyncSession) -> TicketRepository:
    return TicketRepository(db_session)


@pytest.fixture
async def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


# ---------------------------------------------------------------------------
# Factories
#
# Every factory commits, so rows are visible to API requests (which use their
# own sessions) and survive a later rollback in the test.
# ---------------------------------------------------------------------------


@pytest.fixture
def create_region(db_session: AsyncSession, region_repository: RegionRepository):
    """
    Usage:
        region = await create_region(code="01", name="Andalucía")
    """
    codes = _code_sequence("R")

    async def _create(**overrides) -> Region:
        data = {"code": next(codes), "name": fake.city(), "image_path": None}
        data.update(overrides)
        region = await region_repository.create(**data)
        await db_session.commit()
        return region

    return _create


@pytest.fixture
def create_province(db_session: AsyncSession, province_repository: ProvinceRepository, create_region):
    codes = _code_sequence("P")

    async def _create(region: Region | None = None, **overrides) -> Province:
        region = region or await create_region()
        data = {"code": next(codes), "name": fake.city(), "region_id": region.id}
        data.update(overrides)
        province = await province_repository.create(**data)
        await db_session.commit()
        return province

    return _create


@pytest.fixture
def create_supermarket(db_session: AsyncSession, supermarket_repository: SupermarketRepository):
    async def _create(**overrides) -> Supermarket:
        data = {"name": fake.company()}
        data.update(overrides)
        supermarket = await supermarket_repository.create(**data)
        await db_session.commit()
        return supermarket

    return _create


@pytest.fixture
def create_location(db_session: AsyncSession, location_repository: LocationRepository, create_supermarket):
    async def _create(province: Province, supermarket: Supermarket | None = None, **overrides) -> Location:
        supermarket = supermarket or await create_supermarket()
        data = {
            "address": fake.street_address(),
            "city": fake.city(),
            "supermarket_id": supermarket.id,
            "province_id": province.id,
        }
        data.update(overrides)
        location = await location_repository.create(**data)
        await db_session.commit()
        return location

    return _create


@pytest.fixture
def create_product(db_session: AsyncSession, product_repository: ProductRepository):
    async def _create(**overrides) -> Product:
        data = {"name": fake.unique.word().capitalize()}
        data.update(overrides)
        product = await product_repository.create(**data)
        await db_session.commit()
        return product

    return _create


@pytest.fixture
def create_ticket(db_session: AsyncSession, ticket_repository: TicketRepository):
    async def _create(products: list[Product] | None = None, date: dt.date | None = None) -> Ticket:
        ticket = await ticket_repository.create(
            date=date or dt.date(2024, 11, 2),
            products=list(products or []),
        )
        await db_session.commit()
        return ticket

    return _create


@pytest.fixture
async def region_tree(create_region, create_province, create_location):
    """
    One region with two provinces and a location in each, plus an unrelated
    region/province/location that must survive cascades.
    """
    region = await create_region(code="01", name="Andalucía")
    p1 = await create_province(region=region, code="04", name="Almería")
    p2 = await create_province(region=region, code="11", name="Cádiz")
    l1 = await create_location(province=p1)
    l2 = await create_location(province=p2)

    other_region = await create_region(code="09", name="Cataluña")
    other_province = await create_province(region=other_region, code="08", name="Barcelona")
    other_location = await create_location(province=other_province)

    return {
        "region": region,
        "provinces": [p1, p2],
        "locations": [l1, l2],
        "other_region": other_region,
        "other_province": other_province,
        "other_location": other_location,
    }
