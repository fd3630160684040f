"""
Entity -> DTO mapping.

Explicit functions instead of `model_validate(entity)` so the wire shape stays
decoupled from the ORM (e.g. one-to-many collections are never touched).
"""

from ticket_logger.models import Location, Product, Province, Region, Supermarket, Ticket
from ticket_logger.schemas import (
    LocationRead,
    ProductRead,
    ProvinceRead,
    ProvinceSummary,
    RegionRead,
    RegionSummary,
    SupermarketRead,
    TicketRead,
)


def to_region_summary(region: Region) -> RegionSummary:
    return RegionSummary(id=region.id, code=region.code, name=region.name)


def to_region_read(region: Region) -> RegionRead:
    return RegionRead(id=region.id, code=region.code, name=region.name, image_path=region.image_path)


def to_province_summary(province: Province) -> ProvinceSummary:
    return ProvinceSummary(id=province.id, code=province.code, name=province.name)


def to_province_read(province: Province) -> ProvinceRead:
    return ProvinceRead(
        id=province.id,
        code=province.code,
        name=province.name,
        region=to_region_summary(province.region),
    )


def to_supermarket_read(supermarket: Supermarket) -> SupermarketRead:
    return SupermarketRead(id=supermarket.id, name=supermarket.name)


def to_location_read(location: Location) -> LocationRead:
    return LocationRead(
        id=location.id,
        address=location.address,
        city=location.city,
        supermarket=to_supermarket_read(location.supermarket),
        province=to_province_summary(location.province),
    )


def to_product_read(product: Product) -> ProductRead:
    return ProductRead(id=product.id, name=product.name)


def to_ticket_read(ticket: Ticket) -> TicketRead:
    return TicketRead(
        id=ticket.id,
        date=ticket.date,
        products=[to_product_read(p) for p in ticket.products],
    )
