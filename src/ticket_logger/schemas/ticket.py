import datetime as dt

from pydantic import Field

from .common import APIModel, IdRef
from .product import ProductRead


class TicketCreate(APIModel):
    """
    {"date": "2024-11-02", "products": [{"id": 1}, {"id": 4}]}

    Products must already exist; duplicates in the list are collapsed.
    """

    date: dt.date
    products: list[IdRef] = Field(default_factory=list)


TicketUpdate = TicketCreate


class TicketRead(APIModel):
    id: int
    date: dt.date
    products: list[ProductRead]
