import datetime as dt
from sqlalchemy import Date, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ticket_logger.database.base import Base
from .product import ticket_products
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .product import Product


class Ticket(Base):
    """
    SQLAlchemy model for a Ticket (receipt).

    Products are attached through the `ticket_products` association table; the
    collection is loaded with SELECT IN so tickets can be serialized right away.
    """
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    date: Mapped[dt.date] = mapped_column(
        Date,
        nullable=False,
        index=True
    )

    # Many-to-Many
    products: Mapped[list["Product"]] = relationship(
        "Product",
        secondary=ticket_products,
        back_populates="tickets",
        passive_deletes=True,
        lazy="selectin",
        order_by="Product.id"
    )

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id!r}, date={self.date!r})>"
