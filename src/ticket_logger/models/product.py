from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ticket_logger.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ticket import Ticket


# ------------------------------
# Association table (Ticket <-> Product)
# ------------------------------
# The composite primary key makes "same product twice on one ticket" a unique violation.
ticket_products = Table(
    "ticket_products",
    Base.metadata,
    Column("ticket_id", Integer, ForeignKey("tickets.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class Product(Base):
    """SQLAlchemy model for a Product (a receipt line item)."""
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True
    )

    tickets: Mapped[list["Ticket"]] = relationship(
        "Ticket",
        secondary=ticket_products,
        back_populates="products",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id!r}, name={self.name!r})>"
