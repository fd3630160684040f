from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ticket_logger.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .province import Province
    from .supermarket import Supermarket


class Location(Base):
    """
    SQLAlchemy model for a Location: one physical shop of a supermarket
    inside a province.
    """
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    city: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    supermarket_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("supermarkets.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    province_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("provinces.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    supermarket: Mapped["Supermarket"] = relationship(
        "Supermarket",
        back_populates="locations",
        lazy="joined"
    )

    province: Mapped["Province"] = relationship(
        "Province",
        back_populates="locations",
        lazy="joined"
    )

    def __repr__(self) -> str:
        return (
            f"<Location(id={self.id!r}, city={self.city!r}, "
            f"supermarket_id={self.supermarket_id!r}, province_id={self.province_id!r})>"
        )
