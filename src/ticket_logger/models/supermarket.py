from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ticket_logger.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .location import Location


class Supermarket(Base):
    """SQLAlchemy model for a Supermarket chain; owns many Locations."""
    __tablename__ = "supermarkets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    locations: Mapped[list["Location"]] = relationship(
        "Location",
        back_populates="supermarket",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Supermarket(id={self.id!r}, name={self.name!r})>"
