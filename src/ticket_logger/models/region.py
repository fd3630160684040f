from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ticket_logger.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .province import Province


class Region(Base):
    """
    SQLAlchemy model for a Region (autonomous community), e.g. "01" Andalucía.

    A region owns many provinces. Deleting a region removes its provinces and,
    through them, their locations (see RegionRepository.delete_cascade).
    """
    __tablename__ = "regions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Short code, unique across regions (storage-level constraint)
    code: Mapped[str] = mapped_column(
        String(2),
        unique=True,
        nullable=False
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # File name returned by the storage collaborator (column is called "image")
    image_path: Mapped[str | None] = mapped_column(
        "image",
        String(255),
        nullable=True
    )

    # --- Relationships ---

    # One-to-Many: never serialized, only used for navigation
    provinces: Mapped[list["Province"]] = relationship(
        "Province",
        back_populates="region",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Region(id={self.id!r}, code={self.code!r}, name={self.name!r})>"
