from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ticket_logger.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .region import Region
    from .location import Location


class Province(Base):
    """
    SQLAlchemy model for a Province, e.g. "23" Jaén.

    Belongs to exactly one Region and owns many Locations.
    """
    __tablename__ = "provinces"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    code: Mapped[str] = mapped_column(
        String(2),
        unique=True,
        nullable=False
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # ON DELETE CASCADE is only a storage backstop; the repositories delete children explicitly.
    region_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("regions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    # Many-to-One: eager (joined) so DTO mapping never triggers an async lazy load
    region: Mapped["Region"] = relationship(
        "Region",
        back_populates="provinces",
        lazy="joined"
    )

    locations: Mapped[list["Location"]] = relationship(
        "Location",
        back_populates="province",
        passive_deletes=True,
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Province(id={self.id!r}, code={self.code!r}, region_id={self.region_id!r})>"
