from sqlalchemy import String, DateTime, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from ticket_logger.database.base import Base


class User(Base):
    """
    SQLAlchemy model for User.

    Only consumed by the login stub: a username and a salted password hash.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Username (must be unique and non-null)
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False
    )

    # werkzeug "pbkdf2:sha256:<iterations>$<salt>$<hash>" (never store plain-text passwords)
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    # Whether the user account is active (soft-deletion toggle)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False
    )

    # Timestamp for when the user was created
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        # Helpful for debugging/logging (no password material)
        return f"<User(id={self.id!r}, username={self.username!r})>"
