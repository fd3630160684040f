"""
User repository: lookup by username for the login stub.
"""

import logging

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, username: str, hashed_password: str, is_active: bool = True) -> User:
        """
        Create a user from an already hashed password (never store raw passwords).

        Raises:
            ConflictError: the username is taken.
        """
        return await self.create(
            username=username.strip(),
            hashed_password=hashed_password,
            is_active=is_active,
        )

    async def get_by_username(self, username: str) -> User | None:
        async with db_error_handler(self.db, self.model_name, "get_by_username"):
            result = await self.db.execute(select(User).where(User.username == username.strip()))
            return result.scalar_one_or_none()

    async def username_exists(self, username: str) -> bool:
        async with db_error_handler(self.db, self.model_name, "username_exists"):
            result = await self.db.execute(select(exists().where(User.username == username.strip())))
            return bool(result.scalar())
