import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.base import AuthenticationError
from ticket_logger.i18n import DEFAULT_LOCALE
from ticket_logger.repositories import UserRepository
from ticket_logger.schemas import LoginInfo, LoginRequest, LoginResponse
from .base_service import BaseService
from .security import generate_placeholder_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Login stub: checks the stored credentials and hands back a placeholder token.
    """

    model_name = "User"

    def __init__(self, db: AsyncSession, locale: str = DEFAULT_LOCALE):
        super().__init__(db, locale)
        self.users = UserRepository(db)

    def login_info(self) -> LoginInfo:
        return LoginInfo(message=self.msg("auth.info"), required_fields=["username", "password"])

    async def login(self, payload: LoginRequest) -> LoginResponse:
        username = (payload.username or "").strip()
        password = payload.password or ""
        if not username or not password:
            raise AuthenticationError(self.msg("auth.required"), fields=["username", "password"])

        user = await self.users.get_by_username(username)
        if user is None or not user.is_active or not verify_password(password, user.hashed_password):
            # same message for unknown user and wrong password
            logger.info("service.auth.login.failed", extra={"username": username})
            raise AuthenticationError(self.msg("auth.invalid"))

        logger.info("service.auth.login.success", extra={"user_id": user.id})
        return LoginResponse(
            message=self.msg("auth.success"),
            username=user.username,
            token=generate_placeholder_token(),
        )

    async def register_user(self, username: str, password: str) -> int:
        """Create an active user (used for seeding and tests). Returns the new id."""
        user = await self.users.create_user(username=username, hashed_password=hash_password(password))
        await self.commit("create")
        return user.id
