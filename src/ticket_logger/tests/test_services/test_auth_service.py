import pytest

from ticket_logger.exceptions import AuthenticationError, ConflictError
from ticket_logger.repositories import UserRepository
from ticket_logger.schemas import LoginRequest
from ticket_logger.services import AuthService
from ticket_logger.services.security import hash_password, verify_password


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret", method="pbkdf2:sha256:1000")

    assert hashed.startswith("pbkdf2:sha256:1000$")
    assert verify_password("s3cret", hashed) is True
    assert verify_password("wrong", hashed) is False
    assert verify_password("s3cret", "not-a-hash") is False


@pytest.mark.asyncio
class TestAuthService:

    async def test_login_info(self, db_session):
        info = AuthService(db_session).login_info()
        assert info.required_fields == ["username", "password"]

    async def test_login_success(self, db_session):
        service = AuthService(db_session)
        await service.register_user("alice", "s3cret")

        response = await service.login(LoginRequest(username="alice", password="s3cret"))

        assert response.message == "Login successful"
        assert response.username == "alice"
        assert response.token

    @pytest.mark.parametrize(
        "username,password",
        [(None, "x"), ("alice", None), ("  ", "x"), ("alice", "")],
    )
    async def test_missing_credentials(self, db_session, username, password):
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthService(db_session).login(LoginRequest(username=username, password=password))

        assert exc_info.value.message == "Username and password are required"
        assert exc_info.value.http_status() == 400

    async def test_wrong_password_and_unknown_user_look_the_same(self, db_session):
        service = AuthService(db_session)
        await service.register_user("alice", "s3cret")

        with pytest.raises(AuthenticationError) as wrong_password:
            await service.login(LoginRequest(username="alice", password="nope"))
        with pytest.raises(AuthenticationError) as unknown_user:
            await service.login(LoginRequest(username="bob", password="s3cret"))

        assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"

    async def test_inactive_user_cannot_log_in(self, db_session):
        await UserRepository(db_session).create_user("carol", hash_password("s3cret"), is_active=False)
        await db_session.commit()

        with pytest.raises(AuthenticationError):
            await AuthService(db_session).login(LoginRequest(username="carol", password="s3cret"))

    async def test_register_duplicate_username(self, db_session):
        service = AuthService(db_session)
        await service.register_user("alice", "s3cret")

        with pytest.raises(ConflictError):
            await service.register_user("alice", "other")

    async def test_spanish_messages(self, db_session):
        with pytest.raises(AuthenticationError) as exc_info:
            await AuthService(db_session, locale="es").login(LoginRequest())
        assert exc_info.value.message == "Usuario y contraseña son obligatorios"
