# ticket_logger/api/v1/routes/auth.py

from fastapi import APIRouter, Depends

from ticket_logger.core.dependencies import get_auth_service
from ticket_logger.schemas import ErrorResponse, LoginInfo, LoginRequest, LoginResponse
from ticket_logger.services import AuthService

router = APIRouter(tags=["auth"])


@router.get("/login", response_model=LoginInfo)
async def login_info(service: AuthService = Depends(get_auth_service)) -> LoginInfo:
    return service.login_info()


@router.post("/login", response_model=LoginResponse, responses={400: {"model": ErrorResponse}})
async def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)) -> LoginResponse:
    """Checks the credentials and returns a placeholder token (no signing)."""
    return await service.login(payload)
