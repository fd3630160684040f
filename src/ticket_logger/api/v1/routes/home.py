# ticket_logger/api/v1/routes/home.py

from fastapi import APIRouter

from ticket_logger.schemas import HomeResponse
from ticket_logger.utils.logging import get_project_version

router = APIRouter(tags=["home"])


@router.get("/", response_model=HomeResponse)
async def home() -> HomeResponse:
    return HomeResponse(
        message="Welcome to the Ticket Logger API",
        version=get_project_version(),
        status="running",
    )
