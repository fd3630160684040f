"""
FastAPI dependencies: request session, settings, locale, storage and services.

Tests override `get_db_session` (and may override `get_storage`) through
`app.dependency_overrides`.
"""

from typing import AsyncIterator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.config.settings import Settings, get_settings
from ticket_logger.database.session import get_async_session
from ticket_logger.i18n import negotiate_locale
from ticket_logger.services import (
    AuthService,
    FileStorageService,
    LocationService,
    ProvinceService,
    RegionService,
    SupermarketService,
    TicketService,
)


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """One session per request from the app's own sessionmaker, closed when the response is sent."""
    async for session in get_async_session(request):
        yield session


def get_app_settings(request: Request) -> Settings:
    # create_app(settings) stores its settings on app.state; fall back to the env-driven ones
    return getattr(request.app.state, "settings", None) or get_settings()


def get_locale(
    accept_language: str | None = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> str:
    return negotiate_locale(accept_language, default=settings.DEFAULT_LOCALE)


def get_storage(settings: Settings = Depends(get_app_settings)) -> FileStorageService:
    return FileStorageService(settings.UPLOAD_PATH, max_bytes=settings.MAX_UPLOAD_BYTES)


def get_region_service(
    db: AsyncSession = Depends(get_db_session),
    storage: FileStorageService = Depends(get_storage),
    locale: str = Depends(get_locale),
) -> RegionService:
    return RegionService(db, storage, locale)


def get_province_service(
    db: AsyncSession = Depends(get_db_session),
    locale: str = Depends(get_locale),
) -> ProvinceService:
    return ProvinceService(db, locale)


def get_supermarket_service(
    db: AsyncSession = Depends(get_db_session),
    locale: str = Depends(get_locale),
) -> SupermarketService:
    return SupermarketService(db, locale)


def get_location_service(
    db: AsyncSession = Depends(get_db_session),
    locale: str = Depends(get_locale),
) -> LocationService:
    return LocationService(db, locale)


def get_ticket_service(
    db: AsyncSession = Depends(get_db_session),
    locale: str = Depends(get_locale),
) -> TicketService:
    return TicketService(db, locale)


def get_auth_service(
    db: AsyncSession = Depends(get_db_session),
    locale: str = Depends(get_locale),
) -> AuthService:
    return AuthService(db, locale)
