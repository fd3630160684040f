"""
Application factory for the ticket logger API.

    uvicorn ticket_logger.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ticket_logger.api.v1.error_handlers import register_exception_handlers
from ticket_logger.api.v1.routes import api_router
from ticket_logger.config.settings import Settings, get_settings
from ticket_logger.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from ticket_logger.database.base import Base
from ticket_logger.database.session import build_engine, build_sessionmaker
from ticket_logger.utils.logging import get_project_name, get_project_version

import ticket_logger.models  # noqa: F401  (registers every table on Base.metadata)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("app.startup", extra={"env": settings.ENV, "version": get_project_version()})

    if settings.DB_CREATE_ALL:
        async with app.state.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("app.startup.tables_ready")

    try:
        yield
    finally:
        await app.state.engine.dispose()
        logger.info("app.shutdown")
        stop_queue_logging()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=get_project_name(),
        version=get_project_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings
    # engine and sessions follow the settings handed to the factory, not the env cache
    app.state.engine = build_engine(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)
    app.state.sessionmaker = build_sessionmaker(app.state.engine)

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)

    # region images are served straight from the upload directory
    settings.UPLOAD_PATH.mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_PATH),
        name="uploads",
    )

    return app

