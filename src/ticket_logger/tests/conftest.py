"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities
that are needed across ALL types of tests (repositories, services, API).

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py
- tests/test_fixtures/settings_fixtures.py
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import sys
import asyncio
import logging
from pathlib import Path
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before importing modules that
# might initialize them (Faker, SQLAlchemy, httpx...).
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "multipart",
    "python_multipart",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from ticket_logger.database.base import Base
from ticket_logger.database.session import build_engine
import ticket_logger.models  # noqa: F401  (registers every table on Base.metadata)
from ticket_logger.core.logging.builder import setup_logging, stop_queue_logging

from .test_fixtures.settings_fixtures import make_settings

# -------------------------------
# Load settings
# -------------------------------
settings = make_settings(LOG_LEVEL="WARNING")

logger = logging.getLogger(__name__)


# The `autouse=True` part means that this fixture will be automatically used by pytest
# without explicitly including it in your test function parameters.
@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install application logging for the entire test session.

    dictConfig removes pytest's capture handler from the root logger, so it is
    re-attached (best-effort) for tests that read `caplog.records`.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield

    stop_queue_logging()


# ------------------------------------------------------------------------------------------------
# Determining and Logging the Test Database URL for Tests
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Return the database URL without credentials: scheme, host, port and database name only.
    """
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI/CD override)
    2. The app's `DATABASE_URL` when `TESTING=true` and `TEST_POSTGRES_DB` is set
    3. In-memory SQLite (aiosqlite), so the suite runs without a database server
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url

    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL

    return "sqlite+aiosqlite://"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")

# ------------------------------------------------------------------------------------------------
# ENVIRONMENT / PLATFORM FIXES
# ------------------------------------------------------------------------------------------------

# On Windows, psycopg async needs the SelectorEventLoop (not the default ProactorEventLoop).
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Ensure 'src' on sys.path so `import ticket_logger...` works without an install
SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh schema per test.

    Services commit their own transactions, so isolation comes from dropping the
    tables afterwards rather than from rolling back a SAVEPOINT. In-memory SQLite
    needs a single shared connection (StaticPool) to keep the schema alive.
    """
    engine_kwargs = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine_kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    engine = build_engine(TEST_DATABASE_URL, **engine_kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for repository and service tests (expire_on_commit=False, like the app).

    Tests that seed data and then call the API must commit first: the API uses its
    own sessions on the same connection.
    """
    async with session_maker() as session:
        yield session
        await session.rollback()


# Repository / service fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    base_repo,
    region_repository,
    province_repository,
    supermarket_repository,
    location_repository,
    product_repository,
    ticket_repository,
    user_repository,
    create_region,
    create_province,
    create_supermarket,
    create_location,
    create_product,
    create_ticket,
    region_tree,
)

# API fixtures
from .test_fixtures.api_fixtures import (  # noqa: E402
    app_settings,
    recording_storage,
    app,
    client,
)
