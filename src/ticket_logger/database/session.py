from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    SQLite ignores FOREIGN KEY clauses (and so ON DELETE CASCADE) unless the
    pragma is switched on for every new DBAPI connection.
    """

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """Create an AsyncEngine, wiring the SQLite pragma when needed."""
    engine = create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,   # Enables connection health checks
        **kwargs,
    )
    if engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(engine.sync_engine)
    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# Dependency to get DB session
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    The sessionmaker is the one `create_app()` built from its own settings and
    stored on `app.state`. Services commit their own unit of work; anything left
    uncommitted when the request ends is rolled back by closing the session.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with request.app.state.sessionmaker() as session:
        yield session
