from .base import Base
from .session import build_engine, build_sessionmaker, get_async_session

__all__ = ["Base", "build_engine", "build_sessionmaker", "get_async_session"]
