"""Database infrastructure - shared engine and ORM primitives."""

from infrastructure.database.engines import (
    build_async_url,
    create_sessionmaker,
    create_store_engine,
)
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "build_async_url",
    "create_sessionmaker",
    "create_store_engine",
]
