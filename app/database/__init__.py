from app.database.async_db import (
    check_db_connection,
    dispose_engine,
    get_async_db,
    get_async_db_context,
    get_async_engine,
)
from app.database.base import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "check_db_connection",
    "dispose_engine",
    "get_async_db",
    "get_async_db_context",
    "get_async_engine",
]
