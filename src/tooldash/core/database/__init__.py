"""Database layer - session management, base models, and mixins."""

from tooldash.core.database.base import Base, TimestampMixin, UUIDMixin
from tooldash.core.database.session import (
    dispose_engine,
    get_db,
    get_engine,
    get_session_factory,
)


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "dispose_engine",
    "get_db",
    "get_engine",
    "get_session_factory",
]
