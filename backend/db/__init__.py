"""Database helpers."""

from .errors import is_unique_violation, unique_violation_columns
from .session import async_engine, async_session_maker, build_engine, create_tables, get_session

__all__ = [
    "async_engine",
    "async_session_maker",
    "build_engine",
    "create_tables",
    "get_session",
    "is_unique_violation",
    "unique_violation_columns",
]
