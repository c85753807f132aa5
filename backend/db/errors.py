"""Database error helpers."""

from __future__ import annotations

import re

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"
_SQLITE_UNIQUE_COLUMNS = re.compile(r"unique constraint failed: ([\w., ]+)")
_POSTGRES_KEY_COLUMN = re.compile(r"key \((\w+)\)")


def _original(error: IntegrityError) -> object | None:
    return getattr(error, "orig", None)


def is_unique_violation(error: IntegrityError) -> bool:
    """Return True when the IntegrityError indicates a unique-constraint conflict."""
    original = _original(error)
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = str(original or error).lower()
    return "duplicate key" in message or "unique constraint" in message


def unique_violation_columns(error: IntegrityError) -> frozenset[str]:
    """Best-effort extraction of the column names behind a unique violation.

    SQLite reports ``UNIQUE constraint failed: accounts.email``; PostgreSQL
    reports ``Key (email)=(...) already exists``. Unknown shapes yield an
    empty set and callers must fall back to re-reading the table.
    """
    message = str(_original(error) or error).lower()
    sqlite_match = _SQLITE_UNIQUE_COLUMNS.search(message)
    if sqlite_match is not None:
        qualified = (part.strip() for part in sqlite_match.group(1).split(","))
        return frozenset(name.rpartition(".")[2] for name in qualified if name)
    postgres_match = _POSTGRES_KEY_COLUMN.search(message)
    if postgres_match is not None:
        return frozenset({postgres_match.group(1)})
    return frozenset()


__all__ = ["is_unique_violation", "unique_violation_columns"]
