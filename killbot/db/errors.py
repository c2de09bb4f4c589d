"""Errors raised by the data-access layer itself.

Driver errors (``aiosqlite.Error`` and its subclasses) are not wrapped and
reach the caller unchanged.
"""

from typing import Any, Optional


class DatabaseError(Exception):
    """Base class for errors raised by this package."""


class NotConnectedError(DatabaseError, RuntimeError):
    """An operation was attempted before a connection was established."""

    def __init__(self) -> None:
        super().__init__("Database connection is not established")


class NoRowsError(DatabaseError, LookupError):
    """A query expected exactly one row but returned none.

    ``value`` holds the placeholder result a lookup hands back alongside the
    failure, e.g. ``INVALID_REGION_ID`` for region lookups.
    """

    def __init__(self, query: str, params: tuple = (), value: Optional[Any] = None) -> None:
        super().__init__(f"No rows in result set for params {params!r}")
        self.query = query
        self.params = params
        self.value = value
