"""Database access layer (DAL) for the kill notification bot.

This sub-package encapsulates low-level DB interactions so that the polling
and posting logic remains storage-agnostic.
"""

from ..config import DatabaseSettings
from .base import Connection
from .connection import DatabaseConnection
from .errors import DatabaseError, NoRowsError, NotConnectedError
from .models import INVALID_REGION_ID, Organization

__all__ = [
    "Connection",
    "DatabaseConnection",
    "DatabaseError",
    "INVALID_REGION_ID",
    "NoRowsError",
    "NotConnectedError",
    "Organization",
    "setup_database",
]


def setup_database(settings: DatabaseSettings) -> Connection:
    """Return an unconnected store for the configured backend type."""
    backend = settings.type.lower()
    if backend == "sqlite":
        return DatabaseConnection(settings)
    raise ValueError(f"Unsupported database type: {settings.type}")
