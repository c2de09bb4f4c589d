"""
This file contains shared fixtures for the test suite.
"""

import sqlite3
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from killbot.config import DatabaseSettings
from killbot.db import DatabaseConnection

SCHEMA_FILE = Path(__file__).resolve().parents[1] / "docs" / "schema.sql"


@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh database file containing the bot's tables."""
    path = tmp_path / "killbot_test.db"
    schema_sql = SCHEMA_FILE.read_text(encoding="utf-8")

    conn = sqlite3.connect(path)
    try:
        conn.executescript(schema_sql)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def db_settings(db_path):
    return DatabaseSettings(path=str(db_path))


@pytest_asyncio.fixture
async def store(db_settings):
    """A connected store, closed again after the test."""
    db = DatabaseConnection(db_settings)
    await db.connect()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def execute_sql(db_path):
    """
    Run statements against the test database through a separate connection,
    the way the static data import and admin tooling would.
    """

    async def _execute(statement: str, params=()):
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute(statement, params)
            await conn.commit()

    return _execute
