"""aiosqlite implementation of the data-access layer.

Owns a single connection handle shared by every operation. There is no
pooling, no automatic reconnect and no retry: a failing statement raises to
the immediate caller unchanged.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional, Sequence

import aiosqlite

from ..config import DatabaseSettings
from .base import Connection
from .errors import NoRowsError, NotConnectedError
from .models import INVALID_REGION_ID, Organization

logger = logging.getLogger(__name__)

ORGANIZATION_COLUMNS = "id, evecorporationid, lastkillid, lastlossid, name, killcomment, losscomment"


def _row_to_organization(row: Sequence[Any]) -> Organization:
    return Organization(
        id=row[0],
        eve_corporation_id=row[1],
        last_kill_id=row[2],
        last_loss_id=row[3],
        name=row[4],
        kill_comment=row[5],
        loss_comment=row[6],
    )


class DatabaseConnection(Connection):
    """SQLite-backed store for organizations and static game data."""

    def __init__(self, settings: DatabaseSettings):
        self.settings = settings
        self._conn: Optional[aiosqlite.Connection] = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        """Open the configured database and keep the handle for later operations.

        An already open handle is closed first.
        """
        await self.close()
        target = self.settings.target
        conn = await aiosqlite.connect(
            target,
            detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
        )
        try:
            await conn.execute("PRAGMA encoding = 'UTF-8';")
            # Forces the file to be opened and its header read.
            await conn.execute("SELECT 1;")
        except Exception:
            await conn.close()
            raise
        self._conn = conn
        logger.info("Connected to database %s", target)

    async def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.info("Database connection closed")

    def _handle(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise NotConnectedError()
        return self._conn

    async def _fetchall(self, query: str, params: tuple = ()) -> List[Sequence[Any]]:
        conn = self._handle()
        logger.debug("Executing query %r with params %r", query, params)
        async with conn.execute(query, params) as cursor:
            return list(await cursor.fetchall())

    async def _fetchone(self, query: str, params: tuple = (), value: Any = None) -> Sequence[Any]:
        conn = self._handle()
        logger.debug("Executing query %r with params %r", query, params)
        async with conn.execute(query, params) as cursor:
            row = await cursor.fetchone()
        if row is None:
            raise NoRowsError(query, params, value=value)
        return row

    async def _execute(self, statement: str, params: tuple = ()) -> Optional[int]:
        """Run a single write statement in its own transaction.

        Returns the rowid of the last inserted row, if any.
        """
        conn = self._handle()
        logger.debug("Executing statement %r with params %r", statement, params)
        try:
            async with conn.execute(statement, params) as cursor:
                last_row_id = cursor.lastrowid
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
        return last_row_id

    async def raw_query(self, query: str, *params: Any) -> List[Dict[str, Any]]:
        """
        Run an arbitrary parameterized SELECT and return every row as a
        ``{column name: value}`` mapping.

        Columns are taken from the cursor description, so any result shape is
        accepted. Returns an empty list when nothing matches. A failure on any
        row fails the whole call.
        """
        conn = self._handle()
        logger.debug("Executing raw query %r with params %r", query, params)
        async with conn.execute(query, params) as cursor:
            if cursor.description is None:
                return []
            columns = [column[0] for column in cursor.description]
            rows = await cursor.fetchall()
        return [dict(zip(columns, row)) for row in rows]

    async def load_all_organizations(self) -> List[Organization]:
        rows = await self._fetchall(f"SELECT {ORGANIZATION_COLUMNS} FROM corporations")
        organizations = [_row_to_organization(row) for row in rows]

        for organization in organizations:
            organization.ignored_regions = await self.load_ignored_regions_for_organization(organization.id)

        return organizations

    async def load_organization(self, organization_id: int) -> Organization:
        """Load one organization with its ignored regions; raises NoRowsError if absent."""
        row = await self._fetchone(
            f"SELECT {ORGANIZATION_COLUMNS} FROM corporations WHERE id=?",
            (organization_id,),
        )
        organization = _row_to_organization(row)
        organization.ignored_regions = await self.load_ignored_regions_for_organization(organization.id)
        return organization

    async def load_ignored_regions_for_organization(self, organization_id: int) -> List[int]:
        rows = await self._fetchall(
            "SELECT regionid FROM ignoredregions WHERE corporationID=?",
            (organization_id,),
        )
        return [row[0] for row in rows]

    async def query_ship_name(self, ship_type_id: int) -> str:
        row = await self._fetchone("SELECT typeName FROM invTypes WHERE typeID=?", (ship_type_id,))
        return row[0]

    async def query_region_id(self, solar_system_id: int) -> int:
        """
        Look up the region a solar system belongs to.

        On a miss the raised NoRowsError carries ``INVALID_REGION_ID`` as its
        ``value``.
        """
        row = await self._fetchone(
            "SELECT regionID FROM mapSolarSystems WHERE solarSystemID=?",
            (solar_system_id,),
            value=INVALID_REGION_ID,
        )
        return row[0]

    async def save_organization(self, organization: Organization) -> Organization:
        """
        Persist the identity and cursors of *organization*.

        Persisted entities are updated in place by id. New ones are inserted
        and receive their storage-assigned id. Name, comments and ignored
        regions are never written here.
        """
        if organization.is_persisted:
            await self._update_organization(organization)
        else:
            await self._insert_organization(organization)
        return organization

    async def _update_organization(self, organization: Organization) -> None:
        await self._execute(
            "UPDATE corporations SET evecorporationid=?, lastkillid=?, lastlossid=? WHERE id=?",
            (
                organization.eve_corporation_id,
                organization.last_kill_id,
                organization.last_loss_id,
                organization.id,
            ),
        )

    async def _insert_organization(self, organization: Organization) -> None:
        organization_id = await self._execute(
            "INSERT INTO corporations(evecorporationid, lastkillid, lastlossid) VALUES(?, ?, ?)",
            (
                organization.eve_corporation_id,
                organization.last_kill_id,
                organization.last_loss_id,
            ),
        )
        if organization_id is None:
            raise RuntimeError("Database did not report an id for the inserted corporation")
        organization.id = organization_id
        logger.info(
            "Inserted corporation %d with id %d",
            organization.eve_corporation_id,
            organization_id,
        )
