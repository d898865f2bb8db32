"""SQLite-backed token store for durable per-user persistence."""

from __future__ import annotations

from pathlib import Path

import aiosqlite
import structlog

log = structlog.get_logger(__name__)

_CREATE_SQL = """
    CREATE TABLE IF NOT EXISTS kv (
        key         TEXT PRIMARY KEY,
        value       TEXT NOT NULL,
        updated_at  TEXT NOT NULL DEFAULT (datetime('now'))
    )
"""

_SELECT_SQL = "SELECT value FROM kv WHERE key = ?"

_UPSERT_SQL = """
    INSERT INTO kv (key, value) VALUES (?, ?)
    ON CONFLICT(key) DO UPDATE SET
        value      = excluded.value,
        updated_at = datetime('now')
"""

_DELETE_SQL = "DELETE FROM kv WHERE key = ?"


class SQLiteTokenStore:
    """Durable key/value store in a single SQLite file.

    Each operation opens its own short-lived connection, so the store can be
    shared freely between clients and needs no explicit close.

    Usage::

        store = SQLiteTokenStore("~/.vendor-client/storage.db")
        await store.set("token", "abc")
        token = await store.get("token")
    """

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._initialized = False
        log.debug("token_store_created", path=str(self._db_path))

    @property
    def path(self) -> Path:
        return self._db_path

    async def _connect(self) -> aiosqlite.Connection:
        if not self._initialized:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(self._db_path)
        if not self._initialized:
            try:
                await conn.execute(_CREATE_SQL)
                await conn.commit()
            except Exception:
                await conn.close()
                raise
            self._initialized = True
            log.info("token_store_initialized", path=str(self._db_path))
        return conn

    async def get(self, key: str) -> str | None:
        conn = await self._connect()
        try:
            async with conn.execute(_SELECT_SQL, (key,)) as cursor:
                row = await cursor.fetchone()
        finally:
            await conn.close()
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        conn = await self._connect()
        try:
            await conn.execute(_UPSERT_SQL, (key, value))
            await conn.commit()
        finally:
            await conn.close()
        log.debug("token_store_set", key=key)

    async def delete(self, key: str) -> None:
        conn = await self._connect()
        try:
            await conn.execute(_DELETE_SQL, (key,))
            await conn.commit()
        finally:
            await conn.close()
        log.debug("token_store_deleted", key=key)
