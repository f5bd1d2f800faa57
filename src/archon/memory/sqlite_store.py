"""SQLite memory provider, available as the registered "sqlite" type."""

import json
import sqlite3
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from archon.core.logging import get_logger
from archon.memory.base import (
    MemoryEntry,
    MemoryInput,
    MemoryProvider,
    MemorySearchOptions,
    validate_entry,
    validate_input,
)
from archon.memory.config import MemoryConfig, RegisteredMemoryConfig
from archon.memory.errors import MemoryNotFoundError, MemoryStorageError
from archon.memory.file_store import generate_memory_id
from archon.memory.query import filter_entries
from archon.memory.registry import ProviderRegistry, register_memory_provider

logger = get_logger("memory.sqlite_store")

DB_FILENAME = "memories.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS memories (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    metadata TEXT,  -- JSON object
    timestamp TEXT NOT NULL,  -- ISO 8601
    tags TEXT NOT NULL  -- JSON array
);

CREATE INDEX IF NOT EXISTS idx_memories_timestamp ON memories(timestamp);
"""


def _row_to_entry(row: sqlite3.Row | tuple) -> MemoryEntry:
    return validate_entry(
        {
            "id": row[0],
            "content": row[1],
            "metadata": json.loads(row[2]) if row[2] is not None else None,
            "timestamp": datetime.fromisoformat(row[3]),
            "tags": json.loads(row[4]),
        }
    )


class SQLiteMemoryProvider(MemoryProvider):
    """SQLite-backed memory provider.

    Same semantics as the file provider, with one row per entry instead of
    a full rewrite per mutation. The connection opens on first use.
    """

    name = "sqlite"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.db_path = self.path / DB_FILENAME
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database and create the schema if needed."""
        if self._conn is not None:
            return
        try:
            self.path.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(self.db_path)
            await self._conn.executescript(SCHEMA)
            await self._conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise MemoryStorageError(f"Failed to open memory database {self.db_path}: {e}") from e
        logger.info(f"Connected to memory database: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("Memory database not connected. Call connect() first.")
        return self._conn

    async def _connection(self) -> aiosqlite.Connection:
        await self.connect()
        return self.conn

    async def _all_entries(self) -> list[MemoryEntry]:
        conn = await self._connection()
        async with conn.execute(
            "SELECT id, content, metadata, timestamp, tags FROM memories"
        ) as cursor:
            rows = await cursor.fetchall()
        return [_row_to_entry(row) for row in rows]

    async def save(self, data: MemoryInput) -> MemoryEntry:
        conn = await self._connection()
        if not isinstance(data, MemoryInput):
            data = validate_input(data)

        entry = MemoryEntry.model_construct(
            id=generate_memory_id(),
            content=data.content,
            metadata=deepcopy(data.metadata),
            timestamp=datetime.now(timezone.utc),
            tags=list(data.tags),
        )

        try:
            await conn.execute(
                """INSERT INTO memories (id, content, metadata, timestamp, tags)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    entry.id,
                    entry.content,
                    json.dumps(entry.metadata) if entry.metadata is not None else None,
                    entry.timestamp.isoformat(),
                    json.dumps(entry.tags),
                ),
            )
            await conn.commit()
        except sqlite3.Error as e:
            raise MemoryStorageError(f"Failed to save memory: {e}") from e

        return entry

    async def search(
        self,
        query: str,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        return filter_entries(await self._all_entries(), query, options)

    async def get(self, memory_id: str) -> MemoryEntry | None:
        conn = await self._connection()
        async with conn.execute(
            "SELECT id, content, metadata, timestamp, tags FROM memories WHERE id = ?",
            (memory_id,),
        ) as cursor:
            row = await cursor.fetchone()
        return _row_to_entry(row) if row else None

    async def list(
        self,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        return filter_entries(await self._all_entries(), options=options)

    async def delete(self, memory_id: str) -> None:
        conn = await self._connection()
        try:
            cursor = await conn.execute("DELETE FROM memories WHERE id = ?", (memory_id,))
            await conn.commit()
        except sqlite3.Error as e:
            raise MemoryStorageError(f"Failed to delete memory {memory_id}: {e}") from e

        if cursor.rowcount == 0:
            raise MemoryNotFoundError(memory_id)
        logger.debug(f"Deleted memory {memory_id}")


def _create_sqlite_provider(config: MemoryConfig) -> MemoryProvider:
    if not isinstance(config, RegisteredMemoryConfig) or "path" not in config.options:
        raise ValueError("SQLite memory config requires options['path']")
    return SQLiteMemoryProvider(config.options["path"])


def register_sqlite_provider(registry: ProviderRegistry | None = None) -> None:
    """Make the "sqlite" provider type available to the factory."""
    register_memory_provider("sqlite", _create_sqlite_provider, registry)
