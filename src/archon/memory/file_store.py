"""JSON file memory provider with a lazily loaded in-memory index."""

import asyncio
import json
import time
from copy import deepcopy
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os
from pydantic import TypeAdapter, ValidationError

from archon.core.logging import get_logger
from archon.memory.base import (
    MemoryEntry,
    MemoryInput,
    MemoryProvider,
    MemorySearchOptions,
    validate_input,
)
from archon.memory.errors import MemoryNotFoundError, MemoryStorageError
from archon.memory.query import filter_entries

logger = get_logger("memory.file_store")

STORAGE_FILENAME = "memories.json"
ID_PREFIX = "mem_"

_entries_adapter = TypeAdapter(list[MemoryEntry])


class LoadState(Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"


def generate_memory_id() -> str:
    """Build an id from the creation time in ms plus a random hex suffix."""
    return f"{ID_PREFIX}{time.time_ns() // 1_000_000}_{uuid4().hex[:8]}"


def _serialize(entry: MemoryEntry) -> dict:
    data = entry.model_dump(mode="json")
    if data["metadata"] is None:
        del data["metadata"]
    return data


def _detached(entry: MemoryEntry) -> MemoryEntry:
    """Copy handed to callers so in-place edits never reach the index."""
    return entry.model_copy(deep=True)


class FileMemoryProvider(MemoryProvider):
    """Memory provider backed by a single JSON file.

    The whole file is read into memory on first use and rewritten in full
    after every save or delete. Operations on one instance may overlap
    freely; two instances writing the same directory will still overwrite
    each other's changes.
    """

    name = "file"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.file_path = self.path / STORAGE_FILENAME
        self._memories: dict[str, MemoryEntry] = {}
        self._state = LoadState.UNLOADED
        self._load_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._state is LoadState.LOADED

    async def _ensure_loaded(self) -> None:
        """Populate the index from disk once per instance."""
        if self._state is LoadState.LOADED:
            return

        async with self._load_lock:
            if self._state is LoadState.LOADED:
                return
            self._memories = await self._read_file()
            self._state = LoadState.LOADED

    async def _read_file(self) -> dict[str, MemoryEntry]:
        try:
            await aiofiles.os.makedirs(self.path, exist_ok=True)
        except OSError as e:
            raise MemoryStorageError(
                f"Failed to create memory directory {self.path}: {e}"
            ) from e

        try:
            async with aiofiles.open(self.file_path, "rb") as f:
                raw = await f.read()
        except FileNotFoundError:
            logger.debug(f"No memory file at {self.file_path}, starting empty")
            return {}
        except OSError as e:
            raise MemoryStorageError(
                f"Failed to read memory file {self.file_path}: {e}"
            ) from e

        # Bytes in, so bad UTF-8 is reported with the JSON errors
        try:
            entries = _entries_adapter.validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as e:
            raise MemoryStorageError(
                f"Corrupted memory file {self.file_path}: {e}"
            ) from e

        logger.info(f"Loaded {len(entries)} memories from {self.file_path}")
        return {entry.id: entry for entry in entries}

    async def _persist(self) -> None:
        """Rewrite the storage file from the current index.

        Callers hold _write_lock.
        """
        payload = json.dumps(
            [_serialize(entry) for entry in self._memories.values()],
            indent=2,
            ensure_ascii=False,
        )
        temp_file = self.file_path.with_name(f"{self.file_path.name}.{uuid4().hex[:8]}.tmp")
        try:
            async with aiofiles.open(temp_file, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(temp_file, self.file_path)
        except OSError as e:
            raise MemoryStorageError(
                f"Failed to write memory file {self.file_path}: {e}"
            ) from e
        logger.debug(f"Persisted {len(self._memories)} memories to {self.file_path}")

    async def save(self, data: MemoryInput) -> MemoryEntry:
        await self._ensure_loaded()
        if not isinstance(data, MemoryInput):
            data = validate_input(data)

        entry = MemoryEntry.model_construct(
            id=generate_memory_id(),
            content=data.content,
            metadata=deepcopy(data.metadata),
            timestamp=datetime.now(timezone.utc),
            tags=list(data.tags),
        )

        async with self._write_lock:
            self._memories[entry.id] = entry
            try:
                await self._persist()
            except MemoryStorageError:
                # Keep the index in step with what is on disk
                self._memories.pop(entry.id, None)
                raise

        return _detached(entry)

    async def search(
        self,
        query: str,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        await self._ensure_loaded()
        return [_detached(e) for e in filter_entries(self._memories.values(), query, options)]

    async def get(self, memory_id: str) -> MemoryEntry | None:
        await self._ensure_loaded()
        entry = self._memories.get(memory_id)
        return _detached(entry) if entry is not None else None

    async def list(
        self,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        await self._ensure_loaded()
        return [_detached(e) for e in filter_entries(self._memories.values(), options=options)]

    async def delete(self, memory_id: str) -> None:
        await self._ensure_loaded()

        async with self._write_lock:
            entry = self._memories.pop(memory_id, None)
            if entry is None:
                raise MemoryNotFoundError(memory_id)

            try:
                await self._persist()
            except MemoryStorageError:
                self._memories[memory_id] = entry
                raise

        logger.debug(f"Deleted memory {memory_id}")
