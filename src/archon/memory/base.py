"""
Memory record model and provider interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MemoryMetadata = dict[str, Any]


class MemoryEntry(BaseModel):
    """Single memory record.

    Entries are immutable once created. ``id`` and ``timestamp`` are
    assigned by the provider on save.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    id: str
    content: str
    metadata: MemoryMetadata | None = None
    timestamp: datetime
    tags: list[str]

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class MemoryInput(BaseModel):
    """Caller-supplied part of an entry (everything except id and timestamp)."""

    model_config = ConfigDict(strict=True)

    content: str
    metadata: MemoryMetadata | None = None
    tags: list[str] = Field(default_factory=list)


@dataclass
class MemorySearchOptions:
    """Filter and pagination options for search() and list().

    limit: max results; None or non-positive means unlimited
    tags: entry must carry ALL of these tags
    since/until: inclusive bounds on entry timestamp (naive values are UTC)
    """

    limit: int | None = None
    tags: list[str] | None = None
    since: datetime | None = None
    until: datetime | None = None


def validate_entry(value: Any) -> MemoryEntry:
    """Validate an untrusted value as a MemoryEntry.

    Raises:
        pydantic.ValidationError: listing each offending field and constraint
    """
    if isinstance(value, MemoryEntry):
        value = value.model_dump()
    return MemoryEntry.model_validate(value)


def validate_input(value: Any) -> MemoryInput:
    """Validate an untrusted value as a MemoryInput.

    Raises:
        pydantic.ValidationError: listing each offending field and constraint
    """
    if isinstance(value, MemoryInput):
        value = value.model_dump()
    return MemoryInput.model_validate(value)


class MemoryProvider(ABC):
    """Abstract memory storage interface.

    Every backend, built-in or custom, implements this exact set of
    operations. All methods are async so local and remote backends share
    one calling convention.
    """

    name: str

    @abstractmethod
    async def save(self, data: MemoryInput) -> MemoryEntry:
        """Store a new entry with a generated id and timestamp."""
        ...

    @abstractmethod
    async def search(
        self,
        query: str,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        """Return entries whose content matches query, filtered by options."""
        ...

    @abstractmethod
    async def get(self, memory_id: str) -> MemoryEntry | None:
        """Get specific entry by ID, or None if absent."""
        ...

    @abstractmethod
    async def list(
        self,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        """Return all entries matching the tag and date filters."""
        ...

    @abstractmethod
    async def delete(self, memory_id: str) -> None:
        """Delete entry.

        Raises:
            MemoryNotFoundError: if no entry has this id
        """
        ...
