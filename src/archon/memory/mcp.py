"""MCP server memory provider placeholder."""

from archon.memory.base import (
    MemoryEntry,
    MemoryInput,
    MemoryProvider,
    MemorySearchOptions,
)
from archon.memory.errors import UnsupportedProviderError


class McpMemoryProvider(MemoryProvider):
    """Memory provider delegating to an MCP memory server.

    Talking to the server needs the Claude Code runtime, which a standalone
    process does not have, so every operation fails immediately.
    """

    def __init__(self, server_name: str):
        self.server_name = server_name
        self.name = f"mcp:{server_name}"

    def _unavailable(self) -> UnsupportedProviderError:
        return UnsupportedProviderError(
            f'MCP provider "{self.server_name}" requires Claude Code runtime. '
            "Use the file provider for standalone execution, or run within Claude Code."
        )

    async def save(self, data: MemoryInput) -> MemoryEntry:
        raise self._unavailable()

    async def search(
        self,
        query: str,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        raise self._unavailable()

    async def get(self, memory_id: str) -> MemoryEntry | None:
        raise self._unavailable()

    async def list(
        self,
        options: MemorySearchOptions | None = None,
    ) -> list[MemoryEntry]:
        raise self._unavailable()

    async def delete(self, memory_id: str) -> None:
        raise self._unavailable()
