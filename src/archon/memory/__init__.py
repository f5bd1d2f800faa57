"""
Memory module - pluggable storage for agent context.

Providers:
- file: JSON file in a directory, loaded lazily (default)
- mcp: MCP memory server (needs the Claude Code runtime)
- sqlite: SQLite database, registered via register_sqlite_provider()
- custom: any MemoryProvider instance

Use create_memory_provider() with a config to get a provider.
"""

from archon.memory.base import (
    MemoryEntry,
    MemoryInput,
    MemoryMetadata,
    MemoryProvider,
    MemorySearchOptions,
    validate_entry,
    validate_input,
)
from archon.memory.config import (
    CustomMemoryConfig,
    FileMemoryConfig,
    McpMemoryConfig,
    MemoryConfig,
    RegisteredMemoryConfig,
    memory_config_from_dict,
)
from archon.memory.errors import (
    MemoryNotFoundError,
    MemoryProviderError,
    MemoryStorageError,
    UnknownProviderTypeError,
    UnsupportedProviderError,
)
from archon.memory.file_store import FileMemoryProvider
from archon.memory.mcp import McpMemoryProvider
from archon.memory.registry import (
    ProviderRegistry,
    create_memory_provider,
    get_provider_registry,
    register_memory_provider,
)

__all__ = [
    "CustomMemoryConfig",
    "FileMemoryConfig",
    "FileMemoryProvider",
    "McpMemoryConfig",
    "McpMemoryProvider",
    "MemoryConfig",
    "MemoryEntry",
    "MemoryInput",
    "MemoryMetadata",
    "MemoryNotFoundError",
    "MemoryProvider",
    "MemoryProviderError",
    "MemorySearchOptions",
    "MemoryStorageError",
    "ProviderRegistry",
    "RegisteredMemoryConfig",
    "UnknownProviderTypeError",
    "UnsupportedProviderError",
    "create_memory_provider",
    "get_provider_registry",
    "memory_config_from_dict",
    "register_memory_provider",
    "validate_entry",
    "validate_input",
]
