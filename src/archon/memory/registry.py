"""Memory provider registry and factory."""

from collections.abc import Callable
from typing import TypeAlias

from archon.core.logging import get_logger
from archon.memory.base import MemoryProvider
from archon.memory.config import (
    CustomMemoryConfig,
    FileMemoryConfig,
    McpMemoryConfig,
    MemoryConfig,
)
from archon.memory.errors import UnknownProviderTypeError
from archon.memory.file_store import FileMemoryProvider
from archon.memory.mcp import McpMemoryProvider

logger = get_logger("memory.registry")

ProviderFactory: TypeAlias = Callable[[MemoryConfig], MemoryProvider]


class ProviderRegistry:
    """Maps provider type names to factories and builds providers from config.

    Populate it during startup. Registration is not synchronized and must
    not race with create().
    """

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}

    def register(self, provider_type: str, factory: ProviderFactory) -> None:
        """Register a factory, replacing any previous one for the same type."""
        if provider_type in self._factories:
            logger.warning(f"Memory provider {provider_type} already registered, replacing")
        self._factories[provider_type] = factory
        logger.debug(f"Registered memory provider: {provider_type}")

    def unregister(self, provider_type: str) -> None:
        """Remove a registered factory if present."""
        self._factories.pop(provider_type, None)

    def get(self, provider_type: str) -> ProviderFactory | None:
        """Get factory by type name."""
        return self._factories.get(provider_type)

    def types(self) -> list[str]:
        """Get registered type names."""
        return list(self._factories.keys())

    def create(self, config: MemoryConfig) -> MemoryProvider:
        """
        Resolve a config to a provider.

        Custom configs return their instance unchanged. Registered factories
        take precedence over the built-in file and mcp providers.

        Raises:
            UnknownProviderTypeError: If nothing handles config.type
        """
        if isinstance(config, CustomMemoryConfig):
            return config.provider

        factory = self._factories.get(config.type)
        if factory:
            return factory(config)

        if isinstance(config, FileMemoryConfig):
            return FileMemoryProvider(config.path)
        if isinstance(config, McpMemoryConfig):
            return McpMemoryProvider(config.server_name)

        raise UnknownProviderTypeError(config.type)


# Global registry instance, created on first use
_global_registry: ProviderRegistry | None = None


def get_provider_registry() -> ProviderRegistry:
    """Get or create the process-wide provider registry."""
    global _global_registry
    if _global_registry is None:
        _global_registry = ProviderRegistry()
    return _global_registry


def register_memory_provider(
    provider_type: str,
    factory: ProviderFactory,
    registry: ProviderRegistry | None = None,
) -> None:
    """Register a provider factory with the given or global registry."""
    (registry or get_provider_registry()).register(provider_type, factory)


def create_memory_provider(
    config: MemoryConfig,
    registry: ProviderRegistry | None = None,
) -> MemoryProvider:
    """Create a provider from config using the given or global registry."""
    return (registry or get_provider_registry()).create(config)
