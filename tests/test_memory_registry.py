"""Tests for the memory provider registry and factory."""

from pathlib import Path

import pytest

from archon.memory import registry as registry_module
from archon.memory.base import (
    MemoryEntry,
    MemoryInput,
    MemoryProvider,
    MemorySearchOptions,
)
from archon.memory.config import (
    CustomMemoryConfig,
    FileMemoryConfig,
    McpMemoryConfig,
    RegisteredMemoryConfig,
)
from archon.memory.errors import UnknownProviderTypeError
from archon.memory.file_store import FileMemoryProvider
from archon.memory.mcp import McpMemoryProvider
from archon.memory.registry import (
    ProviderRegistry,
    create_memory_provider,
    get_provider_registry,
    register_memory_provider,
)


class StubProvider(MemoryProvider):
    """Minimal provider for exercising custom and registered paths."""

    def __init__(self, name: str = "stub"):
        self.name = name

    async def save(self, data: MemoryInput) -> MemoryEntry:
        raise NotImplementedError

    async def search(self, query: str, options: MemorySearchOptions | None = None):
        return []

    async def get(self, memory_id: str) -> MemoryEntry | None:
        return None

    async def list(self, options: MemorySearchOptions | None = None):
        return []

    async def delete(self, memory_id: str) -> None:
        return None


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry()


@pytest.fixture
def global_registry(monkeypatch) -> ProviderRegistry:
    """Fresh process-wide registry for the duration of a test."""
    monkeypatch.setattr(registry_module, "_global_registry", None)
    return get_provider_registry()


class TestBuiltins:
    """Built-in provider resolution."""

    def test_file_provider(self, registry: ProviderRegistry, tmp_path: Path):
        provider = registry.create(FileMemoryConfig(path=tmp_path))
        assert isinstance(provider, FileMemoryProvider)
        assert provider.name == "file"
        assert provider.path == tmp_path

    def test_mcp_provider(self, registry: ProviderRegistry):
        provider = registry.create(McpMemoryConfig(server_name="memory"))
        assert isinstance(provider, McpMemoryProvider)
        assert provider.name == "mcp:memory"

    def test_custom_provider_returned_unchanged(self, registry: ProviderRegistry):
        custom = StubProvider("redis")
        assert registry.create(CustomMemoryConfig(provider=custom)) is custom

    @pytest.mark.asyncio
    async def test_created_file_provider_works(self, registry: ProviderRegistry, tmp_path: Path):
        memory = registry.create(FileMemoryConfig(path=tmp_path / "memory"))
        saved = await memory.save(MemoryInput(content="Factory made", tags=["f"]))
        assert (await memory.get(saved.id)) == saved


class TestRegistration:
    """Registered factories."""

    def test_registered_factory_receives_config(self, registry: ProviderRegistry):
        seen = []

        def factory(config):
            seen.append(config)
            return StubProvider(f"redis:{config.options['url']}")

        registry.register("redis", factory)
        config = RegisteredMemoryConfig(type="redis", options={"url": "redis://localhost"})
        provider = registry.create(config)

        assert provider.name == "redis:redis://localhost"
        assert seen == [config]

    def test_registration_overwrites(self, registry: ProviderRegistry):
        registry.register("redis", lambda config: StubProvider("first"))
        registry.register("redis", lambda config: StubProvider("second"))

        provider = registry.create(RegisteredMemoryConfig(type="redis"))
        assert provider.name == "second"

    def test_registered_factory_shadows_builtin(self, registry: ProviderRegistry, tmp_path: Path):
        registry.register("file", lambda config: StubProvider(f"wrapped:{config.path}"))
        provider = registry.create(FileMemoryConfig(path=tmp_path))
        assert provider.name == f"wrapped:{tmp_path}"

    def test_custom_ignores_registry(self, registry: ProviderRegistry):
        registry.register("custom", lambda config: StubProvider("from-registry"))
        custom = StubProvider("mine")
        assert registry.create(CustomMemoryConfig(provider=custom)) is custom

    def test_types_and_unregister(self, registry: ProviderRegistry):
        registry.register("redis", lambda config: StubProvider())
        assert registry.types() == ["redis"]
        assert registry.get("redis") is not None

        registry.unregister("redis")
        assert registry.types() == []
        assert registry.get("redis") is None

    def test_unknown_type(self, registry: ProviderRegistry):
        with pytest.raises(UnknownProviderTypeError) as exc_info:
            registry.create(RegisteredMemoryConfig(type="postgres"))
        assert exc_info.value.provider_type == "postgres"
        assert "Unknown memory provider type: postgres" in str(exc_info.value)

    def test_unknown_type_is_value_error(self, registry: ProviderRegistry):
        with pytest.raises(ValueError):
            registry.create(RegisteredMemoryConfig(type="postgres"))


class TestGlobalRegistry:
    """Module-level helpers use the process-wide registry."""

    def test_singleton(self, global_registry: ProviderRegistry):
        assert get_provider_registry() is global_registry

    def test_register_and_create(self, global_registry: ProviderRegistry):
        register_memory_provider("redis", lambda config: StubProvider("global"))
        provider = create_memory_provider(RegisteredMemoryConfig(type="redis"))
        assert provider.name == "global"
        assert global_registry.types() == ["redis"]

    def test_explicit_registry_isolated(self, global_registry: ProviderRegistry, registry: ProviderRegistry):
        register_memory_provider("redis", lambda config: StubProvider("local"), registry)

        assert global_registry.get("redis") is None
        assert create_memory_provider(RegisteredMemoryConfig(type="redis"), registry).name == "local"
        with pytest.raises(UnknownProviderTypeError):
            create_memory_provider(RegisteredMemoryConfig(type="redis"))
