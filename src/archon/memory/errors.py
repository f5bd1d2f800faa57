"""Memory provider errors."""


class MemoryProviderError(Exception):
    """Base class for errors raised by memory providers and the factory."""


class MemoryNotFoundError(MemoryProviderError):
    """Raised when deleting an entry that does not exist."""

    def __init__(self, memory_id: str):
        super().__init__(f"Memory not found: {memory_id}")
        self.memory_id = memory_id


class MemoryStorageError(MemoryProviderError):
    """Raised when persisted state cannot be read, parsed or written."""


class UnsupportedProviderError(MemoryProviderError):
    """Raised by providers that cannot run in the current process."""


class UnknownProviderTypeError(MemoryProviderError, ValueError):
    """Raised when no provider is known for a configuration type."""

    def __init__(self, provider_type: str):
        super().__init__(f"Unknown memory provider type: {provider_type}")
        self.provider_type = provider_type
