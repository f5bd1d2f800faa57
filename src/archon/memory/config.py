"""
Memory provider configuration.

Built-in providers have one config class each; any other provider type is
described by RegisteredMemoryConfig and resolved through the registry.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, TypeAlias

from archon.memory.base import MemoryProvider


@dataclass(frozen=True)
class FileMemoryConfig:
    """JSON file storage in a directory (created if missing)."""

    path: Path | str
    type: Literal["file"] = field(default="file", init=False)


@dataclass(frozen=True)
class McpMemoryConfig:
    """MCP memory server, named as in the host's MCP config."""

    server_name: str
    type: Literal["mcp"] = field(default="mcp", init=False)


@dataclass(frozen=True)
class CustomMemoryConfig:
    """Ready-made provider instance, used as is."""

    provider: MemoryProvider
    type: Literal["custom"] = field(default="custom", init=False)


@dataclass(frozen=True)
class RegisteredMemoryConfig:
    """Provider type added at runtime via the registry."""

    type: str
    options: dict[str, Any] = field(default_factory=dict)


MemoryConfig: TypeAlias = (
    FileMemoryConfig | McpMemoryConfig | CustomMemoryConfig | RegisteredMemoryConfig
)


def memory_config_from_dict(data: Mapping[str, Any]) -> MemoryConfig:
    """
    Build a config from plain data, e.g. a parsed settings file.

    Args:
        data: Mapping with a "type" key plus type-specific fields

    Returns:
        Matching config variant

    Raises:
        ValueError: If "type" is missing, required fields are absent,
            or type is "custom"
    """
    options = dict(data)
    provider_type = options.pop("type", None)
    if not provider_type:
        raise ValueError("Memory config requires a 'type' field")

    if provider_type == "file":
        if "path" not in options:
            raise ValueError("File memory config requires 'path'")
        return FileMemoryConfig(path=options["path"])

    if provider_type == "mcp":
        server_name = options.get("server_name", options.get("serverName"))
        if not server_name:
            raise ValueError("MCP memory config requires 'server_name'")
        return McpMemoryConfig(server_name=server_name)

    if provider_type == "custom":
        raise ValueError("Custom memory config needs a provider instance, not plain data")

    return RegisteredMemoryConfig(type=provider_type, options=options)
