"""
Configuration management.

Loads settings from environment variables and .env file.
Prefix: ARCHON_
"""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from archon.core.logging import setup_logging
from archon.memory.config import (
    FileMemoryConfig,
    McpMemoryConfig,
    MemoryConfig,
    RegisteredMemoryConfig,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ARCHON_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Memory
    memory_provider: str = Field(
        default="file",
        description="Memory provider type: file, mcp, or a registered type",
    )
    memory_dir: Path = Field(
        default=Path(".claude/memory"), description="Memory storage directory"
    )
    mcp_server_name: str = Field(
        default="memory", description="MCP memory server name"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level name")
    log_file: Path | None = Field(default=None, description="Optional log file path")

    def configure_logging(self) -> logging.Logger:
        """Set up the archon logger from log_level and log_file."""
        return setup_logging(level=self.log_level, log_file=self.log_file)

    def memory_config(self) -> MemoryConfig:
        """Build the memory provider config these settings describe."""
        if self.memory_provider == "file":
            return FileMemoryConfig(path=self.memory_dir)
        if self.memory_provider == "mcp":
            return McpMemoryConfig(server_name=self.mcp_server_name)
        return RegisteredMemoryConfig(
            type=self.memory_provider, options={"path": self.memory_dir}
        )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
