"""
Core module - configuration and logging.

Components:
- config: Settings management via pydantic-settings
- logging: Structured logging setup
"""

from archon.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
