"""
Archon - pluggable memory for developer-assistant agents.

Package structure:
- core: Settings and logging setup
- memory: Memory providers, registry and record model
"""

__version__ = "0.1.0"
