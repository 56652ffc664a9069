"""
Hive Tool - Navigate the honeycomb by intent.

Provides MCP tools for querying, entering, traversing and depositing into hexes.
"""

from .hive_tool import register_tools

__all__ = ["register_tools"]
