"""MCP tool registration."""

from __future__ import annotations

from fastmcp import FastMCP

from honeycomb import Hive

from .hive_tool import register_tools as register_hive_tools


def register_all_tools(mcp: FastMCP, hive: Hive) -> list[str]:
    """Register every honeycomb tool on ``mcp`` and return the registered names."""
    register_hive_tools(mcp, hive=hive)
    return [
        "hive_query",
        "hive_enter",
        "hive_next_steps",
        "hive_traverse",
        "hive_deposit",
        "hive_create_hex",
        "hive_list_hexes",
        "hive_journey_log",
    ]
