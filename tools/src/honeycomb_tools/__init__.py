"""
Honeycomb Tools - MCP surface for the honeycomb navigation engine.

Usage:
    from fastmcp import FastMCP
    from honeycomb import Hive
    from honeycomb_tools.tools import register_all_tools

    mcp = FastMCP("hive")
    register_all_tools(mcp, hive=Hive.from_path("./hive"))
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import so the package can be inspected without fastmcp installed."""
    if name == "register_all_tools":
        from .tools import register_all_tools

        return register_all_tools
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "register_all_tools",
]
