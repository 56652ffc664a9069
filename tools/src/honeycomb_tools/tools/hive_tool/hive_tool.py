"""MCP tools for navigating the honeycomb.

One tool per engine entry point:
- hive_query:        rank hexes against an intent
- hive_enter:        read a hex's contents
- hive_next_steps:   edges whose guards pass for the agent's context
- hive_traverse:     follow an edge, applying its payload transform
- hive_deposit:      merge data into a hex
- hive_create_hex:   add a hex to the graph
- hive_list_hexes:   list every hex
- hive_journey_log:  recent navigation steps

Every tool takes flat arguments and returns a JSON-serialisable dict. Failed
traversals and deposits come back with ``success: False`` and an ``error``
message instead of raising, so the calling agent can pick another edge.
"""

from __future__ import annotations

import logging
from typing import Any

from fastmcp import FastMCP
from pydantic import ValidationError

from honeycomb import AgentContext, Hive
from honeycomb.observability import clear_trace_context, set_trace_context

logger = logging.getLogger(__name__)


def _trace(tool: str, origin: str | None = None) -> None:
    """Reset the trace context for one tool call."""
    clear_trace_context()
    set_trace_context(tool=tool)
    if origin:
        set_trace_context(journey_id=origin)


def _context(
    intent: str | None,
    payload: dict[str, Any] | None,
    origin: str | None,
) -> AgentContext:
    context = AgentContext(intent=intent or None, payload=payload, origin=origin or None)
    set_trace_context(journey_id=context.journey_id)
    return context


def _edge_summary(edge, include_guard: bool = False) -> dict[str, Any]:
    summary = {
        "id": edge.id,
        "to": edge.to,
        "description": edge.description,
        "priority": edge.priority,
    }
    if include_guard:
        summary["when"] = edge.when.model_dump(by_alias=True, exclude_none=True)
    return summary


def register_tools(mcp: FastMCP, hive: Hive) -> None:
    """Register hive navigation tools with the MCP server."""

    @mcp.tool()
    async def hive_query(intent: str, limit: int = 5, origin: str = "") -> dict:
        """Find hexes matching a semantic intent. Returns entry points sorted by relevance.

        Args:
            intent: What the agent is looking for (e.g. 'customer Q4 metrics')
            limit: Max results to return (default 5)
            origin: Optional agent/journey id; when set the query is journaled

        Returns:
            Dict with 'results' (id, name, type, score, matchedHints, description)
        """
        _trace("hive_query", origin)
        context = _context(None, None, origin) if origin else None
        results = await hive.query(intent, limit, context=context)
        return {"results": [r.to_dict() for r in results], "total": len(results)}

    @mcp.tool()
    async def hive_enter(
        hex_id: str,
        intent: str = "",
        payload: dict[str, Any] | None = None,
        origin: str = "",
    ) -> dict:
        """Navigate to a hex and retrieve its contents.

        Args:
            hex_id: The hex ID to enter
            intent: Current agent intent
            payload: Data the agent is carrying
            origin: Agent/journey id for the journey log

        Returns:
            Dict with the hex's id, name, type, contents, edges and tags
        """
        _trace("hive_enter", origin)
        context = _context(intent, payload, origin) if intent or payload or origin else None
        hex = await hive.enter(hex_id, context)
        if hex is None:
            return {"success": False, "error": "Hex not found", "hexId": hex_id}
        return {
            "id": hex.id,
            "name": hex.name,
            "type": str(hex.hex_type),
            "contents": hex.contents.model_dump(mode="json", exclude_none=True),
            "edges": [_edge_summary(e) for e in hex.edges],
            "tags": hex.tags,
        }

    @mcp.tool()
    async def hive_next_steps(
        hex_id: str,
        intent: str = "",
        payload: dict[str, Any] | None = None,
        origin: str = "",
    ) -> dict:
        """Get edges available from a hex, filtered by agent context.

        Only edges whose conditions match are returned, highest priority first.

        Args:
            hex_id: Current hex ID
            intent: What the agent wants to do next
            payload: Data the agent is carrying
            origin: Agent/journey id

        Returns:
            Dict with 'edges' (id, to, description, priority, when)
        """
        _trace("hive_next_steps", origin)
        context = _context(intent, payload, origin)
        edges = await hive.next_steps(hex_id, context)
        return {"edges": [_edge_summary(e, include_guard=True) for e in edges]}

    @mcp.tool()
    async def hive_traverse(
        hex_id: str,
        edge_id: str,
        intent: str = "",
        payload: dict[str, Any] | None = None,
        origin: str = "",
    ) -> dict:
        """Follow an edge from a hex to its destination, applying payload transforms.

        Args:
            hex_id: Source hex ID
            edge_id: Edge ID to follow
            intent: Current agent intent
            payload: Data the agent is carrying
            origin: Agent/journey id

        Returns:
            Dict with success, destination, payload, external and error
        """
        _trace("hive_traverse", origin)
        context = _context(intent, payload, origin)
        result = await hive.traverse(hex_id, edge_id, context)
        return result.to_dict()

    @mcp.tool()
    async def hive_deposit(hex_id: str, data: Any, origin: str = "") -> dict:
        """Deposit data at a hex. Merges with existing contents.

        Lists are appended, objects are shallow-merged, anything else replaces.

        Args:
            hex_id: Target hex ID
            data: Data to deposit
            origin: Agent/journey id; when set the deposit is journaled

        Returns:
            Dict with success and hexId
        """
        _trace("hive_deposit", origin)
        context = _context(None, None, origin) if origin else None
        success = await hive.deposit(hex_id, data, context=context)
        result: dict[str, Any] = {"success": success, "hexId": hex_id}
        if not success:
            result["error"] = "Hex not found"
        return result

    @mcp.tool()
    async def hive_create_hex(
        id: str,
        name: str,
        type: str,
        entry_hints: list[str],
        tags: list[str],
        description: str | None = None,
        contents: dict[str, Any] | None = None,
        edges: list[dict[str, Any]] | None = None,
    ) -> dict:
        """Create a new hex in the hive.

        Args:
            id: Unique hex identifier (kebab-case)
            name: Human-readable name
            type: One of data, tool, gateway, junction
            entry_hints: Phrases describing when agents should enter
            tags: Categorisation tags
            description: What this hex is for
            contents: Initial contents ({data, refs, tools})
            edges: Outbound edges ({id, to, when, transform?, priority, description})

        Returns:
            Dict with success and the created hex's id, name and type
        """
        _trace("hive_create_hex")
        draft: dict[str, Any] = {
            "id": id,
            "name": name,
            "type": type,
            "entryHints": entry_hints,
            "tags": tags,
            "contents": contents or {"data": None},
            "edges": edges or [],
        }
        if description is not None:
            draft["description"] = description

        try:
            hex = await hive.create_hex(draft)
        except (ValidationError, ValueError) as e:
            logger.warning("Rejected hex %s: %s", id, e)
            return {"success": False, "error": f"Invalid hex: {e}"}

        return {
            "success": True,
            "hex": {"id": hex.id, "name": hex.name, "type": str(hex.hex_type)},
        }

    @mcp.tool()
    async def hive_list_hexes() -> dict:
        """List all hexes in the hive with their basic info.

        Returns:
            Dict with 'hexes' (id, name, type, tags, edgeCount, description)
        """
        _trace("hive_list_hexes")
        hexes = await hive.list_hexes()
        summaries = []
        for h in hexes:
            summary = {
                "id": h.id,
                "name": h.name,
                "type": str(h.hex_type),
                "tags": h.tags,
                "edgeCount": len(h.edges),
            }
            if h.description is not None:
                summary["description"] = h.description
            summaries.append(summary)
        return {"hexes": summaries, "total": len(summaries)}

    @mcp.tool()
    async def hive_journey_log(limit: int | None = None) -> dict:
        """Get recent agent navigation steps from the journey log.

        Useful for auditing and debugging agent paths.

        Args:
            limit: Max entries to return (default: the configured journey limit)

        Returns:
            Dict with 'steps', oldest first
        """
        _trace("hive_journey_log")
        entries = await hive.journey_log(limit)
        return {"steps": [e.to_record() for e in entries], "total": len(entries)}
