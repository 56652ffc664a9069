"""
Hex - a unit of content or capability in the honeycomb.

The on-disk record uses the camelCase field names below; Python code uses the
snake_case attributes. Both spellings are accepted when validating.

    {
      "id": "customer-data-q4",
      "name": "Customer Data Q4",
      "type": "data",
      "contents": {"data": {...}, "refs": [...], "tools": [...]},
      "entryHints": ["customer metrics", "Q4 data"],
      "edges": [{"id": ..., "to": ..., "when": {...}, "priority": 10, "description": ...}],
      "tags": ["customers", "q4"],
      "description": "...",
      "created": "2025-01-01T00:00:00+00:00",
      "updated": "2025-01-01T00:00:00+00:00"
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from honeycomb.graph.edge import Edge


class HexType(StrEnum):
    """What a hex is for. Descriptive only; the engine treats all kinds alike."""

    DATA = "data"  # Stores information
    TOOL = "tool"  # Exposes a capability
    GATEWAY = "gateway"  # Connects to external systems
    JUNCTION = "junction"  # Pure routing


def merge_deposit(existing: Any, incoming: Any) -> Any:
    """
    Merge deposited data into existing hex data.

    - list + list: concatenate, existing first
    - mapping + mapping: shallow merge, incoming keys win
    - anything else: incoming replaces existing
    """
    if isinstance(existing, list) and isinstance(incoming, list):
        return [*existing, *incoming]
    if isinstance(existing, Mapping) and isinstance(incoming, Mapping):
        return {**existing, **incoming}
    return incoming


class HexContents(BaseModel):
    """Opaque payload of a hex. The engine only returns or merges it."""

    data: Any = None
    refs: list[str] | None = None
    tools: list[dict[str, Any]] | None = None

    def deposit(self, incoming: Any) -> None:
        self.data = merge_deposit(self.data, incoming)


class Hex(BaseModel):
    """A node of the honeycomb with its outbound edges."""

    id: str
    name: str
    hex_type: HexType = Field(alias="type")
    contents: HexContents
    entry_hints: list[str] = Field(
        alias="entryHints", description="Phrases describing when an agent should land here"
    )
    edges: list[Edge]
    tags: list[str]
    description: str | None = None
    created: str
    updated: str

    model_config = {"populate_by_name": True}

    def get_edge(self, edge_id: str) -> Edge | None:
        """Get an outbound edge by ID."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def get_outgoing_edges(self) -> list[Edge]:
        """All outbound edges, highest priority first (stable for ties)."""
        return sorted(self.edges, key=lambda e: -e.priority)

    def to_record(self) -> dict[str, Any]:
        """Durable JSON-compatible form with camelCase keys and absent fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
