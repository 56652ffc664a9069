"""Agent context - what a navigating agent carries between calls."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

ANONYMOUS_JOURNEY = "anonymous"


@dataclass
class AgentContext:
    """
    Ephemeral, caller-supplied navigation state.

    Nothing here is persisted. ``visited`` and ``depth`` are carried along for
    callers that want cycle detection; the engine does not enforce either.
    """

    intent: str | None = None
    payload: Any = None
    visited: list[str] = field(default_factory=list)
    origin: str | None = None  # Agent / journey identifier
    depth: int = 0  # Hops taken so far

    @property
    def journey_id(self) -> str:
        return self.origin or ANONYMOUS_JOURNEY

    def step_to(self, hex_id: str, payload: Any = None) -> AgentContext:
        """Return a copy of this context that has moved onto ``hex_id``."""
        return replace(
            self,
            payload=self.payload if payload is None else payload,
            visited=[*self.visited, hex_id],
            depth=self.depth + 1,
        )
