"""
Edge Protocol - How hexes connect in the honeycomb.

An edge is owned by exactly one source hex and defines:
1. The destination (a hex id, or ``external:<name>`` to leave the graph)
2. A guard (``when``) evaluated against the agent's context
3. An optional transform reshaping the payload carried across

Guard clauses:
- always:  unconditional; every other clause is ignored
- intent:  lexical overlap with the agent's intent (after synonym expansion)
- hasData: payload contains every listed key
- lacks:   payload is missing at least one listed key
- match:   payload holds exactly these values at these keys

All present clauses are ANDed. A clause is only checked when its input is
available: without an agent intent the intent clause is skipped, and without a
payload the hasData / lacks / match clauses are skipped. A guard combining
``hasData`` and ``lacks`` therefore passes when no payload is carried at all.

Transforms run in a fixed order: pick -> omit -> rename -> inject.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from honeycomb.graph.context import AgentContext
from honeycomb.graph.lexicon import SynonymTable, tokenize

EXTERNAL_PREFIX = "external:"


def _payload_keys(payload: Any) -> set[str]:
    if isinstance(payload, Mapping):
        return set(payload.keys())
    return set()


def _strict_equal(a: Any, b: Any) -> bool:
    # True == 1 in Python; guard values must match in kind as well as value
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


class EdgeCondition(BaseModel):
    """
    Guard deciding whether an edge may be taken.

    Examples:
        EdgeCondition(always=True)
        EdgeCondition(intent="revenue context")
        EdgeCondition(has_data=["customer_id"], match={"tier": "gold"})
    """

    intent: str | None = None
    has_data: list[str] | None = Field(default=None, alias="hasData")
    lacks: list[str] | None = None
    match: dict[str, Any] | None = None
    always: bool | None = None

    model_config = {"populate_by_name": True}

    def evaluate(self, context: AgentContext, synonyms: SynonymTable | None = None) -> bool:
        """
        Decide whether this guard passes for ``context``.

        Checks run in order always -> intent -> hasData -> lacks -> match and
        stop at the first failing clause.
        """
        if self.always:
            return True

        if self.intent and context.intent:
            table = synonyms or SynonymTable.default()
            if table.overlap(tokenize(self.intent), tokenize(context.intent)) == 0:
                return False

        payload = context.payload
        if payload is None:
            return True

        keys = _payload_keys(payload)

        if self.has_data is not None:
            if not all(key in keys for key in self.has_data):
                return False

        if self.lacks is not None:
            if not any(key not in keys for key in self.lacks):
                return False

        if self.match is not None:
            for key, expected in self.match.items():
                if key not in keys or not _strict_equal(payload[key], expected):
                    return False

        return True


class EdgeTransform(BaseModel):
    """
    Declarative payload reshaping applied when an edge is taken.

    Example:
        EdgeTransform(pick=["a", "b"], rename={"a": "x"}, inject={"y": 9})
        # {"a": 1, "b": 2, "c": 3} -> {"b": 2, "x": 1, "y": 9}
    """

    pick: list[str] | None = None
    omit: list[str] | None = None
    inject: dict[str, Any] | None = None
    rename: dict[str, str] | None = None

    def apply(self, payload: Any) -> Any:
        """Return the reshaped payload. Non-mapping payloads pass through untouched."""
        if not isinstance(payload, Mapping):
            return payload

        result = dict(payload)

        if self.pick is not None:
            result = {key: result[key] for key in self.pick if key in result}

        if self.omit is not None:
            for key in self.omit:
                result.pop(key, None)

        if self.rename is not None:
            for old, new in self.rename.items():
                if old in result:
                    result[new] = result.pop(old)

        if self.inject is not None:
            result.update(self.inject)

        return result


class Edge(BaseModel):
    """
    A directed, conditional connection owned by one source hex.

    ``id`` is unique within the owning hex only. ``to`` does not have to resolve
    when the edge is created; forward references and external targets are legal.
    """

    id: str
    to: str = Field(description="Destination hex ID or 'external:<service>'")
    when: EdgeCondition
    transform: EdgeTransform | None = None
    priority: int = Field(description="Higher priority edges are evaluated first")
    description: str

    @property
    def is_external(self) -> bool:
        return self.to.startswith(EXTERNAL_PREFIX)

    def should_traverse(self, context: AgentContext, synonyms: SynonymTable | None = None) -> bool:
        return self.when.evaluate(context, synonyms)

    def carry(self, payload: Any) -> Any:
        """Payload as it arrives on the far side of this edge."""
        if self.transform is None:
            return payload
        return self.transform.apply(payload)
