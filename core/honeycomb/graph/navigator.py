"""
Hive - the interface agents use to move through the honeycomb.

    query       "I need X"                 -> ranked entry points
    enter       "show me this hex"         -> hex contents
    next_steps  "I have X, where now?"     -> edges whose guards pass
    traverse    "take this edge"           -> destination + reshaped payload
    deposit     "leave this here"          -> merged into the hex's data

Every call that touches a hex on behalf of an agent ends by recording a
journey step. Traversal and deposit failures come back as values
(``TraversalResult.success``, ``False``); they are not raised.

Traversal states:

    Sourced -> EdgeResolved -> GuardChecked -> Transformed -> Result

Any failing state short-circuits to an unsuccessful Result. The guard is
always re-checked at traversal time: the payload may have changed since the
edge was offered by next_steps().
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from honeycomb.graph.context import AgentContext
from honeycomb.graph.edge import Edge
from honeycomb.graph.hex import Hex
from honeycomb.graph.lexicon import SynonymTable
from honeycomb.graph.query import DEFAULT_QUERY_LIMIT, QueryEngine, QueryResult
from honeycomb.runtime.journey_recorder import JourneyRecorder
from honeycomb.runtime.journey_store import DEFAULT_JOURNEY_LIMIT, JourneyLogStore
from honeycomb.schemas.journey import Journey, JourneyAction, JourneyLogEntry, JourneyStep
from honeycomb.storage.backend import FileHexStore, HexStore

if TYPE_CHECKING:
    from honeycomb.config import HoneycombConfig

logger = logging.getLogger(__name__)

SOURCE_NOT_FOUND = "Source hex not found"
EDGE_NOT_FOUND = "Edge not found"
CONDITION_NOT_MET = "Edge condition not met"


@dataclass
class TraversalResult:
    """Outcome of following an edge."""

    success: bool
    destination: str  # Hex ID or external target, "" when unresolved
    payload: Any = None
    external: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success, "destination": self.destination}
        if self.success:
            result["payload"] = self.payload
            result["external"] = self.external
        if self.error is not None:
            result["error"] = self.error
        return result


class Hive:
    """
    Navigation engine over a hex store.

    Example:
        hive = Hive.from_path("./hive")
        results = await hive.query("customer Q4 metrics")
        ctx = AgentContext(intent="revenue context", origin="agent-1")
        edges = await hive.next_steps(results[0].hex.id, ctx)
        outcome = await hive.traverse(results[0].hex.id, edges[0].id, ctx)
    """

    def __init__(
        self,
        store: HexStore,
        recorder: JourneyRecorder,
        synonyms: SynonymTable | None = None,
        query_limit: int = DEFAULT_QUERY_LIMIT,
        journey_limit: int = DEFAULT_JOURNEY_LIMIT,
    ):
        self.store = store
        self.recorder = recorder
        self.synonyms = synonyms or SynonymTable.default()
        self.query_limit = query_limit
        self.journey_limit = journey_limit
        self._query_engine = QueryEngine(self.synonyms)

    @classmethod
    def from_path(cls, path: str | Path, synonyms: SynonymTable | None = None) -> Hive:
        """File-backed hive rooted at ``path`` (hexes/ and journeys.jsonl)."""
        root = Path(path)
        return cls(
            store=FileHexStore(root),
            recorder=JourneyRecorder(JourneyLogStore(root / "journeys.jsonl")),
            synonyms=synonyms,
        )

    @classmethod
    def from_config(cls, config: HoneycombConfig) -> Hive:
        return cls(
            store=FileHexStore(config.storage_path),
            recorder=JourneyRecorder(JourneyLogStore(config.journey_log_path)),
            synonyms=config.synonym_table(),
            query_limit=config.query_limit,
            journey_limit=config.journey_limit,
        )

    # ============================================
    # QUERY
    # ============================================

    async def query(
        self,
        intent: str,
        limit: int | None = None,
        context: AgentContext | None = None,
    ) -> list[QueryResult]:
        """Rank every hex against ``intent``. Read-only unless a context asks for a journey step."""
        hexes = await self.store.list_all()
        results = self._query_engine.rank(
            intent, hexes, self.query_limit if limit is None else limit
        )

        if context is not None:
            self.recorder.record(
                context,
                JourneyStep(
                    hex_id=results[0].hex.id if results else "",
                    action=JourneyAction.QUERY,
                    payload={"intent": intent, "matches": [r.hex.id for r in results]},
                ),
            )

        return results

    # ============================================
    # ENTER
    # ============================================

    async def enter(self, hex_id: str, context: AgentContext | None = None) -> Hex | None:
        hex = await self.store.get(hex_id)

        if hex is not None and context is not None:
            self.recorder.record(
                context,
                JourneyStep(hex_id=hex_id, action=JourneyAction.ENTER, payload=context.payload),
            )

        return hex

    # ============================================
    # NEXT STEPS
    # ============================================

    async def next_steps(self, hex_id: str, context: AgentContext) -> list[Edge]:
        """Edges whose guards pass for ``context``, highest priority first. [] for unknown hexes."""
        hex = await self.store.get(hex_id)
        if hex is None:
            return []

        return [
            edge
            for edge in hex.get_outgoing_edges()
            if edge.should_traverse(context, self.synonyms)
        ]

    # ============================================
    # TRAVERSE
    # ============================================

    async def traverse(
        self,
        from_hex_id: str,
        edge_id: str,
        context: AgentContext,
    ) -> TraversalResult:
        # Sourced
        source = await self.store.get(from_hex_id)
        if source is None:
            logger.info(
                "Traverse from unknown hex %s",
                from_hex_id,
                extra={"event": "traverse", "hex_id": from_hex_id, "edge_id": edge_id},
            )
            return TraversalResult(success=False, destination="", error=SOURCE_NOT_FOUND)

        # EdgeResolved
        edge = source.get_edge(edge_id)
        if edge is None:
            logger.info(
                "Hex %s has no edge %s",
                from_hex_id,
                edge_id,
                extra={"event": "traverse", "hex_id": from_hex_id, "edge_id": edge_id},
            )
            return TraversalResult(success=False, destination="", error=EDGE_NOT_FOUND)

        # GuardChecked
        if not edge.should_traverse(context, self.synonyms):
            logger.info(
                "Guard on %s/%s not met",
                from_hex_id,
                edge_id,
                extra={"event": "traverse", "hex_id": from_hex_id, "edge_id": edge_id},
            )
            return TraversalResult(success=False, destination=edge.to, error=CONDITION_NOT_MET)

        # Transformed
        payload = edge.carry(context.payload)

        self.recorder.record(
            context,
            JourneyStep(
                hex_id=from_hex_id,
                action=JourneyAction.EXIT,
                payload=payload,
                edge_id=edge_id,
            ),
        )

        logger.debug(
            "Traversed %s/%s -> %s",
            from_hex_id,
            edge_id,
            edge.to,
            extra={"event": "traverse", "hex_id": from_hex_id, "edge_id": edge_id},
        )
        return TraversalResult(
            success=True,
            destination=edge.to,
            payload=payload,
            external=edge.is_external,
        )

    # ============================================
    # DEPOSIT
    # ============================================

    async def deposit(
        self,
        hex_id: str,
        data: Any,
        context: AgentContext | None = None,
    ) -> bool:
        """
        Merge ``data`` into the hex's ``contents.data`` and persist.

        Read-modify-write without isolation: two concurrent deposits on the same
        hex can lose one of the writes (last write wins).
        """
        hex = await self.store.get(hex_id)
        if hex is None:
            return False

        hex.contents.deposit(data)
        hex.updated = datetime.now(UTC).isoformat()
        await self.store.save(hex)
        logger.debug("Deposited into %s", hex_id, extra={"event": "deposit", "hex_id": hex_id})

        if context is not None:
            self.recorder.record(
                context,
                JourneyStep(hex_id=hex_id, action=JourneyAction.DEPOSIT, payload=data),
            )

        return True

    # ============================================
    # HEX MANAGEMENT
    # ============================================

    async def create_hex(self, draft: Mapping[str, Any] | Hex) -> Hex:
        """
        Create (or overwrite) a hex from a draft record without timestamps.

        ``contents``, ``edges`` and ``tags`` default to empty. Edges pointing at
        hexes that do not exist yet are allowed and only logged.

        Raises:
            pydantic.ValidationError: If the draft does not describe a valid hex
            ValueError: If the id cannot be stored
        """
        if isinstance(draft, Hex):
            record = draft.model_dump(by_alias=True)
        else:
            record = dict(draft)
        record.setdefault("contents", {})
        record.setdefault("edges", [])
        record.setdefault("tags", [])

        now = datetime.now(UTC).isoformat()
        hex = Hex.model_validate({**record, "created": now, "updated": now})

        await self._warn_missing_edge_targets(hex)
        await self.store.save(hex)
        logger.info("Created hex %s (%s)", hex.id, hex.hex_type)
        return hex

    async def get_hex(self, hex_id: str) -> Hex | None:
        return await self.store.get(hex_id)

    async def list_hexes(self) -> list[Hex]:
        return await self.store.list_all()

    async def delete_hex(self, hex_id: str) -> bool:
        return await self.store.delete(hex_id)

    async def _warn_missing_edge_targets(self, hex: Hex) -> None:
        existing = set(await self.store.list_ids())
        existing.add(hex.id)
        for edge in hex.edges:
            if edge.is_external:
                continue
            if edge.to not in existing:
                logger.warning(
                    "Hex '%s' has edge '%s' to non-existent hex '%s' (may be created later)",
                    hex.id,
                    edge.id,
                    edge.to,
                )

    # ============================================
    # JOURNEY LOG
    # ============================================

    async def journey_log(self, limit: int | None = None) -> list[JourneyLogEntry]:
        return await self.recorder.read_log(self.journey_limit if limit is None else limit)

    def get_journey(self, journey_id: str) -> Journey | None:
        return self.recorder.get_journey(journey_id)
