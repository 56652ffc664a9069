"""JourneyRecorder: captures every navigation step.

Injected into Hive. Each record() call updates the in-memory journey for the
agent's origin and then appends the step to the durable log immediately.

Safety: ``record()`` catches all exceptions from the log append and reports
them through the Python logger. Journey logging must never abort navigation.

Lifetime: the in-memory journeys live as long as the recorder. They are not
rebuilt from the log on restart; read_log() is the durable view.
"""

from __future__ import annotations

import logging
import threading

from honeycomb.graph.context import AgentContext
from honeycomb.runtime.journey_store import DEFAULT_JOURNEY_LIMIT, JourneyLogStore
from honeycomb.schemas.journey import Journey, JourneyLogEntry, JourneyStep

logger = logging.getLogger(__name__)


class JourneyRecorder:
    """Per-origin journey timelines plus the durable step log.

    Thread-safe: appends are serialised with a lock, so log order is arrival order.
    """

    def __init__(self, store: JourneyLogStore) -> None:
        self._store = store
        self._journeys: dict[str, Journey] = {}
        self._lock = threading.Lock()

    @property
    def store(self) -> JourneyLogStore:
        return self._store

    def record(self, context: AgentContext, step: JourneyStep) -> None:
        """Append ``step`` to the journey of ``context.origin`` and to the log."""
        journey_id = context.journey_id

        with self._lock:
            journey = self._journeys.get(journey_id)
            if journey is None:
                journey = Journey(id=journey_id, agent_id=journey_id)
                self._journeys[journey_id] = journey
            journey.steps.append(step)

            try:
                entry = JourneyLogEntry.model_validate(
                    {**step.model_dump(), "journey_id": journey_id}
                )
                self._store.append(entry)
            except Exception as e:
                logger.warning(
                    "Failed to append journey step (journey=%s, hex=%s, action=%s): %s",
                    journey_id,
                    step.hex_id,
                    step.action,
                    e,
                )

    def get_journey(self, journey_id: str) -> Journey | None:
        return self._journeys.get(journey_id)

    def list_journeys(self) -> list[Journey]:
        return list(self._journeys.values())

    async def read_log(self, limit: int = DEFAULT_JOURNEY_LIMIT) -> list[JourneyLogEntry]:
        """Most recent ``limit`` durable entries; [] when the log is missing or empty."""
        return await self._store.read_recent(limit)
