"""
Journey Schema - the audit trail of agent navigation.

A JourneyStep is one action against one hex. Steps are appended to a durable
JSONL log as JourneyLogEntry records (the step plus the journey it belongs to).
Journey is the in-memory, per-origin view of those steps for the lifetime of
the process; it is never rebuilt from the log.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


def _now() -> str:
    return datetime.now(UTC).isoformat()


class JourneyAction(StrEnum):
    """What an agent did at a hex."""

    ENTER = "enter"
    EXIT = "exit"  # Left through an edge
    DEPOSIT = "deposit"
    QUERY = "query"


class JourneyStatus(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class JourneyStep(BaseModel):
    """One navigation action."""

    hex_id: str = Field(alias="hexId")
    action: JourneyAction
    timestamp: str = Field(default_factory=_now)
    payload: Any = None
    edge_id: str | None = Field(default=None, alias="edgeId")

    model_config = {"populate_by_name": True}


class JourneyLogEntry(JourneyStep):
    """A step as written to the durable log."""

    journey_id: str = Field(alias="journeyId")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Journey(BaseModel):
    """Steps taken by one origin during this process."""

    id: str
    agent_id: str = Field(alias="agentId")
    started: str = Field(default_factory=_now)
    ended: str | None = None
    steps: list[JourneyStep] = Field(default_factory=list)
    status: JourneyStatus = JourneyStatus.ACTIVE

    model_config = {"populate_by_name": True}

    @property
    def path(self) -> list[str]:
        """Hex IDs touched, in order."""
        return [step.hex_id for step in self.steps]
