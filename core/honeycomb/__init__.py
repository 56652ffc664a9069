"""
Honeycomb - agent-native navigation over a hand-authored knowledge graph.

Agents don't search, they pathfind: ask the hive what matches an intent,
enter a hex, ask where they can go from here, and traverse conditional edges
carrying a payload. Every step lands in an auditable journey log.
"""

from honeycomb.config import HoneycombConfig
from honeycomb.graph import (
    AgentContext,
    Edge,
    EdgeCondition,
    EdgeTransform,
    Hex,
    HexContents,
    HexType,
    Hive,
    QueryResult,
    SynonymTable,
    TraversalResult,
)
from honeycomb.runtime import JourneyLogStore, JourneyRecorder
from honeycomb.schemas.journey import Journey, JourneyAction, JourneyLogEntry, JourneyStep
from honeycomb.storage import FileHexStore, HexStore, InMemoryHexStore

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Hive",
    "HoneycombConfig",
    "AgentContext",
    "Hex",
    "HexContents",
    "HexType",
    "Edge",
    "EdgeCondition",
    "EdgeTransform",
    "QueryResult",
    "TraversalResult",
    "SynonymTable",
    "Journey",
    "JourneyAction",
    "JourneyStep",
    "JourneyLogEntry",
    "JourneyRecorder",
    "JourneyLogStore",
    "HexStore",
    "FileHexStore",
    "InMemoryHexStore",
]
