"""Graph structures and navigation for the honeycomb."""

from honeycomb.graph.context import ANONYMOUS_JOURNEY, AgentContext
from honeycomb.graph.edge import EXTERNAL_PREFIX, Edge, EdgeCondition, EdgeTransform
from honeycomb.graph.hex import Hex, HexContents, HexType, merge_deposit
from honeycomb.graph.lexicon import DEFAULT_CONCEPTS, SynonymTable, tokenize
from honeycomb.graph.navigator import Hive, TraversalResult
from honeycomb.graph.query import QueryEngine, QueryResult

__all__ = [
    # Context
    "AgentContext",
    "ANONYMOUS_JOURNEY",
    # Edges
    "Edge",
    "EdgeCondition",
    "EdgeTransform",
    "EXTERNAL_PREFIX",
    # Hexes
    "Hex",
    "HexContents",
    "HexType",
    "merge_deposit",
    # Matching
    "SynonymTable",
    "DEFAULT_CONCEPTS",
    "tokenize",
    "QueryEngine",
    "QueryResult",
    # Navigation
    "Hive",
    "TraversalResult",
]
