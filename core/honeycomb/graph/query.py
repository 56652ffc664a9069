"""
Query Engine - "I need X" -> ranked entry points.

Scoring for one hex against an intent (both sides synonym-expanded):

    +1.0  for every entry hint sharing at least one token with the intent
    +0.5  x tokens shared with the hex name
    +0.3  x tokens shared with the hex description (when present)
    +0.5  for every tag literally present in the expanded intent

Hexes scoring zero are dropped; the rest are sorted by descending score
(ties keep store order) and truncated to ``limit``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from honeycomb.graph.hex import Hex
from honeycomb.graph.lexicon import SynonymTable, overlap

DEFAULT_QUERY_LIMIT = 5

HINT_WEIGHT = 1.0
NAME_WEIGHT = 0.5
DESCRIPTION_WEIGHT = 0.3
TAG_WEIGHT = 0.5


@dataclass
class QueryResult:
    """A scored hex, with the hints that explain the score."""

    hex: Hex
    score: float
    matched_hints: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.hex.id,
            "name": self.hex.name,
            "type": str(self.hex.hex_type),
            "score": self.score,
            "matchedHints": list(self.matched_hints),
        }
        if self.hex.description is not None:
            result["description"] = self.hex.description
        return result


class QueryEngine:
    """Scores hexes against free-text intents. Holds no state beyond its synonym table."""

    def __init__(self, synonyms: SynonymTable | None = None):
        self.synonyms = synonyms or SynonymTable.default()

    def score(self, hex: Hex, expanded_intent: frozenset[str]) -> QueryResult:
        matched_hints: list[str] = []
        score = 0.0

        for hint in hex.entry_hints:
            if overlap(expanded_intent, self.synonyms.expand_text(hint)) > 0:
                matched_hints.append(hint)
                score += HINT_WEIGHT

        score += NAME_WEIGHT * overlap(expanded_intent, self.synonyms.expand_text(hex.name))

        if hex.description:
            score += DESCRIPTION_WEIGHT * overlap(
                expanded_intent, self.synonyms.expand_text(hex.description)
            )

        for tag in hex.tags:
            if tag.lower() in expanded_intent:
                score += TAG_WEIGHT

        return QueryResult(hex=hex, score=score, matched_hints=matched_hints)

    def rank(
        self,
        intent: str,
        hexes: Iterable[Hex],
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[QueryResult]:
        """Score every hex and return the best ``limit`` with a positive score."""
        expanded_intent = self.synonyms.expand_text(intent)

        results = []
        for hex in hexes:
            result = self.score(hex, expanded_intent)
            if result.score > 0:
                results.append(result)

        results.sort(key=lambda r: -r.score)
        return results[:limit]
