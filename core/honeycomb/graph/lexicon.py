"""
Lexical matching - How intents are compared with hints.

There are no embeddings here. Text is reduced to lowercase tokens, each token
is widened through a fixed concept table, and two pieces of text match when
their widened token sets intersect.

The concept table is bidirectional:
- a token that is a concept key pulls in the key's synonyms
- a token that is listed as a synonym pulls in the key and all of its synonyms

Expansions are computed once when the table is built, so a lookup is a single
dict access rather than a scan over every concept.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")

# Tokens of this length or shorter are dropped ("a", "of", "to", ...)
MIN_TOKEN_LENGTH = 3

DEFAULT_CONCEPTS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "button": ("interactive", "form", "click", "input", "ui", "element"),
        "deploy": ("ship", "ops", "launch", "release", "production", "ci", "cd"),
        "database": ("schema", "data", "table", "model", "prisma", "sql"),
        "style": ("css", "design", "theme", "color", "token", "tailwind"),
        "auth": ("login", "signup", "session", "permission", "security", "authentication"),
        "test": ("qa", "quality", "check", "audit", "verify", "testing"),
        "api": ("backend", "server", "endpoint", "route", "action", "rest"),
        "layout": ("spacing", "grid", "responsive", "breakpoint", "flex", "gap"),
        "text": ("typography", "font", "heading", "copy", "writing"),
        "image": ("performance", "optimization", "loading", "asset", "media"),
        "error": ("handling", "validation", "message", "boundary", "catch"),
        "form": ("input", "validation", "field", "submit", "interactive"),
        "component": ("ui", "element", "widget", "block", "module"),
        "animation": ("motion", "transition", "hover", "easing", "duration"),
        "color": ("theme", "palette", "token", "dark", "light", "mode"),
        "accessibility": ("a11y", "wcag", "aria", "screen", "reader", "keyboard", "focus"),
        "seo": ("search", "meta", "og", "social", "crawl", "sitemap"),
        "setup": ("scaffold", "init", "initialize", "new", "project", "start"),
        "code": ("typescript", "react", "standards", "patterns", "naming"),
        "copy": ("writing", "ux", "microcopy", "label", "message", "voice"),
    }
)


def tokenize(text: str) -> list[str]:
    """Lowercase, strip everything but [a-z0-9] and whitespace, split, drop short words."""
    cleaned = _NON_ALNUM.sub("", text.lower())
    return [word for word in cleaned.split() if len(word) >= MIN_TOKEN_LENGTH]


class SynonymTable:
    """
    Immutable concept table with precomputed bidirectional expansions.

    Example:
        table = SynonymTable.default()
        table.expand(["button"])       # {"button", "interactive", "form", ...}
        table.expand(["interactive"])  # {"interactive", "button", "form", ...}
    """

    def __init__(self, concepts: Mapping[str, Iterable[str]]):
        normalized: dict[str, tuple[str, ...]] = {}
        for key, synonyms in concepts.items():
            key = key.lower()
            merged = list(normalized.get(key, ()))
            for synonym in synonyms:
                synonym = synonym.lower()
                if synonym not in merged:
                    merged.append(synonym)
            normalized[key] = tuple(merged)
        self._concepts = MappingProxyType(normalized)

        expansions: dict[str, set[str]] = {}
        for key, synonyms in normalized.items():
            expansions.setdefault(key, {key}).update(synonyms)
            for synonym in synonyms:
                expansions.setdefault(synonym, {synonym}).update((key, *synonyms))
        self._expansions: Mapping[str, frozenset[str]] = MappingProxyType(
            {token: frozenset(group) for token, group in expansions.items()}
        )

    @classmethod
    @functools.cache
    def default(cls) -> SynonymTable:
        """The built-in concept table, shared because it never changes."""
        return cls(DEFAULT_CONCEPTS)

    @property
    def concepts(self) -> Mapping[str, tuple[str, ...]]:
        return self._concepts

    def extended(self, extra: Mapping[str, Iterable[str]]) -> SynonymTable:
        """Return a new table with extra concepts merged in (synonyms are appended)."""
        merged: dict[str, list[str]] = {key: list(values) for key, values in self._concepts.items()}
        for key, synonyms in extra.items():
            merged.setdefault(key.lower(), []).extend(synonyms)
        return SynonymTable(merged)

    def expand(self, tokens: Iterable[str]) -> frozenset[str]:
        """Widen a token list through the concept table."""
        expanded: set[str] = set()
        for token in tokens:
            expanded.add(token)
            expanded.update(self._expansions.get(token, ()))
        return frozenset(expanded)

    def expand_text(self, text: str) -> frozenset[str]:
        return self.expand(tokenize(text))

    def overlap(self, a: Iterable[str], b: Iterable[str]) -> int:
        """Number of shared tokens after both sides are expanded."""
        return len(self.expand(a) & self.expand(b))

    def __len__(self) -> int:
        return len(self._concepts)

    def __repr__(self) -> str:
        return f"SynonymTable(concepts={len(self._concepts)})"


def overlap(a: frozenset[str] | set[str], b: frozenset[str] | set[str]) -> int:
    """Size of the intersection of two already-expanded token sets."""
    return len(a & b)
