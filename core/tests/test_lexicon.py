"""Tests for tokenization and the bidirectional synonym table."""

from honeycomb.graph.lexicon import DEFAULT_CONCEPTS, SynonymTable, tokenize


class TestTokenize:
    def test_lowercases_and_strips_punctuation(self):
        assert tokenize("Hello, World!") == ["hello", "world"]

    def test_drops_short_tokens(self):
        assert tokenize("a ab abc Q4 data") == ["abc", "data"]

    def test_collapses_whitespace(self):
        assert tokenize("  customer \t\n metrics  ") == ["customer", "metrics"]

    def test_empty_text(self):
        assert tokenize("") == []
        assert tokenize("?! --") == []

    def test_hyphenated_words_are_joined(self):
        # Punctuation is removed, not treated as a separator
        assert tokenize("sign-up flow") == ["signup", "flow"]


class TestSynonymTable:
    def test_key_expands_to_synonyms(self):
        expanded = SynonymTable.default().expand(["button"])
        assert "interactive" in expanded
        assert "click" in expanded
        assert "button" in expanded

    def test_synonym_expands_back_to_key_and_siblings(self):
        expanded = SynonymTable.default().expand(["interactive"])
        # "interactive" belongs to both the button and form concepts
        assert {"button", "click", "form", "submit", "interactive"} <= expanded

    def test_expansion_is_symmetric_for_every_pair(self):
        table = SynonymTable.default()
        for key, synonyms in DEFAULT_CONCEPTS.items():
            for synonym in synonyms:
                assert synonym in table.expand([key])
                assert key in table.expand([synonym]), f"{synonym} should reach {key}"

    def test_unknown_token_expands_to_itself(self):
        assert SynonymTable.default().expand(["zebra"]) == frozenset({"zebra"})

    def test_overlap_uses_expansion(self):
        table = SynonymTable.default()
        assert table.overlap(["button"], ["interactive"]) > 0
        assert table.overlap(["button"], ["zebra"]) == 0

    def test_default_is_shared(self):
        assert SynonymTable.default() is SynonymTable.default()

    def test_extended_returns_new_table(self):
        base = SynonymTable.default()
        extended = base.extended({"invoice": ["billing", "payment"], "button": ["cta"]})

        assert "invoice" in extended.expand(["billing"])
        assert "button" in extended.expand(["cta"])
        assert "interactive" in extended.expand(["cta"])
        # The base table is untouched
        assert "invoice" not in base.expand(["billing"])
        assert "cta" not in base.concepts["button"]

    def test_custom_table_normalizes_case(self):
        table = SynonymTable({"Invoice": ["Billing"]})
        assert table.expand(["billing"]) == frozenset({"billing", "invoice"})
        assert len(table) == 1
