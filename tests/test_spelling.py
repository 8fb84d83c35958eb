# =============================================================================
# test_spelling.py - Opcode Spelling Suggester Tests
# =============================================================================
# Tests for the edit-distance-1 neighbourhood generator and the suggestion
# lookup used for invalid opcodes.
#
# Test coverage includes:
#   - Each edit operation (deletion, insertion, substitution, transposition)
#   - Generation order, which decides ties
#   - Custom alphabets
#   - Every single-edit corruption of every opcode with a unique repair
# =============================================================================

import string

import pytest
from mal_checker.checker import spelling
from mal_checker.checker.opcodes import MNEMONICS
from mal_checker.checker.spelling import (
    DEFAULT_ALPHABET,
    deletions,
    edit_distance_one,
    insertions,
    substitutions,
    suggest,
    transpositions,
)


# =============================================================================
# Edit Operations
# =============================================================================

class TestEditOperations:
    """Each operation produces the expected candidates in order."""

    def test_deletions(self):
        assert list(deletions("ABC")) == ["BC", "AC", "AB"]

    def test_insertions(self):
        result = list(insertions("AB", "XY"))
        assert result == ["XAB", "YAB", "AXB", "AYB", "ABX", "ABY"]

    def test_insertions_default_alphabet_count(self):
        assert len(list(insertions("ADD"))) == 4 * 26

    def test_substitutions_skip_noop(self):
        result = list(substitutions("AB", "AB"))
        assert result == ["BB", "AA"]

    def test_substitutions_default_alphabet_count(self):
        assert len(list(substitutions("ADD"))) == 3 * 25

    def test_transpositions(self):
        assert list(transpositions("ABC")) == ["BAC", "ACB"]
        assert list(transpositions("A")) == []

    def test_empty_word(self):
        assert list(edit_distance_one("", "AB")) == ["A", "B"]

    def test_generation_order(self):
        """Deletions, then insertions, then substitutions, then transpositions."""
        result = list(edit_distance_one("AB", "C"))
        assert result == ["B", "A", "CAB", "ACB", "ABC", "CB", "AC", "BA"]

    def test_default_alphabet(self):
        assert DEFAULT_ALPHABET == string.ascii_uppercase


# =============================================================================
# Suggestions
# =============================================================================

class TestSuggest:
    """suggest() returns the first known neighbour."""

    @pytest.mark.parametrize("typo,expected", [
        ("MVEI", "MOVEI"),   # deletion from MOVEI
        ("ADDX", "ADD"),     # insertion into ADD
        ("SUV", "SUB"),      # substitution
        ("MLU", "MUL"),      # transposition
        ("BRR", "BR"),
        ("ENDD", "END"),
    ])
    def test_examples(self, typo, expected):
        assert suggest(typo, MNEMONICS) == expected

    def test_no_suggestion(self):
        assert suggest("JUMP", MNEMONICS) is None
        assert suggest("XYZZY", MNEMONICS) is None

    def test_lowercase_has_no_uppercase_neighbour(self):
        """Lowercase opcodes are more than one edit away from any opcode."""
        assert suggest("add", MNEMONICS) is None

    def test_first_match_wins(self):
        """MOVEX: substitution X->I reaches MOVEI after deletion reaches MOVE."""
        assert suggest("MOVEX", MNEMONICS) == "MOVE"

    def test_custom_alphabet(self):
        """Without 'O' in the alphabet, MVEI cannot be repaired by insertion."""
        assert suggest("MVEI", MNEMONICS, alphabet="ABC") is None

    def test_long_token_skips_neighbourhood(self, monkeypatch):
        """A token too long to be one edit from any opcode is not expanded."""
        def fail(*args, **kwargs):
            raise AssertionError("neighbourhood generated")

        monkeypatch.setattr(spelling, "edit_distance_one", fail)
        assert suggest("X" * 8000, MNEMONICS) is None
        assert suggest("MOVEIXY", MNEMONICS) is None

    def test_length_boundary_still_suggests(self):
        """One character longer than the longest opcode is still in reach."""
        assert suggest("MOVEIS", MNEMONICS) == "MOVEI"


def _corruptions(word: str):
    """Every single-edit corruption of word over A-Z."""
    return set(edit_distance_one(word, string.ascii_uppercase))


class TestEveryCorruption:
    """Single-edit typos with a unique nearby opcode are repaired."""

    @pytest.mark.parametrize("opcode", sorted(MNEMONICS))
    def test_unique_repairs(self, opcode):
        checked = 0
        for typo in _corruptions(opcode):
            if typo in MNEMONICS:
                continue
            repairs = {c for c in edit_distance_one(typo) if c in MNEMONICS}
            if repairs == {opcode}:
                assert suggest(typo, MNEMONICS) == opcode, typo
                checked += 1
        assert checked > 0
