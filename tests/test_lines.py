# =============================================================================
# test_lines.py - Per-Line Check Tests
# =============================================================================
# Tests for check_label, check_opcode, check_operand_form,
# check_operand_arity and extract_identifiers.
#
# Key Behavior:
# -------------
# - Each check returns None or exactly one Diagnostic
# - Wrong operand counts are never reported as wrong operand types
# - Unknown opcodes are left to check_opcode (no arity diagnostic)
# - Locations are attached only when a line number is supplied
# =============================================================================

import pytest
from mal_checker.diagnostics import Category, Severity
from mal_checker.errors import SourceLocation
from mal_checker.checker.lines import (
    check_label,
    check_opcode,
    check_operand_arity,
    check_operand_form,
    extract_identifiers,
    iter_identifiers,
)
from mal_checker.checker.opcodes import OPCODE_TABLE


# =============================================================================
# Labels
# =============================================================================

class TestCheckLabel:
    """Label formation rules."""

    def test_no_colon(self):
        assert check_label("ADD R1, R2, R3") is None

    def test_valid_label(self):
        assert check_label("LOOP: INC R1") is None
        assert check_label("A: END") is None
        assert check_label("DONE:") is None

    def test_space_before_colon(self):
        diag = check_label("BR DONE:")
        assert diag.category is Category.ILL_FORMED_LABEL
        assert "spaces" in diag.message
        assert "first token" in diag.message

    def test_too_long(self):
        diag = check_label("LONGLABEL: DEC R3")
        assert diag.category is Category.ILL_FORMED_LABEL
        assert "more than 5 characters" in diag.message
        assert diag.subject == "LONGLABEL"

    def test_non_alphabetic(self):
        diag = check_label("LP1: INC R1")
        assert diag.category is Category.ILL_FORMED_LABEL
        assert "letters only" in diag.message

    def test_empty_label_is_accepted(self):
        """An empty name has no non-letter characters and is short enough."""
        assert check_label(": INC R1") is None

    def test_spaces_take_precedence_over_length(self):
        diag = check_label("VERY LONG: INC R1")
        assert "spaces" in diag.message

    def test_severity_is_error(self):
        assert check_label("L1: END").severity is Severity.ERROR

    def test_location(self):
        diag = check_label("L1: END", line_number=4, filename="prog.mal")
        assert diag.location == SourceLocation("prog.mal", 4, 1)
        assert check_label("L1: END").location is None


# =============================================================================
# Opcodes
# =============================================================================

class TestCheckOpcode:
    """Opcode recognition and spelling suggestions."""

    @pytest.mark.parametrize("mnemonic", sorted(OPCODE_TABLE))
    def test_known_opcodes(self, mnemonic):
        assert check_opcode(f"{mnemonic} R1") is None

    def test_label_only_line(self):
        assert check_opcode("LOOP:") is None

    def test_opcode_after_label(self):
        assert check_opcode("LOOP: BR LOOP") is None

    def test_invalid_with_suggestion(self):
        diag = check_opcode("MVEI 17, R1")
        assert diag.category is Category.INVALID_OPCODE
        assert diag.suggestion == "MOVEI"
        assert diag.subject == "MVEI"
        assert "did you mean 'MOVEI'" in diag.message

    def test_insertion_typo(self):
        assert check_opcode("ADDX R1, R2, R3").suggestion == "ADD"

    def test_invalid_without_suggestion(self):
        diag = check_opcode("JUMP LOOP")
        assert diag.category is Category.INVALID_OPCODE
        assert diag.suggestion is None
        assert "did you mean" not in diag.message

    def test_lowercase_is_invalid(self):
        assert check_opcode("add R1, R2, R3") is not None

    def test_location_points_at_opcode(self):
        diag = check_opcode("LOOP: ADX R1", line_number=2)
        assert diag.location.line == 2
        assert diag.location.column == 7

    def test_custom_alphabet(self):
        diag = check_opcode("MVEI 17, R1", alphabet="XYZ")
        assert diag.suggestion is None


# =============================================================================
# Operand Form
# =============================================================================

class TestCheckOperandForm:
    """Each operand must be a register, octal number or identifier."""

    def test_all_well_formed(self):
        assert check_operand_form("MOVEI 17, R1") is None
        assert check_operand_form("ADD COUNT, R2, TOTAL") is None

    def test_no_operands(self):
        assert check_operand_form("END") is None
        assert check_operand_form("LOOP:") is None

    @pytest.mark.parametrize("operand", ["R8", "19", "5A", "COUNTS", "X_1"])
    def test_ill_formed(self, operand):
        diag = check_operand_form(f"MOVE {operand}, R1")
        assert diag.category is Category.ILL_FORMED_OPERAND
        assert diag.subject == operand

    def test_reports_first_bad_operand_only(self):
        diag = check_operand_form("ADD R8, R9, R1", line_number=1)
        assert diag.subject == "R8"
        assert diag.location.column == 5

    def test_checked_for_unknown_opcodes(self):
        assert check_operand_form("FOO R8") is not None


# =============================================================================
# Operand Arity and Types
# =============================================================================

VALID_OPERANDS = {
    "MOVE": ["R1", "R2"],
    "MOVEI": ["17", "R2"],
    "ADD": ["R1", "R2", "R3"],
    "SUB": ["A", "B", "C"],
    "MUL": ["R1", "X", "R3"],
    "DIV": ["R1", "R2", "Y"],
    "INC": ["R1"],
    "DEC": ["COUNT"],
    "BEQ": ["R1", "R2", "LOOP"],
    "BLT": ["R1", "ZERO", "LOOP"],
    "BGT": ["R1", "R2", "DONE:"],
    "BR": ["LOOP"],
    "END": [],
}


class TestCheckOperandArity:
    """Operand counts and per-position types."""

    @pytest.mark.parametrize("mnemonic,operands", sorted(VALID_OPERANDS.items()))
    def test_valid(self, mnemonic, operands):
        assert check_operand_arity(f"{mnemonic} {', '.join(operands)}") is None

    @pytest.mark.parametrize("mnemonic", sorted(VALID_OPERANDS))
    def test_too_many(self, mnemonic):
        """One extra operand is always too-many, never a type error."""
        operands = VALID_OPERANDS[mnemonic] + ["R8"]
        diag = check_operand_arity(f"{mnemonic} {', '.join(operands)}")
        assert diag.category is Category.TOO_MANY_OPERANDS
        arity = OPCODE_TABLE[mnemonic].arity
        assert f"requires {arity} operand" in diag.message

    @pytest.mark.parametrize("mnemonic", sorted(m for m in VALID_OPERANDS if VALID_OPERANDS[m]))
    def test_too_few(self, mnemonic):
        """One missing operand is always too-few, even if the rest are bad."""
        operands = ["99"] * (len(VALID_OPERANDS[mnemonic]) - 1)
        diag = check_operand_arity(f"{mnemonic} {', '.join(operands)}")
        assert diag.category is Category.TOO_FEW_OPERANDS

    def test_singular_noun(self):
        diag = check_operand_arity("INC")
        assert diag.message == "too few operands. INC requires 1 operand"

    def test_end_with_operand(self):
        diag = check_operand_arity("END R1")
        assert diag.category is Category.TOO_MANY_OPERANDS
        assert "END requires 0 operands" in diag.message

    def test_wrong_type(self):
        diag = check_operand_arity("MOVEI R1, R2")
        assert diag.category is Category.INVALID_OPERAND_TYPE
        assert "operand 1 to be a number in octal form" in diag.message

    def test_single_diagnostic_for_several_bad_positions(self):
        diag = check_operand_arity("ADD 1, R2, 3")
        assert diag.category is Category.INVALID_OPERAND_TYPE
        assert "rejected operands 1 ('1'), 3 ('3')" in diag.message

    def test_branch_target_must_be_label(self):
        diag = check_operand_arity("BEQ R1, R2, R3")
        assert diag.category is Category.INVALID_OPERAND_TYPE
        assert "operand 3 to be a valid label" in diag.message

    def test_mul_with_bad_register(self):
        """MUL FORTY, R2, R8 cites operand 3 as a register or identifier slot."""
        diag = check_operand_arity("MUL FORTY, R2, R8", line_number=3)
        assert diag.category is Category.INVALID_OPERAND_TYPE
        assert "operands 1, 2 and 3 to each be a valid source or destination" in diag.message
        assert "rejected operand 3 ('R8')" in diag.message
        assert diag.location.column == 16

    def test_unknown_opcode_is_skipped(self):
        assert check_operand_arity("MVEI 17") is None

    def test_label_only_line(self):
        assert check_operand_arity("LOOP:") is None


# =============================================================================
# Identifiers
# =============================================================================

class TestExtractIdentifiers:
    """Identifier inventory."""

    def test_identifiers(self):
        assert extract_identifiers("ADD COUNT, R1, TOTAL") == {"COUNT", "TOTAL"}

    def test_registers_and_numbers_excluded(self):
        assert extract_identifiers("MOVEI 17, R1") == set()

    def test_branch_target_excluded(self):
        assert extract_identifiers("BR LOOP") == set()

    @pytest.mark.parametrize("opcode", ["BEQ", "BLT", "BGT"])
    def test_compared_values_kept(self, opcode):
        assert extract_identifiers(f"{opcode} X, Y, LOOP") == {"X", "Y"}

    def test_compared_value_named_like_target(self):
        assert list(iter_identifiers("BEQ LOOP, R1, LOOP")) == ["LOOP"]

    def test_label_excluded(self):
        assert extract_identifiers("LOOP: INC X") == {"X"}

    def test_unknown_opcode_still_collected(self):
        assert extract_identifiers("MVE A, B") == {"A", "B"}

    def test_order_preserved(self):
        assert list(iter_identifiers("ADD B, A, B")) == ["B", "A", "B"]

    def test_label_only_line(self):
        assert extract_identifiers("LOOP:") == set()
