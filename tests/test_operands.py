# =============================================================================
# test_operands.py - Operand Classifier Unit Tests
# =============================================================================
# Tests for register, octal immediate and identifier classification, and
# the derived source/destination and label-operand rules.
# =============================================================================

import pytest
from mal_checker.checker.operands import (
    OperandKind,
    classify,
    is_identifier,
    is_label_operand,
    is_octal_immediate,
    is_register,
    is_source_or_destination,
    is_well_formed,
    strip_label_colon,
)


class TestRegisters:
    """Registers are exactly R0..R7."""

    @pytest.mark.parametrize("token", [f"R{n}" for n in range(8)])
    def test_valid_registers(self, token):
        assert is_register(token)

    @pytest.mark.parametrize("token", ["R8", "R9", "r1", "R", "R10", "R01", " R1"])
    def test_invalid_registers(self, token):
        assert not is_register(token)


class TestOctal:
    """Octal immediates are digit strings without 8 or 9."""

    @pytest.mark.parametrize("token", ["0", "7", "17", "777", "0123"])
    def test_valid(self, token):
        assert is_octal_immediate(token)

    @pytest.mark.parametrize("token", ["19", "8", "5A", "-1", "", "1.0"])
    def test_invalid(self, token):
        assert not is_octal_immediate(token)


class TestIdentifiers:
    """Identifiers are 1-5 letters."""

    @pytest.mark.parametrize("token", ["X", "COUNT", "total", "Ab"])
    def test_valid(self, token):
        assert is_identifier(token)

    @pytest.mark.parametrize("token", ["COUNTS", "R1", "A_B", "", "X1", "DONE:"])
    def test_invalid(self, token):
        assert not is_identifier(token)


class TestDerivedRules:
    """Source/destination and label-operand rules."""

    def test_source_or_destination(self):
        assert is_source_or_destination("R3")
        assert is_source_or_destination("SUM")
        assert not is_source_or_destination("17")
        assert not is_source_or_destination("R8")

    def test_label_operand_allows_trailing_colon(self):
        assert is_label_operand("LOOP")
        assert is_label_operand("LOOP:")
        assert not is_label_operand("LOOP::")
        assert not is_label_operand("R1")

    def test_strip_label_colon(self):
        assert strip_label_colon("DONE:") == "DONE"
        assert strip_label_colon("DONE") == "DONE"


class TestClassify:
    """classify() applies every predicate independently."""

    def test_register(self):
        assert classify("R1") == {OperandKind.REGISTER}

    def test_octal(self):
        assert classify("17") == {OperandKind.OCTAL_IMMEDIATE}

    def test_identifier(self):
        assert classify("R") == {OperandKind.IDENTIFIER}

    def test_ill_formed(self):
        assert classify("R8") == frozenset()
        assert not is_well_formed("R8")
        assert not is_well_formed("19")
