"""
MAL Instruction Set Definition
==============================

This module defines the fixed MAL instruction set as a declarative table:
each opcode maps to an ordered tuple of per-position operand constraints.
The arity of an opcode is the length of that tuple.

Instruction Set
---------------
| Opcode            | Operands                                   |
|-------------------|--------------------------------------------|
| MOVE              | src/dest, src/dest                         |
| MOVEI             | octal immediate, src/dest                  |
| ADD, SUB, MUL, DIV| src/dest, src/dest, src/dest               |
| INC, DEC          | src/dest                                   |
| BEQ, BLT, BGT     | src/dest, src/dest, label                  |
| BR                | label                                      |
| END               | (none)                                     |

"src/dest" means a register (R0-R7) or an identifier. Branch opcodes have
exactly one label position, which is their branch target.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from mal_checker.checker.operands import (
    is_label_operand,
    is_octal_immediate,
    is_source_or_destination,
)


# =============================================================================
# Operand Constraints
# =============================================================================

class OperandConstraint(Enum):
    """
    What an operand position accepts.

    Each value is a (description, predicate) pair; the description is used
    in invalid-operand-type messages.
    """
    SOURCE_DESTINATION = ("a valid source or destination", is_source_or_destination)
    OCTAL_IMMEDIATE = ("a number in octal form", is_octal_immediate)
    LABEL = ("a valid label", is_label_operand)

    @property
    def description(self) -> str:
        return self.value[0]

    def accepts(self, token: str) -> bool:
        predicate: Callable[[str], bool] = self.value[1]
        return predicate(token)


SRC_DEST = OperandConstraint.SOURCE_DESTINATION
OCTAL = OperandConstraint.OCTAL_IMMEDIATE
LABEL = OperandConstraint.LABEL


# =============================================================================
# Opcode Descriptor
# =============================================================================

@dataclass(frozen=True)
class OpcodeDescriptor:
    """
    Operand rules for one opcode.

    This dataclass is frozen so the opcode table cannot be modified at
    runtime.

    Attributes:
        mnemonic: The opcode name, e.g. "MOVEI"
        operands: Per-position constraints, in operand order
    """
    mnemonic: str
    operands: tuple[OperandConstraint, ...]

    @property
    def arity(self) -> int:
        return len(self.operands)

    @property
    def branch_target_index(self) -> Optional[int]:
        """0-based position of the label operand, or None."""
        try:
            return self.operands.index(LABEL)
        except ValueError:
            return None

    def failing_positions(self, operands: Sequence[str]) -> list[int]:
        """
        Return the 1-based positions whose operand breaks its constraint.

        Only meaningful when len(operands) == arity.
        """
        return [
            position
            for position, (constraint, operand) in enumerate(zip(self.operands, operands), 1)
            if not constraint.accepts(operand)
        ]

    def describe_requirements(self) -> str:
        """
        Describe every operand position in one sentence.

        Positions sharing a constraint are grouped in order of first
        appearance:
            "BEQ requires operands 1 and 2 to each be a valid source or
             destination and operand 3 to be a valid label"
        """
        if not self.operands:
            return f"{self.mnemonic} takes no operands"

        groups: dict[OperandConstraint, list[int]] = {}
        for position, constraint in enumerate(self.operands, 1):
            groups.setdefault(constraint, []).append(position)

        clauses = []
        for constraint, positions in groups.items():
            if len(positions) == 1:
                clauses.append(f"operand {positions[0]} to be {constraint.description}")
            else:
                numbers = _join_numbers(positions)
                clauses.append(f"operands {numbers} to each be {constraint.description}")

        return f"{self.mnemonic} requires " + " and ".join(clauses)

    def __repr__(self) -> str:
        kinds = ", ".join(c.name for c in self.operands)
        return f"OpcodeDescriptor({self.mnemonic}, arity={self.arity}, [{kinds}])"


def _join_numbers(numbers: list[int]) -> str:
    """Join [1, 2, 3] as '1, 2 and 3'."""
    text = [str(n) for n in numbers]
    return ", ".join(text[:-1]) + " and " + text[-1]


# =============================================================================
# Opcode Table
# =============================================================================

def _descriptor(mnemonic: str, *operands: OperandConstraint) -> tuple[str, OpcodeDescriptor]:
    return mnemonic, OpcodeDescriptor(mnemonic, tuple(operands))


OPCODE_TABLE: dict[str, OpcodeDescriptor] = dict([
    # Data movement
    _descriptor("MOVE", SRC_DEST, SRC_DEST),
    _descriptor("MOVEI", OCTAL, SRC_DEST),

    # Arithmetic
    _descriptor("ADD", SRC_DEST, SRC_DEST, SRC_DEST),
    _descriptor("SUB", SRC_DEST, SRC_DEST, SRC_DEST),
    _descriptor("MUL", SRC_DEST, SRC_DEST, SRC_DEST),
    _descriptor("DIV", SRC_DEST, SRC_DEST, SRC_DEST),
    _descriptor("INC", SRC_DEST),
    _descriptor("DEC", SRC_DEST),

    # Branches
    _descriptor("BEQ", SRC_DEST, SRC_DEST, LABEL),
    _descriptor("BLT", SRC_DEST, SRC_DEST, LABEL),
    _descriptor("BGT", SRC_DEST, SRC_DEST, LABEL),
    _descriptor("BR", LABEL),

    # Pseudo-opcode
    _descriptor("END"),
])

MNEMONICS: frozenset[str] = frozenset(OPCODE_TABLE)

BRANCH_INSTRUCTIONS: frozenset[str] = frozenset(
    name for name, desc in OPCODE_TABLE.items() if desc.branch_target_index is not None
)

END_MNEMONIC = "END"


def get_descriptor(mnemonic: str) -> Optional[OpcodeDescriptor]:
    """Look up an opcode; matching is case-sensitive."""
    return OPCODE_TABLE.get(mnemonic)


def is_valid_opcode(mnemonic: str) -> bool:
    return mnemonic in OPCODE_TABLE
