"""
MAL Checking Engine
===================

The checking core: pure functions over MAL source lines and programs.

Main Components
---------------
- **normalizer**: strips comments/whitespace and splits lines into
  label, opcode and operands
- **operands**: classifies operands as register, octal immediate or
  identifier
- **opcodes**: the fixed opcode table (operand count and per-position
  constraints)
- **spelling**: edit-distance-1 suggestions for unknown opcodes
- **lines**: the per-line checks
- **program**: the whole-program label wiring and END placement checks

The SyntaxChecker orchestrator lives in mal_checker.checker.checker and
is re-exported from the top-level mal_checker package.
"""

from mal_checker.checker.normalizer import LineParts, Token, normalize, split_line, tokenize
from mal_checker.checker.operands import (
    OperandKind,
    classify,
    is_identifier,
    is_label_operand,
    is_octal_immediate,
    is_register,
    is_source_or_destination,
)
from mal_checker.checker.opcodes import (
    BRANCH_INSTRUCTIONS,
    MNEMONICS,
    OPCODE_TABLE,
    OpcodeDescriptor,
    OperandConstraint,
)
from mal_checker.checker.spelling import DEFAULT_ALPHABET, edit_distance_one, suggest
from mal_checker.checker.lines import (
    check_label,
    check_opcode,
    check_operand_arity,
    check_operand_form,
    extract_identifiers,
)
from mal_checker.checker.program import (
    EndDuplicatePolicy,
    LabelTable,
    Program,
    ProgramLine,
    ProgramToken,
    TokenKind,
    check_end_placement,
    check_label_wiring,
)

__all__ = [
    # Normalizer
    "normalize",
    "split_line",
    "tokenize",
    "Token",
    "LineParts",
    # Operands
    "OperandKind",
    "classify",
    "is_register",
    "is_octal_immediate",
    "is_identifier",
    "is_source_or_destination",
    "is_label_operand",
    # Opcodes
    "OPCODE_TABLE",
    "MNEMONICS",
    "BRANCH_INSTRUCTIONS",
    "OpcodeDescriptor",
    "OperandConstraint",
    # Spelling
    "DEFAULT_ALPHABET",
    "edit_distance_one",
    "suggest",
    # Per-line checks
    "check_label",
    "check_opcode",
    "check_operand_form",
    "check_operand_arity",
    "extract_identifiers",
    # Whole-program checks
    "Program",
    "ProgramLine",
    "ProgramToken",
    "TokenKind",
    "LabelTable",
    "EndDuplicatePolicy",
    "check_label_wiring",
    "check_end_placement",
]
