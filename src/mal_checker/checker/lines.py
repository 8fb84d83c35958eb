"""
Per-Line Checks
===============

Each check takes one normalized, non-blank MAL line and returns at most
one Diagnostic (None when the line is fine for that check). The checks
are independent pure functions and can run in any order, or in parallel
across lines.

| Check                 | Categories                                          |
|-----------------------|-----------------------------------------------------|
| check_label           | ill-formed-label                                    |
| check_opcode          | invalid-opcode (with spelling suggestion)           |
| check_operand_form    | ill-formed-operand                                  |
| check_operand_arity   | too-many-operands, too-few-operands,                |
|                       | invalid-operand-type                                |

extract_identifiers() collects the identifier operands of a line for the
report's identifier inventory.

Location keywords
-----------------
Every check accepts optional ``line_number`` and ``filename`` keywords.
When a line number is given, diagnostics carry a SourceLocation pointing
at the offending token; otherwise their location is None.
"""

from typing import Iterator, Optional

from mal_checker.diagnostics import Category, Diagnostic
from mal_checker.errors import SourceLocation
from mal_checker.checker.normalizer import LABEL_TERMINATOR, split_line
from mal_checker.checker.operands import MAX_IDENTIFIER_LENGTH, is_identifier, is_well_formed
from mal_checker.checker.opcodes import BRANCH_INSTRUCTIONS, MNEMONICS, get_descriptor
from mal_checker.checker.spelling import DEFAULT_ALPHABET, suggest


def _location(line_number: Optional[int], filename: str, column: int = 1) -> Optional[SourceLocation]:
    if line_number is None:
        return None
    return SourceLocation(filename, line_number, column)


# =============================================================================
# Label
# =============================================================================

def check_label(
    line: str,
    *,
    line_number: Optional[int] = None,
    filename: str = "<input>",
) -> Optional[Diagnostic]:
    """
    Check the optional leading 'name:' of a line.

    The label candidate is everything before the first ':'. It must be the
    first token (no whitespace), at most 5 characters, and letters only.
    An empty candidate breaks none of these rules. Only the first failing
    rule is reported.
    """
    colon = line.find(LABEL_TERMINATOR)
    if colon < 0:
        return None

    candidate = line[:colon]
    location = _location(line_number, filename)

    if any(ch.isspace() for ch in candidate):
        return Diagnostic(
            Category.ILL_FORMED_LABEL,
            "ill-formed label - label cannot contain spaces and must be "
            "the first token on the line",
            location,
            subject=candidate,
        )
    if len(candidate) > MAX_IDENTIFIER_LENGTH:
        return Diagnostic(
            Category.ILL_FORMED_LABEL,
            f"ill-formed label '{candidate}' - label is more than "
            f"{MAX_IDENTIFIER_LENGTH} characters long",
            location,
            subject=candidate,
        )
    if any(not ch.isalpha() for ch in candidate):
        return Diagnostic(
            Category.ILL_FORMED_LABEL,
            f"ill-formed label '{candidate}' - label must be composed of letters only",
            location,
            subject=candidate,
        )
    return None


# =============================================================================
# Opcode
# =============================================================================

def check_opcode(
    line: str,
    *,
    alphabet: str = DEFAULT_ALPHABET,
    line_number: Optional[int] = None,
    filename: str = "<input>",
) -> Optional[Diagnostic]:
    """
    Check that the line's opcode is one of the known MAL opcodes.

    Unknown opcodes get a spelling suggestion when a known opcode is one
    edit away (see spelling.py).
    """
    opcode = split_line(line).opcode
    if opcode is None or opcode.text in MNEMONICS:
        return None

    suggestion = suggest(opcode.text, MNEMONICS, alphabet)
    message = f"invalid opcode '{opcode.text}'"
    if suggestion is not None:
        message += f" - did you mean '{suggestion}'?"

    return Diagnostic(
        Category.INVALID_OPCODE,
        message,
        _location(line_number, filename, opcode.column),
        subject=opcode.text,
        suggestion=suggestion,
    )


# =============================================================================
# Operands
# =============================================================================

def check_operand_form(
    line: str,
    *,
    line_number: Optional[int] = None,
    filename: str = "<input>",
) -> Optional[Diagnostic]:
    """
    Check that every operand is a register, octal number or identifier.

    Reports the first ill-formed operand only; one diagnostic per line.
    """
    parts = split_line(line)
    if parts.opcode is None:
        return None

    for operand in parts.operands:
        if not is_well_formed(operand.text):
            return Diagnostic(
                Category.ILL_FORMED_OPERAND,
                f"ill-formed operand '{operand.text}' - an operand has to be a "
                f"valid register, valid octal number, or valid identifier",
                _location(line_number, filename, operand.column),
                subject=operand.text,
            )
    return None


def check_operand_arity(
    line: str,
    *,
    line_number: Optional[int] = None,
    filename: str = "<input>",
) -> Optional[Diagnostic]:
    """
    Check operand count and operand types against the opcode table.

    A count mismatch is reported as too-many/too-few and types are then not
    examined. With the right count, all failing positions are folded into
    a single invalid-operand-type diagnostic. Unknown opcodes are skipped
    here; check_opcode reports them.
    """
    parts = split_line(line)
    if parts.opcode is None:
        return None

    descriptor = get_descriptor(parts.opcode.text)
    if descriptor is None:
        return None

    count = len(parts.operands)
    noun = "operand" if descriptor.arity == 1 else "operands"

    if count > descriptor.arity:
        extra = parts.operands[descriptor.arity]
        return Diagnostic(
            Category.TOO_MANY_OPERANDS,
            f"too many operands. {descriptor.mnemonic} requires {descriptor.arity} {noun}",
            _location(line_number, filename, extra.column),
            subject=descriptor.mnemonic,
        )
    if count < descriptor.arity:
        return Diagnostic(
            Category.TOO_FEW_OPERANDS,
            f"too few operands. {descriptor.mnemonic} requires {descriptor.arity} {noun}",
            _location(line_number, filename, parts.opcode.column),
            subject=descriptor.mnemonic,
        )

    failing = descriptor.failing_positions(parts.operand_texts)
    if not failing:
        return None

    first = parts.operands[failing[0] - 1]
    bad = ", ".join(f"{n} ('{parts.operands[n - 1].text}')" for n in failing)
    rejected = "rejected operand" if len(failing) == 1 else "rejected operands"
    return Diagnostic(
        Category.INVALID_OPERAND_TYPE,
        f"invalid operand type - {descriptor.describe_requirements()}; "
        f"{rejected} {bad}",
        _location(line_number, filename, first.column),
        subject=descriptor.mnemonic,
    )


# =============================================================================
# Identifier Inventory
# =============================================================================

def iter_identifiers(line: str) -> Iterator[str]:
    """
    Yield identifier operands of a line in source order.

    The branch-target operand of a branch instruction is a label, not an
    identifier, and is skipped. The compared values of BEQ/BLT/BGT are
    collected like any other operand.
    """
    parts = split_line(line)
    if parts.opcode is None:
        return
    target_index = None
    if parts.opcode.text in BRANCH_INSTRUCTIONS:
        target_index = get_descriptor(parts.opcode.text).branch_target_index
    for index, operand in enumerate(parts.operands):
        if index != target_index and is_identifier(operand.text):
            yield operand.text


def extract_identifiers(line: str) -> set[str]:
    """Return the set of identifier operands used on a line."""
    return set(iter_identifiers(line))
