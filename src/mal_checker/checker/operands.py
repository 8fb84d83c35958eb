"""
MAL Operand Classifier
======================

Classifies operand tokens. Each kind is an independent predicate: a
token is tested against every kind, not assigned a single tag.

| Kind             | Rule                                       | Examples      |
|------------------|--------------------------------------------|---------------|
| Register         | exactly R0..R7 (case-sensitive)            | R0, R7        |
| Octal immediate  | digits only, none of them 8 or 9           | 0, 17, 777    |
| Identifier       | letters only, at most 5 characters         | X, COUNT      |

Derived rules used by the opcode table:
- source/destination: register or identifier
- label operand: identifier, with an optional trailing ':'
"""

from enum import Enum


REGISTERS = frozenset(f"R{n}" for n in range(8))
OCTAL_DIGITS = frozenset("01234567")
MAX_IDENTIFIER_LENGTH = 5


class OperandKind(Enum):
    """The three operand kinds MAL recognizes."""
    REGISTER = "register"
    OCTAL_IMMEDIATE = "octal immediate"
    IDENTIFIER = "identifier"

    def __str__(self) -> str:
        return self.value


def is_register(token: str) -> bool:
    return token in REGISTERS


def is_octal_immediate(token: str) -> bool:
    return bool(token) and all(ch in OCTAL_DIGITS for ch in token)


def is_identifier(token: str) -> bool:
    return token.isalpha() and len(token) <= MAX_IDENTIFIER_LENGTH


def is_source_or_destination(token: str) -> bool:
    return is_register(token) or is_identifier(token)


def strip_label_colon(token: str) -> str:
    """Drop one trailing ':' from a label operand ("DONE:" -> "DONE")."""
    return token[:-1] if token.endswith(":") else token


def is_label_operand(token: str) -> bool:
    return is_identifier(strip_label_colon(token))


def classify(token: str) -> frozenset[OperandKind]:
    """
    Return every kind the token satisfies.

    An empty result means the operand is ill-formed.
    """
    kinds = set()
    if is_register(token):
        kinds.add(OperandKind.REGISTER)
    if is_octal_immediate(token):
        kinds.add(OperandKind.OCTAL_IMMEDIATE)
    if is_identifier(token):
        kinds.add(OperandKind.IDENTIFIER)
    return frozenset(kinds)


def is_well_formed(token: str) -> bool:
    return bool(classify(token))
