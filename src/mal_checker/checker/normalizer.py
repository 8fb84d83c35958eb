"""
MAL Line Normalizer and Splitter
================================

Turns raw source lines into the pieces the checks work on.

MAL Line Format
---------------
    [label:] OPCODE [operand {, operand}]   ; comment

- A comment starts at the first ';' and runs to the end of the line.
- A label is the text before the first ':' when that text is the first
  token on the line (contains no whitespace).
- The opcode is the first whitespace-delimited token after the label.
- Operands are the remaining text, separated by commas and/or whitespace.

Example
-------
>>> parts = split_line(normalize("LOOP: ADD R1, R2, R3   ; sum"))
>>> parts.label.text, parts.opcode.text, [t.text for t in parts.operands]
('LOOP', 'ADD', ['R1', 'R2', 'R3'])
"""

from dataclasses import dataclass
from typing import Optional
import re


COMMENT_CHAR = ";"
LABEL_TERMINATOR = ":"

_TOKEN_RE = re.compile(r"\S+")
_OPERAND_RE = re.compile(r"[^\s,]+")


def normalize(raw: str) -> str:
    """
    Strip the trailing comment and surrounding whitespace from a raw line.

    The result contains no ';', so normalize(normalize(x)) == normalize(x).
    Blank results are left for the caller to drop.
    """
    return raw.split(COMMENT_CHAR, 1)[0].strip()


@dataclass(frozen=True)
class Token:
    """
    A contiguous piece of a normalized line.

    Attributes:
        text: The token text
        column: 1-indexed column of the first character in the line
    """
    text: str
    column: int

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class LineParts:
    """
    A normalized line split into label, opcode and operands.

    Attributes:
        label: The declared label (text without the ':'), or None
        opcode: The opcode token, or None for a label-only line
        operands: Operand tokens in source order
    """
    label: Optional[Token]
    opcode: Optional[Token]
    operands: tuple[Token, ...]

    @property
    def operand_texts(self) -> list[str]:
        return [op.text for op in self.operands]


def tokenize(line: str) -> list[Token]:
    """Split a line on whitespace, keeping each token's column."""
    return [Token(m.group(), m.start() + 1) for m in _TOKEN_RE.finditer(line)]


def split_line(line: str) -> LineParts:
    """
    Split a normalized line into its label, opcode and operands.

    A ':' that appears after whitespace (e.g. the operand in "BR DONE:")
    does not make a label; it stays part of the instruction text.
    """
    label = None
    start = 0

    colon = line.find(LABEL_TERMINATOR)
    if colon >= 0 and not any(ch.isspace() for ch in line[:colon]):
        label = Token(line[:colon], 1)
        start = colon + 1

    match = _TOKEN_RE.search(line, start)
    if match is None:
        return LineParts(label, None, ())

    opcode = Token(match.group(), match.start() + 1)
    operands = tuple(
        Token(m.group(), m.start() + 1)
        for m in _OPERAND_RE.finditer(line, match.end())
    )
    return LineParts(label, opcode, operands)
