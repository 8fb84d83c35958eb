"""
Whole-Program Checks
====================

Two checks need to see the complete program before they can decide
anything, so they run once after every line has been normalized:

1. **Label wiring** (check_label_wiring)
   - Every well-formed declared label should be referenced somewhere.
     Unreferenced labels get a warning.
   - Every branch target (sole operand of BR, third operand of BEQ, BLT,
     BGT) that is a well-formed label name must be declared. Dangling
     targets are errors. Malformed targets are left to the per-line
     checks, which already report them.
   Forward references are legal; declaration order does not matter.

2. **END placement** (check_end_placement)
   - END must appear, exactly once, as the final token of the program.

Both checks work on a Program: an ordered sequence of typed token records
(label, opcode, operand), each tagged with its source line.

Example
-------
>>> program = Program.from_source("BR DONE\\nLOOP: INC R1\\nEND\\n")
>>> [str(d) for d in check_label_wiring(program)]
["<input>:2:1: warning: the label 'LOOP' is not being branched to",
 "<input>:1:4: error: the token 'DONE' has no label to branch to"]
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional, Union
import logging

from mal_checker.diagnostics import Category, Diagnostic
from mal_checker.errors import SourceLocation
from mal_checker.checker.normalizer import LineParts, Token, normalize, split_line
from mal_checker.checker.operands import is_identifier, strip_label_colon
from mal_checker.checker.opcodes import BRANCH_INSTRUCTIONS, END_MNEMONIC, get_descriptor

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Program Model
# =============================================================================

class TokenKind(Enum):
    """Role of a token within its line."""
    LABEL = auto()
    OPCODE = auto()
    OPERAND = auto()


@dataclass(frozen=True)
class ProgramToken:
    """
    One token of the program-wide stream.

    Attributes:
        kind: Whether the token is a label declaration, opcode or operand
        text: Token text (label declarations without their ':')
        line_number: Source line the token came from
        column: 1-indexed column within the normalized line
    """
    kind: TokenKind
    text: str
    line_number: int
    column: int


@dataclass(frozen=True)
class ProgramLine:
    """
    A normalized, non-blank source line.

    Attributes:
        line_number: 1-based line number assigned by the caller
        text: The normalized line text
        parts: The line split into label, opcode and operands
    """
    line_number: int
    text: str
    parts: LineParts

    @classmethod
    def from_text(cls, line_number: int, text: str) -> "ProgramLine":
        return cls(line_number, text, split_line(text))

    def tokens(self) -> list[ProgramToken]:
        """Return this line's tokens in source order."""
        result = []
        if self.parts.label is not None:
            result.append(ProgramToken(
                TokenKind.LABEL, self.parts.label.text, self.line_number, self.parts.label.column
            ))
        if self.parts.opcode is not None:
            result.append(ProgramToken(
                TokenKind.OPCODE, self.parts.opcode.text, self.line_number, self.parts.opcode.column
            ))
        for operand in self.parts.operands:
            result.append(ProgramToken(
                TokenKind.OPERAND, operand.text, self.line_number, operand.column
            ))
        return result


@dataclass(frozen=True)
class Program:
    """
    An ordered sequence of normalized program lines.

    Attributes:
        lines: The non-blank lines, in source order
        filename: Source name used in diagnostic locations
    """
    lines: tuple[ProgramLine, ...]
    filename: str = "<input>"

    @classmethod
    def from_source(cls, source: str, filename: str = "<input>") -> "Program":
        """
        Build a program from raw source text.

        Comments and surrounding whitespace are stripped, blank lines are
        dropped, and each kept line keeps its physical line number.
        """
        lines = []
        for number, raw in enumerate(source.splitlines(), 1):
            text = normalize(raw)
            if text:
                lines.append(ProgramLine.from_text(number, text))
        return cls(tuple(lines), filename)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[Union[str, tuple[int, str]]],
        filename: str = "<input>",
    ) -> "Program":
        """
        Build a program from already normalized lines.

        Each item is either a (line_number, text) pair or a bare string; bare
        strings are numbered by position, starting at 1.
        """
        result = []
        for index, item in enumerate(lines, 1):
            number, text = item if isinstance(item, tuple) else (index, item)
            result.append(ProgramLine.from_text(number, text))
        return cls(tuple(result), filename)

    @property
    def tokens(self) -> list[ProgramToken]:
        """The flat, program-wide token stream."""
        return [token for line in self.lines for token in line.tokens()]

    def location(self, token: ProgramToken) -> SourceLocation:
        return SourceLocation(self.filename, token.line_number, token.column)

    def __len__(self) -> int:
        return len(self.lines)


def as_program(source: Union[Program, str], filename: str = "<input>") -> Program:
    """Accept either a Program or raw source text."""
    if isinstance(source, Program):
        return source
    return Program.from_source(source, filename)


# =============================================================================
# Label Table
# =============================================================================

@dataclass
class LabelTable:
    """
    Labels declared in a program, and everything else it mentions.

    Built once per label-wiring pass and then discarded.

    Attributes:
        declared: Declared label name -> first declaring token
        references: The token stream with label declarations removed
    """
    declared: dict[str, ProgramToken] = field(default_factory=dict)
    references: list[ProgramToken] = field(default_factory=list)

    @classmethod
    def build(cls, program: Program) -> "LabelTable":
        table = cls()
        for token in program.tokens:
            if token.kind is TokenKind.LABEL:
                table.declared.setdefault(token.text, token)
            else:
                table.references.append(token)
        return table

    def referenced_names(self) -> set[str]:
        """Names mentioned outside label declarations (label ':' ignored)."""
        return {strip_label_colon(token.text) for token in self.references}


# =============================================================================
# Label Wiring
# =============================================================================

def check_label_wiring(
    program: Union[Program, str],
    filename: str = "<input>",
) -> list[Diagnostic]:
    """
    Report unreferenced labels and dangling branch targets.

    Args:
        program: The program, or its raw source text
        filename: Source name, used only when program is a string

    Returns:
        Unreferenced-label warnings (in declaration order) followed by
        dangling-branch-target errors (in source order)
    """
    program = as_program(program, filename)
    table = LabelTable.build(program)
    diagnostics: list[Diagnostic] = []

    referenced = table.referenced_names()
    for name, token in table.declared.items():
        if is_identifier(name) and name not in referenced:
            diagnostics.append(Diagnostic(
                Category.UNREFERENCED_LABEL,
                f"the label '{name}' is not being branched to",
                program.location(token),
                subject=name,
            ))

    for line in program.lines:
        target = _branch_target(line)
        if target is None:
            continue
        name = strip_label_colon(target.text)
        if is_identifier(name) and name not in table.declared:
            diagnostics.append(Diagnostic(
                Category.DANGLING_BRANCH_TARGET,
                f"the token '{name}' has no label to branch to",
                SourceLocation(program.filename, line.line_number, target.column),
                subject=name,
            ))

    logger.debug(
        f"Label wiring: {len(table.declared)} labels declared, "
        f"{len(diagnostics)} problem(s)"
    )
    return diagnostics


def _branch_target(line: ProgramLine) -> Optional[Token]:
    """Return the branch-target operand token of a branch line, if present."""
    opcode = line.parts.opcode
    if opcode is None or opcode.text not in BRANCH_INSTRUCTIONS:
        return None
    index = get_descriptor(opcode.text).branch_target_index
    if index is None or index >= len(line.parts.operands):
        return None
    return line.parts.operands[index]


# =============================================================================
# END Placement
# =============================================================================

class EndDuplicatePolicy(Enum):
    """
    How repeated END instructions are reported.

    EVERY:  each END after the first gets one end-duplicated warning.
    LEGACY: as EVERY, except that a duplicate END which is the program's
            final token withdraws every END warning reported before it,
            leaving only its own duplicate warning.
    """
    EVERY = "every"
    LEGACY = "legacy"


def check_end_placement(
    program: Union[Program, str],
    policy: EndDuplicatePolicy = EndDuplicatePolicy.EVERY,
    filename: str = "<input>",
) -> list[Diagnostic]:
    """
    Check that END appears exactly once, as the last token.

    Only opcode tokens count as END; an operand spelled END is an
    identifier.

    Args:
        program: The program, or its raw source text
        policy: Duplicate-END reporting policy
        filename: Source name, used only when program is a string

    Returns:
        A single end-missing warning when there is no END; otherwise any
        end-not-last and end-duplicated warnings
    """
    program = as_program(program, filename)
    tokens = program.tokens
    ends = [
        index for index, token in enumerate(tokens)
        if token.kind is TokenKind.OPCODE and token.text == END_MNEMONIC
    ]

    if not ends:
        logger.debug("END placement: no END instruction")
        return [Diagnostic(
            Category.END_MISSING,
            "this program does not contain the END instruction at all",
        )]

    last_index = len(tokens) - 1
    first = ends[0]
    diagnostics: list[Diagnostic] = []

    if first < last_index:
        diagnostics.append(Diagnostic(
            Category.END_NOT_LAST,
            "the END opcode is not the last instruction for this program",
            program.location(tokens[first]),
            subject=END_MNEMONIC,
        ))

    for index in ends[1:]:
        if policy is EndDuplicatePolicy.LEGACY and index == last_index:
            diagnostics.clear()
        diagnostics.append(Diagnostic(
            Category.END_DUPLICATED,
            "the END opcode appears more than once",
            program.location(tokens[index]),
            subject=END_MNEMONIC,
        ))

    logger.debug(f"END placement: {len(ends)} END(s), {len(diagnostics)} warning(s)")
    return diagnostics
