"""
MAL Syntax Checker
==================

The SyntaxChecker ties the per-line checks and the whole-program checks
together into a single run over a MAL source.

Checking Process
----------------
1. **Normalize**: strip comments and whitespace, drop blank lines.

2. **Per-line checks**, in this order for every line:
   - check_label
   - check_opcode
   - check_operand_form
   - check_operand_arity
   and collect the line's identifiers.

3. **Whole-program checks**, once every line has been seen:
   - check_label_wiring
   - check_end_placement

Example Usage
-------------
>>> from mal_checker import SyntaxChecker
>>> result = SyntaxChecker().check_string('''
... start: MOVEI 17, R1
...        BR start
...        END
... ''')
>>> result.is_valid
True
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from mal_checker.config import CheckerConfig
from mal_checker.diagnostics import Diagnostic, DiagnosticTally
from mal_checker.errors import SourceFileError
from mal_checker.checker.lines import (
    check_label,
    check_opcode,
    check_operand_arity,
    check_operand_form,
    iter_identifiers,
)
from mal_checker.checker.program import (
    Program,
    ProgramLine,
    check_end_placement,
    check_label_wiring,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================

@dataclass
class LineResult:
    """Diagnostics for one program line, in check order."""
    line: ProgramLine
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class CheckResult:
    """
    Outcome of checking one MAL program.

    Attributes:
        program: The normalized program that was checked
        line_results: Per-line diagnostics, one entry per program line
        wiring_diagnostics: Unreferenced labels and dangling branch targets
        end_diagnostics: END placement warnings
        identifiers: Identifiers used, de-duplicated, in first-use order
    """
    program: Program
    line_results: list[LineResult] = field(default_factory=list)
    wiring_diagnostics: list[Diagnostic] = field(default_factory=list)
    end_diagnostics: list[Diagnostic] = field(default_factory=list)
    identifiers: list[str] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return self.program.filename

    @property
    def line_count(self) -> int:
        """Number of non-blank lines of code."""
        return len(self.program)

    @property
    def program_diagnostics(self) -> list[Diagnostic]:
        return self.wiring_diagnostics + self.end_diagnostics

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Every diagnostic, in report order."""
        per_line = [d for result in self.line_results for d in result.diagnostics]
        return per_line + self.program_diagnostics

    @property
    def tally(self) -> DiagnosticTally:
        return DiagnosticTally(self.diagnostics)

    @property
    def is_valid(self) -> bool:
        """True when no error was found; warnings are allowed."""
        return not any(d.is_error for d in self.diagnostics)


# =============================================================================
# Checker
# =============================================================================

class SyntaxChecker:
    """
    Static checker for MAL programs.

    The checker holds only configuration; every call to check_string or
    check_file is independent.

    Attributes:
        config: Active CheckerConfig
    """

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or CheckerConfig()

    def check_line(self, line: ProgramLine, filename: str = "<input>") -> list[Diagnostic]:
        """Run the four per-line checks on one normalized line."""
        where = {"line_number": line.line_number, "filename": filename}
        found = [
            check_label(line.text, **where),
            check_opcode(line.text, alphabet=self.config.alphabet, **where),
            check_operand_form(line.text, **where),
            check_operand_arity(line.text, **where),
        ]
        return [d for d in found if d is not None]

    def check_program(self, program: Program) -> CheckResult:
        """Check an already normalized program."""
        result = CheckResult(program)
        seen: dict[str, None] = {}

        for line in program.lines:
            diagnostics = self.check_line(line, program.filename)
            result.line_results.append(LineResult(line, diagnostics))
            for identifier in iter_identifiers(line.text):
                seen.setdefault(identifier, None)
            if diagnostics:
                logger.debug(
                    f"{program.filename}:{line.line_number}: "
                    f"{len(diagnostics)} problem(s) in {line.text!r}"
                )

        result.identifiers = list(seen)
        result.wiring_diagnostics = check_label_wiring(program)
        result.end_diagnostics = check_end_placement(program, self.config.end_duplicates)

        tally = result.tally
        logger.info(
            f"Checked {program.filename}: {result.line_count} lines, "
            f"{tally.error_count()} error(s), {tally.warning_count()} warning(s)"
        )
        return result

    def check_string(self, source: str, filename: str = "<input>") -> CheckResult:
        """
        Check MAL source code from a string.

        Args:
            source: MAL source text
            filename: Name used in diagnostic locations
        """
        return self.check_program(Program.from_source(source, filename))

    def check_file(self, filepath: str | Path) -> CheckResult:
        """
        Check a MAL source file.

        Raises:
            SourceFileError: If the file cannot be read
        """
        filepath = Path(filepath)
        logger.debug(f"Reading {filepath}")
        try:
            source = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceFileError(str(filepath), str(e)) from e
        return self.check_string(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def check(source: str, filename: str = "<input>", config: Optional[CheckerConfig] = None) -> CheckResult:
    """Check MAL source text with a one-off SyntaxChecker."""
    return SyntaxChecker(config).check_string(source, filename)


def check_file(filepath: str | Path, config: Optional[CheckerConfig] = None) -> CheckResult:
    """Check a MAL file with a one-off SyntaxChecker."""
    return SyntaxChecker(config).check_file(filepath)
