"""
MAL Checker Diagnostics
=======================

Diagnostics are the values the checking core produces: one immutable
record per problem found in a MAL program. Every category has a fixed
severity, so a diagnostic's severity is always derived from its category.

Categories and Severities
-------------------------
| Category                | Severity |
|-------------------------|----------|
| ill-formed-label        | error    |
| invalid-opcode          | error    |
| ill-formed-operand      | error    |
| invalid-operand-type    | error    |
| too-many-operands       | error    |
| too-few-operands        | error    |
| unreferenced-label      | warning  |
| dangling-branch-target  | error    |
| end-missing             | warning  |
| end-not-last            | warning  |
| end-duplicated          | warning  |

Counting diagnostics per category is the job of DiagnosticTally, which
the reporting layer owns. The core keeps no counters of its own.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from mal_checker.errors import SourceLocation


# =============================================================================
# Severity and Category
# =============================================================================

class Severity(Enum):
    """Diagnostic severity. Only errors make a program invalid."""
    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


class Category(Enum):
    """
    Diagnostic categories.

    Each member's value is a (name, severity, description) triple. The
    description is the phrase used in report summaries, e.g.
    "3 ill formed label error(s)".
    """
    ILL_FORMED_LABEL = ("ill-formed-label", Severity.ERROR, "ill formed label")
    INVALID_OPCODE = ("invalid-opcode", Severity.ERROR, "invalid opcode")
    ILL_FORMED_OPERAND = ("ill-formed-operand", Severity.ERROR, "ill formed operand")
    INVALID_OPERAND_TYPE = ("invalid-operand-type", Severity.ERROR, "invalid operand type")
    TOO_MANY_OPERANDS = ("too-many-operands", Severity.ERROR, "too many operands")
    TOO_FEW_OPERANDS = ("too-few-operands", Severity.ERROR, "too few operands")
    UNREFERENCED_LABEL = ("unreferenced-label", Severity.WARNING, "unreferenced label")
    DANGLING_BRANCH_TARGET = ("dangling-branch-target", Severity.ERROR, "dangling branch target")
    END_MISSING = ("end-missing", Severity.WARNING, "missing END")
    END_NOT_LAST = ("end-not-last", Severity.WARNING, "END not last")
    END_DUPLICATED = ("end-duplicated", Severity.WARNING, "duplicated END")

    @property
    def label(self) -> str:
        """Kebab-case category name, e.g. 'invalid-opcode'."""
        return self.value[0]

    @property
    def severity(self) -> Severity:
        return self.value[1]

    @property
    def description(self) -> str:
        return self.value[2]

    def __str__(self) -> str:
        return self.label


# =============================================================================
# Diagnostic Record
# =============================================================================

@dataclass(frozen=True)
class Diagnostic:
    """
    A single problem found in a MAL program.

    Attributes:
        category: What kind of problem this is (determines severity)
        message: Human-readable description
        location: Where in the source the problem is (None for
                  program-wide findings such as a missing END)
        subject: The token the diagnostic is about (label, opcode,
                 operand or branch target), if any
        suggestion: Spelling suggestion for invalid opcodes
    """
    category: Category
    message: str
    location: Optional[SourceLocation] = None
    subject: Optional[str] = None
    suggestion: Optional[str] = None

    @property
    def severity(self) -> Severity:
        return self.category.severity

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def line(self) -> Optional[int]:
        """Source line number, or None for program-wide diagnostics."""
        return self.location.line if self.location else None

    def __str__(self) -> str:
        """
        Format as 'filename:line:column: severity: message'.

        Example:
            count.mal:4:1: error: invalid opcode 'MVEI' - did you mean 'MOVEI'?
        """
        if self.location:
            return f"{self.location}: {self.severity}: {self.message}"
        return f"{self.severity}: {self.message}"


# =============================================================================
# Tally
# =============================================================================

class DiagnosticTally:
    """
    Counts diagnostics by category for the final report.

    Example:
        tally = DiagnosticTally()
        tally.extend(result.diagnostics)
        if tally.has_errors():
            print(f"{tally.error_count()} errors")
    """

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()):
        self._counts: dict[Category, int] = {category: 0 for category in Category}
        self.extend(diagnostics)

    def add(self, diagnostic: Diagnostic) -> None:
        """Count one diagnostic."""
        self._counts[diagnostic.category] += 1

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Count every diagnostic in an iterable."""
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def count(self, category: Category) -> int:
        """Return the number of diagnostics seen for one category."""
        return self._counts[category]

    def error_count(self) -> int:
        return sum(n for c, n in self._counts.items() if c.severity is Severity.ERROR)

    def warning_count(self) -> int:
        return sum(n for c, n in self._counts.items() if c.severity is Severity.WARNING)

    def has_errors(self) -> bool:
        return self.error_count() > 0

    def categories(self, severity: Optional[Severity] = None) -> list[tuple[Category, int]]:
        """
        Return (category, count) pairs with a non-zero count.

        Pairs come in Category declaration order, optionally filtered to
        one severity.
        """
        return [
            (category, count)
            for category, count in self._counts.items()
            if count and (severity is None or category.severity is severity)
        ]

    def __len__(self) -> int:
        return sum(self._counts.values())
