"""
MAL Syntax Checker
==================

A static checker for MAL, a small register-based teaching assembly
language. It reads MAL source and reports syntax and wiring errors
without executing the program.

What Is Checked
---------------
Per line:
- **ill-formed label**: the leading 'name:' is not 1-5 letters
- **invalid opcode**: unknown opcode, with a spelling suggestion
- **ill-formed operand**: not a register, octal number or identifier
- **too many / too few operands**: wrong operand count for the opcode
- **invalid operand type**: right count, wrong kind of operand

Whole program:
- **unreferenced label** (warning) and **dangling branch target** (error)
- **END placement** (warnings): missing, not last, or duplicated

Quick Start
-----------
Check a string:
    >>> from mal_checker import check
    >>> result = check("MVEI 17, R1\\nEND\\n")
    >>> print(result.diagnostics[0])
    <input>:1:1: error: invalid opcode 'MVEI' - did you mean 'MOVEI'?

Check a file and write the log report:
    >>> from mal_checker import SyntaxChecker, write_report
    >>> result = SyntaxChecker().check_file("count.mal")
    >>> write_report(result, "count.log")

Or use the command-line tool:
    $ malcheck count.mal
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mal_checker.errors import (
    MalCheckerError,
    SourceFileError,
    ReportWriteError,
    ConfigError,
    SourceLocation,
)
from mal_checker.diagnostics import Category, Diagnostic, DiagnosticTally, Severity
from mal_checker.checker.checker import (
    CheckResult,
    LineResult,
    SyntaxChecker,
    check,
    check_file,
)
from mal_checker.checker.program import EndDuplicatePolicy, Program
from mal_checker.config import CheckerConfig
from mal_checker.report import format_report, write_report

__all__ = [
    "__version__",
    # Errors
    "MalCheckerError",
    "SourceFileError",
    "ReportWriteError",
    "ConfigError",
    "SourceLocation",
    # Diagnostics
    "Category",
    "Diagnostic",
    "DiagnosticTally",
    "Severity",
    # Checker
    "SyntaxChecker",
    "CheckResult",
    "LineResult",
    "check",
    "check_file",
    "Program",
    "EndDuplicatePolicy",
    "CheckerConfig",
    # Report
    "format_report",
    "write_report",
]
