"""
MAL Checker Error Hierarchy
===========================

This module defines the exception hierarchy for the MAL syntax checker.
All exceptions inherit from MalCheckerError, allowing callers to catch
every checker-related failure with a single except clause.

Exception Hierarchy
-------------------
MalCheckerError (base)
├── SourceFileError - source file cannot be read or decoded
├── ReportWriteError - log report cannot be written
└── ConfigError - invalid configuration value

Note that problems *in the MAL program itself* are never raised. The
checking core returns them as Diagnostic values (see diagnostics.py);
exceptions are reserved for the surrounding I/O and configuration layer.

Error messages follow this format:
    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in MAL source for diagnostics and errors.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed, physical line in the source)
        column: Column number (1-indexed, within the normalized line)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class MalCheckerError(Exception):
    """
    Base exception for all MAL checker errors.

    Attributes:
        message: The error description
        location: Where the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            count.mal:3:1: error: cannot read source
            hint: check the file permissions
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Driver Exceptions
# =============================================================================

class SourceFileError(MalCheckerError):
    """
    The MAL source file could not be read.

    Raised when:
    - The file does not exist or is a directory
    - Permission denied
    - The content is not valid text in the expected encoding
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read '{path}': {reason}")


class ReportWriteError(MalCheckerError):
    """The log report could not be written to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"cannot write report '{path}': {reason}",
            hint="check that the output directory exists and is writable",
        )


class ConfigError(MalCheckerError):
    """
    Invalid configuration value.

    Raised when a value is passed explicitly (constructor or CLI) that the
    checker cannot use, e.g. an empty spelling alphabet. Invalid values read
    from the environment are logged and ignored instead.
    """
    pass
