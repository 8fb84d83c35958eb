"""
MAL Checker Log Report
======================

Formats a CheckResult as the plain-text log written next to the source
file (count.mal -> count.log). The log has three parts:

1. **Header**: title, source and report names, date, and the optional
   author/course lines from the configuration.
2. **Listing**: every line of code, each followed by its diagnostics,
   then the program-wide label and END diagnostics.
3. **Footer**: line count, warning and error totals per category, the
   identifier inventory, and the final verdict.
"""

from datetime import date
from pathlib import Path
from typing import Optional
import logging

from mal_checker.config import CheckerConfig
from mal_checker.diagnostics import Diagnostic, Severity
from mal_checker.errors import ReportWriteError
from mal_checker.checker.checker import CheckResult

# Logger for this module
logger = logging.getLogger(__name__)

TITLE = "MAL Syntax Checker Results"
RULE = "----------"


def format_diagnostic(diagnostic: Diagnostic, with_line: bool = False) -> str:
    """
    Format one diagnostic for the log.

    Example:
        ** error: invalid opcode 'MVEI' - did you mean 'MOVEI'?
        ** warning: the label 'LOOP' is not being branched to (line 7)
    """
    text = f"** {diagnostic.severity}: {diagnostic.message}"
    if with_line and diagnostic.line is not None:
        text += f" (line {diagnostic.line})"
    return text


def _header(source_name: str, config: CheckerConfig, report_name: str, today: date) -> list[str]:
    lines = [TITLE, source_name, report_name, today.strftime(config.date_format)]
    if config.author:
        lines.append(config.author)
    if config.course:
        lines.append(config.course)
    lines += [RULE, "", "MAL Program Listing:", ""]
    return lines


def _listing(result: CheckResult) -> list[str]:
    lines = []
    for line_result in result.line_results:
        lines.append(f"{line_result.line.line_number}. {line_result.line.text}")
        lines.extend(format_diagnostic(d) for d in line_result.diagnostics)

    if result.program_diagnostics:
        lines.append("")
        lines.extend(format_diagnostic(d, with_line=True) for d in result.program_diagnostics)
    return lines


def _footer(result: CheckResult) -> list[str]:
    tally = result.tally
    lines = ["", RULE, "", f"Total Lines of Code: {result.line_count}", ""]

    if tally.warning_count():
        lines.append(f"Total Warnings = {tally.warning_count()}")
        for category, count in tally.categories(Severity.WARNING):
            lines.append(f"{count} {category.description} warning(s)")
    else:
        lines.append("No Warnings!")
    lines.append("")

    if tally.error_count():
        lines.append(f"Total Errors = {tally.error_count()}")
        for category, count in tally.categories(Severity.ERROR):
            lines.append(f"{count} {category.description} error(s)")
    else:
        lines.append("No Errors Found!")

    if result.identifiers:
        lines += ["", "Identifiers:"]
        lines.extend(result.identifiers)

    verdict = "valid" if result.is_valid else "not valid"
    lines += ["", f"Processing Complete - MAL Program is {verdict}"]
    return lines


def format_report(
    result: CheckResult,
    config: Optional[CheckerConfig] = None,
    source_name: Optional[str] = None,
    report_name: str = "",
    today: Optional[date] = None,
) -> str:
    """
    Build the full log text for a check result.

    Args:
        result: The result to report
        config: Supplies the header lines and date format
        source_name: Source name shown in the header (defaults to the
            name the result was checked under)
        report_name: Name of the log file, shown in the header
        today: Report date (defaults to the current date)
    """
    config = config or CheckerConfig()
    today = today or date.today()
    source_name = source_name or result.filename
    lines = _header(source_name, config, report_name, today) + _listing(result) + _footer(result)
    return "\n".join(lines) + "\n"


def default_report_path(source: Path, config: Optional[CheckerConfig] = None) -> Path:
    """Return the report path next to the source: count.mal -> count.log."""
    config = config or CheckerConfig()
    return source.with_suffix(config.report_suffix)


def write_report(
    result: CheckResult,
    path: str | Path,
    config: Optional[CheckerConfig] = None,
    today: Optional[date] = None,
) -> Path:
    """
    Write the log report to a file.

    Returns:
        The path written

    Raises:
        ReportWriteError: If the file cannot be written
    """
    path = Path(path)
    text = format_report(result, config, report_name=str(path), today=today)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(str(path), str(e)) from e
    logger.debug(f"Wrote report to {path} ({len(text)} characters)")
    return path
