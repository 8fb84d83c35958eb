"""
malcheck - MAL Syntax Checker Command-Line Interface
====================================================

Checks a MAL source file and writes a log report next to it.

Usage Examples
--------------
Check a program (writes count.log):
    $ malcheck count.mal

The .mal suffix may be omitted:
    $ malcheck count

Print the report instead of writing it:
    $ malcheck count.mal --stdout

Name the report and add header lines:
    $ malcheck count.mal -o results.log --author "A. Student" --course CS3210
"""

from pathlib import Path
from typing import Optional
import logging
import sys

import click

from mal_checker import __version__
from mal_checker.checker.checker import SyntaxChecker
from mal_checker.checker.program import EndDuplicatePolicy
from mal_checker.cli.errors import ExitCode, handle_cli_exception
from mal_checker.config import CheckerConfig
from mal_checker.report import default_report_path, format_report, write_report


def setup_logging(verbose: bool) -> None:
    """Configure logging; only verbose runs show checker debug output."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")


def resolve_source_path(source: Path, suffix: str) -> Path:
    """
    Find the source file, allowing the suffix to be omitted.

    Raises:
        click.BadParameter: If neither the path nor path+suffix is a file
    """
    if source.is_file():
        return source
    if source.name and not source.suffix:
        with_suffix = source.with_name(source.name + suffix)
        if with_suffix.is_file():
            return with_suffix
    raise click.BadParameter(f"the file {source} does not exist", param_hint="SOURCE")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("source", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Report file (default: SOURCE with .log suffix)",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the report to standard output instead of writing a file",
)
@click.option(
    "--end-duplicates",
    type=click.Choice([p.value for p in EndDuplicatePolicy], case_sensitive=False),
    default=None,
    help="How repeated END instructions are reported. 'every' warns for each "
         "extra END; 'legacy' lets a final duplicate END replace earlier END "
         "warnings. Default: every (or MALCHECK_END_DUPLICATES).",
)
@click.option("--author", default=None, help="Author line for the report header")
@click.option("--course", default=None, help="Course line for the report header")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.version_option(version=__version__, prog_name="malcheck")
def main(
    source: Path,
    output: Optional[Path],
    to_stdout: bool,
    end_duplicates: Optional[str],
    author: Optional[str],
    course: Optional[str],
    verbose: bool,
) -> None:
    """
    Check a MAL program for syntax and wiring errors.

    SOURCE is the MAL file to check; the .mal suffix may be omitted.

    \b
    Exit status:
        0  the program is valid (warnings allowed)
        1  the program has errors, or the report could not be written
        2  invalid arguments or unreadable source
    """
    setup_logging(verbose)

    try:
        config = CheckerConfig.from_env().with_overrides(
            end_duplicates=EndDuplicatePolicy(end_duplicates.lower()) if end_duplicates else None,
            author=author,
            course=course,
        )
        source_path = resolve_source_path(source, config.source_suffix)

        result = SyntaxChecker(config).check_file(source_path)

        if to_stdout:
            click.echo(format_report(result, config, report_name="<stdout>"), nl=False)
        else:
            report_path = output or default_report_path(source_path, config)
            write_report(result, report_path, config)
            click.echo(f"Finished creating the log for {source_path}")
            if verbose:
                tally = result.tally
                click.echo(
                    f"{tally.error_count()} error(s), {tally.warning_count()} warning(s) "
                    f"-> {report_path}"
                )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    sys.exit(ExitCode.SUCCESS if result.is_valid else ExitCode.CHECK_FAILED)


if __name__ == "__main__":
    main()
