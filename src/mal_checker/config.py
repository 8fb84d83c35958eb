"""
MAL Checker - Configuration
===========================

Checker configuration: report naming, report header lines, the spelling
alphabet, and the duplicate-END policy. Configuration can come from:
- Default values (defined here)
- Environment variables (CheckerConfig.from_env)
- Explicit keyword arguments (the CLI passes its options this way)
"""

from dataclasses import dataclass, replace
from typing import Optional
import logging
import os

from mal_checker.errors import ConfigError
from mal_checker.checker.program import EndDuplicatePolicy
from mal_checker.checker.spelling import DEFAULT_ALPHABET

# Logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckerConfig:
    """
    Configuration for a checker run.

    Attributes:
        end_duplicates: How repeated END instructions are reported
        alphabet: Letters tried by the spelling suggester
        source_suffix: Suffix appended to a source name given without one
        report_suffix: Suffix of the default report file
        author: Optional author line for the report header
        course: Optional course line for the report header
        date_format: strftime format for the report date
    """

    # Checking
    end_duplicates: EndDuplicatePolicy = EndDuplicatePolicy.EVERY
    alphabet: str = DEFAULT_ALPHABET

    # File naming
    source_suffix: str = ".mal"
    report_suffix: str = ".log"

    # Report header
    author: Optional[str] = None
    course: Optional[str] = None
    date_format: str = "%m/%d/%Y"

    def __post_init__(self) -> None:
        if not self.alphabet:
            raise ConfigError("spelling alphabet must not be empty")
        if not isinstance(self.end_duplicates, EndDuplicatePolicy):
            raise ConfigError(
                f"invalid END duplicate policy {self.end_duplicates!r}",
                hint="use one of: " + ", ".join(p.value for p in EndDuplicatePolicy),
            )

    # ═══════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "CheckerConfig":
        """
        Create a CheckerConfig from environment variables.

        Environment variables (all optional):
            MALCHECK_END_DUPLICATES: "every" or "legacy"
            MALCHECK_ALPHABET: Letters used for spelling suggestions
            MALCHECK_AUTHOR: Report header author line
            MALCHECK_COURSE: Report header course line

        Invalid values are logged and ignored.

        Args:
            environ: Mapping to read instead of os.environ (for testing)
        """
        environ = os.environ if environ is None else environ
        config = cls()

        if policy := environ.get("MALCHECK_END_DUPLICATES"):
            try:
                config = replace(config, end_duplicates=EndDuplicatePolicy(policy.lower()))
            except ValueError:
                logger.warning(f"Ignoring invalid MALCHECK_END_DUPLICATES={policy!r}")

        if alphabet := environ.get("MALCHECK_ALPHABET"):
            config = replace(config, alphabet=alphabet)

        if author := environ.get("MALCHECK_AUTHOR"):
            config = replace(config, author=author)

        if course := environ.get("MALCHECK_COURSE"):
            config = replace(config, course=course)

        return config

    def with_overrides(self, **overrides) -> "CheckerConfig":
        """Return a copy with the non-None overrides applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values) if values else self
