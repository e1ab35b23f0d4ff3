"""Finding collection and reporting for netcfg-generator.

Validation never blocks rendering, so problems found while checking an
interface collection or loading a model document are gathered here and
reported together instead of being raised.
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for findings."""

    WARNING = "warning"  # Advisory, output is still usable
    ERROR = "error"  # Input was dropped


_LOG_LEVELS = {ErrorSeverity.WARNING: logging.WARNING, ErrorSeverity.ERROR: logging.ERROR}


@dataclass(frozen=True)
class ContextError:
    """A single finding, keyed by the field or document entry it concerns.

    ``section`` looks like ``eth0.gateway4`` for validation findings and
    ``interfaces[2]`` for document entries the parser dropped.
    """

    section: str
    message: str
    exception: Exception | None = None
    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __str__(self) -> str:
        if self.exception:
            return f"[{self.section}] {self.message}: {self.exception}"
        return f"[{self.section}] {self.message}"


class ErrorCollector:
    """Findings from one validation or loading pass, in the order found."""

    def __init__(self) -> None:
        self.errors: list[ContextError] = []

    def add_error(
        self,
        section: str,
        message: str,
        exception: Exception | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> None:
        """Record a finding and log it at its severity."""
        error = ContextError(section, message, exception, severity)
        self.errors.append(error)
        logger.log(_LOG_LEVELS[severity], "%s", error)

    def add_warning(self, section: str, message: str) -> None:
        """Record a WARNING-level finding."""
        self.add_error(section, message, severity=ErrorSeverity.WARNING)

    def count(self, severity: ErrorSeverity = ErrorSeverity.ERROR) -> int:
        """Number of findings with the given severity."""
        return sum(1 for e in self.errors if e.severity == severity)

    def has_errors(self) -> bool:
        """Return True if any entry was dropped."""
        return self.count(ErrorSeverity.ERROR) > 0

    def has_warnings(self) -> bool:
        return self.count(ErrorSeverity.WARNING) > 0

    def messages_for(self, section: str) -> list[str]:
        """Messages recorded for one section, empty if the section is clean."""
        return [e.message for e in self.errors if e.section == section]

    def by_section(self) -> dict[str, list[ContextError]]:
        """Findings grouped by section, sections in first-seen order."""
        grouped: dict[str, list[ContextError]] = {}
        for error in self.errors:
            grouped.setdefault(error.section, []).append(error)
        return grouped

    def log_summary(self) -> None:
        """Log one line per section and a closing count."""
        if not self.errors:
            logger.info("No configuration problems found")
            return

        grouped = self.by_section()
        for section, findings in grouped.items():
            messages = "; ".join(f"[{e.severity.value.upper()}] {e.message}" for e in findings)
            logger.warning("%s: %s", section, messages)

        errors = self.count(ErrorSeverity.ERROR)
        warnings = self.count(ErrorSeverity.WARNING)
        if errors:
            logger.error(
                "%d error(s) and %d warning(s) in %d section(s); invalid entries were skipped",
                errors,
                warnings,
                len(grouped),
            )
        else:
            logger.warning("%d warning(s) in %d section(s)", warnings, len(grouped))
