"""Per-spin reports and the sinks they are emitted to."""
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Protocol

from slotmachine.logic.models import SpinOutcome


logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def format_currency(cents: int) -> str:
    """Format an amount in cents as dollars, e.g. 250 -> '$2.50'."""
    dollars = (Decimal(cents) / 100).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"${dollars}"


@dataclass
class SpinReport:
    """Human-readable report of a single spin."""

    symbols: list[str]
    payout: int  # cents

    @classmethod
    def from_outcome(cls, outcome: SpinOutcome) -> "SpinReport":
        return cls(symbols=outcome.display_names, payout=outcome.payout)

    def to_text(self) -> str:
        """Symbols on one line, payout on the next."""
        return f"{' '.join(self.symbols)}\npayout = {format_currency(self.payout)}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "symbols": self.symbols,
            "payout": self.payout,
        }


class ReportSink(Protocol):
    """Protocol for spin report sinks."""

    def emit(self, report: SpinReport) -> None:
        """Emit a spin report."""
        ...


class ConsoleReportSink:
    """Sink that prints reports to stdout."""

    def emit(self, report: SpinReport) -> None:
        print(report.to_text())


class LoggingReportSink:
    """Default sink that logs reports."""

    def emit(self, report: SpinReport) -> None:
        """Log spin report."""
        logger.info("SPIN %s: %s", report.to_text().replace("\n", " | "), report.to_dict())


class Reporter:
    """Emits spin reports to a sink without letting sink failures escape."""

    def __init__(self, sink: ReportSink | None = None):
        self._sink = sink or LoggingReportSink()
        self._sink_errors = 0  # Counter for sink failures

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def set_sink(self, sink: ReportSink) -> None:
        """Set the report sink (useful for testing)."""
        self._sink = sink

    def report(self, outcome: SpinOutcome) -> None:
        """
        Emit the report for a spin.

        Sink failures MUST NOT break a spin.
        """
        report = SpinReport.from_outcome(outcome)
        try:
            self._sink.emit(report)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Report sink error (count=%d): %s",
                self._sink_errors,
                str(e),
            )
