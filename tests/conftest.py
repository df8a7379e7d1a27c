"""Pytest fixtures for slot machine tests."""
from collections.abc import Iterable

import pytest

from slotmachine.logic.engine import SlotMachine
from slotmachine.logic.models import MachineConfig, Symbol
from slotmachine.logic.rng import RNGBase
from slotmachine.report import SpinReport


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (run long simulations)"
    )


DEFAULT_ODDS = {
    Symbol.HEARTS: 0.3,
    Symbol.SPADES: 0.25,
    Symbol.BELLS: 0.05,
    Symbol.FLOWERS: 0.2,
    Symbol.FRUITS: 0.2,
}

# Draw values landing inside each symbol's interval for DEFAULT_ODDS.
# Walk order is BELLS [0, .05), FLOWERS [.05, .25), FRUITS [.25, .45),
# HEARTS [.45, .75), SPADES [.75, 1).
DRAW_FOR = {
    Symbol.BELLS: 0.01,
    Symbol.FLOWERS: 0.10,
    Symbol.FRUITS: 0.30,
    Symbol.HEARTS: 0.50,
    Symbol.SPADES: 0.90,
}


class ScriptedRNG(RNGBase):
    """RNG returning a fixed sequence of values."""

    def __init__(self, values: Iterable[float]):
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls]
        self.calls += 1
        return value

    @classmethod
    def for_symbols(cls, *symbols: Symbol) -> "ScriptedRNG":
        """Script draws that produce the given symbols under DEFAULT_ODDS."""
        return cls(DRAW_FOR[s] for s in symbols)


class RecordingReportSink:
    """Report sink that keeps every emitted report."""

    def __init__(self):
        self.reports: list[SpinReport] = []

    def emit(self, report: SpinReport) -> None:
        self.reports.append(report)

    def clear(self) -> None:
        self.reports.clear()


class FailingReportSink:
    """Report sink that always raises."""

    def emit(self, report: SpinReport) -> None:
        raise RuntimeError("sink unavailable")


@pytest.fixture
def default_config() -> MachineConfig:
    """Three reels, 25-cent wager unit, demo odds."""
    return MachineConfig(num_reels=3, odds=DEFAULT_ODDS, wager_unit_value=25)


@pytest.fixture
def recording_sink() -> RecordingReportSink:
    """Create a fresh recording sink for each test."""
    return RecordingReportSink()


@pytest.fixture
def make_machine(default_config: MachineConfig, recording_sink: RecordingReportSink):
    """Factory for machines with scripted symbols and a recording sink."""

    def _make(*symbols: Symbol) -> SlotMachine:
        return SlotMachine(
            default_config,
            rng=ScriptedRNG.for_symbols(*symbols),
            sink=recording_sink,
        )

    return _make
