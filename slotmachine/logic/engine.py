"""Slot machine engine: lever pulls, running totals and payout percent."""
import logging
import threading
from typing import Any

from pydantic import ValidationError

from slotmachine.errors import config_error
from slotmachine.logic.models import MachineConfig, MachineTotals, SpinOutcome
from slotmachine.logic.payout import calc_payout
from slotmachine.logic.rng import ProductionRNG, RNGBase
from slotmachine.logic.sampler import draw_symbols
from slotmachine.report import Reporter, ReportSink
from slotmachine.validators import validate_wager_units


logger = logging.getLogger(__name__)


class SlotMachine:
    """
    Multi-reel slot machine.

    Implements:
    - Lever pull: one weighted draw per reel, payout, report
    - Running receipts/payout totals since the last reset
    - Payout percent (payout returned to the player per 100 wagered)
    """

    def __init__(
        self,
        config: MachineConfig,
        rng: RNGBase | None = None,
        sink: ReportSink | None = None,
    ):
        self.config = config
        self.rng = rng or ProductionRNG()
        self.reporter = Reporter(sink)
        self._totals = MachineTotals()
        self._lock = threading.Lock()

    @classmethod
    def from_params(
        cls,
        num_reels: int,
        odds: dict[Any, float],
        wager_unit_value: int,
        rng: RNGBase | None = None,
        sink: ReportSink | None = None,
    ) -> "SlotMachine":
        """Build a machine from raw parameters, raising INVALID_CONFIG on bad input."""
        try:
            config = MachineConfig(
                num_reels=num_reels,
                odds=odds,
                wager_unit_value=wager_unit_value,
            )
        except ValidationError as e:
            error = config_error(f"Invalid machine configuration: {e}")
            logger.warning("Rejected machine configuration: %s", error.to_dict())
            raise error from e
        return cls(config, rng=rng, sink=sink)

    def spin(self, num_wager_units: int) -> SpinOutcome | None:
        """
        Pull the lever with the given number of wager units.

        Args:
            num_wager_units: Non-negative number of wager units

        Returns:
            SpinOutcome, or None when no units were wagered (no draw,
            no report, totals unchanged)
        """
        validate_wager_units(num_wager_units)
        if num_wager_units == 0:
            return None

        symbols = draw_symbols(self.config, self.rng)
        wager_value = num_wager_units * self.config.wager_unit_value
        payout = calc_payout(symbols, wager_value)

        outcome = SpinOutcome(
            symbols=symbols,
            wager_units=num_wager_units,
            wager_value=wager_value,
            payout=payout,
        )
        logger.debug(
            "Spin: symbols=%s wager=%d payout=%d win=%s",
            outcome.display_names,
            wager_value,
            payout,
            outcome.is_win,
        )

        self.reporter.report(outcome)

        with self._lock:
            self._totals.record(wager_value, payout)

        return outcome

    def get_payout_percent(self) -> float:
        """
        Total payout as a percent of total receipts, e.g. 85.5.

        Returns 0.0 until both totals are non-zero.
        """
        with self._lock:
            receipts = self._totals.receipts
            payout = self._totals.payout
        if payout != 0 and receipts != 0:
            return 100 * payout / receipts
        return 0.0

    def reset(self) -> None:
        """Clear total payout and receipts."""
        with self._lock:
            self._totals.reset()
        logger.info("Machine totals reset")

    @property
    def totals(self) -> MachineTotals:
        """Snapshot of the running totals."""
        with self._lock:
            return self._totals.model_copy()
