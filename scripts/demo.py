#!/usr/bin/env python3
"""
Scripted demonstration session on a quarter slot machine.

Usage:
    python -m scripts.demo
    python -m scripts.demo --seed 42
"""
import argparse
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from slotmachine.config import settings
from slotmachine.logic.engine import SlotMachine
from slotmachine.logic.models import Symbol
from slotmachine.logic.rng import ProductionRNG, SeededRNG
from slotmachine.report import ConsoleReportSink

DEMO_ODDS = {
    Symbol.HEARTS: 0.3,
    Symbol.SPADES: 0.25,
    Symbol.BELLS: 0.05,
    Symbol.FLOWERS: 0.2,
    Symbol.FRUITS: 0.2,
}

FIRST_SESSION = [2, 1, 3]
SECOND_SESSION = [4, 1, 1, 2]


def run_demo(seed: int | None = None) -> list[float]:
    """Play both scripted sessions and return the payout percent after each."""
    rng = SeededRNG(seed=seed) if seed is not None else ProductionRNG()
    machine = SlotMachine.from_params(
        num_reels=3,
        odds=DEMO_ODDS,
        wager_unit_value=25,  # quarter slot machine
        rng=rng,
        sink=ConsoleReportSink(),
    )

    percents = []
    for session in (FIRST_SESSION, SECOND_SESSION):
        for units in session:
            machine.spin(units)
        percent = machine.get_payout_percent()
        print(f"Pay out percent to user = {percent}")
        percents.append(percent)
        machine.reset()
    return percents


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Scripted slot machine demo")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for a repeatable session",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    run_demo(seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
