#!/usr/bin/env python3
"""
Exact theoretical payout percent for a machine configuration.

Enumerates every reel outcome with its probability and applies the
payout rules from slotmachine.logic.payout, so the numbers always match
the engine and can be used to check audit simulations.

Usage:
    python -m scripts.theoretical_rtp --output json
    python -m scripts.theoretical_rtp --output human
"""
import argparse
import itertools
import json
import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from slotmachine.config import default_machine_config
from slotmachine.config_hash import get_config_hash
from slotmachine.errors import config_error
from slotmachine.logic.models import MachineConfig
from slotmachine.logic.payout import PayoutRule, calc_payout, classify


# Outcomes grow as len(Symbol) ** num_reels
MAX_ENUMERATION_REELS = 8


@dataclass
class TheoreticalResult:
    """Exact expectations per lever pull of one wager unit."""

    payout_percent: float
    hit_probability: float
    all_match_probability: float
    majority_probability: float
    outcomes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "payout_percent": round(self.payout_percent, 6),
            "hit_probability": round(self.hit_probability, 6),
            "all_match_probability": round(self.all_match_probability, 6),
            "majority_probability": round(self.majority_probability, 6),
            "outcomes": self.outcomes,
        }


def compute_theoretical(config: MachineConfig) -> TheoreticalResult:
    """Enumerate all reel outcomes and accumulate exact expectations."""
    if config.num_reels > MAX_ENUMERATION_REELS:
        raise config_error(
            f"Exact enumeration supports at most {MAX_ENUMERATION_REELS} reels, "
            f"got {config.num_reels}."
        )

    # Zero-probability symbols contribute nothing
    drawable = [(s, p) for s, p in config.odds_in_order() if p > 0]

    expected_x = 0.0
    all_match = 0.0
    majority = 0.0
    outcomes = 0
    for combo in itertools.product(drawable, repeat=config.num_reels):
        symbols = [s for s, _ in combo]
        probability = math.prod(p for _, p in combo)
        outcomes += 1

        rule, _ = classify(symbols)
        if rule == PayoutRule.ALL_MATCH:
            all_match += probability
        elif rule == PayoutRule.MAJORITY:
            majority += probability
        # Payout for a wager value of 1 is the payout multiple
        expected_x += probability * calc_payout(symbols, 1)

    return TheoreticalResult(
        payout_percent=expected_x * 100,
        hit_probability=all_match + majority,
        all_match_probability=all_match,
        majority_probability=majority,
        outcomes=outcomes,
    )


def theoretical_payout_percent(config: MachineConfig) -> float:
    """Expected payout per 100 wagered."""
    return compute_theoretical(config).payout_percent


def hit_probability(config: MachineConfig) -> float:
    """Probability that a lever pull pays anything."""
    return compute_theoretical(config).hit_probability


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Exact theoretical payout percent")
    parser.add_argument(
        "--output",
        choices=["json", "human"],
        default="human",
        help="Output format",
    )
    args = parser.parse_args()

    config = default_machine_config()
    result = compute_theoretical(config)

    if args.output == "json":
        payload = {"config_hash": get_config_hash(config), **result.to_dict()}
        print(json.dumps(payload, indent=2))
    else:
        print(f"Config hash: {get_config_hash(config)}")
        print(f"Reels: {config.num_reels}, outcomes enumerated: {result.outcomes}")
        print(f"Payout percent: {result.payout_percent:.4f}%")
        print(f"Hit probability: {result.hit_probability:.6f}")
        print(f"  all match: {result.all_match_probability:.6f}")
        print(f"  majority:  {result.majority_probability:.6f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
