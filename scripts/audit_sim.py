#!/usr/bin/env python3
"""
Audit simulation script.

Runs a headless seeded simulation of the configured machine and writes a
one-row CSV with payout percent, hit frequency and payout distribution.

Usage:
    python -m scripts.audit_sim --rounds 100000 --seed AUDIT_2025 --out out/audit.csv
    python -m scripts.audit_sim --rounds 20000 --seed AUDIT_2025 --units 2 --out out/audit_2u.csv
"""
import argparse
import csv
import hashlib
import logging
import subprocess
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from slotmachine.config import default_machine_config, settings
from slotmachine.config_hash import get_config_hash
from slotmachine.logic.models import MachineConfig
from slotmachine.logic.payout import PayoutRule, calc_payout, classify
from slotmachine.logic.rng import SeededRNG
from slotmachine.logic.sampler import draw_symbols


logger = logging.getLogger(__name__)


@dataclass
class SimulationStats:
    """Statistics accumulated during simulation."""
    total_wagered: int = 0  # cents
    total_won: int = 0  # cents
    rounds: int = 0
    wins: int = 0
    all_match_count: int = 0
    majority_count: int = 0
    payout_x_values: list[float] = field(default_factory=list)
    max_payout_x_observed: float = 0.0

    @property
    def payout_percent(self) -> float:
        if self.total_wagered == 0:
            return 0.0
        return self.total_won / self.total_wagered * 100

    @property
    def hit_freq(self) -> float:
        return (self.wins / self.rounds * 100) if self.rounds > 0 else 0.0


def get_git_commit() -> str:
    """Get current git commit hash (short)."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).parent.parent,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass
    return "unknown"


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically."""
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def run_simulation(
    config: MachineConfig,
    rounds: int,
    seed_str: str,
    wager_units: int = 1,
    verbose: bool = False,
) -> SimulationStats:
    """
    Run headless simulation.

    Draws and evaluates spins directly rather than through SlotMachine so
    per-rule counts are available and no reports are emitted.

    Args:
        config: Machine configuration to simulate
        rounds: Number of lever pulls
        seed_str: Seed string for reproducibility
        wager_units: Wager units per pull
        verbose: Print progress

    Returns:
        SimulationStats with aggregated results
    """
    rng = SeededRNG(seed=seed_to_int(seed_str))
    wager_value = wager_units * config.wager_unit_value

    stats = SimulationStats()
    progress_interval = max(1, rounds // 100)

    for round_count in range(rounds):
        if verbose and round_count % progress_interval == 0:
            pct = (round_count / rounds) * 100
            print(f"\rProgress: {pct:.1f}%", end="", flush=True)

        symbols = draw_symbols(config, rng)
        rule, _ = classify(symbols)
        payout = calc_payout(symbols, wager_value)

        stats.total_wagered += wager_value
        stats.total_won += payout
        stats.rounds += 1

        if rule == PayoutRule.ALL_MATCH:
            stats.all_match_count += 1
        elif rule == PayoutRule.MAJORITY:
            stats.majority_count += 1

        if payout > 0:
            stats.wins += 1

        payout_x = payout / wager_value if wager_value > 0 else 0.0
        stats.payout_x_values.append(payout_x)
        if payout_x > stats.max_payout_x_observed:
            stats.max_payout_x_observed = payout_x

    if verbose:
        print("\rProgress: 100.0%")

    return stats


def calculate_percentile(values: list[float], percentile: float) -> float:
    """Calculate percentile from sorted list."""
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    idx = int(len(sorted_vals) * percentile / 100)
    idx = min(idx, len(sorted_vals) - 1)
    return sorted_vals[idx]


def generate_csv(
    config: MachineConfig,
    seed_str: str,
    wager_units: int,
    stats: SimulationStats,
    output_path: str,
) -> None:
    """Generate one-row audit CSV."""
    rounds = stats.rounds
    all_match_rate = (stats.all_match_count / rounds * 100) if rounds > 0 else 0
    majority_rate = (stats.majority_count / rounds * 100) if rounds > 0 else 0

    # Column order: timestamp, git_commit, config_hash first
    row = {
        "timestamp": get_timestamp_iso(),
        "git_commit": get_git_commit(),
        "config_hash": get_config_hash(config),
        "num_reels": config.num_reels,
        "wager_unit_value": config.wager_unit_value,
        "wager_units": wager_units,
        "rounds": rounds,
        "seed": seed_str,
        "total_wagered": stats.total_wagered,
        "total_won": stats.total_won,
        "payout_percent": f"{stats.payout_percent:.4f}",
        "hit_freq": f"{stats.hit_freq:.4f}",
        "all_match_rate": f"{all_match_rate:.4f}",
        "majority_rate": f"{majority_rate:.4f}",
        "p95_payout_x": f"{calculate_percentile(stats.payout_x_values, 95):.2f}",
        "p99_payout_x": f"{calculate_percentile(stats.payout_x_values, 99):.2f}",
        "max_payout_x": f"{stats.max_payout_x_observed:.2f}",
    }

    # Ensure output directory exists
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        writer.writeheader()
        writer.writerow(row)

    logger.info("CSV written to: %s", output_path)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Slot machine audit simulation")
    parser.add_argument(
        "--rounds",
        type=int,
        required=True,
        help="Number of lever pulls to simulate",
    )
    parser.add_argument(
        "--seed",
        type=str,
        required=True,
        help="Seed string for reproducibility",
    )
    parser.add_argument(
        "--units",
        type=int,
        default=1,
        help="Wager units per pull (default: 1)",
    )
    parser.add_argument(
        "--out",
        type=str,
        required=True,
        help="Output CSV path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show progress",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)

    if args.rounds <= 0:
        print("Error: --rounds must be positive", file=sys.stderr)
        return 1
    if args.units <= 0:
        print("Error: --units must be positive", file=sys.stderr)
        return 1

    config = default_machine_config()
    stats = run_simulation(
        config=config,
        rounds=args.rounds,
        seed_str=args.seed,
        wager_units=args.units,
        verbose=args.verbose,
    )
    generate_csv(config, args.seed, args.units, stats, args.out)

    print(f"Payout percent: {stats.payout_percent:.4f}%")
    print(f"Hit frequency: {stats.hit_freq:.4f}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())
