"""Config hash for audit reproducibility.

Used by the audit simulation and theoretical payout scripts so CSV rows
and reports can be tied back to the exact machine configuration.
"""
import hashlib
import json

from slotmachine.logic.models import MachineConfig


def get_config_hash(config: MachineConfig) -> str:
    """
    Generate hash of a machine configuration.

    Returns 16-char hex hash of config snapshot.
    """
    config_snapshot = {
        "num_reels": config.num_reels,
        "wager_unit_value": config.wager_unit_value,
        "odds": {symbol.name: p for symbol, p in config.odds_in_order()},
        "payout_factors": {symbol.name: symbol.payout_factor for symbol, _ in config.odds_in_order()},
    }
    canonical = json.dumps(config_snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
