"""Payout rules for a set of drawn reel symbols.

1. All reels show the same symbol: wager x 2 x payout factor.
2. More than half, but not all, reels share a symbol: wager x payout factor.
3. Otherwise nothing is paid.
"""
from collections.abc import Sequence
from enum import Enum

from slotmachine.errors import ErrorCode, SlotMachineError
from slotmachine.logic.models import Symbol


class PayoutRule(str, Enum):
    """Which payout rule a spin satisfied."""

    ALL_MATCH = "all_match"
    MAJORITY = "majority"
    NONE = "none"


# Payout factor multiplier per rule
RULE_MULTIPLIER: dict[PayoutRule, int] = {
    PayoutRule.ALL_MATCH: 2,
    PayoutRule.MAJORITY: 1,
    PayoutRule.NONE: 0,
}


def classify(reel_symbols: Sequence[Symbol]) -> tuple[PayoutRule, Symbol | None]:
    """
    Find the payout rule the symbols satisfy and the symbol it pays on.

    Sorts a copy to cluster equal symbols, then scans runs and stops at the
    first run longer than half the reel count.
    """
    if not reel_symbols:
        raise SlotMachineError(ErrorCode.INVALID_REQUEST, "No reel symbols to evaluate.")

    ordered = sorted(reel_symbols, key=lambda s: s.order)
    num_reels = len(ordered)

    if ordered[0] == ordered[-1]:
        return PayoutRule.ALL_MATCH, ordered[0]

    half = num_reels // 2
    left = 0
    for right in range(num_reels):
        if ordered[right] != ordered[left]:
            left = right
        if right - left + 1 > half:
            return PayoutRule.MAJORITY, ordered[left]

    return PayoutRule.NONE, None


def calc_payout(reel_symbols: Sequence[Symbol], wager_value: int) -> int:
    """
    Calculate payout in cents for drawn symbols and a wager value in cents.

    Pure: does not reorder reel_symbols.
    """
    if wager_value < 0:
        raise SlotMachineError(
            ErrorCode.INVALID_WAGER,
            f"Wager value must be non-negative, got {wager_value}.",
        )
    rule, symbol = classify(reel_symbols)
    if symbol is None:
        return 0
    return wager_value * RULE_MULTIPLIER[rule] * symbol.payout_factor
