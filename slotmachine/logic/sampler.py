"""Weighted symbol draw for a single reel."""
from collections.abc import Iterable

from slotmachine.logic.models import MachineConfig, Symbol
from slotmachine.logic.rng import RNGBase


def draw_symbol(odds: Iterable[tuple[Symbol, float]], rng: RNGBase) -> Symbol:
    """
    Draw one symbol from (symbol, probability) pairs.

    Walks the pairs in order keeping a running cumulative sum and returns
    the symbol whose interval [sum, sum + p) holds the random draw. If
    rounding leaves the draw above the last boundary, the last symbol with
    non-zero probability is returned so every draw selects a symbol.
    """
    u = rng.random()
    cumulative = 0.0
    last_drawable: Symbol | None = None
    for symbol, probability in odds:
        if probability <= 0:
            continue
        last_drawable = symbol
        if u < cumulative + probability:
            return symbol
        cumulative += probability

    if last_drawable is None:
        raise ValueError("odds table has no symbol with non-zero probability")
    return last_drawable


def draw_symbols(config: MachineConfig, rng: RNGBase) -> list[Symbol]:
    """Draw one symbol per reel, independently."""
    odds = config.odds_in_order()
    return [draw_symbol(odds, rng) for _ in range(config.num_reels)]
