"""Symbols, machine configuration and spin models."""
import math
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slotmachine.config import settings


class Symbol(Enum):
    """Reel symbols with display name and payout factor.

    Declaration order is the total order used to group equal symbols and
    the order the sampler walks the odds table in.
    """

    BELLS = ("Bells", 10)
    FLOWERS = ("Flowers", 5)
    FRUITS = ("Fruits", 3)
    HEARTS = ("Hearts", 2)
    SPADES = ("Spades", 1)

    def __init__(self, display_name: str, payout_factor: int):
        self.display_name = display_name
        self.payout_factor = payout_factor

    @property
    def order(self) -> int:
        """Position of the symbol in declaration order."""
        return _SYMBOL_ORDER[self]

    @classmethod
    def lookup(cls, key: Any) -> "Symbol":
        """Resolve a Symbol from itself, its member name or display name."""
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            folded = key.strip().casefold()
            for symbol in cls:
                if folded in (symbol.name.casefold(), symbol.display_name.casefold()):
                    return symbol
        raise ValueError(f"Unknown symbol: {key!r}")


_SYMBOL_ORDER: dict[Symbol, int] = {symbol: i for i, symbol in enumerate(Symbol)}


class MachineConfig(BaseModel):
    """
    Immutable machine configuration.

    - num_reels: reels per spin (>= 1)
    - odds: probability per symbol, every symbol present, summing to 1.0
    - wager_unit_value: value of one wager unit in cents (> 0)
    """

    model_config = ConfigDict(frozen=True)

    num_reels: int = Field(..., ge=1, strict=True)
    odds: Mapping[Symbol, float]
    wager_unit_value: int = Field(..., gt=0, strict=True)

    @field_validator("odds", mode="before")
    @classmethod
    def _resolve_symbol_keys(cls, value: Any) -> dict[Symbol, float]:
        if not isinstance(value, Mapping):
            raise ValueError("odds must be a mapping of symbol to probability")
        resolved: dict[Symbol, float] = {}
        for key, probability in value.items():
            symbol = Symbol.lookup(key)
            if symbol in resolved:
                raise ValueError(f"Duplicate odds entry for {symbol.display_name}")
            resolved[symbol] = probability
        return resolved

    @field_validator("odds")
    @classmethod
    def _check_distribution(cls, value: Mapping[Symbol, float]) -> Mapping[Symbol, float]:
        missing = [s.display_name for s in Symbol if s not in value]
        if missing:
            raise ValueError(f"odds missing symbols: {', '.join(missing)}")

        for symbol, probability in value.items():
            if not math.isfinite(probability) or probability < 0 or probability > 1:
                raise ValueError(
                    f"odds for {symbol.display_name} must be in [0, 1], got {probability}"
                )

        total = math.fsum(value.values())
        if abs(total - 1.0) > settings.odds_tolerance:
            raise ValueError(f"odds must sum to 1.0, got {total!r}")
        # Read-only view so the table cannot change after validation
        return MappingProxyType(dict(value))

    def odds_in_order(self) -> list[tuple[Symbol, float]]:
        """Return (symbol, probability) pairs in symbol declaration order."""
        return [(symbol, self.odds[symbol]) for symbol in Symbol]

    def __hash__(self) -> int:
        return hash((self.num_reels, tuple(self.odds_in_order()), self.wager_unit_value))


class SpinOutcome(BaseModel):
    """Result of one lever pull."""

    symbols: list[Symbol] = Field(default_factory=list)  # draw order
    wager_units: int = 0
    wager_value: int = 0  # cents
    payout: int = 0  # cents

    @property
    def display_names(self) -> list[str]:
        return [symbol.display_name for symbol in self.symbols]

    @property
    def is_win(self) -> bool:
        return self.payout > 0


class MachineTotals(BaseModel):
    """Running receipts and payout in cents since the last reset."""

    receipts: int = 0
    payout: int = 0
    spins: int = 0

    def record(self, wager_value: int, payout: int) -> None:
        """Add one spin's wager and payout."""
        self.receipts += wager_value
        self.payout += payout
        self.spins += 1

    def reset(self) -> None:
        """Zero all totals."""
        self.receipts = 0
        self.payout = 0
        self.spins = 0
