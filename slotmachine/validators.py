"""Argument validators for machine operations."""
from typing import Any

from slotmachine.errors import ErrorCode, SlotMachineError


def validate_wager_units(num_wager_units: Any) -> None:
    """
    Validate the number of wager units for a lever pull.

    Raises INVALID_WAGER if not a non-negative integer.
    """
    if isinstance(num_wager_units, bool) or not isinstance(num_wager_units, int):
        raise SlotMachineError(
            ErrorCode.INVALID_WAGER,
            f"Wager units must be an integer, got {num_wager_units!r}.",
        )
    if num_wager_units < 0:
        raise SlotMachineError(
            ErrorCode.INVALID_WAGER,
            f"Wager units must be non-negative, got {num_wager_units}.",
        )
