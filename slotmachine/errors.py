"""Error codes and exceptions raised by the slot machine."""
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for machine configuration and play."""

    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_WAGER = "INVALID_WAGER"
    INVALID_REQUEST = "INVALID_REQUEST"


# Whether the caller can retry with corrected input on the same machine
ERROR_RECOVERABLE: dict[ErrorCode, bool] = {
    ErrorCode.INVALID_CONFIG: False,
    ErrorCode.INVALID_WAGER: True,
    ErrorCode.INVALID_REQUEST: True,
}


class SlotMachineError(Exception):
    """Base slot machine error carrying an error code."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Error: {code.value}"
        self.recoverable = ERROR_RECOVERABLE[code]
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict for logging or display."""
        return {
            "code": self.code.value,
            "message": self.message,
            "recoverable": self.recoverable,
        }


def config_error(message: str) -> SlotMachineError:
    """Build an INVALID_CONFIG error."""
    return SlotMachineError(ErrorCode.INVALID_CONFIG, message)
