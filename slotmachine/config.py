"""Machine configuration defaults, overridable through the environment."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Default machine settings (quarter machine, three reels)."""

    model_config = ConfigDict(env_prefix="SLOT_")

    # Machine
    num_reels: int = 3
    wager_unit_value: int = 25  # cents

    # Odds per symbol display name; must sum to 1.0
    odds: dict[str, float] = {
        "Hearts": 0.3,
        "Spades": 0.25,
        "Bells": 0.05,
        "Flowers": 0.2,
        "Fruits": 0.2,
    }
    odds_tolerance: float = 1e-9

    # Logging
    log_level: str = "INFO"


settings = Settings()


def default_machine_config():
    """Build a MachineConfig from the current settings."""
    from slotmachine.logic.models import MachineConfig

    return MachineConfig(
        num_reels=settings.num_reels,
        odds=settings.odds,
        wager_unit_value=settings.wager_unit_value,
    )
