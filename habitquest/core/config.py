import logging

from pydantic import model_validator
from pydantic_settings import BaseSettings

DIFFICULTY_POLICIES = ("reject", "default")


class Settings(BaseSettings):
    """Calculator settings loaded from environment variables."""

    # App settings
    debug: bool = False
    log_level: str = "INFO"

    # XP
    base_xp: int = 10
    level_xp_step: int = 50  # level n starts at level_xp_step * (n - 1)^2

    # Streaks
    streak_lookback_days: int = 365  # max days walked back from today

    # Rewards
    invalid_difficulty_policy: str = "reject"  # "reject" or "default"
    max_bonus_multiplier: int = 5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject values the calculators cannot work with."""
        if self.streak_lookback_days < 1:
            raise ValueError("STREAK_LOOKBACK_DAYS must be at least 1")
        if self.level_xp_step < 1:
            raise ValueError("LEVEL_XP_STEP must be at least 1")
        if self.invalid_difficulty_policy not in DIFFICULTY_POLICIES:
            raise ValueError(
                f"INVALID_DIFFICULTY_POLICY must be one of {DIFFICULTY_POLICIES}, "
                f"got {self.invalid_difficulty_policy!r}"
            )
        return self


def configure_logging(config: Settings) -> None:
    """Apply the configured log level to the root logger."""
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level)


settings = Settings()
