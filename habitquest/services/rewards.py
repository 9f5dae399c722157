"""XP rewards for completing habits, scaled by difficulty."""

import logging

from habitquest.core.errors import InvalidArgument
from habitquest.core.numbers import round_half_up

logger = logging.getLogger(__name__)

BASE_XP = 10

# Difficulty rating -> XP multiplier
DIFFICULTY_MULTIPLIERS = {
    1: 0.5,   # Very Easy
    2: 0.75,  # Easy
    3: 1.0,   # Medium
    4: 1.5,   # Hard
    5: 2.0,   # Extreme
}

DEFAULT_MULTIPLIER = DIFFICULTY_MULTIPLIERS[3]


def difficulty_multiplier(difficulty: int, policy: str = "reject") -> float:
    """Look up the XP multiplier for a difficulty rating.

    Out-of-range ratings raise InvalidArgument under the "reject" policy and
    fall back to the medium multiplier under the "default" policy.
    """
    valid = not isinstance(difficulty, bool) and isinstance(difficulty, int)
    if valid and difficulty in DIFFICULTY_MULTIPLIERS:
        return DIFFICULTY_MULTIPLIERS[difficulty]

    if policy == "default":
        logger.warning(f"Invalid difficulty {difficulty!r}, using multiplier {DEFAULT_MULTIPLIER}")
        return DEFAULT_MULTIPLIER
    if policy == "reject":
        raise InvalidArgument(f"Difficulty must be an integer from 1 to 5, got {difficulty!r}")
    raise InvalidArgument(f"Unknown difficulty policy: {policy!r}")


def compute_xp_reward(difficulty: int, base_xp: int = BASE_XP, policy: str = "reject") -> int:
    """Calculate the XP awarded for one completion, rounded to the nearest 10."""
    raw = base_xp * difficulty_multiplier(difficulty, policy)
    return round_half_up(raw / 10) * 10


def apply_xp_delta(xp: int, delta: int) -> int:
    """Apply an XP change, never going below zero."""
    return max(0, xp + delta)
