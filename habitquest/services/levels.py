"""Level calculations - XP to level and progress within a level.

Level n starts at LEVEL_XP_STEP * (n - 1)^2 cumulative XP, so level 1 covers
0-49, level 2 covers 50-199, level 3 covers 200-449 and so on.
"""

import logging
import math

from habitquest.core.errors import InvalidArgument
from habitquest.core.numbers import clamp, round_half_up
from habitquest.models.gamification import LevelProgress

logger = logging.getLogger(__name__)

LEVEL_XP_STEP = 50


def validate_xp(xp: int) -> int:
    """Return xp unchanged if it is a non-negative integer."""
    if isinstance(xp, bool) or not isinstance(xp, int):
        raise InvalidArgument(f"XP must be an integer, got {type(xp).__name__}: {xp!r}")
    if xp < 0:
        raise InvalidArgument(f"XP must be non-negative, got {xp}")
    return xp


def compute_level(xp: int, step: int = LEVEL_XP_STEP) -> int:
    """Calculate the level for a cumulative XP total: floor(sqrt(xp / step)) + 1."""
    validate_xp(xp)
    # isqrt(xp // step) == floor(sqrt(xp / step)) for integers, without float error
    return math.isqrt(xp // step) + 1


def xp_for_level(level: int, step: int = LEVEL_XP_STEP) -> int:
    """Calculate the cumulative XP at which a level starts."""
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise InvalidArgument(f"Level must be an integer >= 1, got {level!r}")
    return step * (level - 1) ** 2


def level_progress(xp: int, step: int = LEVEL_XP_STEP) -> LevelProgress:
    """Get the level for xp and the progress toward the next level."""
    level = compute_level(xp, step)
    floor_xp = xp_for_level(level, step)
    ceil_xp = xp_for_level(level + 1, step)

    xp_in_level = xp - floor_xp
    xp_for_next_level = ceil_xp - floor_xp
    percent = clamp(round_half_up(100 * xp_in_level / xp_for_next_level), 0, 100)

    logger.debug(f"Level for {xp} XP: {level} ({percent}% to {level + 1})")

    return LevelProgress(
        level=level,
        current_level_xp=floor_xp,
        next_level_xp=ceil_xp,
        xp_in_level=xp_in_level,
        xp_for_next_level=xp_for_next_level,
        progress_percent=percent,
    )
