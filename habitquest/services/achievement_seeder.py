"""Achievement seeder - generates the default achievement catalog."""

import math
from typing import Any

from habitquest.models.gamification import AchievementDefinition, AchievementTier

# XP awarded on unlock, per tier
TIER_XP_REWARDS = {
    AchievementTier.BRONZE: 25,
    AchievementTier.SILVER: 50,
    AchievementTier.GOLD: 100,
    AchievementTier.PLATINUM: 250,
    AchievementTier.DIAMOND: 500,
}


def roman_numeral(num: int) -> str:
    """Convert integer to Roman numeral."""
    val = [1000, 900, 500, 400, 100, 90, 50, 40, 10, 9, 5, 4, 1]
    syms = ["M", "CM", "D", "CD", "C", "XC", "L", "XL", "X", "IX", "V", "IV", "I"]
    roman_num = ""
    for i, v in enumerate(val):
        while num >= v:
            roman_num += syms[i]
            num -= v
    return roman_num


def get_tier(position: int, line_length: int) -> AchievementTier:
    """Spread the positions of an achievement line over the tiers, lowest first."""
    tiers = list(AchievementTier)
    index = math.ceil(position * len(tiers) / line_length) - 1
    return tiers[max(0, min(index, len(tiers) - 1))]


def generate_tiered_achievements(
    id_prefix: str,
    name_template: str,
    description_template: str,
    criteria_type: str,
    thresholds: list[int],
    icon: str,
) -> list[dict[str, Any]]:
    """Generate a tiered achievement line."""
    achievements = []
    line_length = len(thresholds)

    for i, threshold in enumerate(thresholds, 1):
        tier = get_tier(i, line_length)
        achievements.append({
            "id": f"{id_prefix}_{threshold}",
            "name": name_template.format(tier=roman_numeral(i)),
            "description": description_template.format(value=threshold),
            "icon": icon,
            "tier": tier,
            "criteria": {"type": criteria_type, "threshold": threshold},
            "xp_reward": TIER_XP_REWARDS[tier],
        })

    return achievements


def generate_all_achievements() -> list[dict[str, Any]]:
    """Generate the raw default achievement definitions."""
    achievements = []

    achievements.extend(generate_tiered_achievements(
        id_prefix="streak",
        name_template="On Fire {tier}",
        description_template="Keep a {value}-day streak going",
        criteria_type="streak",
        thresholds=[3, 7, 14, 30, 100],
        icon="🔥",
    ))

    achievements.extend(generate_tiered_achievements(
        id_prefix="completions",
        name_template="Habit Builder {tier}",
        description_template="Complete habits {value} times",
        criteria_type="total_completions",
        thresholds=[1, 10, 50, 100, 500],
        icon="✅",
    ))

    achievements.extend(generate_tiered_achievements(
        id_prefix="longest",
        name_template="Marathoner {tier}",
        description_template="Reach a best streak of {value} days",
        criteria_type="longest_streak",
        thresholds=[7, 30, 365],
        icon="🏅",
    ))

    return achievements


def generate_default_catalog() -> list[AchievementDefinition]:
    """Build the default catalog as validated definitions."""
    return [AchievementDefinition.model_validate(a) for a in generate_all_achievements()]
