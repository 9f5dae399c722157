"""Achievement evaluation - which achievements a user's stats newly unlock."""

import logging
from collections.abc import Collection, Iterable

from habitquest.models.gamification import (
    AchievementDefinition,
    AchievementProgress,
    AchievementStats,
    UnlockedAchievement,
)

logger = logging.getLogger(__name__)


def catalog_order(catalog: Iterable[AchievementDefinition]) -> list[AchievementDefinition]:
    """Sort by tier ascending, then XP reward ascending (stable for ties)."""
    return sorted(catalog, key=lambda a: (a.tier.order, a.xp_reward))


def metric_value(definition: AchievementDefinition, stats: AchievementStats) -> int:
    """Get the stat an achievement's criteria is measured against."""
    return definition.criteria.value(stats)


def is_met(definition: AchievementDefinition, stats: AchievementStats) -> bool:
    return metric_value(definition, stats) >= definition.criteria.threshold


def evaluate_achievements(
    catalog: Iterable[AchievementDefinition],
    unlocked_ids: Collection[str],
    stats: AchievementStats,
) -> list[UnlockedAchievement]:
    """Find the achievements whose criteria are newly met.

    Already-unlocked achievements are never re-evaluated, so feeding the
    result back into unlocked_ids makes the next call return nothing new.
    """
    newly_unlocked = []

    for definition in catalog_order(catalog):
        if definition.id in unlocked_ids:
            continue
        if not is_met(definition, stats):
            continue

        logger.info(f"Achievement unlocked: {definition.id} (+{definition.xp_reward} XP)")
        newly_unlocked.append(UnlockedAchievement(
            id=definition.id,
            name=definition.name,
            tier=definition.tier,
            xp_reward=definition.xp_reward,
        ))

    return newly_unlocked


def total_xp_reward(unlocked: Iterable[UnlockedAchievement]) -> int:
    return sum(achievement.xp_reward for achievement in unlocked)


def achievement_progress(
    catalog: Iterable[AchievementDefinition],
    unlocked_ids: Collection[str],
    stats: AchievementStats,
) -> list[AchievementProgress]:
    """Get every achievement with its unlock state and progress toward the threshold."""
    results = []
    for definition in catalog_order(catalog):
        current_value = metric_value(definition, stats)
        threshold = definition.criteria.threshold
        is_unlocked = definition.id in unlocked_ids

        if is_unlocked or threshold == 0:
            progress = 1.0
        else:
            progress = min(current_value / threshold, 1.0)

        results.append(AchievementProgress(
            id=definition.id,
            name=definition.name,
            tier=definition.tier,
            is_unlocked=is_unlocked,
            current_value=current_value,
            threshold=threshold,
            progress=progress,
        ))
    return results
