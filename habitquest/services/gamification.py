"""Gamification service - recomputes streaks, levels, ranks, and achievements.

The service holds configuration only. Every call takes a read-only snapshot
and returns the values the caller should persist, so it is the single source
of truth for a user's streak and XP; client-side counters are projections to
be replaced by the result of recompute().
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

from habitquest.core.config import Settings, settings as default_settings
from habitquest.core.errors import InvalidArgument
from habitquest.models.gamification import (
    AchievementDefinition,
    AchievementStats,
    DailyBonusClaim,
    GamificationStatus,
    HabitSnapshot,
    HabitStatus,
    RankThreshold,
    ResourceType,
    StreakRepair,
    ToggleResult,
    UserSnapshot,
    to_day,
)
from habitquest.services.achievements import evaluate_achievements, total_xp_reward
from habitquest.services.levels import compute_level, level_progress
from habitquest.services.ranks import RANKS, compute_rank, rank_for, validate_rank_table
from habitquest.services.resources import (
    daily_bonus,
    grant,
    repair_target_day,
    spend,
    streak_repair_cost,
)
from habitquest.services.rewards import apply_xp_delta, compute_xp_reward
from habitquest.services.stats import habit_stats
from habitquest.services.streaks import compute_streak, compute_user_streak, update_longest_streak

logger = logging.getLogger(__name__)


def total_completions(habits: Iterable[HabitSnapshot]) -> int:
    """Count completed (habit, day) pairs across all habits, archived ones included."""
    return len({
        (habit.id, record.date)
        for habit in habits
        for record in habit.records
        if record.completed
    })


class GamificationService:
    """Stateless calculator facade configured by Settings."""

    def __init__(
        self,
        config: Settings | None = None,
        ranks: Sequence[RankThreshold] = RANKS,
    ):
        self.settings = config or default_settings
        validate_rank_table(ranks)
        self.ranks = tuple(ranks)

    def xp_reward(self, difficulty: int) -> int:
        """XP for one completion of a habit with the given difficulty."""
        return compute_xp_reward(
            difficulty,
            base_xp=self.settings.base_xp,
            policy=self.settings.invalid_difficulty_policy,
        )

    def recompute(
        self,
        user: UserSnapshot,
        catalog: Iterable[AchievementDefinition],
        today: date | datetime | str,
    ) -> GamificationStatus:
        """Run streak -> level/rank -> achievements for one user.

        Achievement XP is added before the final level and rank are derived,
        so a level up caused by an unlock is reported in the same pass.
        """
        day = to_day(today)
        step = self.settings.level_xp_step

        streak = compute_user_streak(user.habits, day, self.settings.streak_lookback_days)
        aggregate = update_longest_streak(user, streak)
        completions = total_completions(user.habits)

        stats = AchievementStats(
            current_streak=aggregate.current_streak,
            total_completions=completions,
            longest_streak=aggregate.longest_streak,
        )
        unlocked = evaluate_achievements(catalog, user.unlocked_achievement_ids, stats)
        awarded = total_xp_reward(unlocked)

        xp = apply_xp_delta(user.xp, awarded)
        level_before = compute_level(user.xp, step)
        level = level_progress(xp, step)
        rank_before = rank_for(user.xp, self.ranks)
        rank = compute_rank(xp, self.ranks)

        if level.level > level_before:
            logger.info(f"Level up: {level_before} -> {level.level} ({xp} XP)")
        if rank.current.id != rank_before.id:
            logger.info(f"Rank changed: {rank_before.id} -> {rank.current.id}")

        return GamificationStatus(
            current_streak=aggregate.current_streak,
            longest_streak=aggregate.longest_streak,
            total_completions=completions,
            xp_before=user.xp,
            xp=xp,
            xp_awarded=awarded,
            level_before=level_before,
            level=level,
            leveled_up=level.level > level_before,
            rank=rank,
            rank_changed=rank.current.id != rank_before.id,
            newly_unlocked=unlocked,
        )

    def toggle_completion(
        self,
        user_xp: int,
        difficulty: int,
        currently_completed: bool,
        day: date | datetime | str,
        today: date | datetime | str,
    ) -> ToggleResult:
        """Work out the XP change of ticking or un-ticking a habit for a day."""
        day = to_day(day)
        if day > to_day(today):
            raise InvalidArgument("Cannot complete habits for future dates")

        reward = self.xp_reward(difficulty)

        if currently_completed:
            xp = apply_xp_delta(user_xp, -reward)
            return ToggleResult(
                completed=False,
                xp_change=xp - user_xp,
                xp=xp,
                message="Habit unmarked",
            )

        xp = apply_xp_delta(user_xp, reward)
        return ToggleResult(
            completed=True,
            xp_change=reward,
            xp=xp,
            message=f"Habit completed! +{reward} XP",
        )

    def habit_status(self, habit: HabitSnapshot, today: date | datetime | str) -> HabitStatus:
        """Compute the per-habit fields shown in a habit list."""
        day = to_day(today)
        return HabitStatus(
            id=habit.id,
            current_streak=compute_streak(habit.records, day, self.settings.streak_lookback_days),
            is_completed_today=any(r.completed and r.date == day for r in habit.records),
            xp_reward=self.xp_reward(habit.difficulty),
            stats=habit_stats(habit.records, day),
        )

    def claim_daily_bonus(
        self,
        user_xp: int,
        current_streak: int,
        balances: Mapping[ResourceType, int],
        last_claimed: date | datetime | str | None,
        today: date | datetime | str,
    ) -> DailyBonusClaim:
        """Pay out the streak-scaled daily bonus, at most once per calendar day.

        The gold is credited to the balances and the XP added to user_xp.
        """
        day = to_day(today)
        if last_claimed is not None and to_day(last_claimed) >= day:
            raise InvalidArgument("Daily bonus already claimed today")

        bonus = daily_bonus(current_streak, self.settings.max_bonus_multiplier)
        updated = grant(balances, ResourceType.GOLD, bonus.gold)
        xp = apply_xp_delta(user_xp, bonus.xp)
        logger.info(f"Daily bonus claimed: x{bonus.multiplier}, +{bonus.gold} GOLD, +{bonus.xp} XP")
        return DailyBonusClaim(bonus=bonus, claimed_on=day, xp=xp, balances=updated)

    def repair_streak(
        self,
        balances: Mapping[ResourceType, int],
        days_ago: int,
        today: date | datetime | str,
    ) -> StreakRepair:
        """Price a streak repair and deduct it from the balances.

        The caller backfills completions for every active habit on target_day.
        """
        cost = streak_repair_cost(days_ago)
        updated = spend(balances, cost)
        target = repair_target_day(today, days_ago)
        logger.info(f"Streak repaired for {target} using {cost.amount} {cost.resource.value}")
        return StreakRepair(target_day=target, cost=cost, balances=updated)
