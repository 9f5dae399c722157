"""Gamification models for completions, XP, levels, ranks, and achievements."""

import datetime as dt
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from habitquest.core.errors import InvalidArgument


def to_day(value: Any) -> dt.date:
    """Truncate a date, datetime, or ISO string to its calendar day."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.datetime.fromisoformat(value.strip()).date()
        except ValueError as e:
            raise InvalidArgument(f"Malformed date: {value!r}") from e
    raise InvalidArgument(f"Expected a date, got {type(value).__name__}: {value!r}")


class ResourceType(str, Enum):
    """Currencies a user can hold."""
    GOLD = "GOLD"
    ELIXIR = "ELIXIR"
    DARK_MATTER = "DARK_MATTER"
    GEMS = "GEMS"


class AchievementTier(str, Enum):
    """Achievement tiers, lowest first."""
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"

    @property
    def order(self) -> int:
        return list(AchievementTier).index(self)


# =============================================================================
# COMPLETIONS AND USERS
# =============================================================================

class CompletionRecord(BaseModel):
    """Evidence that a habit was performed on a calendar day."""

    date: dt.date = Field(description="Calendar day of the completion (time truncated)")
    completed: bool = Field(default=True, description="False for a record that was un-ticked")
    value: float | None = Field(default=None, description="Measured quantity for numeric habits")

    @field_validator("date", mode="before")
    @classmethod
    def truncate_date(cls, value: Any) -> dt.date:
        return to_day(value)


class HabitSnapshot(BaseModel):
    """Read-only view of one habit and its completion history."""

    id: str
    name: str = ""
    category: str = "other"
    difficulty: int = Field(default=3, description="1 (very easy) to 5 (extreme)")
    is_archived: bool = False
    records: list[CompletionRecord] = Field(default_factory=list)


class UserAggregate(BaseModel):
    """Persisted per-user counters."""

    xp: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)


class UserSnapshot(UserAggregate):
    """Everything the calculators need to know about one user."""

    habits: list[HabitSnapshot] = Field(default_factory=list)
    unlocked_achievement_ids: set[str] = Field(default_factory=set)


# =============================================================================
# LEVELS AND RANKS
# =============================================================================

class LevelProgress(BaseModel):
    """Level derived from XP and the progress toward the next one."""

    level: int
    current_level_xp: int = Field(description="XP at which the current level starts")
    next_level_xp: int = Field(description="XP at which the next level starts")
    xp_in_level: int
    xp_for_next_level: int
    progress_percent: int = Field(ge=0, le=100)


class RankThreshold(BaseModel):
    """One entry of the rank table."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    min_xp: int = Field(ge=0)
    color: str = "#9CA3AF"
    icon: str = ""


class NextRank(BaseModel):
    """The rank after the current one and how far away it is."""

    model_config = ConfigDict(frozen=True)

    rank: RankThreshold
    xp_required: int = Field(description="XP still needed to reach this rank")
    progress: int = Field(description="Percent of the way from the current rank")


class RankStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: RankThreshold
    next: NextRank | None = Field(default=None, description="None once the top rank is reached")


class RankListing(RankThreshold):
    is_unlocked: bool
    is_current: bool


# =============================================================================
# ACHIEVEMENTS
# =============================================================================

class StreakCriteria(BaseModel):
    """Unlocks when the current user streak reaches the threshold."""

    type: Literal["streak"] = "streak"
    threshold: int = Field(ge=0)

    def value(self, stats: "AchievementStats") -> int:
        return stats.current_streak


class TotalCompletionsCriteria(BaseModel):
    """Unlocks when the all-time completion count reaches the threshold."""

    type: Literal["total_completions"] = "total_completions"
    threshold: int = Field(ge=0)

    def value(self, stats: "AchievementStats") -> int:
        return stats.total_completions


class LongestStreakCriteria(BaseModel):
    """Unlocks when the best streak ever reaches the threshold."""

    type: Literal["longest_streak"] = "longest_streak"
    threshold: int = Field(ge=0)

    def value(self, stats: "AchievementStats") -> int:
        return stats.longest_streak


Criteria = Annotated[
    Union[StreakCriteria, TotalCompletionsCriteria, LongestStreakCriteria],
    Field(discriminator="type"),
]


class AchievementDefinition(BaseModel):
    """Static achievement definition shared by all users."""

    id: str
    name: str
    description: str = ""
    icon: str = ""
    tier: AchievementTier = AchievementTier.BRONZE
    criteria: Criteria
    xp_reward: int = Field(ge=0, description="XP awarded on unlock")


class AchievementStats(BaseModel):
    """User aggregates the achievement criteria are evaluated against."""

    current_streak: int = Field(default=0, ge=0)
    total_completions: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)


class UnlockedAchievement(BaseModel):
    id: str
    name: str
    tier: AchievementTier
    xp_reward: int


class AchievementProgress(BaseModel):
    id: str
    name: str
    tier: AchievementTier
    is_unlocked: bool
    current_value: int
    threshold: int
    progress: float = Field(ge=0.0, le=1.0)


# =============================================================================
# RESOURCES AND STATS
# =============================================================================

class DailyBonus(BaseModel):
    multiplier: int
    gold: int
    xp: int


class ResourceCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource: ResourceType
    amount: int = Field(gt=0)


class HabitStats(BaseModel):
    """Per-habit completion statistics."""

    last_30_days: int
    completion_rate: int = Field(description="Percent of the last 30 days completed")
    total_all_time: int


Period = Literal["week", "month", "year", "all"]


class PeriodStats(BaseModel):
    """Completion statistics across all habits for a period."""

    period: Period
    total_completions: int
    unique_days: int
    by_category: dict[str, int]
    by_day_of_week: dict[int, int] = Field(description="0 = Sunday ... 6 = Saturday")
    completion_rate: int


# =============================================================================
# SERVICE RESULTS
# =============================================================================

class GamificationStatus(BaseModel):
    """Result of recomputing a user's gamification state."""

    current_streak: int
    longest_streak: int
    total_completions: int
    xp_before: int
    xp: int
    xp_awarded: int
    level_before: int
    level: LevelProgress
    leveled_up: bool
    rank: RankStatus
    rank_changed: bool
    newly_unlocked: list[UnlockedAchievement]


class ToggleResult(BaseModel):
    completed: bool
    xp_change: int = Field(description="Applied change, after clamping XP at zero")
    xp: int
    message: str


class HabitStatus(BaseModel):
    """A habit's computed fields as shown next to it in a habit list."""

    id: str
    current_streak: int
    is_completed_today: bool
    xp_reward: int
    stats: HabitStats


class StreakRepair(BaseModel):
    """Outcome of paying to backfill a missed day."""

    target_day: dt.date
    cost: ResourceCost
    balances: dict[ResourceType, int]


class DailyBonusClaim(BaseModel):
    """Outcome of claiming the once-a-day bonus."""

    bonus: DailyBonus
    claimed_on: dt.date = Field(description="Persist as the user's last claim day")
    xp: int
    balances: dict[ResourceType, int]
