from habitquest.models.gamification import (
    AchievementDefinition,
    AchievementProgress,
    AchievementStats,
    AchievementTier,
    CompletionRecord,
    Criteria,
    GamificationStatus,
    HabitSnapshot,
    LevelProgress,
    LongestStreakCriteria,
    RankStatus,
    RankThreshold,
    ResourceType,
    StreakCriteria,
    TotalCompletionsCriteria,
    UnlockedAchievement,
    UserAggregate,
    UserSnapshot,
)

__all__ = [
    "AchievementDefinition",
    "AchievementProgress",
    "AchievementStats",
    "AchievementTier",
    "CompletionRecord",
    "Criteria",
    "GamificationStatus",
    "HabitSnapshot",
    "LevelProgress",
    "LongestStreakCriteria",
    "RankStatus",
    "RankThreshold",
    "ResourceType",
    "StreakCriteria",
    "TotalCompletionsCriteria",
    "UnlockedAchievement",
    "UserAggregate",
    "UserSnapshot",
]
