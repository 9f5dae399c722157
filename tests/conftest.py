"""Shared test fixtures for the gamification calculators.

Provides:
- A fixed "today" so streak walks are reproducible
- Completion record and habit factories
- A small achievement catalog and a configured GamificationService
"""
from datetime import date, timedelta

import pytest

from habitquest.core.config import Settings
from habitquest.models.gamification import (
    AchievementDefinition,
    AchievementTier,
    CompletionRecord,
    HabitSnapshot,
)

# A Sunday
TODAY = date(2026, 3, 15)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep local environment variables from leaking into Settings."""
    for name in (
        "BASE_XP",
        "LEVEL_XP_STEP",
        "STREAK_LOOKBACK_DAYS",
        "INVALID_DIFFICULTY_POLICY",
        "MAX_BONUS_MULTIPLIER",
        "DEBUG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def test_settings():
    return Settings(_env_file=None)


@pytest.fixture
def service(test_settings):
    from habitquest.services.gamification import GamificationService
    return GamificationService(test_settings)


@pytest.fixture
def catalog():
    """Achievements deliberately listed out of tier order."""
    return [
        AchievementDefinition(
            id="streak_30", name="Month Streak", tier=AchievementTier.GOLD,
            criteria={"type": "streak", "threshold": 30}, xp_reward=100,
        ),
        AchievementDefinition(
            id="completions_10", name="Ten Done", tier=AchievementTier.SILVER,
            criteria={"type": "total_completions", "threshold": 10}, xp_reward=50,
        ),
        AchievementDefinition(
            id="streak_3", name="Warming Up", tier=AchievementTier.BRONZE,
            criteria={"type": "streak", "threshold": 3}, xp_reward=30,
        ),
        AchievementDefinition(
            id="completions_1", name="First Step", tier=AchievementTier.BRONZE,
            criteria={"type": "total_completions", "threshold": 1}, xp_reward=25,
        ),
        AchievementDefinition(
            id="longest_7", name="Best Week", tier=AchievementTier.SILVER,
            criteria={"type": "longest_streak", "threshold": 7}, xp_reward=40,
        ),
    ]


# --- Test data factories ---

def make_record(days_ago: int, completed: bool = True, **overrides) -> CompletionRecord:
    """Create a completion record dated relative to TODAY."""
    return CompletionRecord(date=TODAY - timedelta(days=days_ago), completed=completed, **overrides)


def make_records(*days_ago: int) -> list[CompletionRecord]:
    return [make_record(d) for d in days_ago]


def make_habit(habit_id: str = "habit-1", days_ago=(), **overrides) -> HabitSnapshot:
    """Create a habit with completed records on the given days."""
    defaults = {
        "id": habit_id,
        "name": f"Habit {habit_id}",
        "category": "health",
        "difficulty": 3,
        "is_archived": False,
        "records": make_records(*days_ago),
    }
    defaults.update(overrides)
    return HabitSnapshot(**defaults)
