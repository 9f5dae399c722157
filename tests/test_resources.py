"""Tests for the resource economy: daily bonus, streak repair pricing, balances."""
from datetime import date

import pytest
from pydantic import ValidationError

from habitquest.core.errors import InsufficientResources, InvalidArgument
from habitquest.models.gamification import ResourceCost, ResourceType
from habitquest.services.resources import (
    daily_bonus,
    grant,
    repair_target_day,
    resource_balances,
    spend,
    streak_repair_cost,
)
from tests.conftest import TODAY


class TestDailyBonus:
    """One extra multiplier step per full week of streak, capped."""

    def test_no_streak(self):
        bonus = daily_bonus(0)
        assert (bonus.multiplier, bonus.gold, bonus.xp) == (1, 10, 5)

    def test_first_week_boundary(self):
        assert daily_bonus(6).multiplier == 1
        assert daily_bonus(7).multiplier == 2

    def test_rewards_scale_with_multiplier(self):
        bonus = daily_bonus(14)
        assert (bonus.multiplier, bonus.gold, bonus.xp) == (3, 30, 15)

    def test_capped(self):
        assert daily_bonus(28).multiplier == 5
        assert daily_bonus(365).multiplier == 5
        assert daily_bonus(365, max_multiplier=3).multiplier == 3

    def test_negative_streak_rejected(self):
        with pytest.raises(InvalidArgument):
            daily_bonus(-1)


class TestStreakRepairCost:
    """Repairing further back costs rarer resources."""

    def test_yesterday_costs_gold(self):
        assert streak_repair_cost(1) == ResourceCost(resource=ResourceType.GOLD, amount=50)

    @pytest.mark.parametrize("days_ago", [2, 3])
    def test_recent_costs_elixir(self, days_ago):
        assert streak_repair_cost(days_ago) == ResourceCost(resource=ResourceType.ELIXIR, amount=25)

    @pytest.mark.parametrize("days_ago", [4, 5, 7])
    def test_old_costs_dark_matter(self, days_ago):
        assert streak_repair_cost(days_ago) == ResourceCost(resource=ResourceType.DARK_MATTER, amount=10)

    @pytest.mark.parametrize("days_ago", [0, 8, -1, 1.0, True])
    def test_out_of_range_rejected(self, days_ago):
        with pytest.raises(InvalidArgument, match="repair"):
            streak_repair_cost(days_ago)

    def test_target_day(self):
        assert repair_target_day(TODAY, 1) == date(2026, 3, 14)
        assert repair_target_day("2026-03-15", 7) == date(2026, 3, 8)


class TestBalances:
    """Tests for resource_balances and spend."""

    def test_missing_resources_are_zero(self):
        assert resource_balances() == {resource: 0 for resource in ResourceType}

    def test_accepts_string_keys(self):
        balances = resource_balances({"GOLD": 5})
        assert balances[ResourceType.GOLD] == 5
        assert balances[ResourceType.GEMS] == 0

    def test_unknown_resource_rejected(self):
        with pytest.raises(InvalidArgument, match="Unknown resource"):
            resource_balances({"SILVER": 1})

    def test_spend_deducts(self):
        balances = {ResourceType.GOLD: 60}
        updated = spend(balances, ResourceCost(resource=ResourceType.GOLD, amount=50))
        assert updated[ResourceType.GOLD] == 10
        assert balances[ResourceType.GOLD] == 60

    def test_spend_exact_balance(self):
        updated = spend({ResourceType.ELIXIR: 25}, ResourceCost(resource=ResourceType.ELIXIR, amount=25))
        assert updated[ResourceType.ELIXIR] == 0

    def test_insufficient(self):
        with pytest.raises(InsufficientResources, match="Not enough GOLD. Need 50, have 10"):
            spend({ResourceType.GOLD: 10}, ResourceCost(resource=ResourceType.GOLD, amount=50))

    def test_insufficient_is_invalid_argument(self):
        with pytest.raises(InvalidArgument):
            spend({}, ResourceCost(resource=ResourceType.GEMS, amount=1))

    def test_grant_credits(self):
        balances = {ResourceType.GOLD: 5}
        updated = grant(balances, ResourceType.GOLD, 30)
        assert updated[ResourceType.GOLD] == 35
        assert updated[ResourceType.ELIXIR] == 0
        assert balances[ResourceType.GOLD] == 5

    def test_grant_accepts_string_resource(self):
        assert grant({}, "GEMS", 2)[ResourceType.GEMS] == 2

    @pytest.mark.parametrize("amount", [0, -5, 1.5, True])
    def test_grant_rejects_non_positive_amount(self, amount):
        with pytest.raises(InvalidArgument, match="Grant amount"):
            grant({}, ResourceType.GOLD, amount)

    def test_grant_rejects_unknown_resource(self):
        with pytest.raises(InvalidArgument, match="Unknown resource"):
            grant({}, "SILVER", 1)


class TestRepairCostsAreShared:
    """Repair prices are shared constants and cannot be altered through a caller's copy."""

    def test_returned_cost_is_read_only(self):
        cost = streak_repair_cost(1)
        with pytest.raises(ValidationError):
            cost.amount = 1
        assert streak_repair_cost(1).amount == 50
