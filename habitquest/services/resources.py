"""Resource economy - daily bonuses, streak repair pricing, and balances."""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta

from habitquest.core.errors import InsufficientResources, InvalidArgument
from habitquest.models.gamification import DailyBonus, ResourceCost, ResourceType, to_day

logger = logging.getLogger(__name__)

MAX_BONUS_MULTIPLIER = 5
DAILY_BONUS_GOLD = 10
DAILY_BONUS_XP = 5

MAX_REPAIR_DAYS = 7

# Repairing further back costs rarer resources
REPAIR_COST_YESTERDAY = ResourceCost(resource=ResourceType.GOLD, amount=50)
REPAIR_COST_RECENT = ResourceCost(resource=ResourceType.ELIXIR, amount=25)  # 2-3 days ago
REPAIR_COST_OLD = ResourceCost(resource=ResourceType.DARK_MATTER, amount=10)  # 4-7 days ago


def daily_bonus(current_streak: int, max_multiplier: int = MAX_BONUS_MULTIPLIER) -> DailyBonus:
    """Calculate the daily bonus: one extra multiplier step per full week of streak."""
    if current_streak < 0:
        raise InvalidArgument(f"Streak must be non-negative, got {current_streak}")
    multiplier = min(current_streak // 7 + 1, max_multiplier)
    return DailyBonus(
        multiplier=multiplier,
        gold=DAILY_BONUS_GOLD * multiplier,
        xp=DAILY_BONUS_XP * multiplier,
    )


def streak_repair_cost(days_ago: int) -> ResourceCost:
    """Get the price of backfilling a missed day 1 to 7 days ago."""
    if isinstance(days_ago, bool) or not isinstance(days_ago, int) or not 1 <= days_ago <= MAX_REPAIR_DAYS:
        raise InvalidArgument(f"Can only repair 1 to {MAX_REPAIR_DAYS} days ago, got {days_ago!r}")
    if days_ago == 1:
        return REPAIR_COST_YESTERDAY
    elif days_ago <= 3:
        return REPAIR_COST_RECENT
    return REPAIR_COST_OLD


def repair_target_day(today: date | datetime | str, days_ago: int) -> date:
    """Get the day whose completions a streak repair backfills."""
    streak_repair_cost(days_ago)
    return to_day(today) - timedelta(days=days_ago)


def parse_resource(resource: ResourceType | str) -> ResourceType:
    try:
        return ResourceType(resource)
    except ValueError as e:
        raise InvalidArgument(f"Unknown resource type: {resource!r}") from e


def resource_balances(amounts: Mapping[ResourceType | str, int] | None = None) -> dict[ResourceType, int]:
    """Normalise stored balances so every resource type is present."""
    balances = {resource: 0 for resource in ResourceType}
    for resource, amount in (amounts or {}).items():
        balances[parse_resource(resource)] = amount
    return balances


def grant(balances: Mapping[ResourceType, int], resource: ResourceType | str, amount: int) -> dict[ResourceType, int]:
    """Credit a reward, returning the new balances."""
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
        raise InvalidArgument(f"Grant amount must be a positive integer, got {amount!r}")
    resource = parse_resource(resource)
    updated = resource_balances(balances)
    updated[resource] += amount
    logger.debug(f"Granted {amount} {resource.value}, {updated[resource]} total")
    return updated


def spend(balances: Mapping[ResourceType, int], cost: ResourceCost) -> dict[ResourceType, int]:
    """Pay a cost, returning the new balances."""
    updated = resource_balances(balances)
    have = updated[cost.resource]
    if have < cost.amount:
        raise InsufficientResources(
            f"Not enough {cost.resource.value}. Need {cost.amount}, have {have}"
        )
    updated[cost.resource] = have - cost.amount
    logger.debug(f"Spent {cost.amount} {cost.resource.value}, {updated[cost.resource]} left")
    return updated
