"""Rank resolution - XP to a named tier from an ascending threshold table."""

import bisect
import logging
from collections.abc import Sequence

from habitquest.core.errors import InvalidArgument
from habitquest.core.numbers import round_half_up
from habitquest.models.gamification import NextRank, RankListing, RankStatus, RankThreshold
from habitquest.services.levels import validate_xp

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

RANKS: tuple[RankThreshold, ...] = (
    RankThreshold(id="unranked", name="Unranked", min_xp=0, color="#9CA3AF", icon="🌱"),
    RankThreshold(id="bronze", name="Bronze", min_xp=100, color="#CD7F32", icon="🥉"),
    RankThreshold(id="silver", name="Silver", min_xp=300, color="#C0C0C0", icon="🥈"),
    RankThreshold(id="gold", name="Gold", min_xp=600, color="#FFD700", icon="🥇"),
    RankThreshold(id="platinum", name="Platinum", min_xp=1000, color="#E5E4E2", icon="💎"),
    RankThreshold(id="diamond", name="Diamond", min_xp=1500, color="#B9F2FF", icon="💠"),
    RankThreshold(id="master", name="Master", min_xp=2200, color="#9B59B6", icon="🔮"),
    RankThreshold(id="champion", name="Champion", min_xp=3000, color="#E74C3C", icon="👑"),
    RankThreshold(id="legend", name="Legend", min_xp=4000, color="#F39C12", icon="🌟"),
)


# =============================================================================
# RANK CALCULATIONS
# =============================================================================

def validate_rank_table(table: Sequence[RankThreshold]) -> None:
    """Ensure the table is non-empty, starts at 0 XP and strictly increases."""
    if not table:
        raise InvalidArgument("Rank table must not be empty")
    if table[0].min_xp != 0:
        raise InvalidArgument(f"First rank must start at 0 XP, got {table[0].min_xp}")
    for prev, rank in zip(table, table[1:]):
        if rank.min_xp <= prev.min_xp:
            raise InvalidArgument(
                f"Rank thresholds must strictly increase: "
                f"{prev.id}={prev.min_xp} then {rank.id}={rank.min_xp}"
            )


def _rank_index(xp: int, table: Sequence[RankThreshold]) -> int:
    validate_xp(xp)
    validate_rank_table(table)
    # Index of the last threshold <= xp; equality belongs to the higher rank
    return bisect.bisect_right(table, xp, key=lambda rank: rank.min_xp) - 1


def rank_for(xp: int, table: Sequence[RankThreshold] = RANKS) -> RankThreshold:
    """Determine the rank for a cumulative XP total."""
    return table[_rank_index(xp, table)]


def next_rank_for(xp: int, table: Sequence[RankThreshold] = RANKS) -> NextRank | None:
    """Get the rank after the current one, or None at the top rank."""
    index = _rank_index(xp, table)
    if index == len(table) - 1:
        return None

    current = table[index]
    upcoming = table[index + 1]
    progress = round_half_up(100 * (xp - current.min_xp) / (upcoming.min_xp - current.min_xp))

    return NextRank(
        rank=upcoming,
        xp_required=upcoming.min_xp - xp,
        progress=progress,
    )


def compute_rank(xp: int, table: Sequence[RankThreshold] = RANKS) -> RankStatus:
    """Get the current rank and the next one for a cumulative XP total."""
    status = RankStatus(current=rank_for(xp, table), next=next_rank_for(xp, table))
    logger.debug(f"Rank for {xp} XP: {status.current.id}")
    return status


def list_ranks(xp: int, table: Sequence[RankThreshold] = RANKS) -> list[RankListing]:
    """List every rank with whether it is unlocked and whether it is current."""
    current = rank_for(xp, table)
    return [
        RankListing(
            **rank.model_dump(),
            is_unlocked=xp >= rank.min_xp,
            is_current=rank.id == current.id,
        )
        for rank in table
    ]
