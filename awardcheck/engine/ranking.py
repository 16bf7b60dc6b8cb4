"""Rank positions and cutoffs within a pool.

Positions are dense and unique: a pool of k teams uses exactly 1..k, each
once.  Equal values do NOT share a position; they take adjacent positions
ordered by team id.  Qualifying pools renumber the external standings
restricted to the pool, so a grade pool always starts at 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from awardcheck.engine.models import UNRANKED
from awardcheck.engine.pools import (
    Criterion,
    EventPools,
    PoolEntry,
    PoolKey,
    PoolSet,
    RankingPool,
)
from awardcheck.engine.rounding import RoundingRule, cutoff


@dataclass(frozen=True)
class RankedPool:
    """A pool with positions assigned, best first."""

    key: PoolKey
    criterion: Criterion
    entries: tuple[PoolEntry, ...] = ()
    positions: Mapping[int, int] = field(default_factory=dict)
    """team_id -> 1-based position."""

    @property
    def size(self) -> int:
        return len(self.entries)

    def position_of(self, team_id: int) -> int:
        """1-based position, or ``UNRANKED`` if the team is not in the pool."""
        return self.positions.get(team_id, UNRANKED)


def order_entries(entries: tuple[PoolEntry, ...], descending: bool) -> tuple[PoolEntry, ...]:
    """Sort by value (descending for scores), ties by team id ascending."""
    if descending:
        return tuple(sorted(entries, key=lambda e: (-e.value, e.team_id)))
    return tuple(sorted(entries, key=lambda e: (e.value, e.team_id)))


def rank_pool(pool: RankingPool) -> RankedPool:
    """Assign dense positions 1..k to a pool's members."""
    ordered = order_entries(pool.entries, pool.criterion.descending)
    positions = {entry.team_id: index for index, entry in enumerate(ordered, start=1)}
    return RankedPool(
        key=pool.key,
        criterion=pool.criterion,
        entries=ordered,
        positions=positions,
    )


def is_in_rank(position: int, cutoff_value: int) -> bool:
    return 0 < position <= cutoff_value


class RankCalculator:
    """Ranks pools and computes cutoffs under one program's rounding rule.

    Usage::

        calc = RankCalculator(rules.rounding)
        ranked = calc.rank_all(pools.qualifying)
        limit = calc.cutoff(ranked[key].size, rules.threshold)
    """

    def __init__(self, rounding: RoundingRule) -> None:
        self.rounding = rounding

    def rank_all(self, pool_set: PoolSet) -> dict[PoolKey, RankedPool]:
        return {pool.key: rank_pool(pool) for pool in pool_set}

    def cutoff(self, pool_size: int, threshold: float) -> int:
        return cutoff(pool_size, threshold, self.rounding)

    def in_rank(self, position: int, pool_size: int, threshold: float) -> bool:
        return is_in_rank(position, self.cutoff(pool_size, threshold))

    def rank_event(self, pools: EventPools) -> RankedEvent:
        """Rank every pool of every criterion."""
        return RankedEvent(
            pools=pools,
            qualifying=self.rank_all(pools.qualifying),
            skills=self.rank_all(pools.skills),
            programming_only=(
                self.rank_all(pools.programming_only)
                if pools.programming_only is not None
                else None
            ),
        )


@dataclass(frozen=True)
class RankedEvent:
    """Ranked pools for every criterion of one event."""

    pools: EventPools
    qualifying: Mapping[PoolKey, RankedPool]
    skills: Mapping[PoolKey, RankedPool]
    programming_only: Mapping[PoolKey, RankedPool] | None = None

    def group_of(self, team_id: int) -> PoolKey | None:
        return self.pools.group_of(team_id)

    def group_size(self, key: PoolKey) -> int:
        """Number of attending teams in a group (its qualifying pool size)."""
        pool = self.qualifying.get(key)
        return pool.size if pool is not None else 0

    @staticmethod
    def _lookup(ranked: Mapping[PoolKey, RankedPool] | None, key: PoolKey, team_id: int) -> int:
        if ranked is None or key not in ranked:
            return UNRANKED
        return ranked[key].position_of(team_id)

    def qualifying_position(self, key: PoolKey, team_id: int) -> int:
        return self._lookup(self.qualifying, key, team_id)

    def skills_position(self, key: PoolKey, team_id: int) -> int:
        return self._lookup(self.skills, key, team_id)

    def programming_only_position(self, key: PoolKey, team_id: int) -> int:
        return self._lookup(self.programming_only, key, team_id)
