"""Ranking pools -- which teams are ranked against each other.

Three criteria are ranked separately: qualifying rank, combined skills and
programming-only skills.  All three share one *granularity* decision:

  - ``COMBINED``: a single ``Overall`` pool of every attending team.  Used
    when the program never splits awards by grade, or when this event's
    awards are not split.
  - ``BY_GRADE``: one ``Grade(label)`` pool per configured grade label with
    attending members, plus a residual ``NoGrade`` pool for teams whose grade
    matches no label.

Keeping the programming-only pools on the same granularity as the main pools
means "top N% of my group" refers to the same group for every criterion.

Membership filters on top of the group:

  - skills pools only hold teams with at least one recorded run
  - programming-only pools never hold a team with programming score 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Mapping, Sequence, Union

from awardcheck.engine.models import Team
from awardcheck.engine.programs import ProgramRules
from awardcheck.engine.skills import AggregatedTeamSkills

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pool keys
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Overall:
    """Every attending team in one pool."""

    def __str__(self) -> str:
        return "Overall"


@dataclass(frozen=True)
class Grade:
    """Teams whose grade matches one configured partition label."""

    label: str

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class NoGrade:
    """Teams whose grade matches no configured partition label."""

    def __str__(self) -> str:
        return "No grade"


PoolKey = Union[Overall, Grade, NoGrade]

OVERALL = Overall()
NO_GRADE = NoGrade()


class PoolGranularity(Enum):
    COMBINED = "combined"
    BY_GRADE = "by_grade"


class Criterion(Enum):
    """What a pool is ranked by."""
    QUALIFYING = "qualifying"
    SKILLS = "skills"
    PROGRAMMING_ONLY = "programming_only"

    @property
    def descending(self) -> bool:
        """Higher value ranks first (scores), or lower first (standings)."""
        return self is not Criterion.QUALIFYING


# ---------------------------------------------------------------------------
# Pools
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PoolEntry:
    team_id: int
    value: float


@dataclass(frozen=True)
class RankingPool:
    """Unordered members of one pool with the value each is ranked by."""

    key: PoolKey
    criterion: Criterion
    entries: tuple[PoolEntry, ...] = ()

    @property
    def size(self) -> int:
        return len(self.entries)

    def __contains__(self, team_id: object) -> bool:
        return any(e.team_id == team_id for e in self.entries)


@dataclass(frozen=True)
class PoolSet:
    """All pools for one criterion, keyed by ``PoolKey``."""

    criterion: Criterion
    pools: Mapping[PoolKey, RankingPool] = field(default_factory=dict)

    def __iter__(self) -> Iterator[RankingPool]:
        return iter(self.pools.values())

    def __len__(self) -> int:
        return len(self.pools)

    def get(self, key: PoolKey) -> RankingPool:
        """Pool for ``key``; an empty pool if none was built."""
        pool = self.pools.get(key)
        if pool is None:
            return RankingPool(key=key, criterion=self.criterion)
        return pool

    @property
    def keys(self) -> list[PoolKey]:
        return list(self.pools)


@dataclass(frozen=True)
class EventPools:
    """Every pool built for one event, plus each team's group."""

    granularity: PoolGranularity
    groups: Mapping[int, PoolKey]
    """team_id -> the group (pool key) the team is ranked in."""
    qualifying: PoolSet
    skills: PoolSet
    programming_only: PoolSet | None = None
    """Only built when the program has a programming-only criterion."""

    def group_of(self, team_id: int) -> PoolKey | None:
        return self.groups.get(team_id)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def choose_granularity(rules: ProgramRules, split_by_grade: bool) -> PoolGranularity:
    """Grade pools only when the program subdivides AND this event splits."""
    if rules.subdivides_by_grade and split_by_grade:
        return PoolGranularity.BY_GRADE
    return PoolGranularity.COMBINED


def pool_key_for(
    team: Team,
    rules: ProgramRules,
    granularity: PoolGranularity,
) -> PoolKey:
    if granularity is PoolGranularity.COMBINED:
        return OVERALL
    label = rules.match_grade(team.grade)
    return Grade(label) if label is not None else NO_GRADE


def _ordered_keys(rules: ProgramRules, present: set[PoolKey]) -> list[PoolKey]:
    """Pool keys in a stable order: Overall, grade labels as configured, NoGrade."""
    candidates: list[PoolKey] = [OVERALL]
    candidates.extend(Grade(label) for label in rules.grade_partitions)
    candidates.append(NO_GRADE)
    return [key for key in candidates if key in present]


def _pool_set(
    criterion: Criterion,
    keys: list[PoolKey],
    members: Mapping[PoolKey, list[PoolEntry]],
) -> PoolSet:
    return PoolSet(
        criterion=criterion,
        pools={
            key: RankingPool(key=key, criterion=criterion, entries=tuple(members.get(key, ())))
            for key in keys
        },
    )


def build_pools(
    teams: Sequence[Team],
    qualifying_ranks: Mapping[int, int],
    skills: Mapping[int, AggregatedTeamSkills],
    rules: ProgramRules,
    split_by_grade: bool,
) -> EventPools:
    """Partition attending teams into pools for every criterion.

    Parameters:
        teams: Attending teams only.
        qualifying_ranks: team_id -> external qualification rank (> 0).
        skills: team_id -> aggregated best runs.
        rules: The program's rules.
        split_by_grade: Whether this event's awards are given per grade.

    Returns:
        EventPools with qualifying, skills and (if required)
        programming-only pools on one shared granularity.
    """
    granularity = choose_granularity(rules, split_by_grade)

    groups: dict[int, PoolKey] = {}
    qualifying: dict[PoolKey, list[PoolEntry]] = {}
    skills_members: dict[PoolKey, list[PoolEntry]] = {}
    prog_members: dict[PoolKey, list[PoolEntry]] = {}

    for team in teams:
        key = pool_key_for(team, rules, granularity)
        groups[team.id] = key
        qualifying.setdefault(key, []).append(
            PoolEntry(team.id, qualifying_ranks[team.id])
        )

        agg = skills.get(team.id)
        if agg is None:
            continue
        if agg.has_runs:
            skills_members.setdefault(key, []).append(
                PoolEntry(team.id, agg.combined_score)
            )
        if agg.programming_score > 0:
            prog_members.setdefault(key, []).append(
                PoolEntry(team.id, agg.programming_score)
            )

    keys = _ordered_keys(rules, set(qualifying))
    no_grade = len(qualifying.get(NO_GRADE, ()))
    if no_grade:
        logger.debug("%d team(s) match no grade partition", no_grade)

    pools = EventPools(
        granularity=granularity,
        groups=groups,
        qualifying=_pool_set(Criterion.QUALIFYING, keys, qualifying),
        skills=_pool_set(Criterion.SKILLS, keys, skills_members),
        programming_only=(
            _pool_set(Criterion.PROGRAMMING_ONLY, keys, prog_members)
            if rules.requires_programming_only_rank
            else None
        ),
    )

    logger.debug(
        "Pools (%s): %s",
        granularity.value,
        ", ".join(f"{pool.key}={pool.size}" for pool in pools.qualifying),
    )
    return pools
