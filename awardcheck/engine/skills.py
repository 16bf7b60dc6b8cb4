"""Skills aggregation -- best programming and driver run per team.

A team may record several runs of each kind.  Only the single best run of
each kind counts: its score, and the attempts value reported with *that*
run (attempts are never summed across runs).

Runs are folded in one pass keyed by ``(team_id, kind)``.  A later run
replaces the held one only with a strictly higher score, so on equal
scores the first-seen run is kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping


class SkillKind(Enum):
    PROGRAMMING = "programming"
    DRIVER = "driver"

    @classmethod
    def parse(cls, value: str | SkillKind | None) -> SkillKind | None:
        """Parse a RobotEvents skill type.  Returns None for other kinds."""
        if isinstance(value, SkillKind):
            return value
        if value is None:
            return None
        key = str(value).strip().lower()
        aliases = {
            "programming": cls.PROGRAMMING,
            "auton": cls.PROGRAMMING,
            "autonomous": cls.PROGRAMMING,
            "driver": cls.DRIVER,
            "pilot": cls.DRIVER,
        }
        return aliases.get(key)


@dataclass(frozen=True)
class RawSkillRun:
    """One skills run as reported by the event."""

    team_id: int
    kind: SkillKind
    score: float = 0
    attempts: int = 0


@dataclass(frozen=True)
class AggregatedTeamSkills:
    """Best run of each kind for one team."""

    team_id: int
    programming_score: float = 0
    programming_attempts: int = 0
    driver_score: float = 0
    driver_attempts: int = 0
    has_runs: bool = False
    """True if the team recorded at least one run of either kind."""

    @property
    def combined_score(self) -> float:
        return self.programming_score + self.driver_score


def best_runs(
    runs: Iterable[RawSkillRun],
    team_ids: Iterable[int] | None = None,
) -> dict[tuple[int, SkillKind], RawSkillRun]:
    """Fold runs into the best run per ``(team_id, kind)``.

    If ``team_ids`` is given, runs for other teams are ignored.
    """
    wanted = None if team_ids is None else set(team_ids)
    best: dict[tuple[int, SkillKind], RawSkillRun] = {}
    for run in runs:
        if wanted is not None and run.team_id not in wanted:
            continue
        key = (run.team_id, run.kind)
        held = best.get(key)
        if held is None or run.score > held.score:
            best[key] = run
    return best


def aggregate_skills(
    team_ids: Iterable[int],
    runs: Iterable[RawSkillRun],
) -> Mapping[int, AggregatedTeamSkills]:
    """Reduce raw runs to one ``AggregatedTeamSkills`` per team.

    Every team in ``team_ids`` gets a record, zeros included, in
    ``team_ids`` order.
    """
    ids = list(dict.fromkeys(team_ids))
    best = best_runs(runs, ids)

    result: dict[int, AggregatedTeamSkills] = {}
    for team_id in ids:
        prog = best.get((team_id, SkillKind.PROGRAMMING))
        drv = best.get((team_id, SkillKind.DRIVER))
        result[team_id] = AggregatedTeamSkills(
            team_id=team_id,
            programming_score=prog.score if prog else 0,
            programming_attempts=prog.attempts if prog else 0,
            driver_score=drv.score if drv else 0,
            driver_attempts=drv.attempts if drv else 0,
            has_runs=prog is not None or drv is not None,
        )
    return result
