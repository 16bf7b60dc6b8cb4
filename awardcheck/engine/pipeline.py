"""Eligibility pipeline orchestrator.

Coordinates one calculation for one event and one program:
  1. Attendance: keep roster teams with a qualification rank > 0
  2. Aggregate each team's best programming and driver runs
  3. Partition attending teams into ranking pools
  4. Rank every pool
  5. Evaluate each team against the program's rules
  6. Sort results into the default presentation order

Every call works on its own copies of the inputs and returns fresh
results; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from awardcheck.engine.evaluator import EligibilityEvaluator, TeamEligibilityResult
from awardcheck.engine.models import QualifyingStanding, Team
from awardcheck.engine.pools import PoolGranularity, PoolKey, build_pools
from awardcheck.engine.programs import Program, ProgramRules, get_program_rules, resolve_program
from awardcheck.engine.skills import RawSkillRun, aggregate_skills
from awardcheck.engine.sorter import sort_results

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PoolSummary:
    """Size and cutoffs of one group."""

    key: PoolKey
    size: int
    qualifying_cutoff: int
    skills_cutoff: int
    programming_only_cutoff: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "pool": str(self.key),
            "size": self.size,
            "qualifying_cutoff": self.qualifying_cutoff,
            "skills_cutoff": self.skills_cutoff,
            "programming_only_cutoff": self.programming_only_cutoff,
        }


@dataclass
class EligibilityReport:
    """Results of one eligibility calculation plus run-level context."""

    program: Program
    rules: ProgramRules
    granularity: PoolGranularity = PoolGranularity.COMBINED
    registered: int = 0
    results: list[TeamEligibilityResult] = field(default_factory=list)
    pools: list[PoolSummary] = field(default_factory=list)

    @property
    def attending(self) -> int:
        return len(self.results)

    @property
    def eligible(self) -> list[TeamEligibilityResult]:
        return [r for r in self.results if r.eligible]

    @property
    def n_eligible(self) -> int:
        return len(self.eligible)

    def to_dict(self) -> dict[str, Any]:
        return {
            "program": self.program.value,
            "granularity": self.granularity.value,
            "registered": self.registered,
            "attending": self.attending,
            "eligible": self.n_eligible,
            "pools": [p.to_dict() for p in self.pools],
            "results": [r.to_dict() for r in self.results],
        }


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def find_attending(
    teams: Iterable[Team],
    standings: Iterable[QualifyingStanding],
) -> tuple[list[Team], dict[int, int]]:
    """Roster teams with a qualification rank > 0, and that rank.

    The first positive standing for a team wins.  Standings for teams not on
    the roster are ignored.
    """
    ranks: dict[int, int] = {}
    for standing in standings:
        if standing.is_ranked and standing.team_id not in ranks:
            ranks[standing.team_id] = int(standing.rank)

    attending: list[Team] = []
    seen: set[int] = set()
    for team in teams:
        if team.id in ranks and team.id not in seen:
            attending.append(team)
            seen.add(team.id)
    return attending, {tid: ranks[tid] for tid in seen}


# ---------------------------------------------------------------------------
# Main entry points
# ---------------------------------------------------------------------------

def run_eligibility(
    teams: Iterable[Team],
    standings: Iterable[QualifyingStanding],
    skill_runs: Iterable[RawSkillRun],
    program: Program | str | int,
    split_by_grade: bool,
    *,
    rules: ProgramRules | None = None,
) -> EligibilityReport:
    """Run the full calculation and return results with pool summaries.

    Parameters:
        teams: Registered roster for the event (or division).
        standings: Raw qualification standings.
        skill_runs: Raw skills runs for the event.
        program: Program selector (enum, code, RobotEvents id, or SKU).
        split_by_grade: Whether this event's award is given per grade.
        rules: Optional override of the program's built-in rules.

    Returns:
        EligibilityReport whose ``results`` are in default sort order.
    """
    resolved = resolve_program(program)
    rules = rules or get_program_rules(resolved)

    roster = tuple(teams)
    attending, qualifying_ranks = find_attending(roster, tuple(standings))
    report = EligibilityReport(program=resolved, rules=rules, registered=len(roster))

    logger.info(
        "%s: %d registered, %d attending",
        resolved.value,
        len(roster),
        len(attending),
    )
    if not attending:
        return report

    skills = aggregate_skills([t.id for t in attending], tuple(skill_runs))
    pools = build_pools(attending, qualifying_ranks, skills, rules, split_by_grade)

    evaluator = EligibilityEvaluator(rules)
    ranked = evaluator.calculator.rank_event(pools)

    results = [evaluator.evaluate(team, skills[team.id], ranked) for team in attending]

    calc = evaluator.calculator
    report.granularity = pools.granularity
    report.pools = [
        PoolSummary(
            key=pool.key,
            size=pool.size,
            qualifying_cutoff=calc.cutoff(pool.size, rules.threshold),
            skills_cutoff=calc.cutoff(pool.size, rules.threshold),
            programming_only_cutoff=(
                calc.cutoff(pool.size, rules.programming_only_threshold)
                if rules.requires_programming_only_rank
                else None
            ),
        )
        for pool in pools.qualifying
    ]
    report.results = sort_results(results)

    logger.info(
        "%s: %d of %d attending teams eligible (%s pools: %s)",
        resolved.value,
        report.n_eligible,
        report.attending,
        pools.granularity.value,
        ", ".join(f"{p.key}={p.size}" for p in report.pools),
    )
    return report


def calculate_eligibility(
    teams: Iterable[Team],
    standings: Iterable[QualifyingStanding],
    skill_runs: Iterable[RawSkillRun],
    program: Program | str | int,
    split_by_grade: bool,
    *,
    rules: ProgramRules | None = None,
) -> list[TeamEligibilityResult]:
    """Eligibility results for every attending team, in default order."""
    return run_eligibility(
        teams, standings, skill_runs, program, split_by_grade, rules=rules
    ).results
