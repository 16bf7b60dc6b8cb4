"""Eligibility evaluation -- one verdict per attending team.

A team is eligible only if every criterion that applies to its program holds::

    eligible = in_qualifying_rank
           AND in_skills_rank
           AND (meets_programming_only_rank OR NOT requires_programming_only_rank)
           AND (programming_score > 0 OR NOT requires_programming_score)
           AND (driver_score > 0 OR NOT requires_driver_score)

There is no partial credit.  Each result keeps the rank and cutoff behind
every criterion so the verdict can be explained, not just reported.

All three cutoffs of a group are sized by the group's attending-team count
(its qualifying pool), so "top 40%" means 40% of the same teams for every
criterion.  Teams in the ``NoGrade`` residual pool are reported unranked and
ineligible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from awardcheck.engine.models import UNRANKED, Team
from awardcheck.engine.pools import NoGrade, PoolKey
from awardcheck.engine.programs import ProgramRules
from awardcheck.engine.ranking import RankCalculator, RankedEvent, is_in_rank
from awardcheck.engine.skills import AggregatedTeamSkills


@dataclass(frozen=True)
class TeamEligibilityResult:
    """Eligibility verdict for one attending team, with its evidence."""

    team: Team
    qualifying_rank: int
    qualifying_cutoff: int
    in_qualifying_rank: bool
    skills_rank: int
    skills_cutoff: int
    in_skills_rank: bool
    programming_only_rank: int
    programming_only_cutoff: int
    meets_programming_only_rank: bool
    programming_score: float
    programming_attempts: int
    driver_score: float
    driver_attempts: int
    eligible: bool
    pool_key: PoolKey | None = None
    reasons: tuple[str, ...] = field(default=())
    """Why the team is not eligible (empty when eligible)."""

    def to_dict(self) -> dict[str, Any]:
        """Flat dict for CSV / JSON export."""
        return {
            "team_id": self.team.id,
            "team_number": self.team.number,
            "team_name": self.team.name,
            "grade": self.team.grade,
            "organization": self.team.organization,
            "region": self.team.region,
            "pool": str(self.pool_key) if self.pool_key is not None else None,
            "qualifying_rank": self.qualifying_rank,
            "qualifying_cutoff": self.qualifying_cutoff,
            "in_qualifying_rank": self.in_qualifying_rank,
            "skills_rank": self.skills_rank,
            "skills_cutoff": self.skills_cutoff,
            "in_skills_rank": self.in_skills_rank,
            "programming_only_rank": self.programming_only_rank,
            "programming_only_cutoff": self.programming_only_cutoff,
            "meets_programming_only_rank": self.meets_programming_only_rank,
            "programming_score": self.programming_score,
            "programming_attempts": self.programming_attempts,
            "driver_score": self.driver_score,
            "driver_attempts": self.driver_attempts,
            "eligible": self.eligible,
            "reasons": list(self.reasons),
        }


def _fmt_rank(rank: int) -> str:
    return "unranked" if rank == UNRANKED else f"#{rank}"


class EligibilityEvaluator:
    """Applies one program's rules to ranked pools.

    Usage::

        evaluator = EligibilityEvaluator(rules)
        result = evaluator.evaluate(team, skills[team.id], ranked_event)
    """

    def __init__(self, rules: ProgramRules) -> None:
        self.rules = rules
        self.calculator = RankCalculator(rules.rounding)

    def evaluate(
        self,
        team: Team,
        skills: AggregatedTeamSkills,
        ranked: RankedEvent,
    ) -> TeamEligibilityResult:
        rules = self.rules
        key = ranked.group_of(team.id)
        group_size = ranked.group_size(key) if key is not None else 0

        qual_cutoff = self.calculator.cutoff(group_size, rules.threshold)
        skills_cutoff = self.calculator.cutoff(group_size, rules.threshold)
        prog_cutoff = self.calculator.cutoff(group_size, rules.programming_only_threshold)

        if key is None or isinstance(key, NoGrade):
            qual_rank = skills_rank = prog_rank = UNRANKED
        else:
            qual_rank = ranked.qualifying_position(key, team.id)
            skills_rank = ranked.skills_position(key, team.id)
            prog_rank = (
                ranked.programming_only_position(key, team.id)
                if rules.requires_programming_only_rank
                else UNRANKED
            )

        in_qual = is_in_rank(qual_rank, qual_cutoff)
        in_skills = is_in_rank(skills_rank, skills_cutoff)
        if rules.requires_programming_only_rank:
            meets_prog = is_in_rank(prog_rank, prog_cutoff)
        else:
            meets_prog = True

        has_programming = skills.programming_score > 0
        has_driver = skills.driver_score > 0

        eligible = (
            in_qual
            and in_skills
            and (meets_prog or not rules.requires_programming_only_rank)
            and (has_programming or not rules.requires_programming_score)
            and (has_driver or not rules.requires_driver_score)
        )

        reasons: list[str] = []
        if isinstance(key, NoGrade):
            reasons.append(f"Grade {team.grade!r} is not an award grade for this event")
        if not in_qual:
            reasons.append(
                f"Qualification rank {_fmt_rank(qual_rank)} outside top {qual_cutoff}"
            )
        if not in_skills:
            reasons.append(f"Skills rank {_fmt_rank(skills_rank)} outside top {skills_cutoff}")
        if rules.requires_programming_only_rank and not meets_prog:
            reasons.append(
                f"Programming-only rank {_fmt_rank(prog_rank)} outside top {prog_cutoff}"
            )
        if rules.requires_programming_score and not has_programming:
            reasons.append("No programming score above zero")
        if rules.requires_driver_score and not has_driver:
            reasons.append("No driver score above zero")

        return TeamEligibilityResult(
            team=team,
            qualifying_rank=qual_rank,
            qualifying_cutoff=qual_cutoff,
            in_qualifying_rank=in_qual,
            skills_rank=skills_rank,
            skills_cutoff=skills_cutoff,
            in_skills_rank=in_skills,
            programming_only_rank=prog_rank,
            programming_only_cutoff=prog_cutoff,
            meets_programming_only_rank=meets_prog,
            programming_score=skills.programming_score,
            programming_attempts=skills.programming_attempts,
            driver_score=skills.driver_score,
            driver_attempts=skills.driver_attempts,
            eligible=eligible,
            pool_key=key,
            reasons=tuple(reasons),
        )
