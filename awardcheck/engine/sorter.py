"""Result ordering and presentation-side filtering.

The default order is reproducible regardless of input order: eligible teams
first, then qualification rank ascending with unranked teams last, then team
number and team id.  Alternate keys fall back to the same team number / id
tie-break.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable

from awardcheck.engine.evaluator import TeamEligibilityResult
from awardcheck.engine.models import UNRANKED


class SortKey(Enum):
    TEAM_NUMBER = "team_number"
    TEAM_ID = "team_id"
    GRADE = "grade"
    ORGANIZATION = "organization"
    REGION = "region"
    ELIGIBLE = "eligible"
    QUALIFYING_RANK = "qualifying_rank"
    SKILLS_RANK = "skills_rank"
    DRIVER_SCORE = "driver_score"
    PROGRAMMING_SCORE = "programming_score"

    @classmethod
    def from_name(cls, name: str) -> SortKey:
        normalized = str(name).strip().lower().replace("-", "_").replace(" ", "_")
        aliases = {
            "number": cls.TEAM_NUMBER,
            "team": cls.TEAM_NUMBER,
            "id": cls.TEAM_ID,
            "state": cls.REGION,
            "eligibility": cls.ELIGIBLE,
            "rank": cls.QUALIFYING_RANK,
            "qualifier_rank": cls.QUALIFYING_RANK,
            "skills": cls.SKILLS_RANK,
            "driver": cls.DRIVER_SCORE,
            "programming": cls.PROGRAMMING_SCORE,
        }
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown sort key {name!r}; expected one of: {valid}") from None


def _rank_key(rank: int) -> tuple[bool, int]:
    """Unranked (-1) sorts after every real position."""
    return (rank == UNRANKED, rank)


def _tiebreak(result: TeamEligibilityResult) -> tuple[str, int]:
    return (result.team.number.casefold(), result.team.id)


_KEY_FUNCS: dict[SortKey, Callable[[TeamEligibilityResult], Any]] = {
    SortKey.TEAM_NUMBER: lambda r: r.team.number.casefold(),
    SortKey.TEAM_ID: lambda r: r.team.id,
    SortKey.GRADE: lambda r: (r.team.grade or "").casefold(),
    SortKey.ORGANIZATION: lambda r: (r.team.organization or "").casefold(),
    SortKey.REGION: lambda r: (r.team.region or "").casefold(),
    SortKey.ELIGIBLE: lambda r: r.eligible,
    SortKey.QUALIFYING_RANK: lambda r: _rank_key(r.qualifying_rank),
    SortKey.SKILLS_RANK: lambda r: _rank_key(r.skills_rank),
    SortKey.DRIVER_SCORE: lambda r: r.driver_score,
    SortKey.PROGRAMMING_SCORE: lambda r: r.programming_score,
}


def default_sort_key(result: TeamEligibilityResult) -> tuple:
    return (not result.eligible, *_rank_key(result.qualifying_rank), *_tiebreak(result))


def sort_results(
    results: Iterable[TeamEligibilityResult],
    key: SortKey | str | None = None,
    descending: bool = False,
) -> list[TeamEligibilityResult]:
    """Return a new, ordered list of results.

    With ``key=None`` the default order is used and ``descending`` is
    ignored.
    """
    items = list(results)
    if key is None:
        return sorted(items, key=default_sort_key)

    sort_key = key if isinstance(key, SortKey) else SortKey.from_name(key)
    items.sort(key=_tiebreak)
    # list.sort is stable under reverse=True, so ties keep the tie-break order.
    items.sort(key=_KEY_FUNCS[sort_key], reverse=descending)
    return items


def filter_results(
    results: Iterable[TeamEligibilityResult],
    search: str | None = None,
    grade: str | None = None,
) -> list[TeamEligibilityResult]:
    """Narrow results for display without touching ranks or verdicts.

    ``search`` matches team number, name or organization; ``grade`` matches
    any team grade containing it.  Both are case-insensitive.
    """
    needle = (search or "").strip().casefold()
    grade_needle = (grade or "").strip().casefold()

    filtered: list[TeamEligibilityResult] = []
    for result in results:
        team = result.team
        if grade_needle and grade_needle not in (team.grade or "").casefold():
            continue
        if needle and not any(
            needle in field.casefold()
            for field in (team.number, team.name or "", team.organization or "")
        ):
            continue
        filtered.append(result)
    return filtered
