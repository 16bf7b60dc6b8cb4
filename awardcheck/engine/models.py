"""Input records consumed by the eligibility engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UNRANKED = -1
"""Rank sentinel for a team that is absent from a pool."""


@dataclass(frozen=True)
class Team:
    """A registered team.  Passed through to results unmodified."""

    id: int
    number: str
    grade: str | None = None
    name: str = ""
    organization: str = ""
    region: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "grade": self.grade,
            "name": self.name,
            "organization": self.organization,
            "region": self.region,
        }


@dataclass(frozen=True)
class QualifyingStanding:
    """One row of the event's qualification rankings.

    ``rank`` is the externally supplied standing; ``None`` or ``<= 0``
    means the team did not play.
    """

    team_id: int
    rank: int | None = None

    @property
    def is_ranked(self) -> bool:
        return self.rank is not None and self.rank > 0
