"""Shared test fixtures for awardcheck.

Provides small, deterministic events (rosters, standings and skills runs)
for the engine, reader, report and CLI tests.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from awardcheck.config.schema import AwardCheckConfig
from awardcheck.engine.models import QualifyingStanding, Team
from awardcheck.engine.programs import Program, get_program_rules
from awardcheck.engine.skills import RawSkillRun, SkillKind

# ---------------------------------------------------------------------------
# Core infrastructure
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> AwardCheckConfig:
    """Config with only the built-in program rules."""
    return AwardCheckConfig()


@pytest.fixture
def adc_rules():
    return get_program_rules(Program.ADC)


@pytest.fixture
def v5rc_rules():
    return get_program_rules(Program.V5RC)


# ---------------------------------------------------------------------------
# Events (deterministic)
# ---------------------------------------------------------------------------

@pytest.fixture
def ten_team_event() -> tuple[list[Team], list[QualifyingStanding], list[RawSkillRun]]:
    """10 teams ranked 1..10; skills scores fall with qualification rank.

    Team ``i`` has id ``100 + i``, number ``f"{i}A"``, programming score
    ``100 - 5i`` and driver score ``50 - i``.
    """
    teams = [Team(id=100 + i, number=f"{i}A", grade="High School") for i in range(1, 11)]
    standings = [QualifyingStanding(team_id=100 + i, rank=i) for i in range(1, 11)]
    runs: list[RawSkillRun] = []
    for i in range(1, 11):
        runs.append(RawSkillRun(100 + i, SkillKind.PROGRAMMING, score=100 - 5 * i, attempts=1))
        runs.append(RawSkillRun(100 + i, SkillKind.DRIVER, score=50 - i, attempts=2))
    return teams, standings, runs


@pytest.fixture
def graded_event() -> tuple[list[Team], list[QualifyingStanding], list[RawSkillRun]]:
    """3 High School, 2 Middle School and 1 College team.

    Standings interleave the grades (HS: 1, 3, 5; MS: 2, 4; College: 6).
    """
    teams = [
        Team(id=1, number="1A", grade="High School", organization="North High"),
        Team(id=2, number="2A", grade="high school", organization="North High"),
        Team(id=3, number="3A", grade="High School", organization="South High"),
        Team(id=4, number="4B", grade="Middle School", organization="East Middle"),
        Team(id=5, number="5B", grade="Middle School", organization="West Middle"),
        Team(id=6, number="6C", grade="College", organization="State University"),
    ]
    standings = [
        QualifyingStanding(team_id=1, rank=1),
        QualifyingStanding(team_id=4, rank=2),
        QualifyingStanding(team_id=2, rank=3),
        QualifyingStanding(team_id=5, rank=4),
        QualifyingStanding(team_id=3, rank=5),
        QualifyingStanding(team_id=6, rank=6),
    ]
    runs = []
    for team_id, prog, drv in [(1, 60, 70), (2, 40, 50), (3, 10, 20),
                               (4, 30, 40), (5, 5, 10), (6, 90, 90)]:
        runs.append(RawSkillRun(team_id, SkillKind.PROGRAMMING, score=prog, attempts=1))
        runs.append(RawSkillRun(team_id, SkillKind.DRIVER, score=drv, attempts=1))
    return teams, standings, runs


# ---------------------------------------------------------------------------
# Event files
# ---------------------------------------------------------------------------

@pytest.fixture
def event_files(tmp_path: Path, ten_team_event) -> dict[str, Path]:
    """The ten-team event written as spreadsheet-style CSV files."""
    teams, standings, runs = ten_team_event

    teams_path = tmp_path / "teams.csv"
    pd.DataFrame([
        {"Team ID": t.id, "Team Number": t.number, "Grade": t.grade, "Organization": "Robotics Club"}
        for t in teams
    ]).to_csv(teams_path, index=False)

    standings_path = tmp_path / "standings.csv"
    pd.DataFrame([
        {"team_id": s.team_id, "rank": s.rank} for s in standings
    ]).to_csv(standings_path, index=False)

    skills_path = tmp_path / "skills.csv"
    pd.DataFrame([
        {"team_id": r.team_id, "type": r.kind.value, "score": r.score, "attempts": r.attempts}
        for r in runs
    ]).to_csv(skills_path, index=False)

    return {"teams": teams_path, "standings": standings_path, "skills": skills_path}
