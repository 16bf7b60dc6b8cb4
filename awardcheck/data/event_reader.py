"""Event data file reader.

Reads the three inputs of an eligibility calculation from CSV or JSON files
(as saved from the RobotEvents API or exported from a spreadsheet) and turns
them into engine records:

    - Teams:     id, number, grade, name, organization, region
    - Standings: team id, rank
    - Skills:    team id, type (programming / driver), score, attempts

Column names are matched case-insensitively against a list of aliases, so
both ``teamId`` (API JSON) and ``Team ID`` (spreadsheet) work.  Nested API
objects such as ``team: {id: ...}`` are flattened by ``pd.json_normalize``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from awardcheck.engine.models import QualifyingStanding, Team
from awardcheck.engine.skills import RawSkillRun, SkillKind

logger = logging.getLogger(__name__)


class EventDataError(ValueError):
    """Raised when an event data file is missing a required column."""


# Column aliases: our key -> accepted source column names (lowercased)
TEAM_COLUMNS = {
    "id": ("id", "team_id", "teamid", "team id", "team.id"),
    "number": ("number", "team_number", "team number", "team.name", "team"),
    "grade": ("grade", "grade level"),
    "name": ("team_name", "team name", "name"),
    "organization": ("organization", "org", "school"),
    "region": ("region", "state", "location.region"),
}

STANDING_COLUMNS = {
    "team_id": ("team_id", "teamid", "team id", "team.id"),
    "rank": ("rank", "qualifier_rank", "qualifying_rank"),
}

SKILL_COLUMNS = {
    "team_id": ("team_id", "teamid", "team id", "team.id"),
    "kind": ("type", "kind", "skill_type", "skill type"),
    "score": ("score",),
    "attempts": ("attempts",),
}


# ---------------------------------------------------------------------------
# File reading
# ---------------------------------------------------------------------------

def read_table(path: str | Path) -> pd.DataFrame:
    """Read a CSV or JSON file into a flat DataFrame.

    JSON may be a list of records or a RobotEvents page (``{"data": [...]}``).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Event data file not found: {path}")

    if path.suffix.lower() == ".json":
        with open(path) as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get("data", [])
        return pd.json_normalize(payload)

    return pd.read_csv(path, dtype=str)


def _resolve_columns(
    df: pd.DataFrame,
    aliases: dict[str, tuple[str, ...]],
    required: tuple[str, ...],
    source: str,
) -> dict[str, Any]:
    """Map our keys to actual DataFrame columns."""
    lookup = {str(col).strip().lower(): col for col in df.columns}
    mapping: dict[str, Any] = {}
    for key, names in aliases.items():
        for name in names:
            if name in lookup:
                mapping[key] = lookup[name]
                break
    missing = [key for key in required if key not in mapping]
    if missing:
        raise EventDataError(
            f"{source}: missing column(s) {', '.join(missing)} "
            f"(have: {', '.join(map(str, df.columns))})"
        )
    return mapping


def _text(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    text = str(value).strip()
    return "" if text.lower() in ("nan", "none") else text


def _int(value: Any, default: int | None = 0) -> int | None:
    try:
        if pd.isna(value):
            return default
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _number(value: Any) -> float:
    try:
        if pd.isna(value):
            return 0
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return int(number) if number.is_integer() else number


# ---------------------------------------------------------------------------
# Record extraction
# ---------------------------------------------------------------------------

def teams_from_frame(df: pd.DataFrame) -> list[Team]:
    cols = _resolve_columns(df, TEAM_COLUMNS, ("id", "number"), "teams")
    teams: list[Team] = []
    for _, row in df.iterrows():
        team_id = _int(row[cols["id"]], default=None)
        if team_id is None:
            logger.debug("Skipping team row without id: %s", dict(row))
            continue
        grade = _text(row[cols["grade"]]) if "grade" in cols else ""
        teams.append(
            Team(
                id=team_id,
                number=_text(row[cols["number"]]),
                grade=grade or None,
                name=_text(row[cols["name"]]) if "name" in cols else "",
                organization=_text(row[cols["organization"]]) if "organization" in cols else "",
                region=_text(row[cols["region"]]) if "region" in cols else "",
            )
        )
    return teams


def standings_from_frame(df: pd.DataFrame) -> list[QualifyingStanding]:
    cols = _resolve_columns(df, STANDING_COLUMNS, ("team_id", "rank"), "standings")
    standings: list[QualifyingStanding] = []
    for _, row in df.iterrows():
        team_id = _int(row[cols["team_id"]], default=None)
        if team_id is None:
            continue
        standings.append(
            QualifyingStanding(team_id=team_id, rank=_int(row[cols["rank"]], default=None))
        )
    return standings


def skill_runs_from_frame(df: pd.DataFrame) -> list[RawSkillRun]:
    cols = _resolve_columns(df, SKILL_COLUMNS, ("team_id", "kind", "score"), "skills")
    runs: list[RawSkillRun] = []
    skipped = 0
    for _, row in df.iterrows():
        team_id = _int(row[cols["team_id"]], default=None)
        kind = SkillKind.parse(_text(row[cols["kind"]]))
        if team_id is None or kind is None:
            skipped += 1
            continue
        runs.append(
            RawSkillRun(
                team_id=team_id,
                kind=kind,
                score=max(_number(row[cols["score"]]), 0),
                attempts=max(_int(row[cols["attempts"]]) or 0, 0) if "attempts" in cols else 0,
            )
        )
    if skipped:
        logger.debug("Skipped %d skills rows with no team or unsupported type", skipped)
    return runs


def load_teams(path: str | Path) -> list[Team]:
    return teams_from_frame(read_table(path))


def load_standings(path: str | Path) -> list[QualifyingStanding]:
    return standings_from_frame(read_table(path))


def load_skill_runs(path: str | Path) -> list[RawSkillRun]:
    return skill_runs_from_frame(read_table(path))
