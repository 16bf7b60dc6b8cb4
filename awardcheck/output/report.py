"""Result tables and CSV / JSON export.

Rendering only reads ``TeamEligibilityResult`` fields; ranks and verdicts
are never recomputed here.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from awardcheck.engine.evaluator import TeamEligibilityResult
from awardcheck.engine.models import UNRANKED
from awardcheck.engine.programs import Program, skill_label

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "team_id",
    "team_number",
    "team_name",
    "grade",
    "organization",
    "region",
    "pool",
    "qualifying_rank",
    "qualifying_cutoff",
    "in_qualifying_rank",
    "skills_rank",
    "skills_cutoff",
    "in_skills_rank",
    "programming_only_rank",
    "programming_only_cutoff",
    "meets_programming_only_rank",
    "programming_score",
    "programming_attempts",
    "driver_score",
    "driver_attempts",
    "eligible",
]


def results_to_frame(results: Iterable[TeamEligibilityResult]) -> pd.DataFrame:
    """One row per result, in the given order."""
    rows = [r.to_dict() for r in results]
    if not rows:
        return pd.DataFrame(columns=EXPORT_COLUMNS + ["reasons"])
    df = pd.DataFrame(rows)
    df["reasons"] = df["reasons"].map("; ".join)
    return df[EXPORT_COLUMNS + ["reasons"]]


def _rank_cell(rank: int, cutoff_value: int, ok: bool) -> str:
    shown = "-" if rank == UNRANKED else str(rank)
    return f"{shown}/{cutoff_value} {'Y' if ok else 'n'}"


def _score_cell(score: float, attempts: int) -> str:
    return f"{score:g} ({attempts})"


def render_table(
    results: Iterable[TeamEligibilityResult],
    program: Program,
    show_programming_only: bool = True,
) -> str:
    """Plain-text table for terminal output."""
    programming = skill_label(program, "programming")
    driver = skill_label(program, "driver")

    rows = []
    for r in results:
        row = {
            "Team": r.team.number,
            "Grade": r.team.grade or "",
            "Qual": _rank_cell(r.qualifying_rank, r.qualifying_cutoff, r.in_qualifying_rank),
            "Skills": _rank_cell(r.skills_rank, r.skills_cutoff, r.in_skills_rank),
        }
        if show_programming_only:
            row[f"{programming} only"] = _rank_cell(
                r.programming_only_rank,
                r.programming_only_cutoff,
                r.meets_programming_only_rank,
            )
        row[programming] = _score_cell(r.programming_score, r.programming_attempts)
        row[driver] = _score_cell(r.driver_score, r.driver_attempts)
        row["Eligible"] = "YES" if r.eligible else "no"
        rows.append(row)

    if not rows:
        return "(no attending teams)"
    return pd.DataFrame(rows).to_string(index=False)


def write_results(
    results: Iterable[TeamEligibilityResult],
    path: str | Path,
    fmt: str = "csv",
) -> Path:
    """Write results to CSV or JSON and return the resolved path."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    results = list(results)

    if fmt == "json":
        with open(path, "w") as f:
            json.dump([r.to_dict() for r in results], f, indent=2, default=str)
    elif fmt == "csv":
        results_to_frame(results).to_csv(path, index=False)
    else:
        raise ValueError(f"Unsupported export format: {fmt!r}")

    logger.info("Wrote %d result(s) to %s", len(results), path)
    return path
