"""Tests for the event data file reader."""

from __future__ import annotations

import json

import pandas as pd
import pytest

from awardcheck.data.event_reader import (
    EventDataError,
    load_skill_runs,
    load_standings,
    load_teams,
    read_table,
    skill_runs_from_frame,
    standings_from_frame,
    teams_from_frame,
)
from awardcheck.engine.models import QualifyingStanding, Team
from awardcheck.engine.skills import SkillKind


def _write_json(path, payload):
    with open(path, "w") as f:
        json.dump(payload, f)
    return path


class TestReadTable:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_table(tmp_path / "nope.csv")

    def test_json_page_wrapper(self, tmp_path):
        path = _write_json(tmp_path / "page.json", {"meta": {"total": 1}, "data": [{"a": 1}]})
        df = read_table(path)
        assert list(df.columns) == ["a"]
        assert len(df) == 1

    def test_json_nested_flattened(self, tmp_path):
        path = _write_json(tmp_path / "rows.json", [{"team": {"id": 5, "name": "5A"}}])
        df = read_table(path)
        assert set(df.columns) == {"team.id", "team.name"}


class TestTeams:
    def test_spreadsheet_csv(self, tmp_path):
        path = tmp_path / "teams.csv"
        path.write_text(
            "Team ID,Team Number,Team Name,Grade,Organization,State\n"
            "101,1234A,Gearheads,High School,North High,Ohio\n"
            "102,5678B,,,,\n"
        )
        teams = load_teams(path)
        assert teams[0] == Team(
            id=101,
            number="1234A",
            grade="High School",
            name="Gearheads",
            organization="North High",
            region="Ohio",
        )
        assert teams[1].grade is None
        assert teams[1].name == ""

    def test_api_json(self, tmp_path):
        path = _write_json(tmp_path / "teams.json", {"data": [
            {
                "id": 139,
                "number": "229V",
                "team_name": "Ace",
                "grade": "Middle School",
                "organization": "Ace Robotics",
                "location": {"city": "Columbus", "region": "Ohio"},
            },
        ]})
        (team,) = load_teams(path)
        assert team.id == 139
        assert team.number == "229V"
        assert team.grade == "Middle School"
        assert team.region == "Ohio"

    def test_row_without_id_skipped(self):
        df = pd.DataFrame({"id": ["1", None], "number": ["1A", "2A"]})
        assert [t.id for t in teams_from_frame(df)] == [1]

    def test_missing_column(self):
        with pytest.raises(EventDataError, match="number"):
            teams_from_frame(pd.DataFrame({"id": [1]}))


class TestStandings:
    def test_api_rankings(self, tmp_path):
        path = _write_json(tmp_path / "rankings.json", {"data": [
            {"id": 9001, "rank": 2, "team": {"id": 139, "name": "229V"}, "wins": 5},
            {"id": 9002, "rank": 1, "team": {"id": 140, "name": "100A"}, "wins": 6},
        ]})
        assert load_standings(path) == [
            QualifyingStanding(team_id=139, rank=2),
            QualifyingStanding(team_id=140, rank=1),
        ]

    def test_blank_rank(self, tmp_path):
        path = tmp_path / "standings.csv"
        path.write_text("Team ID,Rank\n1,3\n2,\n")
        standings = load_standings(path)
        assert standings[0].rank == 3
        assert standings[1].rank is None
        assert standings[1].is_ranked is False

    def test_record_id_is_not_team_id(self):
        with pytest.raises(EventDataError, match="team_id"):
            standings_from_frame(pd.DataFrame({"id": [1], "rank": [1]}))


class TestSkills:
    def test_api_skills(self, tmp_path):
        path = _write_json(tmp_path / "skills.json", {"data": [
            {"id": 1, "team": {"id": 139}, "type": "programming", "score": 55, "attempts": 2},
            {"id": 2, "team": {"id": 139}, "type": "driver", "score": 70, "attempts": 3},
            {"id": 3, "team": {"id": 139}, "type": "package", "score": 10, "attempts": 1},
        ]})
        runs = load_skill_runs(path)
        assert [(r.kind, r.score, r.attempts) for r in runs] == [
            (SkillKind.PROGRAMMING, 55, 2),
            (SkillKind.DRIVER, 70, 3),
        ]

    def test_adc_labels(self):
        df = pd.DataFrame({
            "Team ID": ["7", "7"],
            "Skill Type": ["Auton", "Pilot"],
            "Score": ["12", "30.5"],
        })
        runs = skill_runs_from_frame(df)
        assert runs[0].kind is SkillKind.PROGRAMMING
        assert runs[0].attempts == 0
        assert runs[1].score == 30.5

    def test_negative_and_blank_scores(self):
        df = pd.DataFrame({
            "team_id": ["1", "1"],
            "type": ["driver", "programming"],
            "score": ["-5", None],
            "attempts": ["-1", "2"],
        })
        runs = skill_runs_from_frame(df)
        assert runs[0].score == 0
        assert runs[0].attempts == 0
        assert runs[1].score == 0

    def test_missing_column(self):
        with pytest.raises(EventDataError, match="score"):
            skill_runs_from_frame(pd.DataFrame({"team_id": [1], "type": ["driver"]}))
