"""Tests for the end-to-end eligibility pipeline."""

from __future__ import annotations

import dataclasses
import random

import pytest

from awardcheck.engine.models import UNRANKED, QualifyingStanding, Team
from awardcheck.engine.pipeline import (
    EligibilityReport,
    calculate_eligibility,
    find_attending,
    run_eligibility,
)
from awardcheck.engine.pools import NO_GRADE, OVERALL, Grade, PoolGranularity
from awardcheck.engine.programs import Program, get_program_rules
from awardcheck.engine.skills import RawSkillRun, SkillKind

P = SkillKind.PROGRAMMING
D = SkillKind.DRIVER


def _by_id(results):
    return {r.team.id: r for r in results}


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------

class TestAttendance:
    def test_only_ranked_teams_attend(self):
        teams = [Team(id=i, number=f"{i}A") for i in range(1, 5)]
        standings = [
            QualifyingStanding(team_id=1, rank=2),
            QualifyingStanding(team_id=2, rank=0),
            QualifyingStanding(team_id=3, rank=None),
            QualifyingStanding(team_id=999, rank=1),
        ]
        attending, ranks = find_attending(teams, standings)
        assert [t.id for t in attending] == [1]
        assert ranks == {1: 2}

    def test_first_positive_standing_wins(self):
        teams = [Team(id=1, number="1A")]
        standings = [
            QualifyingStanding(team_id=1, rank=None),
            QualifyingStanding(team_id=1, rank=4),
            QualifyingStanding(team_id=1, rank=2),
        ]
        assert find_attending(teams, standings)[1] == {1: 4}

    def test_unranked_team_not_in_results(self, ten_team_event):
        teams, standings, runs = ten_team_event
        teams = teams + [Team(id=999, number="999Z")]
        results = calculate_eligibility(teams, standings, runs, Program.ADC, False)
        assert 999 not in _by_id(results)
        assert len(results) == 10

    def test_no_attending_teams(self, ten_team_event):
        teams, _, runs = ten_team_event
        report = run_eligibility(teams, [], runs, Program.ADC, False)
        assert report.results == []
        assert report.registered == 10
        assert report.attending == 0
        assert report.pools == []

    def test_empty_inputs(self):
        assert calculate_eligibility([], [], [], "v5rc", True) == []


# ---------------------------------------------------------------------------
# Worked examples
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_half_to_even_pool_of_ten(self, ten_team_event):
        results = _by_id(calculate_eligibility(*ten_team_event, Program.ADC, False))
        for i in range(1, 11):
            result = results[100 + i]
            assert result.qualifying_cutoff == 5
            assert result.qualifying_rank == i
            assert result.eligible is (i <= 5)

    def test_half_up_pool_of_nine(self):
        teams = [Team(id=i, number=f"{i}A", grade="High School") for i in range(1, 10)]
        standings = [QualifyingStanding(team_id=i, rank=i) for i in range(1, 10)]
        runs = [RawSkillRun(i, kind, score=90 - i, attempts=1) for i in range(1, 10) for kind in (P, D)]
        results = _by_id(calculate_eligibility(teams, standings, runs, Program.V5RC, False))
        assert {r.qualifying_cutoff for r in results.values()} == {4}
        assert {r.programming_only_cutoff for r in results.values()} == {4}
        assert [tid for tid, r in sorted(results.items()) if r.eligible] == [1, 2, 3, 4]

    def test_driver_score_required(self):
        teams = [Team(id=i, number=f"{i}A") for i in range(1, 4)]
        standings = [QualifyingStanding(team_id=i, rank=i) for i in range(1, 4)]
        runs = [
            RawSkillRun(1, P, score=50),
            RawSkillRun(1, D, score=0),
            RawSkillRun(2, P, score=10),
            RawSkillRun(2, D, score=10),
            RawSkillRun(3, P, score=5),
            RawSkillRun(3, D, score=5),
        ]
        result = _by_id(calculate_eligibility(teams, standings, runs, Program.V5RC, False))[1]
        assert result.in_qualifying_rank is True
        assert result.in_skills_rank is True
        assert result.meets_programming_only_rank is True
        assert result.programming_score == 50
        assert result.driver_score == 0
        assert result.eligible is False
        assert result.reasons == ("No driver score above zero",)

    def test_unmatched_grade(self, graded_event):
        results = _by_id(calculate_eligibility(*graded_event, Program.V5RC, True))
        college = results[6]
        assert college.qualifying_rank == UNRANKED
        assert college.eligible is False
        assert college.pool_key == NO_GRADE
        hs = [r.qualifying_rank for r in results.values() if r.pool_key == Grade("High School")]
        ms = [r.qualifying_rank for r in results.values() if r.pool_key == Grade("Middle School")]
        assert sorted(hs) == [1, 2, 3]
        assert sorted(ms) == [1, 2]

    def test_elementary_school_teams_get_grade_pool(self):
        teams = [Team(id=i, number=f"{i}E", grade="Elementary School") for i in range(1, 6)]
        standings = [QualifyingStanding(team_id=i, rank=i) for i in range(1, 6)]
        runs = [RawSkillRun(i, kind, score=60 - i) for i in range(1, 6) for kind in (P, D)]
        report = run_eligibility(teams, standings, runs, Program.VIQRC, True)
        results = _by_id(report.results)
        assert {r.pool_key for r in results.values()} == {Grade("Elementary")}
        assert sorted(r.qualifying_rank for r in results.values()) == [1, 2, 3, 4, 5]
        assert sorted(r.skills_rank for r in results.values()) == [1, 2, 3, 4, 5]
        # 5 x 0.4 = 2.0
        assert [tid for tid, r in sorted(results.items()) if r.eligible] == [1, 2]

    def test_tied_combined_score(self):
        teams = [Team(id=20, number="20A"), Team(id=10, number="10A"), Team(id=30, number="30A")]
        standings = [QualifyingStanding(team_id=t.id, rank=n) for n, t in enumerate(teams, 1)]
        runs = [
            RawSkillRun(20, P, score=70), RawSkillRun(20, D, score=30),
            RawSkillRun(10, P, score=40), RawSkillRun(10, D, score=60),
            RawSkillRun(30, P, score=25), RawSkillRun(30, D, score=25),
        ]
        results = _by_id(calculate_eligibility(teams, standings, runs, Program.V5RC, False))
        assert results[10].skills_rank == 1
        assert results[20].skills_rank == 2
        assert results[30].skills_rank == 3
        ranks = [r.skills_rank for r in results.values()]
        assert len(set(ranks)) == len(ranks)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class TestReport:
    def test_report_counts(self, ten_team_event):
        report = run_eligibility(*ten_team_event, "adc", False)
        assert isinstance(report, EligibilityReport)
        assert report.program is Program.ADC
        assert report.granularity is PoolGranularity.COMBINED
        assert report.registered == 10
        assert report.attending == 10
        assert report.n_eligible == 5
        assert [r.team.id for r in report.eligible] == [101, 102, 103, 104, 105]

    def test_pool_summaries(self, graded_event):
        report = run_eligibility(*graded_event, Program.V5RC, True)
        assert report.granularity is PoolGranularity.BY_GRADE
        assert [(p.key, p.size) for p in report.pools] == [
            (Grade("High School"), 3),
            (Grade("Middle School"), 2),
            (NO_GRADE, 1),
        ]
        assert all(p.programming_only_cutoff == 1 for p in report.pools)

    def test_adc_summary_has_no_programming_only_cutoff(self, ten_team_event):
        report = run_eligibility(*ten_team_event, Program.ADC, False)
        (pool,) = report.pools
        assert pool.key == OVERALL
        assert pool.qualifying_cutoff == 5
        assert pool.programming_only_cutoff is None

    def test_to_dict(self, ten_team_event):
        data = run_eligibility(*ten_team_event, Program.ADC, False).to_dict()
        assert data["program"] == "adc"
        assert data["eligible"] == 5
        assert data["pools"][0]["pool"] == "Overall"
        assert len(data["results"]) == 10

    def test_program_selected_by_sku(self, ten_team_event):
        report = run_eligibility(*ten_team_event, "RE-ADC-24-1001", False)
        assert report.program is Program.ADC

    def test_rules_override(self, ten_team_event):
        rules = dataclasses.replace(get_program_rules(Program.ADC), threshold=0.3)
        results = calculate_eligibility(*ten_team_event, Program.ADC, False, rules=rules)
        assert {r.qualifying_cutoff for r in results} == {3}
        assert sum(r.eligible for r in results) == 3


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

class TestDeterminism:
    def test_default_order(self, graded_event):
        results = calculate_eligibility(*graded_event, Program.V5RC, True)
        assert [r.team.id for r in results] == [1, 4, 2, 5, 3, 6]

    def test_idempotent(self, graded_event):
        first = calculate_eligibility(*graded_event, Program.V5RC, True)
        second = calculate_eligibility(*graded_event, Program.V5RC, True)
        assert first == second

    def test_input_order_independent(self, graded_event):
        teams, standings, runs = graded_event
        expected = calculate_eligibility(teams, standings, runs, Program.V5RC, True)

        rng = random.Random(7)
        for _ in range(5):
            shuffled = [list(teams), list(standings), list(runs)]
            for items in shuffled:
                rng.shuffle(items)
            assert calculate_eligibility(*shuffled, Program.V5RC, True) == expected

    def test_inputs_not_mutated(self, graded_event):
        teams, standings, runs = graded_event
        before = (list(teams), list(standings), list(runs))
        calculate_eligibility(teams, standings, runs, Program.V5RC, True)
        assert (teams, standings, runs) == before

    def test_accepts_generators(self, ten_team_event):
        teams, standings, runs = ten_team_event
        results = calculate_eligibility(
            (t for t in teams), iter(standings), iter(runs), Program.ADC, False
        )
        assert len(results) == 10

    @pytest.mark.parametrize("program", list(Program))
    def test_every_program(self, graded_event, program):
        results = calculate_eligibility(*graded_event, program, True)
        assert len(results) == 6
        assert all(r.qualifying_cutoff >= 1 for r in results)
