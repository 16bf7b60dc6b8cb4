"""Program rule table -- per-program award constants.

Each supported program has one immutable ``ProgramRules`` row, built once at
import time from ``awardcheck.config.defaults``.  Config files may override a
row (see ``AwardCheckConfig.rules_for``); the engine itself only ever reads
frozen rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from awardcheck.config.defaults import (
    DEFAULT_SKILL_LABELS,
    PROGRAM_INFO,
    PROGRAM_RULES,
    SKILL_LABELS,
)
from awardcheck.engine.rounding import RoundingRule


class UnknownProgramError(ValueError):
    """Raised when a program selector matches no known program."""


class Program(Enum):
    ADC = "adc"
    V5RC = "v5rc"
    VIQRC = "viqrc"


@dataclass(frozen=True)
class ProgramInfo:
    """RobotEvents identity of a program and the award it checks."""

    id: int
    name: str
    award_name: str
    sku_prefix: str


@dataclass(frozen=True)
class ProgramRules:
    """Award-eligibility constants for one program."""

    threshold: float
    requires_programming_score: bool
    requires_driver_score: bool
    requires_programming_only_rank: bool
    programming_only_threshold: float
    subdivides_by_grade: bool
    grade_partitions: tuple[str, ...]
    rounding: RoundingRule

    @classmethod
    def from_dict(cls, data: Mapping) -> ProgramRules:
        return cls(
            threshold=float(data["threshold"]),
            requires_programming_score=bool(data["requires_programming_score"]),
            requires_driver_score=bool(data["requires_driver_score"]),
            requires_programming_only_rank=bool(data["requires_programming_only_rank"]),
            programming_only_threshold=float(data["programming_only_threshold"]),
            subdivides_by_grade=bool(data["subdivides_by_grade"]),
            grade_partitions=tuple(data.get("grade_partitions") or ()),
            rounding=RoundingRule.from_name(data["rounding"]),
        )

    def match_grade(self, grade: str | None) -> str | None:
        """Return the configured partition label for a team grade, or None.

        Matching ignores case and surrounding whitespace.  A grade also matches
        a short label written without its " School" suffix, so RobotEvents'
        "Elementary School" lands in the "Elementary" partition.
        """
        if not grade:
            return None
        wanted = " ".join(grade.split()).lower()
        for label in self.grade_partitions:
            short = label.strip().lower()
            if wanted in (short, f"{short} school"):
                return label
        return None


PROGRAM_TABLE: Mapping[Program, ProgramRules] = MappingProxyType({
    program: ProgramRules.from_dict(PROGRAM_RULES[program.value])
    for program in Program
})

PROGRAM_DETAILS: Mapping[Program, ProgramInfo] = MappingProxyType({
    program: ProgramInfo(**PROGRAM_INFO[program.value])
    for program in Program
})


def resolve_program(selector: Program | str | int) -> Program:
    """Resolve a program from its enum, short code, RobotEvents id, or event SKU.

    >>> resolve_program("RE-V5RC-24-1234")
    <Program.V5RC: 'v5rc'>
    """
    if isinstance(selector, Program):
        return selector

    if isinstance(selector, int) and not isinstance(selector, bool):
        for program, info in PROGRAM_DETAILS.items():
            if info.id == selector:
                return program
        raise UnknownProgramError(f"Unknown program id: {selector}")

    text = str(selector).strip()
    lowered = text.lower()
    for program, info in PROGRAM_DETAILS.items():
        if lowered in (program.value, info.name.lower()):
            return program
        if text.upper().startswith(info.sku_prefix):
            return program
    if text.isdigit():
        return resolve_program(int(text))
    raise UnknownProgramError(f"Unknown program: {selector!r}")


def get_program_rules(selector: Program | str | int) -> ProgramRules:
    """Built-in rules for a program selector."""
    return PROGRAM_TABLE[resolve_program(selector)]


def skill_label(program: Program, kind: str) -> str:
    """Display label for a skill kind ("programming" or "driver")."""
    labels = SKILL_LABELS.get(program.value, {})
    return labels.get(kind, DEFAULT_SKILL_LABELS[kind])


def describe_requirements(
    selector: Program | str | int,
    rules: ProgramRules | None = None,
) -> list[str]:
    """Human-readable list of the criteria a team must meet."""
    program = resolve_program(selector)
    rules = rules or PROGRAM_TABLE[program]
    programming = skill_label(program, "programming")
    driver = skill_label(program, "driver")
    pct = f"{rules.threshold * 100:.0f}%"

    requirements = [
        f"Top {pct} of qualification rankings",
        f"Top {pct} of combined skills rankings",
    ]
    if rules.requires_programming_score:
        requirements.append(f"{programming} score above zero required")
    if rules.requires_driver_score:
        requirements.append(f"{driver} score above zero required")
    if rules.requires_programming_only_rank:
        requirements.append(
            f"Top {rules.programming_only_threshold * 100:.0f}% of "
            f"{programming.lower()}-only rankings"
        )
    if rules.subdivides_by_grade:
        requirements.append(
            "Ranked within grade ("
            + ", ".join(rules.grade_partitions)
            + ") when awards are split by grade"
        )
    return requirements
