"""Pydantic models for awardcheck.yaml validation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from awardcheck.config.defaults import OUTPUT_DEFAULTS, PROGRAM_RULES

if TYPE_CHECKING:
    from awardcheck.engine.programs import Program, ProgramRules

# ---------------------------------------------------------------------------
# Program rules
# ---------------------------------------------------------------------------

class ProgramRulesConfig(BaseModel):
    threshold: float = Field(gt=0.0, le=1.0)
    requires_programming_score: bool = True
    requires_driver_score: bool = True
    requires_programming_only_rank: bool = False
    programming_only_threshold: float = Field(0.0, ge=0.0, le=1.0)
    subdivides_by_grade: bool = False
    grade_partitions: list[str] = Field(default_factory=list)
    rounding: Literal["half_even", "half_up"] = "half_up"

    @field_validator("grade_partitions")
    @classmethod
    def strip_partitions(cls, value: list[str]) -> list[str]:
        labels: list[str] = []
        seen: set[str] = set()
        for raw in value:
            label = str(raw).strip()
            if not label:
                continue
            if label.lower() in seen:
                raise ValueError(f"Duplicate grade partition: {label!r}")
            seen.add(label.lower())
            labels.append(label)
        return labels

    @model_validator(mode="after")
    def check_consistency(self) -> "ProgramRulesConfig":
        if self.subdivides_by_grade and not self.grade_partitions:
            raise ValueError("subdivides_by_grade requires at least one grade partition")
        if self.requires_programming_only_rank and self.programming_only_threshold <= 0:
            raise ValueError(
                "requires_programming_only_rank needs a programming_only_threshold > 0"
            )
        return self

    def to_rules(self) -> ProgramRules:
        """Freeze into the engine's immutable rule record."""
        from awardcheck.engine.programs import ProgramRules
        from awardcheck.engine.rounding import RoundingRule

        return ProgramRules(
            threshold=self.threshold,
            requires_programming_score=self.requires_programming_score,
            requires_driver_score=self.requires_driver_score,
            requires_programming_only_rank=self.requires_programming_only_rank,
            programming_only_threshold=self.programming_only_threshold,
            subdivides_by_grade=self.subdivides_by_grade,
            grade_partitions=tuple(self.grade_partitions),
            rounding=RoundingRule.from_name(self.rounding),
        )


def _default_programs() -> dict[str, ProgramRulesConfig]:
    return {
        name: ProgramRulesConfig.model_validate(rules)
        for name, rules in PROGRAM_RULES.items()
    }


# ---------------------------------------------------------------------------
# Output Config
# ---------------------------------------------------------------------------

class OutputConfig(BaseModel):
    format: Literal["table", "csv", "json"] = OUTPUT_DEFAULTS["format"]
    sort_key: str | None = OUTPUT_DEFAULTS["sort_key"]
    descending: bool = OUTPUT_DEFAULTS["descending"]

    @field_validator("sort_key")
    @classmethod
    def known_sort_key(cls, value: str | None) -> str | None:
        if value is None:
            return None
        from awardcheck.engine.sorter import SortKey

        return SortKey.from_name(value).value


# ---------------------------------------------------------------------------
# Top-Level Config
# ---------------------------------------------------------------------------

class AwardCheckConfig(BaseModel):
    """Root configuration model for awardcheck."""

    version: int = 1
    programs: dict[str, ProgramRulesConfig] = Field(default_factory=_default_programs)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="before")
    @classmethod
    def merge_program_defaults(cls, data: Any) -> Any:
        """Overlay per-program overrides onto the built-in rule table.

        YAML parses empty keys as None; those fall back to defaults.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("output") is None:
            data.pop("output", None)

        overrides = data.get("programs") or {}
        if not isinstance(overrides, dict):
            raise ValueError("programs must be a mapping of program name to rules")

        merged: dict[str, Any] = {
            name: dict(rules) for name, rules in PROGRAM_RULES.items()
        }
        for name, override in overrides.items():
            key = str(name).strip().lower()
            if key not in merged:
                raise ValueError(
                    f"Unknown program {name!r}; expected one of {sorted(merged)}"
                )
            if isinstance(override, ProgramRulesConfig):
                override = override.model_dump()
            merged[key].update(override or {})
        data["programs"] = merged
        return data

    def rules_for(self, program: Program | str | int) -> ProgramRules:
        """Return the frozen rules for a program selector."""
        from awardcheck.engine.programs import resolve_program

        resolved = resolve_program(program)
        return self.programs[resolved.value].to_rules()
