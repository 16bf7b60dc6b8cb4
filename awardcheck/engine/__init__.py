"""Award-eligibility engine.

Public API:
  calculate_eligibility  -- Results for every attending team, sorted
  run_eligibility        -- Same, wrapped in an EligibilityReport
  TeamEligibilityResult  -- Per-team verdict with ranks and cutoffs
  Program / ProgramRules -- Program selector and its rule row
  sort_results / filter_results -- Presentation ordering and filtering
"""

from awardcheck.engine.evaluator import EligibilityEvaluator, TeamEligibilityResult
from awardcheck.engine.models import UNRANKED, QualifyingStanding, Team
from awardcheck.engine.pipeline import (
    EligibilityReport,
    calculate_eligibility,
    run_eligibility,
)
from awardcheck.engine.pools import NO_GRADE, OVERALL, Grade, NoGrade, Overall, PoolKey
from awardcheck.engine.programs import (
    Program,
    ProgramRules,
    UnknownProgramError,
    describe_requirements,
    get_program_rules,
    resolve_program,
)
from awardcheck.engine.rounding import RoundingRule
from awardcheck.engine.skills import RawSkillRun, SkillKind
from awardcheck.engine.sorter import SortKey, filter_results, sort_results

__all__ = [
    "EligibilityEvaluator",
    "EligibilityReport",
    "Grade",
    "NO_GRADE",
    "NoGrade",
    "OVERALL",
    "Overall",
    "PoolKey",
    "Program",
    "ProgramRules",
    "QualifyingStanding",
    "RawSkillRun",
    "RoundingRule",
    "SkillKind",
    "SortKey",
    "Team",
    "TeamEligibilityResult",
    "UNRANKED",
    "UnknownProgramError",
    "calculate_eligibility",
    "describe_requirements",
    "filter_results",
    "get_program_rules",
    "resolve_program",
    "run_eligibility",
    "sort_results",
]
