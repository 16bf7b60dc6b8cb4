"""Default per-program award rules and program metadata.

These values mirror the published award criteria of each program's game
manual (Excellence Award for V5RC / VIQRC, All Around Champion for ADC) and
the rounding used by the official eligibility calculators.

Do not change these without checking them against the current season's manual.
"""

# ---------------------------------------------------------------------------
# Award eligibility rules per program
# ---------------------------------------------------------------------------
# threshold:                  Fraction of the group that counts as "top N%"
#                             for qualification and skills rankings.
# requires_programming_score: Best programming (autonomous) run must be > 0.
# requires_driver_score:      Best driver (pilot) run must be > 0.
# requires_programming_only_rank: Team must also be in the top N% when ranked
#                             by programming score alone.
# programming_only_threshold: N for the programming-only criterion.
# subdivides_by_grade:        Awards may be given per grade level.
# grade_partitions:           Grade labels used when awards are split.
# rounding:                   "half_even" (ADC) or "half_up" (everything else).
PROGRAM_RULES = {
    "adc": {
        "threshold": 0.5,
        "requires_programming_score": True,
        "requires_driver_score": False,
        "requires_programming_only_rank": False,
        "programming_only_threshold": 0.0,
        "subdivides_by_grade": False,
        "grade_partitions": [],
        "rounding": "half_even",
    },
    "v5rc": {
        "threshold": 0.4,
        "requires_programming_score": True,
        "requires_driver_score": True,
        "requires_programming_only_rank": True,
        "programming_only_threshold": 0.4,
        "subdivides_by_grade": True,
        "grade_partitions": ["High School", "Middle School"],
        "rounding": "half_up",
    },
    "viqrc": {
        "threshold": 0.4,
        "requires_programming_score": True,
        "requires_driver_score": True,
        "requires_programming_only_rank": True,
        "programming_only_threshold": 0.4,
        "subdivides_by_grade": True,
        "grade_partitions": ["High School", "Middle School", "Elementary"],
        "rounding": "half_up",
    },
}

# ---------------------------------------------------------------------------
# Program metadata (RobotEvents ids and SKU prefixes)
# ---------------------------------------------------------------------------
PROGRAM_INFO = {
    "adc": {
        "id": 37,
        "name": "Aerial Drone Competition",
        "award_name": "All Around Champion",
        "sku_prefix": "RE-ADC-",
    },
    "v5rc": {
        "id": 1,
        "name": "VEX Robotics Competition",
        "award_name": "Excellence Award",
        "sku_prefix": "RE-V5RC-",
    },
    "viqrc": {
        "id": 41,
        "name": "VEX IQ Robotics Competition",
        "award_name": "Excellence Award",
        "sku_prefix": "RE-VIQRC-",
    },
}

# ---------------------------------------------------------------------------
# Skill labels (ADC calls programming "Auton" and driver "Pilot")
# ---------------------------------------------------------------------------
DEFAULT_SKILL_LABELS = {
    "programming": "Programming",
    "driver": "Driver",
}

SKILL_LABELS = {
    "adc": {"programming": "Auton", "driver": "Pilot"},
}

# ---------------------------------------------------------------------------
# Output defaults
# ---------------------------------------------------------------------------
OUTPUT_DEFAULTS = {
    "format": "table",
    "sort_key": None,
    "descending": False,
}
