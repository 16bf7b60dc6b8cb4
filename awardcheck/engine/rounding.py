"""Program-specific rounding for rank cutoffs.

Cutoffs are ``max(1, round(k * threshold))``.  Which ``round`` depends on
the program:

  - ADC rounds half to even (2.5 -> 2, 3.5 -> 4)
  - every other program rounds half up (2.5 -> 3, 3.5 -> 4)

The two only disagree at exact ``.5`` products, and there a single position
decides a team's eligibility.  Products are formed with ``Decimal`` so a
threshold such as ``0.3`` is taken at its written value instead of its
nearest binary float.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from enum import Enum

MIN_CUTOFF = 1


class RoundingRule(Enum):
    """Rounding strategy, chosen once per program."""
    HALF_TO_EVEN = "half_even"
    HALF_UP = "half_up"

    @classmethod
    def from_name(cls, name: str) -> RoundingRule:
        normalized = str(name).strip().lower().replace("-", "_")
        aliases = {
            "half_even": cls.HALF_TO_EVEN,
            "half_to_even": cls.HALF_TO_EVEN,
            "bankers": cls.HALF_TO_EVEN,
            "half_up": cls.HALF_UP,
        }
        try:
            return aliases[normalized]
        except KeyError:
            raise ValueError(f"Unknown rounding rule: {name!r}") from None

    @property
    def _decimal_mode(self) -> str:
        return ROUND_HALF_EVEN if self is RoundingRule.HALF_TO_EVEN else ROUND_HALF_UP

    def round(self, value: float | Decimal) -> int:
        """Round a non-negative value to an integer under this rule."""
        dec = value if isinstance(value, Decimal) else Decimal(str(value))
        if dec < 0:
            raise ValueError("Cutoff rounding is defined for non-negative values only")
        return int(dec.quantize(Decimal(1), rounding=self._decimal_mode))


def cutoff(pool_size: int, threshold: float, rule: RoundingRule) -> int:
    """Highest position still counted as "in" a top-``threshold`` criterion.

    Never below 1, so an empty pool yields cutoff 1 with nobody inside it.
    """
    product = Decimal(max(pool_size, 0)) * Decimal(str(threshold))
    return max(MIN_CUTOFF, rule.round(product))


def round_half_up(value: float) -> int:
    return RoundingRule.HALF_UP.round(value)


def round_half_to_even(value: float) -> int:
    return RoundingRule.HALF_TO_EVEN.round(value)
