"""Money / rounding helpers.

Every stored metric goes through `round2` so the API, the summary totals and
the tests agree on a single rounding rule: two decimals, halves away from
zero (12.345 -> 12.35, -12.345 -> -12.35).
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP


def round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
