"""Domain constants and enumerations for validation.

Kept as plain sets / literals; pydantic models and the calculator share them.
"""

from typing import Set

CURRENCIES: Set[str] = {"USD", "INR"}
WINNERS: Set[str] = {"team1", "team2", "none"}
CASH_OUT_TEAMS: Set[str] = {"team1", "team2", ""}

# Stake base used when the user gives no (or a non-positive) custom amount.
DEFAULT_BASE_AMOUNT_USD: float = 25.0
# Flat bonus credited when the losing side hit a six.
SIX_BONUS_USD: float = 25.0
# Both sides hit a six: flat payout, independent of stakes and winner.
BOTH_SIXES_PAYOUT_USD: float = 50.0
