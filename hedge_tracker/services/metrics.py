"""Investment metrics calculator.

Turns one hedge (two opposing stakes sized from the decimal odds) plus a
USD->INR rate into the derived money fields stored with the record.

Pipeline:
    1. Stake base: `custom_base_amount` when positive, else 25 USD.
    2. Per-team stake = base / odds; total invested = sum of both.
    3. Winnings: first matching rule of WINNINGS_RULES (ordered table).
    4. INR mirrors = USD * rate.
    5. Only winnings and profit/loss are rounded to 2 decimals. Stakes and
       invested totals are kept unrounded so the total always equals the sum
       of the two stakes. Profit/loss is taken from the rounded winnings and
       the unrounded invested total, separately per currency, so the INR
       profit/loss is not necessarily round2(profit_loss_usd * rate).

The calculator performs no validation; odds must already be positive.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Callable, Dict, Optional, Sequence

from hedge_tracker.models.constants import (
    BOTH_SIXES_PAYOUT_USD,
    DEFAULT_BASE_AMOUNT_USD,
    SIX_BONUS_USD,
)
from hedge_tracker.services.money import round2


@dataclass(frozen=True)
class InvestmentInput:
    odds1: float
    odds2: float
    winner: str  # 'team1' | 'team2' | 'none'
    six_team1: bool = False
    six_team2: bool = False
    cash_out_team: str = ""  # 'team1' | 'team2' | ''
    custom_cash_out: float = 0.0
    custom_base_amount: Optional[float] = None
    currency: str = "USD"

    @property
    def base_amount(self) -> float:
        if self.custom_base_amount and self.custom_base_amount > 0:
            return float(self.custom_base_amount)
        return DEFAULT_BASE_AMOUNT_USD


@dataclass(frozen=True)
class Stakes:
    team1_usd: float
    team2_usd: float

    @property
    def total_usd(self) -> float:
        return self.team1_usd + self.team2_usd


@dataclass(frozen=True)
class InvestmentMetrics:
    investment_team1_usd: float
    investment_team2_usd: float
    investment_team1_inr: float
    investment_team2_inr: float
    total_invested_usd: float
    total_invested_inr: float
    total_winnings_usd: float
    total_winnings_inr: float
    profit_loss_usd: float
    profit_loss_inr: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class WinningsRule:
    name: str
    applies: Callable[[InvestmentInput], bool]
    payout: Callable[[InvestmentInput, Stakes, float], float]


def stakes_for(inv: InvestmentInput) -> Stakes:
    base = inv.base_amount
    return Stakes(team1_usd=base / inv.odds1, team2_usd=base / inv.odds2)


def cash_out_usd(inv: InvestmentInput, exchange_rate: float) -> float:
    # Always treated as INR, whatever the record currency says.
    if not inv.custom_cash_out:
        return 0.0
    return inv.custom_cash_out / exchange_rate


def _only_six1(inv: InvestmentInput) -> bool:
    return inv.six_team1 and not inv.six_team2


def _only_six2(inv: InvestmentInput) -> bool:
    return inv.six_team2 and not inv.six_team1


def _no_sixes(inv: InvestmentInput) -> bool:
    return not inv.six_team1 and not inv.six_team2


def _team1_return(inv: InvestmentInput, stakes: Stakes) -> float:
    return stakes.team1_usd * inv.odds1


def _team2_return(inv: InvestmentInput, stakes: Stakes) -> float:
    return stakes.team2_usd * inv.odds2


WINNINGS_RULES: Sequence[WinningsRule] = (
    WinningsRule(
        "both_sixes",
        lambda i: i.six_team1 and i.six_team2,
        lambda i, s, r: BOTH_SIXES_PAYOUT_USD,
    ),
    WinningsRule(
        "six_team1_team2_wins",
        lambda i: _only_six1(i) and i.winner == "team2",
        lambda i, s, r: _team2_return(i, s) + SIX_BONUS_USD,
    ),
    WinningsRule(
        "six_team1_team1_wins_team2_cashed_out",
        lambda i: _only_six1(i) and i.winner == "team1" and i.cash_out_team == "team2",
        lambda i, s, r: _team1_return(i, s) + cash_out_usd(i, r),
    ),
    WinningsRule(
        "six_team2_team1_wins",
        lambda i: _only_six2(i) and i.winner == "team1",
        lambda i, s, r: _team1_return(i, s) + SIX_BONUS_USD,
    ),
    WinningsRule(
        "six_team2_team2_wins_team1_cashed_out",
        lambda i: _only_six2(i) and i.winner == "team2" and i.cash_out_team == "team1",
        lambda i, s, r: _team2_return(i, s) + cash_out_usd(i, r),
    ),
    WinningsRule(
        "team1_wins_team2_cashed_out",
        lambda i: _no_sixes(i) and i.winner == "team1" and i.cash_out_team == "team2",
        lambda i, s, r: _team1_return(i, s) + cash_out_usd(i, r),
    ),
    WinningsRule(
        "team2_wins_team1_cashed_out",
        lambda i: _no_sixes(i) and i.winner == "team2" and i.cash_out_team == "team1",
        lambda i, s, r: _team2_return(i, s) + cash_out_usd(i, r),
    ),
    WinningsRule(
        "team1_wins",
        lambda i: i.winner == "team1",
        lambda i, s, r: _team1_return(i, s),
    ),
    WinningsRule(
        "team2_wins",
        lambda i: i.winner == "team2",
        lambda i, s, r: _team2_return(i, s),
    ),
    WinningsRule(
        "no_payout",
        lambda i: True,
        lambda i, s, r: 0.0,
    ),
)


def resolve_rule(inv: InvestmentInput) -> WinningsRule:
    for rule in WINNINGS_RULES:
        if rule.applies(inv):
            return rule
    raise LookupError("no winnings rule matched")  # pragma: no cover


def compute(inv: InvestmentInput, exchange_rate: float) -> InvestmentMetrics:
    stakes = stakes_for(inv)
    total_invested_usd = stakes.total_usd
    total_invested_inr = total_invested_usd * exchange_rate

    rule = resolve_rule(inv)
    total_winnings_usd = rule.payout(inv, stakes, exchange_rate)
    total_winnings_inr = total_winnings_usd * exchange_rate

    total_winnings_usd = round2(total_winnings_usd)
    total_winnings_inr = round2(total_winnings_inr)

    return InvestmentMetrics(
        investment_team1_usd=stakes.team1_usd,
        investment_team2_usd=stakes.team2_usd,
        investment_team1_inr=stakes.team1_usd * exchange_rate,
        investment_team2_inr=stakes.team2_usd * exchange_rate,
        total_invested_usd=total_invested_usd,
        total_invested_inr=total_invested_inr,
        total_winnings_usd=total_winnings_usd,
        total_winnings_inr=total_winnings_inr,
        profit_loss_usd=round2(total_winnings_usd - total_invested_usd),
        profit_loss_inr=round2(total_winnings_inr - total_invested_inr),
    )
