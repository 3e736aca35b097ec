"""Tests for the investment metrics calculator and its winnings decision table."""

import pytest

from hedge_tracker.services.metrics import (
    WINNINGS_RULES,
    InvestmentInput,
    cash_out_usd,
    compute,
    resolve_rule,
)
from hedge_tracker.services.money import round2


def _inv(**kw):
    base = {"odds1": 2.0, "odds2": 2.0, "winner": "team1"}
    base.update(kw)
    return InvestmentInput(**base)


# ---------------------------------------------------------------------------
# round2
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    (2.675, 2.68),
    (1.005, 1.01),
    (-2.675, -2.68),   # halves go away from zero
    (8.333333333333334, 8.33),
    (0.0, 0.0),
])
def test_round2_half_away_from_zero(value, expected):
    assert round2(value) == expected


# ---------------------------------------------------------------------------
# Stakes and currency mirrors
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("odds1, odds2, base, rate", [
    (2.0, 2.0, None, 83.0),
    (1.5, 2.75, 40.0, 82.15),
    (3.0, 1.25, 10.0, 80.0),
    (1.01, 11.0, 25.0, 83.5),
])
def test_stakes_and_inr_mirrors(odds1, odds2, base, rate):
    m = compute(_inv(odds1=odds1, odds2=odds2, custom_base_amount=base), rate)
    b = base or 25.0
    assert m.investment_team1_usd == pytest.approx(b / odds1)
    assert m.investment_team2_usd == pytest.approx(b / odds2)
    assert m.total_invested_usd == pytest.approx(b / odds1 + b / odds2)
    assert m.investment_team1_inr == pytest.approx(b / odds1 * rate)
    assert m.investment_team2_inr == pytest.approx(b / odds2 * rate)
    assert m.total_invested_inr == pytest.approx((b / odds1 + b / odds2) * rate)


@pytest.mark.parametrize("base", [None, 0, -10])
def test_missing_or_non_positive_base_defaults_to_25(base):
    m = compute(_inv(custom_base_amount=base), 83.0)
    assert m.investment_team1_usd == 12.5
    assert m.total_invested_usd == 25.0


def test_custom_base_amount_scales_stakes():
    m = compute(_inv(odds1=2.0, odds2=4.0, custom_base_amount=100.0), 83.0)
    assert m.investment_team1_usd == 50.0
    assert m.investment_team2_usd == 25.0
    assert m.total_winnings_usd == 100.0


# ---------------------------------------------------------------------------
# Worked examples
# ---------------------------------------------------------------------------

def test_even_odds_team1_wins():
    m = compute(_inv(odds1=2, odds2=2, winner="team1"), 83.0)
    assert m.investment_team1_usd == 12.5
    assert m.investment_team2_usd == 12.5
    assert m.total_invested_usd == 25.0
    assert m.total_winnings_usd == 25.0
    assert m.profit_loss_usd == 0.0
    assert m.total_winnings_inr == 2075.0
    assert m.total_invested_inr == 2075.0
    assert m.profit_loss_inr == 0.0


def test_six_on_team1_team2_wins_bonus():
    m = compute(
        _inv(odds1=3, odds2=1.5, winner="team2", six_team1=True, six_team2=False),
        80.0,
    )
    assert m.investment_team2_usd == pytest.approx(25 / 1.5)
    assert m.total_winnings_usd == 50.0
    assert m.total_winnings_inr == 4000.0
    assert m.total_invested_usd == pytest.approx(25.0)
    assert m.profit_loss_usd == 25.0


def test_no_winner_no_sixes_loses_everything():
    m = compute(_inv(odds1=2, odds2=2, winner="none"), 83.0)
    assert m.total_winnings_usd == 0.0
    assert m.total_winnings_inr == 0.0
    assert m.profit_loss_usd == -m.total_invested_usd
    assert m.profit_loss_inr == -m.total_invested_inr


def test_rounding_only_at_output_points():
    # 25/3 = 8.333...; rounding stakes first would give 16.66 invested and
    # 8.34 profit. Only winnings and profit/loss are rounded.
    m = compute(_inv(odds1=3, odds2=3, winner="team1"), 83.0)
    assert m.investment_team1_usd == pytest.approx(25 / 3)
    assert round2(m.total_invested_usd) == 16.67
    assert m.total_winnings_usd == 25.0
    assert m.profit_loss_usd == 8.33


@pytest.mark.parametrize("odds1, odds2, rate", [
    (3, 3, 83.0),
    (1.85, 2.1, 83.27),
    (1.01, 11.0, 82.15),
])
def test_total_invested_is_sum_of_stakes(odds1, odds2, rate):
    m = compute(_inv(odds1=odds1, odds2=odds2), rate)
    assert m.total_invested_usd == m.investment_team1_usd + m.investment_team2_usd
    assert m.total_invested_inr == pytest.approx(
        m.investment_team1_inr + m.investment_team2_inr
    )


def test_inr_profit_loss_rounded_independently():
    m = compute(_inv(odds1=3, odds2=3, winner="team1"), 83.0)
    assert m.total_invested_inr == pytest.approx(50 / 3 * 83.0)
    assert m.total_winnings_inr == 2075.0
    assert m.profit_loss_inr == 691.67
    # Converting the rounded USD figure would give a different answer.
    assert round2(m.profit_loss_usd * 83.0) != m.profit_loss_inr


def test_compute_is_pure():
    inv = _inv(odds1=1.85, odds2=2.1, winner="team2", cash_out_team="team1",
               custom_cash_out=500)
    first = compute(inv, 83.27)
    second = compute(inv, 83.27)
    assert first == second
    assert first.as_dict() == second.as_dict()


# ---------------------------------------------------------------------------
# Decision table priority
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("winner", ["team1", "team2", "none"])
@pytest.mark.parametrize("cash_out_team, cash", [("", 0), ("team1", 830), ("team2", 4150)])
@pytest.mark.parametrize("odds1, odds2", [(2, 2), (1.4, 3.6)])
def test_both_sixes_pay_flat_50(winner, cash_out_team, cash, odds1, odds2):
    inv = _inv(odds1=odds1, odds2=odds2, winner=winner, six_team1=True,
               six_team2=True, cash_out_team=cash_out_team, custom_cash_out=cash)
    assert resolve_rule(inv).name == "both_sixes"
    assert compute(inv, 83.0).total_winnings_usd == 50.0


@pytest.mark.parametrize("kw, rule_name, winnings", [
    # six on team1 only
    (dict(six_team1=True, winner="team2"), "six_team1_team2_wins", 50.0),
    (dict(six_team1=True, winner="team1", cash_out_team="team2", custom_cash_out=830),
     "six_team1_team1_wins_team2_cashed_out", 35.0),
    (dict(six_team1=True, winner="team1"), "team1_wins", 25.0),
    (dict(six_team1=True, winner="none"), "no_payout", 0.0),
    # six on team2 only
    (dict(six_team2=True, winner="team1"), "six_team2_team1_wins", 50.0),
    (dict(six_team2=True, winner="team2", cash_out_team="team1", custom_cash_out=166),
     "six_team2_team2_wins_team1_cashed_out", 27.0),
    (dict(six_team2=True, winner="team2"), "team2_wins", 25.0),
    # no sixes
    (dict(winner="team1", cash_out_team="team2", custom_cash_out=830),
     "team1_wins_team2_cashed_out", 35.0),
    (dict(winner="team2", cash_out_team="team1", custom_cash_out=830),
     "team2_wins_team1_cashed_out", 35.0),
    (dict(winner="team1", cash_out_team="team1", custom_cash_out=830), "team1_wins", 25.0),
    (dict(winner="team2"), "team2_wins", 25.0),
    (dict(winner="none", cash_out_team="team1", custom_cash_out=830), "no_payout", 0.0),
])
def test_rule_resolution(kw, rule_name, winnings):
    inv = _inv(**kw)
    assert resolve_rule(inv).name == rule_name
    assert compute(inv, 83.0).total_winnings_usd == winnings


def test_rule_table_order():
    names = [r.name for r in WINNINGS_RULES]
    assert names[0] == "both_sixes"
    assert names[-1] == "no_payout"
    assert names.index("team1_wins_team2_cashed_out") < names.index("team1_wins")
    assert names.index("six_team1_team2_wins") < names.index("team2_wins")


# ---------------------------------------------------------------------------
# Cash-out handling
# ---------------------------------------------------------------------------

def test_zero_cash_out_contributes_nothing():
    inv = _inv(winner="team1", cash_out_team="team2", custom_cash_out=0)
    assert cash_out_usd(inv, 83.0) == 0.0
    assert compute(inv, 83.0).total_winnings_usd == 25.0


def test_cash_out_divided_by_rate_even_for_usd_records():
    # Known quirk: customCashOut is always treated as INR.
    usd = _inv(winner="team1", cash_out_team="team2", custom_cash_out=830, currency="USD")
    inr = _inv(winner="team1", cash_out_team="team2", custom_cash_out=830, currency="INR")
    assert compute(usd, 83.0) == compute(inr, 83.0)
    assert compute(usd, 83.0).total_winnings_usd == 35.0


def test_cash_out_is_not_clamped_to_stake():
    inv = _inv(winner="team1", cash_out_team="team2", custom_cash_out=83000)
    m = compute(inv, 83.0)
    assert m.total_winnings_usd == 1025.0
    assert m.profit_loss_usd == 1000.0
