"""Tests for the SQLite data access layer, seeding, and schema migrations."""

import sqlite3
from datetime import date

import pytest

from hedge_tracker.db.dal import Database
from hedge_tracker.db.migrate import CURRENT_SCHEMA_VERSION, apply_migrations
from hedge_tracker.db.seed import seed_user
from hedge_tracker.models.investment import InvestmentIn
from hedge_tracker.services.investments import build_record, row_to_out


@pytest.fixture
def db(tmp_path):
    path = tmp_path / "dal.sqlite3"
    apply_migrations(path)
    return Database(path)


def _record(**overrides):
    fields = dict(
        betting_id="b-1",
        team1="RCB",
        team2="KKR",
        date=date(2025, 5, 1),
        odds1=2.0,
        odds2=2.0,
        winner="team1",
        currency="USD",
    )
    fields.update(overrides)
    return build_record(InvestmentIn(**fields), 83.0)


def test_apply_migrations_is_idempotent(tmp_path):
    path = tmp_path / "m.sqlite3"
    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION
    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION


def test_insert_and_get_roundtrip(db):
    inv_id = db.insert_investment("alice", _record())
    row = db.get_investment(inv_id, "alice")
    assert row["team1"] == "RCB"
    assert row["total_winnings_usd"] == 25.0
    assert row["exchange_rate"] == 83.0
    out = row_to_out(row)
    assert out.six_team1 is False
    assert out.date == date(2025, 5, 1)


def test_rows_are_owner_scoped(db):
    inv_id = db.insert_investment("alice", _record())
    assert db.get_investment(inv_id, "bob") is None
    assert db.list_investments("bob") == []
    with pytest.raises(ValueError):
        db.update_investment(inv_id, "bob", _record(winner="team2"))
    with pytest.raises(ValueError):
        db.delete_investment(inv_id, "bob")
    assert db.get_investment(inv_id, "alice")["winner"] == "team1"


def test_list_orders_newest_match_first(db):
    db.insert_investment("alice", _record(betting_id="old", date=date(2025, 3, 1)))
    db.insert_investment("alice", _record(betting_id="new", date=date(2025, 6, 1)))
    assert [r["betting_id"] for r in db.list_investments("alice")] == ["new", "old"]


def test_update_and_delete(db):
    inv_id = db.insert_investment("alice", _record())
    db.update_investment(inv_id, "alice", _record(winner="none"))
    assert db.get_investment(inv_id, "alice")["total_winnings_usd"] == 0.0
    db.delete_investment(inv_id, "alice")
    assert db.get_investment(inv_id, "alice") is None
    with pytest.raises(ValueError):
        db.delete_investment(inv_id, "alice")


def test_insert_requires_all_columns(db):
    record = _record()
    del record["profit_loss_inr"]
    with pytest.raises(KeyError):
        db.insert_investment("alice", record)


def test_totals(db):
    db.insert_investment("alice", _record(winner="team1", odds1=3.0))   # profit
    db.insert_investment("alice", _record(winner="none"))               # loss
    db.insert_investment("bob", _record())
    totals = db.investment_totals("alice")
    assert totals["count"] == 2
    assert totals["profitable"] == 1
    assert totals["losing"] == 1
    empty = db.investment_totals("carol")
    assert empty["count"] == 0 and empty["profit_loss_usd"] == 0


def test_duplicate_user_rejected(db):
    db.create_user("alice", "hash")
    with pytest.raises(ValueError):
        db.create_user("alice", "hash")


def test_seed_user_is_rerunnable(tmp_path):
    path = tmp_path / "seed.sqlite3"
    assert seed_user(path, "alice", "pw-one") is True
    assert seed_user(path, "alice", "pw-two") is False
    assert seed_user(path, "alice", "pw-two", reset_password=True) is True
    with pytest.raises(ValueError):
        Database(path).set_password("nobody", "x")


def test_v1_database_is_migrated(tmp_path):
    path = tmp_path / "legacy.sqlite3"
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE investments (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            betting_id TEXT NOT NULL,
            team1 TEXT NOT NULL,
            team2 TEXT NOT NULL,
            date TEXT NOT NULL,
            odds1 REAL NOT NULL,
            odds2 REAL NOT NULL,
            six_team1 INTEGER NOT NULL DEFAULT 0,
            six_team2 INTEGER NOT NULL DEFAULT 0,
            winner TEXT NOT NULL CHECK (winner IN ('team1','team2')),
            cash_out_team TEXT NOT NULL DEFAULT '',
            custom_cash_out REAL NOT NULL DEFAULT 0,
            currency TEXT NOT NULL,
            investment_team1_usd REAL NOT NULL,
            investment_team2_usd REAL NOT NULL,
            investment_team1_inr REAL NOT NULL,
            investment_team2_inr REAL NOT NULL,
            total_invested_usd REAL NOT NULL,
            total_invested_inr REAL NOT NULL,
            total_winnings_usd REAL NOT NULL,
            total_winnings_inr REAL NOT NULL,
            profit_loss_usd REAL NOT NULL,
            profit_loss_inr REAL NOT NULL,
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now')),
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
        );
        INSERT INTO investments (
            user_id, betting_id, team1, team2, date, odds1, odds2, winner, currency,
            investment_team1_usd, investment_team2_usd, investment_team1_inr,
            investment_team2_inr, total_invested_usd, total_invested_inr,
            total_winnings_usd, total_winnings_inr, profit_loss_usd, profit_loss_inr
        ) VALUES (
            'alice', 'legacy-1', 'MI', 'CSK', '2024-04-01', 2, 2, 'team1', 'INR',
            12.5, 12.5, 1025, 1025, 25, 2050, 25, 2050, 0, 0
        );
        """
    )
    conn.commit()
    conn.close()

    assert apply_migrations(path) == 2
    db = Database(path)
    row = db.list_investments("alice")[0]
    assert row["betting_id"] == "legacy-1"
    assert row["exchange_rate"] == 82.0
    assert row["custom_base_amount"] is None
    # 'none' winner is now accepted
    db.insert_investment("alice", _record(winner="none"))
