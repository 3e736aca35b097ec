"""Database schema DDL definitions and initialization utilities.

Tables:
  - users: login identities (user_id + salted password hash)
  - investments: merged input + computed metrics per hedge, owned by a user
  - metadata: key/value store (schema version etc.)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

USERS_DDL = f"""
CREATE TABLE IF NOT EXISTS users (
    user_id TEXT PRIMARY KEY,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

INVESTMENTS_DDL = f"""
CREATE TABLE IF NOT EXISTS investments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    betting_id TEXT NOT NULL,
    team1 TEXT NOT NULL,
    team2 TEXT NOT NULL,
    date TEXT NOT NULL, -- ISO date (YYYY-MM-DD)
    odds1 REAL NOT NULL,
    odds2 REAL NOT NULL,
    six_team1 INTEGER NOT NULL DEFAULT 0,
    six_team2 INTEGER NOT NULL DEFAULT 0,
    winner TEXT NOT NULL CHECK (winner IN ('team1','team2','none')),
    cash_out_team TEXT NOT NULL DEFAULT '', -- 'team1' | 'team2' | ''
    custom_cash_out REAL NOT NULL DEFAULT 0,
    custom_base_amount REAL,
    currency TEXT NOT NULL, -- 'USD' | 'INR'
    exchange_rate REAL NOT NULL,
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
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

INVESTMENTS_OWNER_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_investments_user_date ON investments(user_id, date);"
)

DDL_ORDER: Sequence[str] = (
    USERS_DDL,
    INVESTMENTS_DDL,
    METADATA_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        _ensure_indexes(cur)
        conn.commit()
    finally:
        conn.close()


def _ensure_indexes(cur: sqlite3.Cursor) -> None:
    """Create indexes, tolerating legacy schemas missing scoped columns."""
    try:
        cur.execute(INVESTMENTS_OWNER_INDEX_DDL)
    except sqlite3.OperationalError:
        # Legacy tables may lack columns; migration adds them.
        pass
