"""Data Access Layer for users and owner-scoped investment records.

Responsibilities
----------------
- Store login identities (user id + password hash).
- Persist merged investment records (input fields + computed metrics),
  always keyed by both the record id and the owning user id so one user can
  never read or mutate another user's rows.
- Offer the small aggregation used by the summary endpoint.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Any, Dict, List, Mapping, Optional

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

INVESTMENT_COLUMNS = (
    "betting_id",
    "team1",
    "team2",
    "date",
    "odds1",
    "odds2",
    "six_team1",
    "six_team2",
    "winner",
    "cash_out_team",
    "custom_cash_out",
    "custom_base_amount",
    "currency",
    "exchange_rate",
    "investment_team1_usd",
    "investment_team2_usd",
    "investment_team1_inr",
    "investment_team2_inr",
    "total_invested_usd",
    "total_invested_inr",
    "total_winnings_usd",
    "total_winnings_inr",
    "profit_loss_usd",
    "profit_loss_inr",
)


def _row_values(record: Mapping[str, Any]) -> List[Any]:
    missing = [c for c in INVESTMENT_COLUMNS if c not in record]
    if missing:
        raise KeyError(f"investment record missing columns: {', '.join(missing)}")
    return [record[c] for c in INVESTMENT_COLUMNS]


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def ping(self) -> None:
        with self._connect() as conn:
            conn.execute("SELECT 1")

    # ------------------------------------------------------------------
    # Users
    def create_user(self, user_id: str, password_hash: str) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            try:
                cur.execute(
                    f"""
                    INSERT INTO users (user_id, password_hash, created_at)
                    VALUES (?, ?, ({UTC_NOW_SQL}))
                    """,
                    (user_id, password_hash),
                )
            except sqlite3.IntegrityError as e:
                raise ValueError("User already exists") from e
            conn.commit()

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM users WHERE user_id = ?", (user_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def set_password(self, user_id: str, password_hash: str) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "UPDATE users SET password_hash = ? WHERE user_id = ?",
                (password_hash, user_id),
            )
            if cur.rowcount == 0:
                raise ValueError("User not found")
            conn.commit()

    # ------------------------------------------------------------------
    # Investment CRUD (owner scoped)
    def insert_investment(self, user_id: str, record: Mapping[str, Any]) -> int:
        cols = ", ".join(INVESTMENT_COLUMNS)
        placeholders = ", ".join("?" for _ in INVESTMENT_COLUMNS)
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO investments (
                    user_id, {cols}, created_at, updated_at
                ) VALUES (?, {placeholders}, ({UTC_NOW_SQL}), ({UTC_NOW_SQL}))
                """,
                [user_id, *_row_values(record)],
            )
            conn.commit()
            return int(cur.lastrowid)

    def get_investment(
        self, investment_id: int, user_id: str
    ) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM investments WHERE id = ? AND user_id = ?",
                (investment_id, user_id),
            )
            row = cur.fetchone()
            return dict(row) if row else None

    def list_investments(self, user_id: str) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM investments WHERE user_id = ? ORDER BY date DESC, id DESC",
                (user_id,),
            )
            return [dict(r) for r in cur.fetchall()]

    def update_investment(
        self, investment_id: int, user_id: str, record: Mapping[str, Any]
    ) -> None:
        assignments = ", ".join(f"{c} = ?" for c in INVESTMENT_COLUMNS)
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                UPDATE investments
                SET {assignments}, updated_at = ({UTC_NOW_SQL})
                WHERE id = ? AND user_id = ?
                """,
                [*_row_values(record), investment_id, user_id],
            )
            if cur.rowcount == 0:
                raise ValueError("Investment not found")
            conn.commit()

    def delete_investment(self, investment_id: int, user_id: str) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "DELETE FROM investments WHERE id = ? AND user_id = ?",
                (investment_id, user_id),
            )
            if cur.rowcount == 0:
                raise ValueError("Investment not found")
            conn.commit()

    # ------------------------------------------------------------------
    # Aggregations (owner scoped)
    def investment_totals(self, user_id: str) -> Dict[str, Any]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT
                    COUNT(*) AS count,
                    COALESCE(SUM(total_invested_usd), 0) AS total_invested_usd,
                    COALESCE(SUM(total_invested_inr), 0) AS total_invested_inr,
                    COALESCE(SUM(total_winnings_usd), 0) AS total_winnings_usd,
                    COALESCE(SUM(total_winnings_inr), 0) AS total_winnings_inr,
                    COALESCE(SUM(profit_loss_usd), 0) AS profit_loss_usd,
                    COALESCE(SUM(profit_loss_inr), 0) AS profit_loss_inr,
                    COALESCE(SUM(CASE WHEN profit_loss_usd > 0 THEN 1 ELSE 0 END), 0) AS profitable,
                    COALESCE(SUM(CASE WHEN profit_loss_usd < 0 THEN 1 ELSE 0 END), 0) AS losing
                FROM investments
                WHERE user_id = ?
                """,
                (user_id,),
            )
            return dict(cur.fetchone())
