"""Database migration utilities.

Handles schema evolution by applying idempotent migrations keyed by an integer
`schema_version` stored in the metadata table. Each migration upgrades the
SQLite schema in-place while preserving user data.

Versions:
  1. users + investments with a fixed 25 USD stake base.
  2. investments gain `custom_base_amount` and `exchange_rate`; the winner
     check is widened to allow 'none'.
"""

from __future__ import annotations
from pathlib import Path
import logging
import sqlite3
from typing import Optional, Set

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schema_version"
LEGACY_FALLBACK_RATE = 83.0

logger = logging.getLogger("hedge_tracker.db.migrate")


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn) or 1
        if version < 2:
            _migrate_to_v2(conn)
            version = 2
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _columns(cur: sqlite3.Cursor, table: str) -> Set[str]:
    cur.execute(f"PRAGMA table_info({table})")
    return {row[1] for row in cur.fetchall()}


def _table_sql(cur: sqlite3.Cursor, table: str) -> str:
    cur.execute("SELECT sql FROM sqlite_master WHERE type='table' AND name=?", (table,))
    row = cur.fetchone()
    return row[0] if row and row[0] else ""


def _migrate_to_v2(conn: sqlite3.Connection) -> None:
    """Upgrade schema to version 2 (custom stake base + stored rate)."""
    cur = conn.cursor()
    try:
        if "'none'" in _table_sql(cur, "investments"):
            # Fresh database created from the current DDL; nothing to rebuild.
            return
        existing = _columns(cur, "investments")
        logger.info("migrating investments table to schema v2")
        cur.execute("ALTER TABLE investments RENAME TO investments_v1")
        cur.execute(schema_def.INVESTMENTS_DDL)
        targets = sorted(existing & _columns(cur, "investments"))
        sources = list(targets)
        params: list = []
        if "exchange_rate" not in existing:
            # v1 rows did not store the rate; recover it from the INR mirror.
            targets.append("exchange_rate")
            sources.append(
                "CASE WHEN total_invested_usd > 0 "
                "THEN total_invested_inr / total_invested_usd ELSE ? END"
            )
            params.append(LEGACY_FALLBACK_RATE)
        cur.execute(
            f"INSERT INTO investments ({', '.join(targets)}) "
            f"SELECT {', '.join(sources)} FROM investments_v1",
            params,
        )
        cur.execute("DROP TABLE investments_v1")
        cur.execute(schema_def.INVESTMENTS_OWNER_INDEX_DDL)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
