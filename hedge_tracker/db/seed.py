"""Seeding helpers for login identities.

Registration over HTTP is off by default, so operators create users with
`seed_user` (see scripts/create_user.py). Existing users are left untouched
unless `reset_password` is set, so this can be safely re-run.
"""

from __future__ import annotations
from pathlib import Path

from hedge_tracker.core.security import hash_password
from .dal import Database
from .migrate import apply_migrations


def seed_user(
    db_path: Path, user_id: str, password: str, *, reset_password: bool = False
) -> bool:
    """Ensure `user_id` exists. Returns True when a row was created or updated."""
    apply_migrations(db_path)  # ensure tables exist
    db = Database(db_path)
    if db.get_user(user_id) is None:
        db.create_user(user_id, hash_password(password))
        return True
    if reset_password:
        db.set_password(user_id, hash_password(password))
        return True
    return False
