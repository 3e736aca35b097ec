"""Create (or reset) a login for the hedge tracker.

Usage:
    python scripts/create_user.py alice 's3cret-pass' [--reset-password]

Uses the same settings as the app (DATA_DIR / DB_PATH environment variables).
"""

import argparse
import getpass
import sys

from hedge_tracker.core.config import get_settings
from hedge_tracker.db.seed import seed_user


def run(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id")
    parser.add_argument("password", nargs="?")
    parser.add_argument("--reset-password", action="store_true")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    settings = get_settings()
    changed = seed_user(
        settings.db_path, args.user_id, password, reset_password=args.reset_password
    )
    print(f"{args.user_id}: {'saved' if changed else 'already exists (unchanged)'}")
    return 0


if __name__ == "__main__":
    sys.exit(run())
