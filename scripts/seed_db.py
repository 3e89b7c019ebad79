from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.accounting_system.accounting_system.database.bootstrap import apply_seed_sql, ensure_admin_user


def main() -> None:
    parser = argparse.ArgumentParser(description="Load demo vendors/vouchers/employees and the admin account.")
    parser.add_argument("--admin-username", default=None)
    parser.add_argument("--admin-password", default=None)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    if not settings.DB_CONFIG:
        raise SystemExit("DATABASE_URL is not set; nothing to seed.")
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_admin_user(
        db_config,
        username=args.admin_username or getattr(settings, "ADMIN_USERNAME", "admin"),
        password=args.admin_password or getattr(settings, "ADMIN_PASSWORD", "admin123"),
    )

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
