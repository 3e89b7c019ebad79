"""Dump the accounting database with `mysqldump`.

Requires the MySQL client tools on PATH.
"""

from __future__ import annotations

import importlib
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module


def build_command(db: dict) -> list[str]:
    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
    ]
    # a bare -p makes mysqldump prompt for the password
    if db.get("password"):
        cmd.append(f"-p{db['password']}")
    cmd += ["--single-transaction", db["database"]]
    return cmd


def dump(db: dict, out_file: Path) -> None:
    """Write the dump to `out_file`; nothing is left behind if the dump fails."""
    try:
        with out_file.open("wb") as f:
            subprocess.run(build_command(db), stdout=f, stderr=subprocess.PIPE, check=True)
    except BaseException:
        out_file.unlink(missing_ok=True)
        raise


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = settings.DB_CONFIG
    if not db:
        raise SystemExit("DATABASE_URL is not set; nothing to back up.")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{db['database']}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.sql"

    try:
        dump(db, out_file)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools.")
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or b"").decode("utf-8", errors="replace").strip()
        raise SystemExit(f"Backup failed: {detail or e}")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
