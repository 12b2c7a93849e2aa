"""Create the database (if missing) and apply database/schema.sql.

Usage: ``python scripts/init_db.py [--seed]``; settings come from ``APP_ENV``.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module
from src.hr_payroll.hr_payroll.common.logging_config import configure_logging, get_logger
from src.hr_payroll.hr_payroll.database.bootstrap import apply_schema, apply_seed_sql, list_tables

logger = get_logger("scripts.init_db")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    configure_logging("INFO", json_format=False)
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    logger.info("Tables: %s", ", ".join(list_tables(db_config)))

    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    return 0


if __name__ == "__main__":
    sys.exit(main())
