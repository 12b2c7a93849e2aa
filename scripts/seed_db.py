"""Load the demo company, guards, template and statutory rates from database/seed.sql.

The schema must exist already (see ``scripts/init_db.py``). Re-running is safe:
the seed upserts its rows.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module
from src.hr_payroll.hr_payroll.common.logging_config import configure_logging
from src.hr_payroll.hr_payroll.database.bootstrap import apply_seed_sql


def main() -> int:
    load_dotenv(override=False)
    configure_logging("INFO", json_format=False)
    settings = importlib.import_module(get_settings_module())
    apply_seed_sql(dict(settings.DB_CONFIG), seed_path=REPO_ROOT / "database" / "seed.sql")
    return 0


if __name__ == "__main__":
    sys.exit(main())
