"""Example: preview a month's payroll through the service layer (no Flask).

Run ``scripts/init_db.py`` and ``scripts/seed_db.py`` first.
"""

import importlib
import json

from config import get_settings_module

from src.hr_payroll.hr_payroll.container import build_container

DEMO_COMPANY_ID = "3bbd6f5e-663b-4a00-b756-fcd2f4c08a79"


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    result = container.payroll_service.calculate_payroll(
        DEMO_COMPANY_ID,
        "2025-06",
        admin_inputs={
            "TSS1001": {"advanceTaken": 500},
            "TSS1002": {"advanceTaken": 0},
            "TSS1003": {"advanceTaken": 0},
        },
    )
    print(json.dumps(result, indent=2))

    rate = container.rate_schedule_service.get_rate_for_date("CENTRAL", "SKILLED", "2024-03-31T12:00:00Z")
    print(json.dumps(rate.to_dict() if rate else None, indent=2))


if __name__ == "__main__":
    main()
