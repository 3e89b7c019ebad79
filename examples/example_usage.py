"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.accounting_system.accounting_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for row in container.report_service.monthly(6):
        print(row["month"], row["total"])

    period = container.payroll_service.get_or_init_period("2025-01")
    for record in period.records:
        print(record.employee_name, record.net_pay)


if __name__ == "__main__":
    main()
