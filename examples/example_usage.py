"""Example: drive the service layer directly, without Flask.

Controllers stay thin; every rule lives in the services wired by the container.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "hrms"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from hrms.container import build_container
from hrms.main import configure_logging


def main():
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    print(container.report_service.employee_summary(1).to_dict())
    print(container.leave_service.open_ledger(1).to_dict())
    for slip in container.payroll_service.list_payslips(employee_id=1, limit=3):
        print(slip.month, slip.year, slip.net_salary, slip.status.value)


if __name__ == "__main__":
    main()
