"""Example: use the service layer directly, without Flask.

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.hr_pro.hr_pro.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        current_employer=settings.CURRENT_EMPLOYER_NAME,
    )
    for employee in container.employee_service.list_employees():
        print(employee["id"], employee["fullName"], employee["financials"]["netSalary"])

    detail = container.employee_service.get_detail(2)
    print(detail["vacations"])


if __name__ == "__main__":
    main()
