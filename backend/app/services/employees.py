"""Employee record service: writes trigger the notification sweep."""
import logging
from datetime import date

from app.models.employee import Employee
from app.services.document_status import (
    Tier,
    aggregate,
    document_tiers,
    missing_documents,
)
from app.services.notifications import run_notification_check
from app.services.record_store import SqlRecordStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "employee_code",
    "full_name",
    "passport_number",
    "visa_type",
    "visa_issue_date",
    "visa_expiry_date",
    "health_card_expiry_date",
    "labour_card_expiry_date",
)


class EmployeeError(Exception):
    """Base class for employee write failures."""


class EmployeeNotFoundError(EmployeeError):
    def __init__(self, employee_id: str):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class DuplicateEmployeeCodeError(EmployeeError):
    def __init__(self, employee_code: str):
        super().__init__(f"Duplicate employee code: {employee_code}")
        self.employee_code = employee_code


def describe_employee(employee: Employee, today: date | None = None) -> dict:
    """Employee fields plus status derived for today."""
    if today is None:
        today = date.today()
    tiers = document_tiers(employee, today)
    data = {field: getattr(employee, field) for field in EDITABLE_FIELDS}
    data.update({
        "id": employee.id,
        "created_at": employee.created_at,
        "updated_at": employee.updated_at,
        "status": aggregate(*tiers.values()),
        "document_statuses": tiers,
        "missing_documents": missing_documents(employee),
    })
    return data


def list_employees_with_status(
    store: SqlRecordStore,
    search: str | None = None,
    status: Tier | None = None,
    today: date | None = None,
) -> list[dict]:
    """Employees with live status, soonest visa expiry first.

    ``search`` matches name or passport number case-insensitively.
    """
    if today is None:
        today = date.today()

    described = [describe_employee(e, today) for e in store.list_employees()]

    if search:
        needle = search.lower()
        described = [
            e for e in described
            if needle in (e["full_name"] or "").lower()
            or needle in (e["passport_number"] or "").lower()
        ]
    if status:
        described = [e for e in described if e["status"] == status]

    # Records without a visa expiry sort last
    described.sort(key=lambda e: (not e["visa_expiry_date"], e["visa_expiry_date"] or ""))
    return described


def _check_code_available(store: SqlRecordStore, employee_code: str | None, exclude_id: str | None = None) -> None:
    if not employee_code:
        return
    existing = store.find_employee_by_code(employee_code)
    if existing and existing.id != exclude_id:
        raise DuplicateEmployeeCodeError(employee_code)


def create_employee(store: SqlRecordStore, data: dict, run_check: bool = True) -> Employee:
    """Create an employee and raise alerts for it.

    Raises DuplicateEmployeeCodeError if the external code is taken.
    """
    values = {field: data.get(field) for field in EDITABLE_FIELDS if field in data}
    _check_code_available(store, values.get("employee_code"))

    employee = store.add_employee(Employee(**values))
    logger.info(f"Created employee {employee.id} ({employee.full_name})")

    if run_check:
        run_notification_check(store)
    return employee


def update_employee(store: SqlRecordStore, employee_id: str, updates: dict) -> Employee:
    """Apply a partial update and raise alerts for the new dates."""
    employee = store.get_employee(employee_id)
    if not employee:
        raise EmployeeNotFoundError(employee_id)

    if "employee_code" in updates:
        _check_code_available(store, updates["employee_code"], exclude_id=employee_id)

    for field in EDITABLE_FIELDS:
        if field not in updates:
            continue
        # Name and visa type can be changed but not cleared
        if field in ("full_name", "visa_type") and not updates[field]:
            continue
        setattr(employee, field, updates[field])

    employee = store.update_employee(employee)
    logger.info(f"Updated employee {employee.id}")

    run_notification_check(store)
    return employee


def delete_employee(store: SqlRecordStore, employee_id: str) -> None:
    """Delete an employee. Their notification history is kept."""
    employee = store.get_employee(employee_id)
    if not employee:
        raise EmployeeNotFoundError(employee_id)
    store.delete_employee(employee)
    logger.info(f"Deleted employee {employee_id}")


def get_dashboard_stats(store: SqlRecordStore, today: date | None = None) -> dict:
    """Employee counts per aggregate status."""
    if today is None:
        today = date.today()

    counts = {tier: 0 for tier in Tier}
    missing_data = 0
    for employee in store.list_employees():
        counts[aggregate(*document_tiers(employee, today).values())] += 1
        if missing_documents(employee):
            missing_data += 1

    unread = sum(1 for n in store.list_notifications() if not n.read)

    return {
        "total_employees": sum(counts.values()),
        "valid": counts[Tier.VALID],
        "expiring_30_days": counts[Tier.WARNING],
        "expiring_7_days": counts[Tier.CRITICAL],
        "expired": counts[Tier.EXPIRED],
        "missing_data": missing_data,
        "unread_notifications": unread,
        "last_check": store.get_last_check(),
    }
