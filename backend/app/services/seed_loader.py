"""Service to seed demo employees from a YAML file."""
import logging
from datetime import date, timedelta
from pathlib import Path

import yaml

from app.config import get_settings
from app.models.employee import Employee
from app.services.notifications import run_notification_check
from app.services.record_store import SqlRecordStore

logger = logging.getLogger(__name__)
settings = get_settings()

# YAML offset key -> employee date field
OFFSET_FIELDS = {
    "visa_issue_in_days": "visa_issue_date",
    "visa_expiry_in_days": "visa_expiry_date",
    "health_card_expiry_in_days": "health_card_expiry_date",
    "labour_card_expiry_in_days": "labour_card_expiry_date",
}


def load_seed_employees(
    store: SqlRecordStore,
    seed_file: Path | None = None,
    today: date | None = None,
) -> list[Employee]:
    """Seed demo employees into an empty store and run the first check.

    Does nothing when employees already exist. Returns the seeded employees.
    """
    if seed_file is None:
        seed_file = settings.seed_file
    if today is None:
        today = date.today()

    if store.list_employees():
        return []

    if not seed_file.exists():
        logger.warning(f"Seed file not found: {seed_file}")
        return []

    with open(seed_file, "r") as f:
        data = yaml.safe_load(f) or {}

    seeded = []
    for entry in data.get("employees", []):
        employee = _build_employee(entry, today)
        if employee is None:
            continue
        store.db.add(employee)
        seeded.append(employee)

    store.db.commit()
    run_notification_check(store, today=today)
    logger.info(f"Seeded {len(seeded)} demo employees")
    return seeded


def _build_employee(entry: dict, today: date) -> Employee | None:
    """Build one employee from a seed entry, resolving day offsets."""
    full_name = entry.get("full_name")
    if not full_name:
        logger.warning(f"Seed entry missing full_name: {entry}")
        return None

    employee = Employee(
        employee_code=entry.get("employee_code"),
        full_name=full_name,
        passport_number=entry.get("passport_number"),
        visa_type=entry.get("visa_type", "Employment"),
    )
    for offset_key, field in OFFSET_FIELDS.items():
        offset = entry.get(offset_key)
        if offset is None:
            continue
        try:
            days = int(offset)
        except (TypeError, ValueError):
            logger.warning(f"Seed entry {full_name} has invalid {offset_key}: {offset!r}")
            return None
        setattr(employee, field, (today + timedelta(days=days)).isoformat())
    return employee
