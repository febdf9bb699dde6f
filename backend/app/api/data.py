"""Data management endpoints: backup, restore, reset."""
import logging

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from app.api.deps import get_store
from app.config import get_settings
from app.models.employee import Employee
from app.models.notification import Notification
from app.schemas.backup import BackupPayload, RestoreRequest, RestoreResponse
from app.schemas.employee import EmployeeRecord
from app.schemas.notification import NotificationResponse
from app.services.expiry_dates import utc_now_iso
from app.services.record_store import SqlRecordStore
from app.services.seed_loader import load_seed_employees

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/backup", response_model=BackupPayload)
def export_backup(store: SqlRecordStore = Depends(get_store)):
    """Export all employees and notifications."""
    return BackupPayload(
        employees=[EmployeeRecord.model_validate(e) for e in store.list_employees()],
        notifications=[NotificationResponse.model_validate(n) for n in store.list_notifications()],
        exported_at=utc_now_iso(),
    )


@router.post("/restore", response_model=RestoreResponse)
def restore_backup(
    request: RestoreRequest,
    store: SqlRecordStore = Depends(get_store),
):
    """Replace stored collections with the ones in a backup.

    Entries that fail validation are skipped and listed in the response.
    """
    skipped = []

    employees = None
    if request.employees is not None:
        employees = []
        seen_ids: set[str] = set()
        seen_codes: set[str] = set()
        for index, raw in enumerate(request.employees):
            try:
                record = EmployeeRecord.model_validate(raw)
            except ValidationError as e:
                skipped.append(f"employees[{index}]: {e.error_count()} invalid fields")
                continue
            if record.id in seen_ids or (record.employee_code and record.employee_code in seen_codes):
                skipped.append(f"employees[{index}]: duplicate id or employee code")
                continue
            seen_ids.add(record.id)
            if record.employee_code:
                seen_codes.add(record.employee_code)
            employees.append(Employee(**record.model_dump(exclude_none=True)))

    notifications = None
    if request.notifications is not None:
        notifications = []
        seen_notification_ids: set[str] = set()
        for index, raw in enumerate(request.notifications):
            try:
                record = NotificationResponse.model_validate(raw)
            except ValidationError as e:
                skipped.append(f"notifications[{index}]: {e.error_count()} invalid fields")
                continue
            if record.id in seen_notification_ids:
                skipped.append(f"notifications[{index}]: duplicate id")
                continue
            seen_notification_ids.add(record.id)
            values = record.model_dump()
            values["read"] = 1 if values["read"] else 0
            notifications.append(Notification(**values))

    store.replace_all(employees=employees, notifications=notifications)
    logger.info(
        f"Restored backup: {len(employees) if employees is not None else 'no'} employees, "
        f"{len(notifications) if notifications is not None else 'no'} notifications, "
        f"{len(skipped)} skipped"
    )

    return RestoreResponse(
        employees_restored=len(employees) if employees is not None else None,
        notifications_restored=len(notifications) if notifications is not None else None,
        skipped=skipped,
    )


@router.post("/reset")
def reset_data(store: SqlRecordStore = Depends(get_store)):
    """Delete all employees and notifications, then re-seed demo data if enabled."""
    store.clear_all()
    seeded = load_seed_employees(store) if settings.seed_demo_data else []
    logger.info(f"Data reset, {len(seeded)} demo employees seeded")
    return {"success": True, "seeded": len(seeded)}
