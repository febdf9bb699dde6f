"""Notification service for document expiry alerts."""
import logging
import uuid
from datetime import date

from app.models.notification import Notification
from app.services.document_status import DOCUMENT_FIELDS, Tier, classify
from app.services.expiry_dates import utc_now_iso
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATES = {
    Tier.EXPIRED: "{document} for {name} has EXPIRED on {date}.",
    Tier.CRITICAL: "{document} for {name} expires in < 7 days ({date}).",
    Tier.WARNING: "{document} for {name} expires in < 30 days ({date}).",
}


def build_message(document: str, tier: Tier, employee_name: str, expiry_date: str) -> str:
    """Render the alert text for a document in a non-valid tier."""
    return MESSAGE_TEMPLATES[tier].format(
        document=document,
        name=employee_name,
        date=expiry_date,
    )


def _alert_key(employee_id: str, document: str, severity: str, expiry_date: str) -> tuple:
    return (employee_id, document, severity, expiry_date)


def _unread_index(existing: list[Notification]) -> tuple[set[tuple], set[tuple]]:
    """Alert keys and (employee_id, message) pairs of unread notifications."""
    keys: set[tuple] = set()
    messages: set[tuple] = set()
    for n in existing:
        if n.read:
            continue
        messages.add((n.employee_id, n.message))
        if n.document_type and n.expiry_date:
            keys.add(_alert_key(n.employee_id, n.document_type, n.severity, n.expiry_date))
    return keys, messages


def _alerts_for_employee(employee, today: date) -> list[tuple[str, Tier, str]]:
    """(document, tier, literal expiry date) for every non-valid document."""
    alerts = []
    for document, field in DOCUMENT_FIELDS.items():
        expiry_date = getattr(employee, field)
        tier = classify(expiry_date, today)
        if tier == Tier.VALID:
            continue
        alerts.append((document, tier, expiry_date))
    return alerts


def reconcile_notifications(
    employees: list,
    existing_notifications: list[Notification],
    today: date | None = None,
    now: str | None = None,
) -> list[Notification]:
    """Compare current document tiers with the alert log.

    Returns unsaved notifications for every non-valid document that has no
    matching unread alert. Read alerts do not suppress, so acknowledging an
    alert makes the same document eligible to alert again on the next run.

    A record that fails to process is logged and skipped.
    """
    if today is None:
        today = date.today()
    if now is None:
        now = utc_now_iso()

    unread_keys, unread_messages = _unread_index(existing_notifications)
    created: list[Notification] = []

    for employee in employees:
        try:
            employee_id = employee.id
            employee_name = employee.full_name
            pending = []
            for document, tier, expiry_date in _alerts_for_employee(employee, today):
                severity = tier.value.lower()
                message = build_message(document, tier, employee_name, expiry_date)
                key = _alert_key(employee_id, document, severity, expiry_date)
                if key in unread_keys or (employee_id, message) in unread_messages:
                    continue
                pending.append((key, message, Notification(
                    id=str(uuid.uuid4()),
                    employee_id=employee_id,
                    employee_name=employee_name,
                    severity=severity,
                    document_type=document,
                    expiry_date=expiry_date,
                    message=message,
                    read=0,
                    created_at=now,
                )))
        except Exception as e:
            logger.error(f"Skipping employee record {getattr(employee, 'id', '?')} during reconcile: {e}")
            continue

        for key, message, notification in pending:
            unread_keys.add(key)
            unread_messages.add((notification.employee_id, message))
            created.append(notification)

    return created


def run_notification_check(store: RecordStore, today: date | None = None) -> list[Notification]:
    """Sweep every employee and persist any new alerts.

    Safe to run repeatedly: a second run with no data change creates nothing.
    """
    employees = store.list_employees()
    existing = store.list_notifications()

    new_notifications = reconcile_notifications(employees, existing, today=today)
    store.save_notifications(new_notifications)

    set_last_check = getattr(store, "set_last_check", None)
    if set_last_check is not None:
        set_last_check(utc_now_iso())

    logger.info(
        f"Notification check: {len(employees)} employees, "
        f"{len(new_notifications)} new notifications"
    )
    return new_notifications
