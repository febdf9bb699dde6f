import os
import sys
from datetime import date, timedelta
from types import SimpleNamespace

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.models.notification import Notification
from app.services.notifications import (
    build_message,
    reconcile_notifications,
    run_notification_check,
)
from app.services.document_status import Tier

TODAY = date(2026, 3, 15)


def _days(offset: int) -> str:
    return (TODAY + timedelta(days=offset)).isoformat()


def _employee(employee_id="emp-1", name="Charlie Davis", visa=90, health=90, labour=90):
    return SimpleNamespace(
        id=employee_id,
        full_name=name,
        visa_expiry_date=_days(visa) if visa is not None else None,
        health_card_expiry_date=_days(health) if health is not None else None,
        labour_card_expiry_date=_days(labour) if labour is not None else None,
    )


class FakeStore:
    def __init__(self, employees, notifications=None):
        self.employees = employees
        self.notifications = list(notifications or [])
        self.last_check = None

    def list_employees(self):
        return list(self.employees)

    def list_notifications(self):
        return list(self.notifications)

    def save_notifications(self, new_ones):
        self.notifications = list(new_ones) + self.notifications

    def set_last_check(self, instant):
        self.last_check = instant


def test_mixed_documents_raise_one_alert_per_non_valid_document():
    employee = _employee(visa=5, health=40, labour=-3)

    created = reconcile_notifications([employee], [], today=TODAY)

    assert len(created) == 2
    by_document = {n.document_type: n for n in created}
    assert set(by_document) == {"Visa", "Labour Card"}
    assert by_document["Visa"].severity == "critical"
    assert by_document["Visa"].message == f"Visa for Charlie Davis expires in < 7 days ({_days(5)})."
    assert by_document["Labour Card"].severity == "expired"
    assert by_document["Labour Card"].message == f"Labour Card for Charlie Davis has EXPIRED on {_days(-3)}."
    assert all(n.employee_id == "emp-1" and n.employee_name == "Charlie Davis" for n in created)
    assert all(not n.read for n in created)


def test_all_documents_valid_creates_nothing():
    created = reconcile_notifications([_employee(visa=31, health=60, labour=365)], [], today=TODAY)

    assert created == []


def test_second_reconcile_with_unread_alerts_creates_nothing():
    employees = [_employee(visa=20), _employee("emp-2", "Bob Smith", health=-1)]

    first = reconcile_notifications(employees, [], today=TODAY)
    second = reconcile_notifications(employees, first, today=TODAY)

    assert len(first) == 2
    assert second == []


def test_read_alert_is_raised_again_at_same_tier():
    employee = _employee(visa=3)
    [original] = reconcile_notifications([employee], [], today=TODAY)
    original.read = 1

    created = reconcile_notifications([employee], [original], today=TODAY)

    assert len(created) == 1
    assert created[0].severity == "critical"
    assert created[0].message == original.message
    assert created[0].id != original.id


def test_tier_change_raises_new_alert_while_old_one_unread():
    employee = _employee(visa=20)
    [warning] = reconcile_notifications([employee], [], today=TODAY)

    later = TODAY + timedelta(days=15)
    created = reconcile_notifications([employee], [warning], today=later)

    assert len(created) == 1
    assert created[0].severity == "critical"


def test_unread_alert_from_old_record_suppresses_by_message():
    employee = _employee(visa=3)
    legacy = Notification(
        id="legacy-1",
        employee_id="emp-1",
        employee_name="Charlie Davis",
        severity="critical",
        message=build_message("Visa", Tier.CRITICAL, "Charlie Davis", _days(3)),
        read=0,
        created_at="2026-03-14T00:00:00+00:00",
    )

    assert reconcile_notifications([employee], [legacy], today=TODAY) == []


def test_renamed_employee_does_not_duplicate_unread_alert():
    [original] = reconcile_notifications([_employee(visa=3)], [], today=TODAY)

    renamed = _employee(name="Charles Davis", visa=3)

    assert reconcile_notifications([renamed], [original], today=TODAY) == []


def test_alert_for_other_employee_does_not_suppress():
    [other] = reconcile_notifications([_employee("emp-2", visa=3)], [], today=TODAY)

    created = reconcile_notifications([_employee("emp-1", visa=3)], [other], today=TODAY)

    assert len(created) == 1
    assert created[0].employee_id == "emp-1"


def test_same_employee_listed_twice_alerts_once():
    employee = _employee(labour=-10)

    created = reconcile_notifications([employee, employee], [], today=TODAY)

    assert len(created) == 1


def test_malformed_record_is_skipped_without_stopping_the_sweep():
    broken = SimpleNamespace(id="broken")
    employee = _employee(visa=-1)

    created = reconcile_notifications([broken, employee], [], today=TODAY)

    assert len(created) == 1
    assert created[0].employee_id == "emp-1"


def test_new_notifications_carry_creation_time():
    created = reconcile_notifications(
        [_employee(visa=1)], [], today=TODAY, now="2026-03-15T09:00:00+00:00"
    )

    assert created[0].created_at == "2026-03-15T09:00:00+00:00"


def test_run_notification_check_saves_new_alerts_ahead_of_old_ones():
    old = Notification(
        id="old-1",
        employee_id="emp-9",
        employee_name="Someone Else",
        severity="warning",
        message="old alert",
        read=1,
        created_at="2026-01-01T00:00:00+00:00",
    )
    store = FakeStore([_employee(visa=2)], [old])

    created = run_notification_check(store, today=TODAY)

    assert len(created) == 1
    assert store.notifications[0] is created[0]
    assert store.notifications[-1] is old
    assert store.last_check is not None


def test_run_notification_check_twice_is_idempotent():
    store = FakeStore([_employee(visa=2, health=-5, labour=25)])

    first = run_notification_check(store, today=TODAY)
    second = run_notification_check(store, today=TODAY)

    assert len(first) == 3
    assert second == []
    assert len(store.notifications) == 3
