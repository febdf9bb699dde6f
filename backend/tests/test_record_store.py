import os
import sys

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app import models  # noqa: F401
from app.database import Base
from app.models.employee import Employee
from app.models.notification import Notification
from app.services.record_store import SqlRecordStore


def _build_session(create_tables: bool = True):
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_tables:
        Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)()


def _notification(notification_id: str, created_at: str, read: int = 0) -> Notification:
    return Notification(
        id=notification_id,
        employee_id="emp-1",
        employee_name="Alice Johnson",
        severity="warning",
        document_type="Visa",
        expiry_date="2026-04-01",
        message=f"message {notification_id}",
        read=read,
        created_at=created_at,
    )


def test_failed_reads_are_treated_as_empty():
    store = SqlRecordStore(_build_session(create_tables=False))

    assert store.list_employees() == []
    assert store.list_notifications() == []
    assert store.get_last_check() is None


def test_notifications_are_listed_newest_first():
    store = SqlRecordStore(_build_session())
    store.save_notifications([_notification("a", "2026-03-01T00:00:00+00:00")])
    store.save_notifications([_notification("b", "2026-03-02T00:00:00+00:00")])

    assert [n.id for n in store.list_notifications()] == ["b", "a"]


def test_mark_read_records_acknowledgement_time():
    store = SqlRecordStore(_build_session())
    store.save_notifications([_notification("a", "2026-03-01T00:00:00+00:00")])

    notification = store.mark_notification_read("a")

    assert notification.read == 1
    assert notification.read_at is not None
    assert store.mark_notification_read("missing") is None


def test_mark_all_read_only_touches_unread():
    store = SqlRecordStore(_build_session())
    store.save_notifications([
        _notification("a", "2026-03-01T00:00:00+00:00"),
        _notification("b", "2026-03-02T00:00:00+00:00"),
        _notification("c", "2026-03-03T00:00:00+00:00", read=1),
    ])

    assert store.mark_all_notifications_read() == 2
    assert all(n.read for n in store.list_notifications())


def test_deleting_employee_keeps_notification_history():
    store = SqlRecordStore(_build_session())
    employee = store.add_employee(Employee(full_name="Alice Johnson", visa_expiry_date="2026-04-01"))
    store.save_notifications([
        Notification(
            employee_id=employee.id,
            employee_name=employee.full_name,
            severity="warning",
            message="Visa for Alice Johnson expires in < 30 days (2026-04-01).",
            read=0,
        )
    ])

    store.delete_employee(employee)

    assert store.list_employees() == []
    [notification] = store.list_notifications()
    assert notification.employee_name == "Alice Johnson"


def test_last_check_round_trip_and_clear_all():
    store = SqlRecordStore(_build_session())
    store.add_employee(Employee(full_name="Bob Smith", employee_code="EMP002"))
    store.save_notifications([_notification("a", "2026-03-01T00:00:00+00:00")])
    store.set_last_check("2026-03-15T10:00:00+00:00")
    store.set_last_check("2026-03-16T10:00:00+00:00")

    assert store.get_last_check() == "2026-03-16T10:00:00+00:00"
    assert store.find_employee_by_code("EMP002").full_name == "Bob Smith"

    store.clear_all()

    assert store.list_employees() == []
    assert store.list_notifications() == []
    assert store.get_last_check() is None


def test_replace_all_leaves_omitted_collection_alone():
    store = SqlRecordStore(_build_session())
    store.add_employee(Employee(full_name="Bob Smith"))
    store.save_notifications([_notification("a", "2026-03-01T00:00:00+00:00")])

    store.replace_all(employees=[Employee(id="e-1", full_name="Diana Evans")])

    assert [e.full_name for e in store.list_employees()] == ["Diana Evans"]
    assert [n.id for n in store.list_notifications()] == ["a"]
