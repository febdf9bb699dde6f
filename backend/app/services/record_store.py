"""Persistence for employee and notification records."""
import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.app_state import AppState
from app.models.employee import Employee
from app.models.notification import Notification
from app.services.expiry_dates import utc_now_iso

logger = logging.getLogger(__name__)

LAST_CHECK_KEY = "last_notification_check"


class RecordStore(Protocol):
    """What the notification sweep needs from storage."""

    def list_employees(self) -> list[Employee]:
        ...

    def list_notifications(self) -> list[Notification]:
        ...

    def save_notifications(self, new_ones: list[Notification]) -> None:
        ...


class SqlRecordStore:
    """Record store backed by a SQLAlchemy session.

    Listing never raises: a failed read is logged and reported as an empty
    collection so callers can decide how to recover.
    """

    def __init__(self, db: Session):
        self.db = db

    # Employees

    def list_employees(self) -> list[Employee]:
        try:
            return self.db.query(Employee).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load employees, treating as empty: {e}")
            self.db.rollback()
            return []

    def get_employee(self, employee_id: str) -> Employee | None:
        return self.db.query(Employee).filter(Employee.id == employee_id).first()

    def find_employee_by_code(self, employee_code: str) -> Employee | None:
        return self.db.query(Employee).filter(Employee.employee_code == employee_code).first()

    def add_employee(self, employee: Employee) -> Employee:
        self.db.add(employee)
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def update_employee(self, employee: Employee) -> Employee:
        employee.updated_at = utc_now_iso()
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def delete_employee(self, employee: Employee) -> None:
        self.db.delete(employee)
        self.db.commit()

    # Notifications

    def list_notifications(self) -> list[Notification]:
        try:
            return self.db.query(Notification).order_by(Notification.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load notifications, treating as empty: {e}")
            self.db.rollback()
            return []

    def save_notifications(self, new_ones: list[Notification]) -> None:
        if not new_ones:
            return
        self.db.add_all(new_ones)
        self.db.commit()

    def get_notification(self, notification_id: str) -> Notification | None:
        return self.db.query(Notification).filter(Notification.id == notification_id).first()

    def mark_notification_read(self, notification_id: str) -> Notification | None:
        notification = self.get_notification(notification_id)
        if not notification:
            return None
        if not notification.read:
            notification.read = 1
            notification.read_at = utc_now_iso()
            self.db.commit()
        return notification

    def mark_all_notifications_read(self) -> int:
        read_at = utc_now_iso()
        updated = (
            self.db.query(Notification)
            .filter(Notification.read == 0)
            .update({Notification.read: 1, Notification.read_at: read_at}, synchronize_session=False)
        )
        self.db.commit()
        return updated

    # Bookkeeping

    def get_last_check(self) -> str | None:
        try:
            state = self.db.get(AppState, LAST_CHECK_KEY)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read last check time: {e}")
            self.db.rollback()
            return None
        return state.value if state else None

    def set_last_check(self, instant: str) -> None:
        state = self.db.get(AppState, LAST_CHECK_KEY)
        if state:
            state.value = instant
        else:
            self.db.add(AppState(key=LAST_CHECK_KEY, value=instant))
        self.db.commit()

    # Whole-store operations

    def clear_all(self) -> None:
        """Delete every employee, notification and bookkeeping entry."""
        self.db.query(Notification).delete(synchronize_session=False)
        self.db.query(Employee).delete(synchronize_session=False)
        self.db.query(AppState).delete(synchronize_session=False)
        self.db.commit()

    def replace_all(
        self,
        employees: list[Employee] | None = None,
        notifications: list[Notification] | None = None,
    ) -> None:
        """Replace whichever collections are given, leaving the others alone."""
        try:
            if employees is not None:
                self.db.query(Employee).delete(synchronize_session=False)
                self.db.add_all(employees)
            if notifications is not None:
                self.db.query(Notification).delete(synchronize_session=False)
                self.db.add_all(notifications)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
