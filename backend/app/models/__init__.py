"""SQLAlchemy models package."""
from app.models.app_state import AppState
from app.models.employee import Employee
from app.models.notification import Notification

__all__ = [
    "AppState",
    "Employee",
    "Notification",
]
