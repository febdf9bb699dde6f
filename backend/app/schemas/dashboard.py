"""Dashboard schemas."""
from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Employee counts by aggregate status."""

    total_employees: int
    valid: int
    expiring_30_days: int
    expiring_7_days: int
    expired: int
    missing_data: int  # Employees with at least one absent or unreadable date
    unread_notifications: int
    last_check: str | None = None
