"""Backup and restore schemas."""
from typing import Any

from pydantic import BaseModel

from app.schemas.employee import EmployeeRecord
from app.schemas.notification import NotificationResponse


class BackupPayload(BaseModel):
    """Full data export."""

    employees: list[EmployeeRecord]
    notifications: list[NotificationResponse]
    exported_at: str


class RestoreRequest(BaseModel):
    """Either collection may be omitted to leave it untouched.

    Entries are validated one by one so a single bad entry does not block
    the rest of the restore.
    """

    employees: list[dict[str, Any]] | None = None
    notifications: list[dict[str, Any]] | None = None


class RestoreResponse(BaseModel):
    employees_restored: int | None
    notifications_restored: int | None
    skipped: list[str]
