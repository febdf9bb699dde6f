"""Notification schemas."""
from typing import Any

from pydantic import BaseModel, field_validator


class NotificationResponse(BaseModel):
    id: str
    employee_id: str
    employee_name: str
    severity: str
    document_type: str | None = None
    expiry_date: str | None = None
    message: str
    read: bool
    read_at: str | None = None
    created_at: str

    @field_validator("read", mode="before")
    @classmethod
    def int_to_bool(cls, v: Any) -> bool:
        if isinstance(v, int):
            return bool(v)
        return v

    class Config:
        from_attributes = True


class NotificationCheckResponse(BaseModel):
    """Result of a manual notification sweep."""

    created: int
    notifications: list[NotificationResponse]


class MarkAllReadResponse(BaseModel):
    updated: int
