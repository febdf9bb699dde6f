"""Employee schemas."""
from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.services.document_status import Tier
from app.services.expiry_dates import parse_iso_date

DATE_FIELD_NAMES = (
    "visa_issue_date",
    "visa_expiry_date",
    "health_card_expiry_date",
    "labour_card_expiry_date",
)


def _normalize_date(value: Any) -> str | None:
    """Accept blank as missing, otherwise require YYYY-MM-DD."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    parsed = parse_iso_date(value)
    if parsed is None:
        raise ValueError("Dates must use the YYYY-MM-DD format")
    return parsed.isoformat()


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class EmployeeCreate(BaseModel):
    """Request to create an employee."""

    employee_code: str | None = Field(None, description="External employee ID (EMP ID)")
    full_name: str = Field(..., min_length=1)
    passport_number: str | None = None
    visa_type: str = "Employment"
    visa_issue_date: str | None = None
    visa_expiry_date: str | None = None
    health_card_expiry_date: str | None = None
    labour_card_expiry_date: str | None = None

    @field_validator(*DATE_FIELD_NAMES, mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> str | None:
        return _normalize_date(v)

    @field_validator("employee_code", "passport_number", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return _strip(v)


class EmployeeUpdate(BaseModel):
    """Partial update; only fields that are sent are changed."""

    employee_code: str | None = None
    full_name: str | None = Field(None, min_length=1)
    passport_number: str | None = None
    visa_type: str | None = None
    visa_issue_date: str | None = None
    visa_expiry_date: str | None = None
    health_card_expiry_date: str | None = None
    labour_card_expiry_date: str | None = None

    @field_validator(*DATE_FIELD_NAMES, mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> str | None:
        return _normalize_date(v)

    @field_validator("employee_code", "passport_number", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return _strip(v)


class EmployeeResponse(BaseModel):
    """Employee with status derived at read time."""

    id: str
    employee_code: str | None
    full_name: str
    passport_number: str | None
    visa_type: str
    visa_issue_date: str | None
    visa_expiry_date: str | None
    health_card_expiry_date: str | None
    labour_card_expiry_date: str | None
    created_at: str
    updated_at: str
    status: Tier
    document_statuses: dict[str, Tier]
    missing_documents: list[str] = []


class EmployeeRecord(BaseModel):
    """Stored employee shape, as exported in backups."""

    id: str
    employee_code: str | None = None
    full_name: str = Field(..., min_length=1)
    passport_number: str | None = None
    visa_type: str = "Employment"
    visa_issue_date: str | None = None
    visa_expiry_date: str | None = None
    health_card_expiry_date: str | None = None
    labour_card_expiry_date: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    # Blank codes are stored as NULL so they never hit the unique index
    @field_validator("employee_code", "passport_number", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return _strip(v)

    class Config:
        from_attributes = True
