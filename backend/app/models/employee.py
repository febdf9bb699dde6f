"""Employee model."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Index, String

from app.database import Base


class Employee(Base):
    """Employee with tracked document expiry dates.

    The aggregate status is never stored; it is derived from the expiry
    dates and the current date on every read.
    """

    __tablename__ = "employees"
    __table_args__ = (
        Index("ix_employees_visa_expiry", "visa_expiry_date"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_code = Column(String(50), unique=True, index=True)  # External EMP ID, optional
    full_name = Column(String(255), nullable=False)
    passport_number = Column(String(50))
    visa_type = Column(String(100), nullable=False, default="Employment")

    # Document dates (YYYY-MM-DD)
    visa_issue_date = Column(String(10))
    visa_expiry_date = Column(String(10))
    health_card_expiry_date = Column(String(10))
    labour_card_expiry_date = Column(String(10))

    # Timestamps
    created_at = Column(String(32), default=lambda: datetime.now(timezone.utc).isoformat())
    updated_at = Column(
        String(32),
        default=lambda: datetime.now(timezone.utc).isoformat(),
        onupdate=lambda: datetime.now(timezone.utc).isoformat(),
    )
