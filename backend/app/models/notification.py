"""Notification model for document expiry alerts."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Index, Integer, String, Text

from app.database import Base


class Notification(Base):
    """Alert raised when an employee document is near or past expiry."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_employee_unread", "employee_id", "read"),
        Index("ix_notifications_created", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Weak reference: history survives employee deletion
    employee_id = Column(String(36), nullable=False)
    employee_name = Column(String(255), nullable=False)  # Snapshot at alert time

    # Alert lineage: warning, critical, expired
    severity = Column(String(20), nullable=False)
    document_type = Column(String(50))  # NULL for entries restored from old backups
    expiry_date = Column(String(10))

    # Content
    message = Column(Text, nullable=False)

    # Status
    read = Column(Integer, default=0)  # SQLite boolean
    read_at = Column(String(32))

    # Timestamps
    created_at = Column(String(32), default=lambda: datetime.now(timezone.utc).isoformat())
