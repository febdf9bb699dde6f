"""Key-value application state."""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text

from app.database import Base


class AppState(Base):
    """Small key-value table for bookkeeping such as the last sweep time."""

    __tablename__ = "app_state"

    key = Column(String(50), primary_key=True)
    value = Column(Text)
    updated_at = Column(
        String(32),
        default=lambda: datetime.now(timezone.utc).isoformat(),
        onupdate=lambda: datetime.now(timezone.utc).isoformat(),
    )
