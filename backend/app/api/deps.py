"""Shared API dependencies."""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.record_store import SqlRecordStore


def get_store(db: Session = Depends(get_db)) -> SqlRecordStore:
    """Record store bound to the request's database session."""
    return SqlRecordStore(db)


__all__ = ["get_db", "get_store"]
