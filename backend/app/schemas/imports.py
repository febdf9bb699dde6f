"""Spreadsheet import schemas."""
from pydantic import BaseModel


class ImportRowError(BaseModel):
    row: int
    error: str


class ImportResult(BaseModel):
    """Response after uploading an employee spreadsheet."""

    inserted: int
    skipped: int
    errors: list[ImportRowError]
    total_errors: int
