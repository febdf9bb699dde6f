"""Spreadsheet import API endpoints."""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.api.deps import get_store
from app.schemas.imports import ImportResult
from app.services.record_store import SqlRecordStore
from app.services.spreadsheet_import import UnsupportedFileError, import_employees

router = APIRouter(prefix="/import", tags=["import"])


@router.post("", response_model=ImportResult)
async def upload_employees(
    file: UploadFile = File(...),
    store: SqlRecordStore = Depends(get_store),
):
    """Upload a CSV or XLSX file of employees."""
    content = await file.read()

    try:
        result = import_employees(store, file.filename or "", content)
    except UnsupportedFileError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return ImportResult(**result)
