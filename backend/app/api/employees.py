"""Employee API endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_store
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.services.document_status import Tier
from app.services.employees import (
    DuplicateEmployeeCodeError,
    EmployeeNotFoundError,
    create_employee,
    delete_employee,
    describe_employee,
    list_employees_with_status,
    update_employee,
)
from app.services.record_store import SqlRecordStore

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeResponse])
def list_employees(
    search: str | None = Query(None, description="Match on name or passport number"),
    status_filter: Tier | None = Query(None, alias="status", description="Only this aggregate status"),
    store: SqlRecordStore = Depends(get_store),
):
    """List employees with live status, soonest visa expiry first."""
    return list_employees_with_status(store, search=search, status=status_filter)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: str,
    store: SqlRecordStore = Depends(get_store),
):
    """Get one employee."""
    employee = store.get_employee(employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    return describe_employee(employee)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def add_employee(
    employee_data: EmployeeCreate,
    store: SqlRecordStore = Depends(get_store),
):
    """Create an employee and raise any alerts its documents need."""
    try:
        employee = create_employee(store, employee_data.model_dump())
    except DuplicateEmployeeCodeError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    return describe_employee(employee)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
def edit_employee(
    employee_id: str,
    employee_data: EmployeeUpdate,
    store: SqlRecordStore = Depends(get_store),
):
    """Update an employee; only the fields sent are changed."""
    try:
        employee = update_employee(store, employee_id, employee_data.model_dump(exclude_unset=True))
    except EmployeeNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    except DuplicateEmployeeCodeError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    return describe_employee(employee)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_employee(
    employee_id: str,
    store: SqlRecordStore = Depends(get_store),
):
    """Delete an employee. Their notifications are kept."""
    try:
        delete_employee(store, employee_id)
    except EmployeeNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
