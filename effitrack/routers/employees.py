from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from effitrack.database import get_db
from effitrack.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeSummary, EmployeeUpdate
from effitrack.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get("/", response_model=List[EmployeeResponse])
def list_employees(db: Session = Depends(get_db)):
    """All employees, newest first."""
    return EmployeeService(db).list_all()


@router.get("/active", response_model=List[EmployeeSummary])
def list_active_employees(db: Session = Depends(get_db)):
    """Active employees by name, for assignment pickers."""
    return EmployeeService(db).list_active()


@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(data: EmployeeCreate, db: Session = Depends(get_db)):
    return EmployeeService(db).create(data)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: str, db: Session = Depends(get_db)):
    return EmployeeService(db).get(employee_id)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
def update_employee(employee_id: str, data: EmployeeUpdate, db: Session = Depends(get_db)):
    return EmployeeService(db).update(employee_id, data)


@router.post("/{employee_id}/toggle-status", response_model=EmployeeResponse)
def toggle_employee_status(employee_id: str, db: Session = Depends(get_db)):
    return EmployeeService(db).toggle_status(employee_id)
