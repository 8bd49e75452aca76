from typing import List

from sqlalchemy.exc import IntegrityError

from effitrack.core.exceptions import DuplicateEmailError, NotFoundError
from effitrack.models.employee import Employee, EmployeeStatus
from effitrack.schemas.employee import EmployeeCreate, EmployeeUpdate
from effitrack.services.base import BaseService


class EmployeeService(BaseService):
    """Employee directory. Employees are never hard-deleted; they are deactivated."""

    def get(self, employee_id: str) -> Employee:
        employee = self.db.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        return employee

    def list_all(self) -> List[Employee]:
        return self.db.query(Employee).order_by(Employee.created_at.desc()).all()

    def list_active(self) -> List[Employee]:
        return (
            self.db.query(Employee)
            .filter(Employee.status == EmployeeStatus.ACTIVE.value)
            .order_by(Employee.name)
            .all()
        )

    def create(self, data: EmployeeCreate) -> Employee:
        employee = Employee(
            name=data.name,
            email=str(data.email),
            department=data.department,
            status=data.status.value,
        )
        self.db.add(employee)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEmailError(str(data.email))
        self.db.refresh(employee)
        self.log_info(f"Created employee {employee.id}")
        return employee

    def update(self, employee_id: str, data: EmployeeUpdate) -> Employee:
        employee = self.get(employee_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field == "status" and value is not None:
                value = EmployeeStatus(value).value
            elif field == "email" and value is not None:
                value = str(value)
            setattr(employee, field, value)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEmailError(str(changes.get("email")))
        self.db.refresh(employee)
        return employee

    def toggle_status(self, employee_id: str) -> Employee:
        employee = self.get(employee_id)
        employee.status = (
            EmployeeStatus.INACTIVE.value if employee.is_active else EmployeeStatus.ACTIVE.value
        )
        self.commit()
        self.db.refresh(employee)
        self.log_info(f"Employee {employee.id} is now {employee.status}")
        return employee
