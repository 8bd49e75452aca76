from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime

from effitrack.models.project import ProjectStatus
from effitrack.schemas.employee import EmployeeSummary


class ProjectBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.ONGOING
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectCreate(ProjectBase):
    employee_ids: List[str] = []


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("title", "status", "start_date")
    @classmethod
    def reject_null(cls, value):
        # Optional only so fields can be omitted; these columns are required
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class AssigneesUpdate(BaseModel):
    employee_ids: List[str] = []


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    status: str
    start_date: date
    end_date: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ProjectWithAssignees(ProjectResponse):
    assigned_employees: List[EmployeeSummary] = []
