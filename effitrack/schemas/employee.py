from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime

from effitrack.models.employee import EmployeeStatus


class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    department: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    department: Optional[str] = None
    status: Optional[EmployeeStatus] = None

    @field_validator("name", "email", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    department: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class EmployeeSummary(BaseModel):
    """Slim shape used for assignee lists and pickers."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
