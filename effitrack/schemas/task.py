from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

from effitrack.models.task import TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    project_id: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    deadline: Optional[datetime] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    project_id: Optional[str] = None
    status: str
    deadline: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
