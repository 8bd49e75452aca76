from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from effitrack.database import get_db
from effitrack.models.task import TaskStatus
from effitrack.schemas.task import TaskCreate, TaskResponse, TaskStatusUpdate
from effitrack.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("/", response_model=List[TaskResponse])
def list_tasks(status: Optional[TaskStatus] = None, db: Session = Depends(get_db)):
    return TaskService(db).list_tasks(status)


@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(data: TaskCreate, db: Session = Depends(get_db)):
    return TaskService(db).create(data)


@router.patch("/{task_id}/status", response_model=TaskResponse)
def update_task_status(task_id: str, data: TaskStatusUpdate, db: Session = Depends(get_db)):
    return TaskService(db).update_status(task_id, data.status)
