from datetime import datetime, timezone
from typing import List, Optional

from effitrack.core.exceptions import NotFoundError
from effitrack.models.employee import Employee
from effitrack.models.project import Project
from effitrack.models.task import Task, TaskStatus
from effitrack.schemas.task import TaskCreate
from effitrack.services.base import BaseService
from effitrack.services.deadline_alerts import as_utc_instant


class TaskService(BaseService):

    def create(self, data: TaskCreate) -> Task:
        if data.assigned_to and self.db.get(Employee, data.assigned_to) is None:
            raise NotFoundError("Employee", data.assigned_to)
        if data.project_id and self.db.get(Project, data.project_id) is None:
            raise NotFoundError("Project", data.project_id)

        task = Task(
            title=data.title,
            description=data.description,
            assigned_to=data.assigned_to,
            project_id=data.project_id,
            status=data.status.value,
            deadline=as_utc_instant(data.deadline) if data.deadline else None,
        )
        if data.status == TaskStatus.COMPLETED:
            task.completed_at = datetime.now(timezone.utc)
        self.db.add(task)
        self.commit()
        self.db.refresh(task)
        return task

    def list_tasks(self, status: Optional[TaskStatus] = None) -> List[Task]:
        query = self.db.query(Task)
        if status:
            query = query.filter(Task.status == status.value)
        return query.order_by(Task.created_at.desc()).all()

    def update_status(self, task_id: str, status: TaskStatus) -> Task:
        task = self.db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task", task_id)

        task.status = status.value
        # completed_at tracks the current completion only
        task.completed_at = datetime.now(timezone.utc) if status == TaskStatus.COMPLETED else None
        self.commit()
        self.db.refresh(task)
        return task
