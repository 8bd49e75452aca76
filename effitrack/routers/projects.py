from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from effitrack.database import get_db
from effitrack.schemas.project import (
    AssigneesUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    ProjectWithAssignees,
)
from effitrack.services.aggregation_service import list_projects_with_assignees
from effitrack.services.assignment_service import AssignmentService

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("/", response_model=List[ProjectWithAssignees])
def list_projects(db: Session = Depends(get_db)):
    """Projects newest first, each with its assigned employees."""
    return list_projects_with_assignees(db)


@router.post("/", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(data: ProjectCreate, db: Session = Depends(get_db)):
    """
    Create a project and assign the selected employees.
    A 409 PROJECT_ASSIGNMENT_FAILED means the project exists but has no assignees.
    """
    return AssignmentService(db).create_project(data)


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(project_id: str, data: ProjectUpdate, db: Session = Depends(get_db)):
    return AssignmentService(db).update_project(project_id, data)


@router.put("/{project_id}/assignees")
def set_project_assignees(project_id: str, data: AssigneesUpdate, db: Session = Depends(get_db)):
    """Replace the project's assignees with exactly the given set."""
    AssignmentService(db).set_project_assignees(project_id, data.employee_ids)
    count = len(set(data.employee_ids))
    return {"message": f"{count} employee(s) assigned to project", "project_id": project_id}
