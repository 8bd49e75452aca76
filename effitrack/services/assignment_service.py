"""
Assignment Manager

Owns the many-to-many link between projects and employees. Saving a project's
employee set is a full replace: every existing link is deleted and the new set
inserted, inside one transaction. There is no diffing and no conflict
detection; two editors saving the same project concurrently resolve as
last-writer-wins.
"""
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError

from effitrack.core.exceptions import AppException, NotFoundError, ProjectAssignmentError
from effitrack.models.project import Project, ProjectAssignment, ProjectStatus
from effitrack.schemas.project import ProjectCreate, ProjectUpdate
from effitrack.services.base import BaseService


def _unique_ids(employee_ids: Iterable[str]) -> List[str]:
    # Order-preserving; the (project_id, employee_id) pair is unique in the table
    return list(dict.fromkeys(employee_ids))


class AssignmentService(BaseService):

    def _get_project(self, project_id: str) -> Project:
        project = self.db.get(Project, project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    def create_project(self, data: ProjectCreate) -> Project:
        """
        Insert the project, then its assignments.

        The two writes are committed separately. If the assignment insert fails
        the project stays saved without assignees and ProjectAssignmentError
        (carrying the new project id) is raised so callers can tell this apart
        from a total failure.
        """
        project = Project(
            title=data.title,
            description=data.description,
            status=data.status.value,
            start_date=data.start_date,
            end_date=data.end_date,
        )
        self.db.add(project)
        self.commit()
        self.db.refresh(project)
        project_id = project.id
        self.log_info(f"Created project {project_id}")

        employee_ids = _unique_ids(data.employee_ids)
        if employee_ids:
            try:
                self.db.add_all(
                    ProjectAssignment(project_id=project_id, employee_id=employee_id)
                    for employee_id in employee_ids
                )
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                self.log_error(f"Project {project_id} saved but assignment failed: {e}")
                raise ProjectAssignmentError(project_id, e.__class__.__name__)
        return project

    def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        project = self._get_project(project_id)
        changes = data.model_dump(exclude_unset=True)
        start_date = changes.get("start_date", project.start_date)
        end_date = changes.get("end_date", project.end_date)
        if end_date is not None and end_date < start_date:
            raise AppException(
                "end_date must not be before start_date", status_code=422, error_code="INVALID_DATES"
            )

        for field, value in changes.items():
            if field == "status":
                value = ProjectStatus(value).value
            setattr(project, field, value)
        self.commit()
        self.db.refresh(project)
        return project

    def set_project_assignees(self, project_id: str, employee_ids: Iterable[str]) -> None:
        """
        Replace the project's employee set with `employee_ids`.

        Delete and insert share one transaction: readers never observe an empty
        set mid-save, and a failed insert leaves the previous set in place.
        """
        self._get_project(project_id)
        employee_ids = _unique_ids(employee_ids)
        try:
            self.db.query(ProjectAssignment).filter(
                ProjectAssignment.project_id == project_id
            ).delete(synchronize_session=False)
            self.db.add_all(
                ProjectAssignment(project_id=project_id, employee_id=employee_id)
                for employee_id in employee_ids
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Replacing assignees of project {project_id} failed: {e}")
            raise AppException(
                "Could not assign employees; previous assignees kept",
                status_code=409,
                error_code="ASSIGNMENT_FAILED",
                details={"project_id": project_id},
            )
        self.log_info(f"Project {project_id} now has {len(employee_ids)} assignee(s)")
