import pytest
from datetime import date

from effitrack.core.exceptions import AppException, NotFoundError, ProjectAssignmentError
from effitrack.models.project import Project, ProjectAssignment
from effitrack.schemas.project import ProjectCreate, ProjectUpdate
from effitrack.services.aggregation_service import list_projects_with_assignees
from effitrack.services.assignment_service import AssignmentService


def _assignee_names(db_session, project_id):
    project = next(p for p in list_projects_with_assignees(db_session) if p.id == project_id)
    return [e.name for e in project.assigned_employees]


def _create(db_session, employee_ids=(), title="Launch"):
    data = ProjectCreate(title=title, start_date=date(2026, 1, 1), employee_ids=list(employee_ids))
    return AssignmentService(db_session).create_project(data)


def test_create_project_with_assignees(db_session, make_employee):
    alice = make_employee("Alice")
    bob = make_employee("Bob")
    project = _create(db_session, [alice.id, bob.id])
    assert project.status == "ongoing"
    assert _assignee_names(db_session, project.id) == ["Alice", "Bob"]


def test_create_project_collapses_duplicate_ids(db_session, make_employee):
    alice = make_employee("Alice")
    project = _create(db_session, [alice.id, alice.id])
    assert _assignee_names(db_session, project.id) == ["Alice"]


def test_create_project_keeps_project_when_assignment_fails(db_session, make_employee):
    alice = make_employee("Alice")
    with pytest.raises(ProjectAssignmentError) as exc_info:
        _create(db_session, [alice.id, "no-such-employee"])

    project_id = exc_info.value.details["project_id"]
    assert db_session.get(Project, project_id) is not None
    assert _assignee_names(db_session, project_id) == []


def test_set_assignees_replaces_whole_set(db_session, make_employee):
    alice = make_employee("Alice")
    bob = make_employee("Bob")
    carol = make_employee("Carol")
    project = _create(db_session, [alice.id, bob.id])

    AssignmentService(db_session).set_project_assignees(project.id, [carol.id, bob.id])
    assert _assignee_names(db_session, project.id) == ["Bob", "Carol"]


def test_set_assignees_to_empty_clears(db_session, make_employee):
    alice = make_employee("Alice")
    project = _create(db_session, [alice.id])

    AssignmentService(db_session).set_project_assignees(project.id, [])
    assert _assignee_names(db_session, project.id) == []
    assert db_session.query(ProjectAssignment).filter_by(project_id=project.id).count() == 0


def test_failed_replace_keeps_previous_assignees(db_session, make_employee):
    alice = make_employee("Alice")
    bob = make_employee("Bob")
    project = _create(db_session, [alice.id])

    with pytest.raises(AppException) as exc_info:
        AssignmentService(db_session).set_project_assignees(project.id, [bob.id, "ghost"])
    assert exc_info.value.error_code == "ASSIGNMENT_FAILED"
    assert _assignee_names(db_session, project.id) == ["Alice"]


def test_set_assignees_unknown_project(db_session):
    with pytest.raises(NotFoundError):
        AssignmentService(db_session).set_project_assignees("missing", [])


def test_update_project_status(db_session):
    project = _create(db_session)
    updated = AssignmentService(db_session).update_project(project.id, ProjectUpdate(status="completed"))
    assert updated.status == "completed"


def test_update_project_rejects_end_before_start(db_session):
    project = _create(db_session)
    with pytest.raises(AppException) as exc_info:
        AssignmentService(db_session).update_project(project.id, ProjectUpdate(end_date=date(2025, 12, 1)))
    assert exc_info.value.error_code == "INVALID_DATES"
    db_session.refresh(project)
    assert project.end_date is None


def test_update_project_checks_dates_against_stored_values(db_session):
    project = _create(db_session)
    service = AssignmentService(db_session)
    service.update_project(project.id, ProjectUpdate(end_date=date(2026, 3, 1)))

    with pytest.raises(AppException):
        service.update_project(project.id, ProjectUpdate(start_date=date(2026, 4, 1)))
    db_session.refresh(project)
    assert project.start_date == date(2026, 1, 1)

    updated = service.update_project(project.id, ProjectUpdate(end_date=None))
    assert updated.end_date is None


def test_deleting_project_cascades_assignments(db_session, make_employee):
    alice = make_employee("Alice")
    project = _create(db_session, [alice.id])
    db_session.delete(db_session.get(Project, project.id))
    db_session.commit()
    assert db_session.query(ProjectAssignment).count() == 0
