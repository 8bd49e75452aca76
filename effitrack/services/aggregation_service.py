"""
Query/Aggregation Layer

Read-only folds over the store: dashboard counters, the rewards leaderboard and
projects joined with their assignees. Nothing here writes.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from effitrack.models.employee import Employee, EmployeeStatus
from effitrack.models.project import Project, ProjectAssignment, ProjectStatus
from effitrack.models.reward_point import RewardPoint
from effitrack.models.task import Task, TaskStatus
from effitrack.schemas.dashboard import DashboardStats
from effitrack.schemas.employee import EmployeeSummary
from effitrack.schemas.project import ProjectWithAssignees
from effitrack.schemas.reward import LeaderboardEntry

logger = logging.getLogger(__name__)


def rank_badge(position: int) -> str:
    """Badge for a zero-based leaderboard position."""
    if position == 0:
        return "1st"
    if position == 1:
        return "2nd"
    if position == 2:
        return "3rd"
    return f"#{position + 1}"


def _status_counts(db: Session, column) -> Dict[str, int]:
    rows = db.query(column, func.count()).group_by(column).all()
    return {status: count for status, count in rows}


def compute_dashboard_stats(db: Session) -> DashboardStats:
    """
    Totals for the dashboard cards.

    Raises SQLAlchemyError on a failed read; see `safe_dashboard_stats` for the
    degrading variant used by the API.
    """
    employees = _status_counts(db, Employee.status)
    projects = _status_counts(db, Project.status)
    tasks = _status_counts(db, Task.status)
    total_points = db.query(func.coalesce(func.sum(RewardPoint.points), 0)).scalar()

    return DashboardStats(
        employee_count=sum(employees.values()),
        active_employee_count=employees.get(EmployeeStatus.ACTIVE.value, 0),
        project_count=sum(projects.values()),
        ongoing_project_count=projects.get(ProjectStatus.ONGOING.value, 0),
        task_count=sum(tasks.values()),
        completed_task_count=tasks.get(TaskStatus.COMPLETED.value, 0),
        total_reward_points=int(total_points or 0),
    )


def safe_dashboard_stats(db: Session) -> Tuple[DashboardStats, str]:
    """Returns (stats, error). On a read failure stats are all zero and error is set."""
    try:
        return compute_dashboard_stats(db), ""
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error fetching dashboard stats: {e}")
        return DashboardStats(), "Could not load dashboard statistics"


def compute_leaderboard(db: Session) -> List[LeaderboardEntry]:
    """
    One row per employee with summed reward points and completed task count,
    ordered by points descending. The sort is stable: equal totals keep the
    employees' insertion order.
    """
    employees = db.query(Employee.id, Employee.name).order_by(Employee.created_at, Employee.id).all()

    points = dict(
        db.query(RewardPoint.employee_id, func.sum(RewardPoint.points))
        .group_by(RewardPoint.employee_id)
        .all()
    )
    completed = dict(
        db.query(Task.assigned_to, func.count(Task.id))
        .filter(Task.assigned_to.isnot(None), Task.status == TaskStatus.COMPLETED.value)
        .group_by(Task.assigned_to)
        .all()
    )

    rows = [
        (employee_id, name, int(points.get(employee_id) or 0), int(completed.get(employee_id) or 0))
        for employee_id, name in employees
    ]
    rows = sorted(rows, key=lambda row: row[2], reverse=True)

    return [
        LeaderboardEntry(
            employee_id=employee_id,
            name=name,
            total_points=total,
            completed_task_count=done,
            rank=position + 1,
            badge=rank_badge(position),
        )
        for position, (employee_id, name, total, done) in enumerate(rows)
    ]


def list_projects_with_assignees(db: Session) -> List[ProjectWithAssignees]:
    """Projects newest first, each with its assigned employees (empty list when none)."""
    projects = db.query(Project).order_by(Project.created_at.desc()).all()
    if not projects:
        return []

    links = (
        db.query(ProjectAssignment.project_id, ProjectAssignment.employee_id)
        .filter(ProjectAssignment.project_id.in_([p.id for p in projects]))
        .all()
    )
    employee_ids = {employee_id for _, employee_id in links}
    employees = {}
    if employee_ids:
        employees = {
            e.id: EmployeeSummary.model_validate(e)
            for e in db.query(Employee).filter(Employee.id.in_(employee_ids)).order_by(Employee.name).all()
        }

    assigned: Dict[str, List[EmployeeSummary]] = defaultdict(list)
    for project_id, employee_id in links:
        if employee_id in employees:
            assigned[project_id].append(employees[employee_id])

    result = []
    for project in projects:
        item = ProjectWithAssignees.model_validate(project)
        item.assigned_employees = sorted(assigned.get(project.id, []), key=lambda e: e.name)
        result.append(item)
    return result
