"""
Deadline Notification Engine

Finds ongoing projects and open tasks whose deadline falls inside the lookahead
window, resolves the employees responsible for each, renders one email per
(employee, item) pair and sends them through a MailTransport.

Failure policy:
- A missing mail credential is fatal and is raised before this module runs
  (see ResendMailTransport.from_settings).
- A failed read drops only that query's contribution; the error is recorded
  in the summary and the remaining queries still run.
- A failed send is recorded as a failed DispatchResult and never stops the
  batch.

Recipients are not deduplicated: an employee on two due projects gets two emails.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from effitrack.core.config import settings
from effitrack.core.email_templates import render_project_alert, render_task_alert
from effitrack.models.employee import Employee
from effitrack.models.project import Project, ProjectAssignment, ProjectStatus
from effitrack.models.task import OPEN_TASK_STATUSES, Task
from effitrack.schemas.alerts import DeadlineAlertSummary, DispatchFailure
from effitrack.services.base import BaseService
from effitrack.services.mail_service import MailTransport

SECONDS_PER_DAY = 24 * 60 * 60

PROJECT = "project"
TASK = "task"


@dataclass(frozen=True)
class Recipient:
    email: Optional[str]
    name: str


@dataclass(frozen=True)
class OutgoingMessage:
    recipient: Recipient
    item_type: str
    item_title: str
    subject: str
    html: str


@dataclass(frozen=True)
class DispatchResult:
    recipient: Optional[str]
    item_type: str
    item_title: str
    success: bool
    error: Optional[str] = None


def as_utc_instant(value) -> datetime:
    """Dates count from UTC midnight; naive datetimes are taken as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise TypeError(f"Unsupported deadline type: {type(value).__name__}")


def days_left(deadline, now: datetime) -> int:
    """Whole days remaining, rounded up: 72h -> 3, 5h -> 1."""
    delta = as_utc_instant(deadline) - as_utc_instant(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DeadlineAlertService(BaseService):

    def __init__(
        self,
        db: Session,
        transport: MailTransport,
        lookahead_days: Optional[int] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        super().__init__(db)
        self.transport = transport
        self.lookahead = timedelta(
            days=settings.deadline_lookahead_days if lookahead_days is None else lookahead_days
        )
        self.clock = clock

    # --- selection -------------------------------------------------------

    def due_projects(self, now: datetime, horizon: datetime) -> List[Project]:
        # end_date is a calendar date: a project ending today is still due
        return (
            self.db.query(Project)
            .filter(
                Project.status == ProjectStatus.ONGOING.value,
                Project.end_date.isnot(None),
                Project.end_date >= now.date(),
                Project.end_date <= horizon.date(),
            )
            .order_by(Project.end_date, Project.created_at)
            .all()
        )

    def due_tasks(self, now: datetime, horizon: datetime) -> List[Task]:
        return (
            self.db.query(Task)
            .filter(
                Task.status.in_(OPEN_TASK_STATUSES),
                Task.deadline.isnot(None),
                Task.deadline >= now,
                Task.deadline <= horizon,
            )
            .order_by(Task.deadline, Task.created_at)
            .all()
        )

    def project_recipients(self, project_id: str) -> List[Recipient]:
        rows = (
            self.db.query(Employee.email, Employee.name)
            .join(ProjectAssignment, ProjectAssignment.employee_id == Employee.id)
            .filter(ProjectAssignment.project_id == project_id)
            .order_by(Employee.name)
            .all()
        )
        return [Recipient(email=email, name=name) for email, name in rows]

    def task_recipients(self, task: Task) -> List[Recipient]:
        if not task.assigned_to:
            return []
        row = (
            self.db.query(Employee.email, Employee.name)
            .filter(Employee.id == task.assigned_to)
            .first()
        )
        return [Recipient(email=row.email, name=row.name)] if row else []

    # --- rendering -------------------------------------------------------

    def project_messages(self, now: datetime, horizon: datetime, errors: List[str]) -> Tuple[int, List[OutgoingMessage]]:
        try:
            projects = self.due_projects(now, horizon)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Project deadline query failed: {e}")
            errors.append("Failed to load projects with upcoming deadlines")
            return 0, []

        self.log_info(f"Found {len(projects)} projects with upcoming deadlines")
        messages = []
        for project in projects:
            try:
                recipients = self.project_recipients(project.id)
            except SQLAlchemyError as e:
                self.db.rollback()
                self.log_error(f"Assignee lookup failed for project {project.id}: {e}")
                errors.append(f"Failed to load assignees for project '{project.title}'")
                continue

            remaining = max(days_left(project.end_date, now), 0)
            for recipient in recipients:
                subject, html = render_project_alert(recipient.name, project.title, project.end_date, remaining)
                messages.append(OutgoingMessage(recipient, PROJECT, project.title, subject, html))
        return len(projects), messages

    def task_messages(self, now: datetime, horizon: datetime, errors: List[str]) -> Tuple[int, List[OutgoingMessage]]:
        try:
            tasks = self.due_tasks(now, horizon)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Task deadline query failed: {e}")
            errors.append("Failed to load tasks with upcoming deadlines")
            return 0, []

        self.log_info(f"Found {len(tasks)} tasks with upcoming deadlines")
        messages = []
        for task in tasks:
            try:
                recipients = self.task_recipients(task)
            except SQLAlchemyError as e:
                self.db.rollback()
                self.log_error(f"Assignee lookup failed for task {task.id}: {e}")
                errors.append(f"Failed to load assignee for task '{task.title}'")
                continue

            deadline = as_utc_instant(task.deadline)
            remaining = days_left(deadline, now)
            for recipient in recipients:
                subject, html = render_task_alert(recipient.name, task.title, task.status, deadline.date(), remaining)
                messages.append(OutgoingMessage(recipient, TASK, task.title, subject, html))
        return len(tasks), messages

    # --- dispatch --------------------------------------------------------

    def dispatch(self, messages: List[OutgoingMessage]) -> List[DispatchResult]:
        """Send every message; one failure never prevents the others."""
        results = []
        for message in messages:
            to = message.recipient.email
            try:
                self.transport.send_email(to, message.subject, message.html)
            except Exception as e:
                self.log_error(f"Failed to send email to {to}: {e}")
                results.append(DispatchResult(to, message.item_type, message.item_title, False, str(e)))
                continue
            self.log_info(f"Email sent to {to} for {message.item_type} {message.item_title}")
            results.append(DispatchResult(to, message.item_type, message.item_title, True))
        return results

    def run(self) -> DeadlineAlertSummary:
        now = as_utc_instant(self.clock())
        horizon = now + self.lookahead
        errors: List[str] = []

        projects_checked, project_messages = self.project_messages(now, horizon, errors)
        tasks_checked, task_messages = self.task_messages(now, horizon, errors)
        results = self.dispatch(project_messages + task_messages)

        sent = [r.recipient for r in results if r.success]
        failures = [
            DispatchFailure(recipient=r.recipient, item_type=r.item_type, item_title=r.item_title, error=r.error or "")
            for r in results
            if not r.success
        ]
        self.log_info(
            f"Deadline alerts: {len(sent)} sent, {len(failures)} failed",
            projects_checked=projects_checked,
            tasks_checked=tasks_checked,
        )
        return DeadlineAlertSummary(
            success=not errors,
            message=f"Sent {len(sent)} deadline alert emails",
            emails_sent=sent,
            projects_checked=projects_checked,
            tasks_checked=tasks_checked,
            failures=failures,
            errors=errors,
        )
