# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import employee, project, task, reward_point

# Explicit class exports for cleaner imports
from .employee import Employee, EmployeeStatus
from .project import Project, ProjectAssignment, ProjectStatus
from .task import Task, TaskStatus
from .reward_point import RewardPoint

__all__ = [
    "Employee",
    "EmployeeStatus",
    "Project",
    "ProjectAssignment",
    "ProjectStatus",
    "Task",
    "TaskStatus",
    "RewardPoint",
]
