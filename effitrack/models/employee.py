import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from effitrack.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    department = Column(String, nullable=True)
    status = Column(String, default=EmployeeStatus.ACTIVE.value, nullable=False)  # Enum value stored as string
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    assignments = relationship("ProjectAssignment", back_populates="employee", cascade="all, delete-orphan", passive_deletes=True)
    reward_points = relationship("RewardPoint", back_populates="employee", cascade="all, delete-orphan", passive_deletes=True)
    tasks = relationship("Task", back_populates="assignee", passive_deletes=True)

    def __repr__(self):
        return f"<Employee {self.email} ({self.status})>"

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE.value
