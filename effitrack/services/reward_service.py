from typing import List, Optional

from effitrack.core.exceptions import AppException, NotFoundError
from effitrack.models.employee import Employee
from effitrack.models.reward_point import RewardPoint
from effitrack.services.base import BaseService


class RewardService(BaseService):
    """Reward ledger. Rows are append-only: awarded once, never edited or removed."""

    def award_points(self, employee_id: str, points: int, reason: str) -> RewardPoint:
        employee = self.db.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        if not employee.is_active:
            raise AppException(
                "Points can only be awarded to active employees",
                status_code=409,
                error_code="EMPLOYEE_INACTIVE",
            )

        entry = RewardPoint(employee_id=employee_id, points=points, reason=reason)
        self.db.add(entry)
        self.commit()
        self.db.refresh(entry)
        self.log_info(f"Awarded {points} point(s) to employee {employee_id}")
        return entry

    def list_rewards(self, employee_id: Optional[str] = None) -> List[RewardPoint]:
        query = self.db.query(RewardPoint)
        if employee_id:
            query = query.filter(RewardPoint.employee_id == employee_id)
        return query.order_by(RewardPoint.created_at.desc()).all()
