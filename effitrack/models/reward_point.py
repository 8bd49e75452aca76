from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from effitrack.database import Base
from effitrack.models.employee import _utcnow, new_id


class RewardPoint(Base):
    """Append-only ledger row. There is no update or delete path."""
    __tablename__ = "reward_points"

    id = Column(String(36), primary_key=True, default=new_id)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    points = Column(Integer, nullable=False, default=0)
    reason = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    employee = relationship("Employee", back_populates="reward_points")
