from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime


class RewardCreate(BaseModel):
    employee_id: str
    points: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1)


class RewardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    points: int
    reason: str
    created_at: datetime


class LeaderboardEntry(BaseModel):
    employee_id: str
    name: str
    total_points: int
    completed_task_count: int
    rank: int
    badge: str
