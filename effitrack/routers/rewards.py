from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from effitrack.database import get_db
from effitrack.schemas.reward import LeaderboardEntry, RewardCreate, RewardResponse
from effitrack.services.aggregation_service import compute_leaderboard
from effitrack.services.reward_service import RewardService

router = APIRouter(prefix="/rewards", tags=["Rewards"])


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(db: Session = Depends(get_db)):
    return compute_leaderboard(db)


@router.get("/", response_model=List[RewardResponse])
def list_rewards(employee_id: Optional[str] = None, db: Session = Depends(get_db)):
    return RewardService(db).list_rewards(employee_id)


@router.post("/", response_model=RewardResponse, status_code=status.HTTP_201_CREATED)
def award_points(data: RewardCreate, db: Session = Depends(get_db)):
    return RewardService(db).award_points(data.employee_id, data.points, data.reason)
