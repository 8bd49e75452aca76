from pydantic import BaseModel
from typing import List, Optional


class DispatchFailure(BaseModel):
    recipient: Optional[str] = None
    item_type: str
    item_title: str
    error: str


class DeadlineAlertSummary(BaseModel):
    success: bool
    message: str
    emails_sent: List[str] = []
    projects_checked: int = 0
    tasks_checked: int = 0
    failures: List[DispatchFailure] = []
    errors: List[str] = []
