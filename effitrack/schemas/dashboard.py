from pydantic import BaseModel


class DashboardStats(BaseModel):
    employee_count: int = 0
    active_employee_count: int = 0
    project_count: int = 0
    ongoing_project_count: int = 0
    task_count: int = 0
    completed_task_count: int = 0
    total_reward_points: int = 0
