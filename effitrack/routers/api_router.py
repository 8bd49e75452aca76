from fastapi import APIRouter
from effitrack.routers import alerts, chat, dashboard, employees, projects, rewards, tasks

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(dashboard.router)
api_router.include_router(employees.router)
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(rewards.router)
api_router.include_router(alerts.router)
api_router.include_router(chat.router)
