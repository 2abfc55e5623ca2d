from app.business.tasks.api import router
from app.business.tasks.schemas import TaskCreate, TaskRead, TaskUpdate
from app.business.tasks.service import TaskService, task_service

__all__ = [
    "router",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TaskService",
    "task_service",
]
