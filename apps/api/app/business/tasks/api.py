from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.business.tasks.schemas import TaskCreate, TaskRead, TaskStatus, TaskUpdate
from app.business.tasks.service import task_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=Envelope[list[TaskRead]])
async def list_tasks(
    assigned_to: str | None = Query(default=None, alias="assignedTo"),
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    upcoming_days: int | None = Query(default=None, alias="upcomingDays", ge=1, le=365),
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[TaskRead]]:
    if upcoming_days is not None:
        tasks = await task_service.list_upcoming_tasks(store, upcoming_days)
    elif assigned_to:
        tasks = await task_service.list_tasks_for_user(store, assigned_to)
    elif task_status:
        tasks = await task_service.list_tasks_by_status(store, task_status)
    else:
        tasks = await task_service.list_tasks_for_user(store, user.sub)
    return Envelope(data=tasks)


@router.post("", response_model=Envelope[TaskRead], status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[TaskRead]:
    task = await task_service.create_task(store, user, payload)
    return Envelope(data=task, message="Task created successfully")


@router.get("/{task_id}", response_model=Envelope[TaskRead])
async def get_task(
    task_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[TaskRead]:
    return Envelope(data=await task_service.get_task(store, task_id))


@router.patch("/{task_id}", response_model=Envelope[TaskRead])
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[TaskRead]:
    task = await task_service.update_task(store, user, task_id, payload)
    return Envelope(data=task, message="Task updated successfully")


@router.delete("/{task_id}", response_model=Envelope[None])
async def delete_task(
    task_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[None]:
    await task_service.delete_task(store, user, task_id)
    return Envelope(data=None, message="Task deleted successfully")
