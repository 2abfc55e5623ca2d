from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from fastapi import HTTPException, status

from app.business.notifications.service import notification_service
from app.business.tasks.repository import TaskRepository
from app.business.tasks.schemas import OPEN_TASK_STATUSES, TaskCreate, TaskRead, TaskUpdate
from app.core.auth import AuthUser
from app.core.clock import utcnow
from app.platform.store.base import DocumentStore
from app.platform.store.query import Query


logger = logging.getLogger("app.tasks")


@dataclass(slots=True)
class TaskService:
    task_repository: TaskRepository = TaskRepository()

    async def create_task(self, store: DocumentStore, user: AuthUser, payload: TaskCreate) -> TaskRead:
        data = payload.model_dump()
        data["assigned_to"] = payload.assigned_to or [user.sub]
        data["created_by"] = user.sub

        task_id = await self.task_repository.create(store, data)
        logger.info("task.created", extra={"document_id": task_id, "user_id": user.sub})

        others = [assignee for assignee in data["assigned_to"] if assignee != user.sub]
        if others:
            await notification_service.notify_users(
                store,
                others,
                type="task",
                title="New Task Assigned",
                message=f"You have been assigned: {payload.title}",
                action_url="/dashboard/employee/tasks",
                metadata={"taskId": task_id},
            )
        return await self.get_task(store, task_id)

    async def get_task(self, store: DocumentStore, task_id: str) -> TaskRead:
        record = await self.task_repository.get(store, task_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        return TaskRead.model_validate(record)

    async def _find(self, store: DocumentStore, query: Query) -> list[TaskRead]:
        return [TaskRead.model_validate(record) for record in await self.task_repository.find(store, query)]

    async def list_tasks_for_user(self, store: DocumentStore, user_id: str) -> list[TaskRead]:
        query = self.task_repository.query().where("assigned_to", "array_contains", user_id).order("deadline")
        return await self._find(store, query)

    async def list_tasks_by_status(self, store: DocumentStore, task_status: str) -> list[TaskRead]:
        query = self.task_repository.query().where("status", "==", task_status).order("created_at", descending=True)
        return await self._find(store, query)

    async def list_open_tasks(self, store: DocumentStore) -> list[TaskRead]:
        query = self.task_repository.query().where("status", "in", list(OPEN_TASK_STATUSES))
        return await self._find(store, query)

    async def list_upcoming_tasks(
        self,
        store: DocumentStore,
        days: int = 7,
        *,
        now: datetime | None = None,
    ) -> list[TaskRead]:
        horizon = (now or utcnow()) + timedelta(days=days)
        query = (
            self.task_repository.query()
            .where("deadline", "<=", horizon)
            .where("status", "in", list(OPEN_TASK_STATUSES))
            .order("deadline")
        )
        return await self._find(store, query)

    async def list_tasks_created_since(
        self,
        store: DocumentStore,
        since: datetime,
        *,
        assignee: str | None = None,
    ) -> list[TaskRead]:
        query = self.task_repository.query().where("created_at", ">=", since)
        if assignee is not None:
            query = query.where("assigned_to", "array_contains", assignee)
        return await self._find(store, query)

    async def update_task(self, store: DocumentStore, user: AuthUser, task_id: str, payload: TaskUpdate) -> TaskRead:
        task = await self.get_task(store, task_id)
        if not user.is_executive and user.sub not in task.assigned_to:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only assignees or executives can update this task",
            )

        changes = payload.model_dump(exclude_unset=True)
        if changes:
            await self.task_repository.update(store, task_id, changes)
            logger.info("task.updated", extra={"document_id": task_id, "user_id": user.sub, "status": changes.get("status")})
        return await self.get_task(store, task_id)

    async def delete_task(self, store: DocumentStore, user: AuthUser, task_id: str) -> None:
        if not user.is_executive:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only executives can delete tasks")
        await self.get_task(store, task_id)
        await self.task_repository.delete(store, task_id)
        logger.info("task.deleted", extra={"document_id": task_id, "user_id": user.sub})


task_service = TaskService()
