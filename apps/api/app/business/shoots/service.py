from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from fastapi import HTTPException, status

from app.business.notifications.service import notification_service
from app.business.shoots.repository import ShootAssignmentRepository, ShootRepository
from app.business.shoots.schemas import ShootAssignmentCreate, ShootAssignmentRead, ShootCreate, ShootRead
from app.core.auth import AuthUser
from app.core.clock import utcnow
from app.platform.store.base import SERVER_TIMESTAMP, DocumentStore


logger = logging.getLogger("app.shoots")


@dataclass(slots=True)
class ShootService:
    shoot_repository: ShootRepository = ShootRepository()
    assignment_repository: ShootAssignmentRepository = ShootAssignmentRepository()

    async def create_shoot(self, store: DocumentStore, user: AuthUser, payload: ShootCreate) -> ShootRead:
        data = payload.model_dump(by_alias=True)
        data["created_by"] = user.sub
        shoot_id = await self.shoot_repository.create(store, data)
        logger.info("shoot.created", extra={"document_id": shoot_id, "user_id": user.sub})
        return await self.get_shoot(store, shoot_id)

    async def get_shoot(self, store: DocumentStore, shoot_id: str) -> ShootRead:
        record = await self.shoot_repository.get(store, shoot_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shoot not found")
        return ShootRead.model_validate(record)

    async def list_shoots_by_client(self, store: DocumentStore, client_id: str) -> list[ShootRead]:
        query = self.shoot_repository.query().where("clientId", "==", client_id).order("date", descending=True)
        return [ShootRead.model_validate(record) for record in await self.shoot_repository.find(store, query)]

    async def list_upcoming_shoots(self, store: DocumentStore, *, now: datetime | None = None) -> list[ShootRead]:
        query = self.shoot_repository.query().where("date", ">=", now or utcnow()).order("date")
        return [ShootRead.model_validate(record) for record in await self.shoot_repository.find(store, query)]

    async def list_all_shoots(self, store: DocumentStore) -> list[ShootRead]:
        query = self.shoot_repository.query().order("date", descending=True)
        return [ShootRead.model_validate(record) for record in await self.shoot_repository.find(store, query)]

    async def assign_member(
        self,
        store: DocumentStore,
        user: AuthUser,
        shoot_id: str,
        payload: ShootAssignmentCreate,
    ) -> ShootAssignmentRead:
        if not user.is_executive:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only executives can assign shoot crew")
        shoot = await self.get_shoot(store, shoot_id)

        assignment_id = await self.assignment_repository.create(
            store,
            {
                "shootId": shoot_id,
                "userId": payload.user_id,
                "role": payload.role,
                "assigned_at": SERVER_TIMESTAMP,
            },
            parent_id=shoot_id,
        )
        await notification_service.create_notification(
            store,
            payload.user_id,
            type="shoot",
            title="New Shoot Assignment",
            message=f"You have been assigned to shoot: {shoot.title}",
            action_url="/dashboard/employee/shoots",
            metadata={"shootId": shoot_id},
        )
        logger.info("shoot.assigned", extra={"document_id": shoot_id, "user_id": payload.user_id, "role": payload.role})

        record = await self.assignment_repository.get(store, assignment_id, parent_id=shoot_id)
        return ShootAssignmentRead.model_validate(record)

    async def list_assignments(self, store: DocumentStore, shoot_id: str) -> list[ShootAssignmentRead]:
        await self.get_shoot(store, shoot_id)
        query = self.assignment_repository.query().order("assigned_at")
        records = await self.assignment_repository.find(store, query, parent_id=shoot_id)
        return [ShootAssignmentRead.model_validate(record) for record in records]


shoot_service = ShootService()
