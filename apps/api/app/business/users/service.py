from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from app.business.users.repository import LoginHistoryRepository, UserRepository
from app.business.users.schemas import LoginHistoryRead, UserProfileUpdate, UserRead
from app.platform.store.base import SERVER_TIMESTAMP, DocumentStore


logger = logging.getLogger("app.users")

DEFAULT_ROLE = "employee"
DEFAULT_DESIGNATION = "Team Member"


@dataclass(slots=True)
class UserService:
    user_repository: UserRepository = UserRepository()
    login_history_repository: LoginHistoryRepository = LoginHistoryRepository()

    async def get_user(self, store: DocumentStore, user_id: str) -> UserRead | None:
        record = await self.user_repository.get(store, user_id)
        return UserRead.model_validate(record) if record is not None else None

    async def require_user(self, store: DocumentStore, user_id: str) -> UserRead:
        user = await self.get_user(store, user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    async def get_or_create_user(
        self,
        store: DocumentStore,
        user_id: str,
        *,
        email: str | None,
        name: str | None = None,
    ) -> tuple[UserRead, bool]:
        existing = await self.get_user(store, user_id)
        if existing is not None:
            return existing, False

        await self.user_repository.set(
            store,
            user_id,
            {
                "email": email,
                "name": name or "User",
                "role": DEFAULT_ROLE,
                "designation": DEFAULT_DESIGNATION,
            },
        )
        logger.info("user.created", extra={"user_id": user_id, "role": DEFAULT_ROLE})
        return await self.require_user(store, user_id), True

    async def list_users_by_role(self, store: DocumentStore, role: str) -> list[UserRead]:
        query = self.user_repository.query().where("role", "==", role)
        return [UserRead.model_validate(record) for record in await self.user_repository.find(store, query)]

    async def update_profile(self, store: DocumentStore, user_id: str, payload: UserProfileUpdate) -> UserRead:
        await self.require_user(store, user_id)
        changes = payload.model_dump(exclude_unset=True)
        if changes:
            await self.user_repository.update(store, user_id, changes)
        return await self.require_user(store, user_id)

    async def record_login(
        self,
        store: DocumentStore,
        user_id: str,
        *,
        device: str,
        ip: str,
        outcome: str = "success",
    ) -> str:
        return await self.login_history_repository.create(
            store,
            {"device": device, "ip": ip, "timestamp": SERVER_TIMESTAMP, "status": outcome},
            parent_id=user_id,
        )

    async def list_logins(self, store: DocumentStore, user_id: str, limit: int = 20) -> list[LoginHistoryRead]:
        query = self.login_history_repository.query().order("timestamp", descending=True).take(limit)
        records = await self.login_history_repository.find(store, query, parent_id=user_id)
        return [LoginHistoryRead.model_validate(record) for record in records]


user_service = UserService()
