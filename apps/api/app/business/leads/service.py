from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from app.business.leads.repository import LeadRepository
from app.business.leads.schemas import LeadCreate, LeadRead, LeadStatusUpdate
from app.business.notifications.service import notification_service
from app.business.users.service import user_service
from app.core.auth import AuthUser
from app.platform.store.base import DocumentStore


logger = logging.getLogger("app.leads")


@dataclass(slots=True)
class LeadService:
    lead_repository: LeadRepository = LeadRepository()

    async def create_lead(self, store: DocumentStore, payload: LeadCreate) -> LeadRead:
        data = payload.model_dump()
        data["status"] = "new"
        lead_id = await self.lead_repository.create(store, data)
        logger.info("lead.created", extra={"document_id": lead_id})

        executives = await user_service.list_users_by_role(store, "executive")
        await notification_service.notify_users(
            store,
            [executive.id for executive in executives],
            type="lead",
            title="New Lead",
            message=f"New lead from {payload.client_name}",
            action_url="/dashboard/executive/leads-management",
            metadata={"leadId": lead_id},
        )
        return await self.get_lead(store, lead_id)

    async def get_lead(self, store: DocumentStore, lead_id: str) -> LeadRead:
        record = await self.lead_repository.get(store, lead_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")
        return LeadRead.model_validate(record)

    async def list_new_leads(self, store: DocumentStore) -> list[LeadRead]:
        return await self.list_leads_by_status(store, "new")

    async def list_leads_by_status(self, store: DocumentStore, lead_status: str) -> list[LeadRead]:
        query = self.lead_repository.query().where("status", "==", lead_status).order("created_at", descending=True)
        return [LeadRead.model_validate(record) for record in await self.lead_repository.find(store, query)]

    async def list_all_leads(self, store: DocumentStore) -> list[LeadRead]:
        query = self.lead_repository.query().order("created_at", descending=True)
        return [LeadRead.model_validate(record) for record in await self.lead_repository.find(store, query)]

    async def update_lead_status(
        self,
        store: DocumentStore,
        user: AuthUser,
        lead_id: str,
        payload: LeadStatusUpdate,
    ) -> LeadRead:
        await self.get_lead(store, lead_id)
        changes: dict[str, object] = {"status": payload.status, "handled_by": user.sub}
        if payload.reason is not None:
            changes["reason"] = payload.reason
        await self.lead_repository.update(store, lead_id, changes)
        logger.info("lead.status_changed", extra={"document_id": lead_id, "user_id": user.sub, "status": payload.status})
        return await self.get_lead(store, lead_id)

    async def conversion_rate(self, store: DocumentStore) -> float:
        """Percentage of all leads that were won; 0 when there are none."""
        leads = await self.lead_repository.find(store)
        if not leads:
            return 0.0
        won = sum(1 for lead in leads if lead.get("status") == "won")
        return won / len(leads) * 100


lead_service = LeadService()
