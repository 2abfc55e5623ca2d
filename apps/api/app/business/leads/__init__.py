from app.business.leads.api import router
from app.business.leads.schemas import LeadCreate, LeadRead, LeadStatusUpdate
from app.business.leads.service import LeadService, lead_service

__all__ = [
    "router",
    "LeadCreate",
    "LeadRead",
    "LeadStatusUpdate",
    "LeadService",
    "lead_service",
]
