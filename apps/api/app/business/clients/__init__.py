from app.business.clients.api import router
from app.business.clients.schemas import ClientCreate, ClientRead
from app.business.clients.service import ClientService, client_service

__all__ = ["router", "ClientCreate", "ClientRead", "ClientService", "client_service"]
