from app.business.shoots.api import router
from app.business.shoots.schemas import ShootAssignmentCreate, ShootAssignmentRead, ShootCreate, ShootRead
from app.business.shoots.service import ShootService, shoot_service

__all__ = [
    "router",
    "ShootAssignmentCreate",
    "ShootAssignmentRead",
    "ShootCreate",
    "ShootRead",
    "ShootService",
    "shoot_service",
]
