from app.business.users.api import router
from app.business.users.schemas import LoginHistoryRead, UserProfileUpdate, UserRead
from app.business.users.service import UserService, user_service

__all__ = [
    "router",
    "LoginHistoryRead",
    "UserProfileUpdate",
    "UserRead",
    "UserService",
    "user_service",
]
