from app.auth.api import router
from app.auth.identity import (
    FirebaseIdentityProvider,
    IdentityProvider,
    IdentityVerificationError,
    VerifiedIdentity,
    get_identity_provider,
)
from app.auth.service import SessionService, session_service

__all__ = [
    "router",
    "FirebaseIdentityProvider",
    "IdentityProvider",
    "IdentityVerificationError",
    "VerifiedIdentity",
    "get_identity_provider",
    "SessionService",
    "session_service",
]
