from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, status

from app.auth.identity import IdentityProvider, IdentityVerificationError
from app.auth.schemas import LoginResponse, SessionUser
from app.business.users.service import user_service
from app.core.auth import create_session_token
from app.core.rbac import home_for_role
from app.metrics import observe_session_issued
from app.platform.store.base import DocumentStore
from app.platform.store.errors import StoreError


logger = logging.getLogger("app.auth")


@dataclass(frozen=True)
class IssuedSession:
    token: str
    response: LoginResponse


@dataclass(slots=True)
class SessionService:
    async def login(
        self,
        store: DocumentStore,
        provider: IdentityProvider,
        id_token: str | None,
        *,
        device: str,
        ip: str,
    ) -> IssuedSession:
        if not id_token:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ID token is required")

        try:
            identity = await provider.verify(id_token)
        except IdentityVerificationError as exc:
            logger.info("session.rejected", extra={"reason": "identity_verification_failed", "error": str(exc)})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication failed") from exc

        user, created = await user_service.get_or_create_user(
            store,
            identity.uid,
            email=identity.email,
            name=identity.name,
        )
        email = identity.email or user.email
        token = create_session_token(user.id, email, user.role)
        observe_session_issued(user.role)
        logger.info("session.issued", extra={"user_id": user.id, "role": user.role, "status": "created" if created else "existing"})

        try:
            await user_service.record_login(store, user.id, device=device, ip=ip)
        except StoreError as exc:
            logger.warning("login_history.failed", extra={"user_id": user.id, "error": str(exc)})

        return IssuedSession(
            token=token,
            response=LoginResponse(
                user=SessionUser(
                    id=user.id,
                    email=email,
                    name=user.name,
                    role=user.role,
                    designation=user.designation,
                ),
                redirect_url=home_for_role(user.role),
            ),
        )


session_service = SessionService()
