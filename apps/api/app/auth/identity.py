"""Federated identity verification.

The backend never sees passwords; clients sign in with Firebase and hand us the
resulting ID token, which is verified here before a session is minted.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin import exceptions as firebase_exceptions
from starlette.concurrency import run_in_threadpool

from app.core.config import get_settings


logger = logging.getLogger("app.auth.identity")


class IdentityVerificationError(Exception):
    """The presented ID token is malformed, expired, revoked or not ours."""


@dataclass(frozen=True)
class VerifiedIdentity:
    uid: str
    email: str | None = None
    name: str | None = None


class IdentityProvider(ABC):
    @abstractmethod
    async def verify(self, id_token: str) -> VerifiedIdentity: ...


class FirebaseIdentityProvider(IdentityProvider):
    def __init__(self, app: firebase_admin.App | None = None) -> None:
        self._app = app

    @property
    def app(self) -> firebase_admin.App:
        if self._app is None:
            self._app = _initialize_firebase_app()
        return self._app

    async def verify(self, id_token: str) -> VerifiedIdentity:
        try:
            decoded = await run_in_threadpool(firebase_auth.verify_id_token, id_token, self.app)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise IdentityVerificationError(str(exc)) from exc

        uid = decoded.get("uid")
        if not uid:
            raise IdentityVerificationError("token has no uid")
        return VerifiedIdentity(uid=uid, email=decoded.get("email"), name=decoded.get("name"))


def _initialize_firebase_app() -> firebase_admin.App:
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    settings = get_settings()
    if settings.firebase_credentials_file:
        credential = credentials.Certificate(settings.firebase_credentials_file)
    else:
        credential = credentials.ApplicationDefault()
    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    logger.info("firebase.initialized", extra={"status": "credentials-file" if settings.firebase_credentials_file else "adc"})
    return firebase_admin.initialize_app(credential, options)


_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    global _provider
    if _provider is None:
        _provider = FirebaseIdentityProvider()
    return _provider
