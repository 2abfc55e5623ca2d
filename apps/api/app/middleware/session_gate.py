from __future__ import annotations

import logging

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.core.auth import decode_session_token
from app.core.config import get_settings
from app.core.context import get_request_context
from app.core.errors import error_response
from app.core.rbac import LOGIN_PATH, evaluate_access, is_api_path, is_public_path
from app.metrics import observe_gate_rejection


logger = logging.getLogger("app.auth.gate")


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Validates the session cookie and applies the role-area table.

    API paths get ``{code, message}`` errors; page paths are redirected.
    On success the caller's identity is written to the request context.
    """

    async def dispatch(self, request: Request, call_next):  # type: ignore[no-untyped-def]
        path = request.url.path
        if is_public_path(path):
            return await call_next(request)

        settings = get_settings()
        token = request.cookies.get(settings.session_cookie_name)
        if not token:
            return self._unauthenticated(request, "Authentication required", reason="missing_token")

        claims = decode_session_token(token)
        if claims is None:
            return self._unauthenticated(request, "Invalid authentication token", reason="invalid_token")

        decision = evaluate_access(path, claims.role)
        if not decision.allowed:
            observe_gate_rejection("role_mismatch")
            logger.info(
                "gate.forbidden",
                extra={"path": path, "user_id": claims.user_id, "role": claims.role, "reason": "role_mismatch"},
            )
            if is_api_path(path):
                required = (decision.required_role or "").capitalize()
                return error_response(status.HTTP_403_FORBIDDEN, f"Access forbidden: {required} role required")
            return self._redirect(request, decision.redirect_to or LOGIN_PATH)

        context = get_request_context(request)
        context.user_id = claims.user_id
        context.email = claims.email
        context.role = claims.role
        return await call_next(request)

    def _unauthenticated(self, request: Request, message: str, *, reason: str) -> Response:
        observe_gate_rejection(reason)
        logger.info("gate.unauthenticated", extra={"path": request.url.path, "reason": reason})
        if is_api_path(request.url.path):
            return error_response(status.HTTP_401_UNAUTHORIZED, message)
        return self._redirect(request, LOGIN_PATH)

    @staticmethod
    def _redirect(request: Request, target: str) -> RedirectResponse:
        return RedirectResponse(url=str(request.url.replace(path=target, query="")))
