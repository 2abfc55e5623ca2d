from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from fastapi import Depends, HTTPException, status

from app.core.auth import AuthUser, get_current_user


LOGIN_PATH = "/login"

PUBLIC_EXACT_PATHS = frozenset({"/"})
PUBLIC_PATH_PREFIXES = (
    "/login",
    "/signup",
    "/welcome",
    "/api/auth",
    "/api/public",
    "/health",
    "/docs",
    "/openapi.json",
)


@dataclass(frozen=True)
class RoleArea:
    role: str
    prefixes: tuple[str, ...]
    home: str


ROLE_AREAS: tuple[RoleArea, ...] = (
    RoleArea(role="employee", prefixes=("/dashboard/employee", "/api/employee"), home="/dashboard/employee"),
    RoleArea(role="executive", prefixes=("/dashboard/executive", "/api/executive"), home="/dashboard/executive"),
)


class AccessOutcome(str, Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    required_role: str | None = None
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is AccessOutcome.ALLOW


def _matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def is_public_path(path: str) -> bool:
    if path in PUBLIC_EXACT_PATHS:
        return True
    return any(_matches_prefix(path, prefix) for prefix in PUBLIC_PATH_PREFIXES)


def is_api_path(path: str) -> bool:
    return _matches_prefix(path, "/api")


def home_for_role(role: str | None) -> str:
    for area in ROLE_AREAS:
        if area.role == role:
            return area.home
    return LOGIN_PATH


def evaluate_access(path: str, role: str) -> AccessDecision:
    """Apply the role-area table to ``path``; unlisted paths are open to any signed-in role."""
    for area in ROLE_AREAS:
        if any(_matches_prefix(path, prefix) for prefix in area.prefixes):
            if area.role == role:
                return AccessDecision(outcome=AccessOutcome.ALLOW, required_role=area.role)
            return AccessDecision(
                outcome=AccessOutcome.FORBIDDEN,
                required_role=area.role,
                redirect_to=home_for_role(role),
            )
    return AccessDecision(outcome=AccessOutcome.ALLOW)


def require_role(*roles: str) -> Callable[[AuthUser], AuthUser]:
    async def checker(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access forbidden: {' or '.join(roles)} role required",
            )
        return user

    return checker
