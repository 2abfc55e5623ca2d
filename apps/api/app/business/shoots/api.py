from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.business.shoots.schemas import ShootAssignmentCreate, ShootAssignmentRead, ShootCreate, ShootRead
from app.business.shoots.service import shoot_service
from app.core.auth import AuthUser, get_current_user
from app.core.database import get_store
from app.core.responses import Envelope
from app.platform.store.base import DocumentStore


router = APIRouter(prefix="/api/shoots", tags=["shoots"])


@router.get("", response_model=Envelope[list[ShootRead]])
async def list_shoots(
    client_id: str | None = Query(default=None, alias="clientId"),
    upcoming: bool = False,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[ShootRead]]:
    if client_id:
        shoots = await shoot_service.list_shoots_by_client(store, client_id)
    elif upcoming:
        shoots = await shoot_service.list_upcoming_shoots(store)
    else:
        shoots = await shoot_service.list_all_shoots(store)
    return Envelope(data=shoots)


@router.post("", response_model=Envelope[ShootRead], status_code=status.HTTP_201_CREATED)
async def create_shoot(
    payload: ShootCreate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[ShootRead]:
    shoot = await shoot_service.create_shoot(store, user, payload)
    return Envelope(data=shoot, message="Shoot created successfully")


@router.get("/{shoot_id}", response_model=Envelope[ShootRead])
async def get_shoot(
    shoot_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[ShootRead]:
    return Envelope(data=await shoot_service.get_shoot(store, shoot_id))


@router.get("/{shoot_id}/assignments", response_model=Envelope[list[ShootAssignmentRead]])
async def list_assignments(
    shoot_id: str,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[list[ShootAssignmentRead]]:
    return Envelope(data=await shoot_service.list_assignments(store, shoot_id))


@router.post(
    "/{shoot_id}/assignments",
    response_model=Envelope[ShootAssignmentRead],
    status_code=status.HTTP_201_CREATED,
)
async def assign_member(
    shoot_id: str,
    payload: ShootAssignmentCreate,
    store: DocumentStore = Depends(get_store),
    user: AuthUser = Depends(get_current_user),
) -> Envelope[ShootAssignmentRead]:
    assignment = await shoot_service.assign_member(store, user, shoot_id, payload)
    return Envelope(data=assignment, message="Crew member assigned")
