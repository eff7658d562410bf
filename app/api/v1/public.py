"""Public card-stack endpoints. Users are addressed by ``url_id`` only."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Body, Header, Query

from app.auth.dependencies import OptionalUser
from app.dependencies import CardNavigation, Verification
from app.schemas.user import (
    AdminProfileResponse,
    CardListResponse,
    PublicUserResponse,
    UserCardResponse,
    ViewCountRequest,
    ViewCountResponse,
)

router = APIRouter()


@router.get("/users", response_model=CardListResponse)
async def list_cards(
    service: CardNavigation,
    limit: int = Query(10, ge=1, le=50),
    offset: int = Query(0, ge=0),
) -> CardListResponse:
    """Eligible users in card order, a page at a time."""
    return await service.list_cards(limit=limit, offset=offset)


@router.get("/users/count", response_model=int)
async def count_verified_users(service: CardNavigation) -> int:
    return await service.count_eligible()


@router.get("/users/next", response_model=PublicUserResponse | None)
async def get_next_user(
    service: CardNavigation,
    current_url_id: int | None = Query(None, ge=1),
) -> PublicUserResponse | None:
    """The card after ``current_url_id``, or the landing card when omitted."""
    return await service.get_next_user(current_url_id)


@router.get("/users/previous", response_model=PublicUserResponse | None)
async def get_previous_user(
    service: CardNavigation,
    current_url_id: int = Query(..., ge=1),
) -> PublicUserResponse | None:
    return await service.get_previous_user(current_url_id)


@router.get("/users/{url_id}", response_model=UserCardResponse | None)
async def get_user_data(url_id: int, service: CardNavigation) -> UserCardResponse | None:
    """A single card with its next/previous neighbours, or null."""
    return await service.get_user_by_url_id(url_id)


@router.post("/users/{url_id}/views", response_model=ViewCountResponse)
async def increment_view_count(
    url_id: int,
    service: CardNavigation,
    viewer: OptionalUser,
    body: Annotated[ViewCountRequest | None, Body()] = None,
    x_session_id: Annotated[str | None, Header()] = None,
) -> ViewCountResponse:
    """Count an anonymous view. Signed-in viewers are not counted."""
    session_id = (body.session_id if body else None) or x_session_id
    return await service.increment_view_count(url_id, viewer=viewer, session_id=session_id)


@router.get("/admins/{admin_id}", response_model=AdminProfileResponse | None)
async def get_admin_profile(
    admin_id: uuid.UUID, service: Verification
) -> AdminProfileResponse | None:
    """Public profile of a verifying admin, with how many profiles they verified."""
    return await service.get_admin_profile(str(admin_id))
