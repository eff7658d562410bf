"""Admin endpoints: review queue, verification and role management."""

import uuid

from fastapi import APIRouter, Depends, Query
from fastapi_filter import FilterDepends

from app.auth.dependencies import CurrentUser
from app.dependencies import Verification
from app.filters.user import UserFilter
from app.schemas.common import ApiResponse
from app.schemas.user import (
    AdminUserListData,
    RoleUpgradeRequest,
    RoleUpgradeResult,
    StatusUpdateRequest,
    StatusUpdateResult,
)
from app.utils.audit import audit_logged

router = APIRouter()


@router.get("/users", response_model=ApiResponse[AdminUserListData])
async def list_users(
    current_user: CurrentUser,
    service: Verification,
    filters: UserFilter = FilterDepends(UserFilter),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> ApiResponse[AdminUserListData]:
    """List users for review, optionally filtered by status, role or search text."""
    data = await service.list_users(current_user.id, filters, limit=limit, offset=offset)
    return ApiResponse.ok(data)


@router.post(
    "/users/{user_id}/status",
    response_model=ApiResponse[StatusUpdateResult],
    dependencies=[Depends(audit_logged("update_user_status"))],
)
async def update_user_status(
    user_id: uuid.UUID,
    body: StatusUpdateRequest,
    current_user: CurrentUser,
    service: Verification,
) -> ApiResponse[StatusUpdateResult]:
    """Verify or flag a user."""
    result = await service.update_status(
        current_user.id, str(user_id), body.action, body.remarks
    )
    return ApiResponse.ok(result)


@router.post(
    "/users/{user_id}/role",
    response_model=ApiResponse[RoleUpgradeResult],
    dependencies=[Depends(audit_logged("upgrade_user_role"))],
)
async def upgrade_user_role(
    user_id: uuid.UUID,
    body: RoleUpgradeRequest,
    current_user: CurrentUser,
    service: Verification,
) -> ApiResponse[RoleUpgradeResult]:
    """Promote a user to admin or demote an admin (super admin only)."""
    result = await service.upgrade_role(
        current_user.id, str(user_id), body.new_role, body.remarks
    )
    return ApiResponse.ok(result)
