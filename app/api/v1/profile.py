"""Own-profile endpoints for signed-in users."""

from fastapi import APIRouter

from app.auth.dependencies import CurrentUser
from app.dependencies import UserRepo
from app.exceptions import NotFoundError
from app.schemas.common import ApiResponse
from app.schemas.user import ProfileResponse, ProfileUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[ProfileResponse])
async def get_profile(current_user: CurrentUser, repo: UserRepo) -> ApiResponse[ProfileResponse]:
    user = await repo.get_by_id(current_user.id)
    if not user:
        raise NotFoundError("User profile not found")
    return ApiResponse.ok(ProfileResponse.model_validate(user))


@router.put("", response_model=ApiResponse[ProfileResponse])
async def update_profile(
    data: ProfileUpdate,
    current_user: CurrentUser,
    repo: UserRepo,
) -> ApiResponse[ProfileResponse]:
    """Edit profile content. Any edit sends the profile back to pending review."""
    changes = data.model_dump(mode="json", exclude_unset=True)
    user = await repo.update_profile(current_user.id, changes)
    if not user:
        raise NotFoundError("User profile not found")
    return ApiResponse.ok(
        ProfileResponse.model_validate(user),
        message="Profile updated and submitted for re-verification",
    )
