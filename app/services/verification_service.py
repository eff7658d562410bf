"""Verification workflow: status transitions and role management."""

from app.auth.guards import require_role
from app.exceptions import (
    DataIntegrityError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
)
from app.filters.user import UserFilter
from app.models.user import (
    VERIFIER_ROLES,
    StatusAction,
    User,
    UserRole,
    VerificationStatus,
)
from app.repositories.user_repository import UserRepository
from app.schemas.user import (
    AdminProfileResponse,
    AdminUserListData,
    AdminUserResponse,
    RoleUpgradeResult,
    RoleUpgradeUser,
    StatusUpdateResult,
    StatusUpdateUser,
    VerifierSummary,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

_ACTION_TO_STATUS = {
    StatusAction.verify: VerificationStatus.verified,
    StatusAction.flag: VerificationStatus.flagged,
}


class VerificationService:
    """Admin operations over the ``users`` table.

    Every method takes the acting user's id and re-reads the actor's role
    from the database before doing anything else.
    """

    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    async def _load_actor(self, actor_id: str, allowed, message: str) -> User:
        actor = await self.repo.get_by_id(actor_id)
        return require_role(actor, allowed, message)

    async def update_status(
        self,
        actor_id: str,
        target_user_id: str,
        action: StatusAction,
        remarks: str | None = None,
    ) -> StatusUpdateResult:
        """Verify or flag a user. Overwrites any previous decision."""
        await self._load_actor(actor_id, VERIFIER_ROLES, "Admin access required")

        action = StatusAction(action)
        new_status = _ACTION_TO_STATUS[action]
        user = await self.repo.set_status(target_user_id, new_status.value, actor_id)
        if user is None:
            raise NotFoundError()

        if user.verified_by is None:
            raise DataIntegrityError("Status update did not record a verifier")

        logger.info(
            "User %s marked %s by %s (remarks=%r)",
            user.id,
            new_status.value,
            actor_id,
            remarks,
        )
        return StatusUpdateResult(
            user=StatusUpdateUser.model_validate(user),
            action=action,
            remarks=remarks,
        )

    async def upgrade_role(
        self,
        actor_id: str,
        target_user_id: str,
        new_role: str,
        remarks: str | None = None,
    ) -> RoleUpgradeResult:
        """Promote a user to admin or demote an admin to help seeker."""
        await self._load_actor(actor_id, {UserRole.super_admin}, "Super admin access required")

        if target_user_id == actor_id:
            raise InvalidOperationError("Cannot modify your own role")

        new_role = UserRole(new_role)
        if new_role == UserRole.super_admin:
            raise InvalidOperationError("The super admin role cannot be assigned")

        target = await self.repo.get_by_id(target_user_id)
        if target is None:
            raise NotFoundError()
        if target.role == UserRole.super_admin:
            raise ForbiddenError("Cannot modify another super admin")

        user = await self.repo.set_role(target_user_id, new_role.value)
        if user is None:
            raise NotFoundError()

        action = (
            "upgrade_to_admin" if new_role == UserRole.admin else "downgrade_to_help_seeker"
        )
        logger.info("User %s role set to %s by %s", user.id, new_role.value, actor_id)
        return RoleUpgradeResult(
            user=RoleUpgradeUser.model_validate(user),
            action=action,
            remarks=remarks,
        )

    async def list_users(
        self,
        actor_id: str,
        filters: UserFilter,
        limit: int = 20,
        offset: int = 0,
    ) -> AdminUserListData:
        await self._load_actor(actor_id, VERIFIER_ROLES, "Admin access required")

        users, total = await self.repo.get_all(filters, limit=limit, offset=offset)
        return AdminUserListData.paginate(
            users=[_admin_row(u) for u in users],
            total=total,
            limit=limit,
            offset=offset,
        )

    async def get_admin_profile(self, admin_id: str) -> AdminProfileResponse | None:
        """Public profile of a verifier; None unless the id is an admin."""
        admin = await self.repo.get_by_id(admin_id)
        if admin is None or admin.role not in VERIFIER_ROLES:
            return None

        verification_count = await self.repo.count_verifications(admin.id)
        return AdminProfileResponse(
            id=admin.id,
            url_id=admin.url_id,
            full_name=admin.full_name,
            role=admin.role,
            verification_count=verification_count,
            description=admin.description,
            phone_number=admin.phone_number,
            linkedin_url=admin.linkedin_url,
            campaign_url=admin.campaign_url,
            created_at=admin.created_at,
            updated_at=admin.updated_at,
        )


def _admin_row(user: User) -> AdminUserResponse:
    verifier = user.verified_by_admin
    return AdminUserResponse(
        id=user.id,
        url_id=user.url_id,
        email=user.email,
        full_name=user.full_name,
        description=user.description,
        phone_number=user.phone_number,
        status=user.status,
        role=user.role,
        verified_by=user.verified_by,
        verified_at=user.verified_at,
        view_count=user.view_count,
        created_at=user.created_at,
        verified_by_admin=VerifierSummary.model_validate(verifier) if verifier else None,
    )
