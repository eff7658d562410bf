"""Unit tests for VerificationService."""

from unittest.mock import AsyncMock

import pytest

from app.exceptions import (
    DataIntegrityError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)
from app.filters.user import UserFilter
from app.services.verification_service import VerificationService
from tests.conftest import make_admin_model, make_user_model, make_verified_user


def _service(*users):
    """Service over a mocked repository whose get_by_id resolves ``users``."""
    by_id = {u.id: u for u in users}
    repo = AsyncMock()
    repo.get_by_id.side_effect = lambda user_id: by_id.get(user_id)
    return VerificationService(repo), repo


@pytest.mark.asyncio
class TestUpdateStatus:
    async def test_admin_verifies_pending_user(self):
        admin = make_admin_model()
        seeker = make_user_model()
        service, repo = _service(admin, seeker)
        repo.set_status.return_value = make_verified_user(
            admin, id=seeker.id, url_id=seeker.url_id
        )

        result = await service.update_status(admin.id, seeker.id, "verify", "looks legit")

        repo.set_status.assert_awaited_once_with(seeker.id, "verified", admin.id)
        assert result.user.status == "verified"
        assert result.user.verified_by == admin.id
        assert result.action == "verify"
        assert result.remarks == "looks legit"

    async def test_flag(self):
        admin = make_admin_model()
        service, repo = _service(admin)
        repo.set_status.return_value = make_user_model(status="flagged", verified_by=admin.id)

        result = await service.update_status(admin.id, "target", "flag")

        repo.set_status.assert_awaited_once_with("target", "flagged", admin.id)
        assert result.user.status == "flagged"

    async def test_super_admin_may_verify(self):
        root = make_user_model(role="super_admin")
        service, repo = _service(root)
        repo.set_status.return_value = make_verified_user(root)

        result = await service.update_status(root.id, "target", "verify")

        assert result.user.verified_by == root.id

    async def test_help_seeker_forbidden(self):
        seeker = make_user_model()
        service, repo = _service(seeker)

        with pytest.raises(ForbiddenError):
            await service.update_status(seeker.id, "target", "verify")
        repo.set_status.assert_not_awaited()

    async def test_unknown_actor_unauthorized(self):
        service, _ = _service()
        with pytest.raises(UnauthorizedError):
            await service.update_status("ghost", "target", "verify")

    async def test_target_not_found(self):
        admin = make_admin_model()
        service, repo = _service(admin)
        repo.set_status.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_status(admin.id, "missing", "verify")

    async def test_missing_verifier_after_update(self):
        admin = make_admin_model()
        service, repo = _service(admin)
        repo.set_status.return_value = make_user_model(status="verified", verified_by=None)

        with pytest.raises(DataIntegrityError):
            await service.update_status(admin.id, "target", "verify")

    async def test_reverify_overwrites_verifier(self):
        first, second = make_admin_model(), make_admin_model()
        seeker = make_verified_user(first)
        service, repo = _service(second, seeker)
        repo.set_status.return_value = make_verified_user(second, id=seeker.id)

        result = await service.update_status(second.id, seeker.id, "verify")

        assert result.user.verified_by == second.id


@pytest.mark.asyncio
class TestUpgradeRole:
    async def test_promote_to_admin(self):
        root = make_user_model(role="super_admin")
        seeker = make_user_model()
        service, repo = _service(root, seeker)
        repo.set_role.return_value = make_user_model(
            id=seeker.id, email=seeker.email, role="admin"
        )

        result = await service.upgrade_role(root.id, seeker.id, "admin", "trusted volunteer")

        repo.set_role.assert_awaited_once_with(seeker.id, "admin")
        assert result.action == "upgrade_to_admin"
        assert result.user.role == "admin"
        assert result.remarks == "trusted volunteer"

    async def test_demote_to_help_seeker(self):
        root = make_user_model(role="super_admin")
        admin = make_admin_model()
        service, repo = _service(root, admin)
        repo.set_role.return_value = make_user_model(id=admin.id, role="help_seeker")

        result = await service.upgrade_role(root.id, admin.id, "help_seeker")

        assert result.action == "downgrade_to_help_seeker"

    async def test_admin_cannot_change_roles(self):
        admin = make_admin_model()
        seeker = make_user_model()
        service, repo = _service(admin, seeker)

        with pytest.raises(ForbiddenError):
            await service.upgrade_role(admin.id, seeker.id, "admin")
        repo.set_role.assert_not_awaited()

    async def test_self_modification(self):
        root = make_user_model(role="super_admin")
        service, repo = _service(root)

        with pytest.raises(InvalidOperationError):
            await service.upgrade_role(root.id, root.id, "help_seeker")
        repo.set_role.assert_not_awaited()

    async def test_cannot_assign_super_admin(self):
        root = make_user_model(role="super_admin")
        seeker = make_user_model()
        service, _ = _service(root, seeker)

        with pytest.raises(InvalidOperationError):
            await service.upgrade_role(root.id, seeker.id, "super_admin")

    async def test_cannot_modify_other_super_admin(self):
        root = make_user_model(role="super_admin")
        other = make_user_model(role="super_admin")
        service, repo = _service(root, other)

        with pytest.raises(ForbiddenError, match="another super admin"):
            await service.upgrade_role(root.id, other.id, "help_seeker")
        repo.set_role.assert_not_awaited()

    async def test_missing_target(self):
        root = make_user_model(role="super_admin")
        service, _ = _service(root)

        with pytest.raises(NotFoundError):
            await service.upgrade_role(root.id, "missing", "admin")


@pytest.mark.asyncio
class TestListUsers:
    async def test_returns_page_with_total(self):
        admin = make_admin_model()
        rows = [make_verified_user(admin), make_user_model()]
        service, repo = _service(admin)
        repo.get_all.return_value = (rows, 42)

        data = await service.list_users(admin.id, UserFilter(), limit=2, offset=0)

        assert data.total == 42
        assert data.has_more is True
        assert data.users[0].verified_by_admin.id == admin.id
        assert data.users[1].verified_by_admin is None

    async def test_help_seeker_forbidden(self):
        seeker = make_user_model()
        service, repo = _service(seeker)

        with pytest.raises(ForbiddenError):
            await service.list_users(seeker.id, UserFilter())
        repo.get_all.assert_not_awaited()


@pytest.mark.asyncio
class TestAdminProfile:
    async def test_admin_profile(self):
        admin = make_admin_model()
        service, repo = _service(admin)
        repo.count_verifications.return_value = 12

        profile = await service.get_admin_profile(admin.id)

        assert profile.verification_count == 12
        assert profile.full_name == admin.full_name
        assert "email" not in profile.model_dump()

    async def test_super_admin_profile(self):
        root = make_user_model(role="super_admin")
        service, repo = _service(root)
        repo.count_verifications.return_value = 0

        assert (await service.get_admin_profile(root.id)).role == "super_admin"

    async def test_help_seeker_is_not_an_admin(self):
        seeker = make_user_model()
        service, repo = _service(seeker)

        assert await service.get_admin_profile(seeker.id) is None
        repo.count_verifications.assert_not_awaited()

    async def test_unknown_id(self):
        service, _ = _service()
        assert await service.get_admin_profile("missing") is None
