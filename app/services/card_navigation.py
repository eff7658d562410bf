"""Card stack navigation over eligible (publicly browsable) users.

Traversal is cyclic: stepping past the last card lands on the first one and
stepping before the first lands on the last. The order is computed against
live data, so view counts changing mid-session can make a card reappear or be
skipped; no snapshot is taken.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from app.config import Settings
from app.exceptions import NotFoundError, UpstreamError, VerifiedUserDataIntegrityError
from app.models.user import User, VerificationStatus
from app.repositories.user_repository import UserRepository
from app.schemas.auth import TokenUser
from app.schemas.user import (
    CardListResponse,
    PublicUserResponse,
    UserCardResponse,
    VerifierSummary,
    ViewCountResponse,
)
from app.utils.logging import get_logger

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)

VIEW_KEY_PREFIX = "views"


def to_public_user(user: User) -> PublicUserResponse:
    """Serialize a card; a verified user must name a resolvable verifier."""
    verifier_summary = None
    if user.status == VerificationStatus.verified:
        verifier = user.verified_by_admin if user.verified_by else None
        if verifier is None or not verifier.full_name:
            raise VerifiedUserDataIntegrityError(
                f"Verified user {user.url_id} has no resolvable verifier"
            )
        verifier_summary = VerifierSummary.model_validate(verifier)

    return PublicUserResponse(
        url_id=user.url_id,
        full_name=user.full_name,
        description=user.description,
        phone_number=user.phone_number,
        role=user.role,
        status=user.status,
        verified_at=user.verified_at,
        view_count=user.view_count,
        created_at=user.created_at,
        linkedin_url=user.linkedin_url,
        campaign_url=user.campaign_url,
        facebook_url=user.facebook_url,
        telegram_url=user.telegram_url,
        verified_by_admin=verifier_summary,
    )


class CardNavigationService:
    """Next/previous traversal and view counting for the public card stack."""

    def __init__(
        self,
        repo: UserRepository,
        settings: Settings,
        *,
        redis: Redis | None = None,
    ) -> None:
        self.repo = repo
        self.settings = settings
        self._redis = redis

    # -- traversal ---------------------------------------------------------

    async def _successor(self, current: User) -> User | None:
        return await self.repo.get_next_eligible(current) or await self.repo.get_first_eligible()

    async def _predecessor(self, current: User) -> User | None:
        return (
            await self.repo.get_previous_eligible(current)
            or await self.repo.get_last_eligible()
        )

    async def get_next_user(self, current_url_id: int | None = None) -> PublicUserResponse | None:
        """Landing card when ``current_url_id`` is absent or not eligible, else the successor."""
        current = None
        if current_url_id is not None:
            current = await self.repo.get_eligible_by_url_id(current_url_id)

        if current is None:
            user = await self.repo.get_first_eligible()
        else:
            user = await self._successor(current)

        return to_public_user(user) if user else None

    async def get_previous_user(self, current_url_id: int) -> PublicUserResponse | None:
        current = await self.repo.get_eligible_by_url_id(current_url_id)
        if current is None:
            user = await self.repo.get_last_eligible()
        else:
            user = await self._predecessor(current)
        return to_public_user(user) if user else None

    async def get_user_by_url_id(self, url_id: int) -> UserCardResponse | None:
        """One card plus the url ids of its neighbours; None if not eligible."""
        user = await self.repo.get_eligible_by_url_id(url_id)
        if user is None:
            return None

        card = to_public_user(user)
        next_user = await self._successor(user)
        previous_user = await self._predecessor(user)

        return UserCardResponse(
            user=card,
            next_user_url_id=_neighbour_url_id(user, next_user),
            previous_user_url_id=_neighbour_url_id(user, previous_user),
        )

    async def list_cards(self, limit: int = 10, offset: int = 0) -> CardListResponse:
        users, total = await self.repo.list_eligible(limit=limit, offset=offset)
        return CardListResponse.paginate(
            users=[to_public_user(u) for u in users],
            total=total,
            limit=limit,
            offset=offset,
        )

    async def count_eligible(self) -> int:
        return await self.repo.count_eligible()

    # -- view counting -----------------------------------------------------

    async def increment_view_count(
        self,
        url_id: int,
        viewer: TokenUser | None = None,
        session_id: str | None = None,
    ) -> ViewCountResponse:
        """Count one anonymous view.

        Signed-in viewers are never counted. With a ``session_id`` the view is
        counted at most once per session and user; without one every call
        counts.
        """
        if viewer is not None:
            return ViewCountResponse(success=True, counted=False)

        key = f"{VIEW_KEY_PREFIX}:{session_id}:{url_id}" if session_id else None
        if key and not await self._claim_session_view(key):
            return ViewCountResponse(success=True, counted=False)

        try:
            view_count = await self.repo.increment_view_count(url_id)
            if view_count is None:
                raise NotFoundError()
        except Exception:
            if key:
                await self._release_session_view(key)
            raise
        return ViewCountResponse(success=True, counted=True, view_count=view_count)

    async def _claim_session_view(self, key: str) -> bool:
        if self._redis is None:
            return True
        try:
            claimed = await self._redis.set(
                key, "1", nx=True, ex=self.settings.view_dedup_ttl_seconds
            )
        except RedisError as err:
            logger.error("Could not claim session view %s: %s", key, err)
            raise UpstreamError() from err
        if not claimed:
            logger.debug("View already counted for %s", key)
        return bool(claimed)

    async def _release_session_view(self, key: str) -> None:
        """Drop a claim whose view was never counted."""
        if self._redis is None:
            return
        try:
            await self._redis.delete(key)
        except RedisError:
            logger.warning("Could not release session view %s", key, exc_info=True)


def _neighbour_url_id(current: User, neighbour: User | None) -> int | None:
    if neighbour is None or neighbour.url_id == current.url_id:
        return None
    return neighbour.url_id
