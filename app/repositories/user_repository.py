"""Repository for user data access.

Card order is ``view_count ASC, created_at DESC, url_id DESC``. The ``url_id``
key only separates rows that tie on the first two, which keeps the order
total. "Previous" is the exact mirror of "next": every inequality and every
sort direction is reversed.
"""

from datetime import UTC, datetime

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.filters.user import UserFilter
from app.models.user import BROWSABLE_ROLES, User, VerificationStatus


def eligible_clause():
    """Rows that may appear in public browsing."""
    return and_(
        User.role.in_(sorted(BROWSABLE_ROLES)),
        User.status == VerificationStatus.verified.value,
        User.verified_by.is_not(None),
    )


def forward_order():
    return (User.view_count.asc(), User.created_at.desc(), User.url_id.desc())


def backward_order():
    return (User.view_count.desc(), User.created_at.asc(), User.url_id.asc())


def after_clause(current: User):
    """Rows strictly after ``current`` in card order."""
    return or_(
        User.view_count > current.view_count,
        and_(User.view_count == current.view_count, User.created_at < current.created_at),
        and_(
            User.view_count == current.view_count,
            User.created_at == current.created_at,
            User.url_id < current.url_id,
        ),
    )


def before_clause(current: User):
    """Rows strictly before ``current`` in card order."""
    return or_(
        User.view_count < current.view_count,
        and_(User.view_count == current.view_count, User.created_at > current.created_at),
        and_(
            User.view_count == current.view_count,
            User.created_at == current.created_at,
            User.url_id > current.url_id,
        ),
    )


class UserRepository:
    """Data access layer for users."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # -- lookups -----------------------------------------------------------

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_role(self, user_id: str) -> str | None:
        result = await self.session.execute(select(User.role).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    # -- card navigation ---------------------------------------------------

    def _eligible_query(self):
        return (
            select(User)
            .options(selectinload(User.verified_by_admin))
            .where(eligible_clause())
        )

    async def get_eligible_by_url_id(self, url_id: int) -> User | None:
        result = await self.session.execute(
            self._eligible_query().where(User.url_id == url_id)
        )
        return result.scalar_one_or_none()

    async def get_first_eligible(self) -> User | None:
        result = await self.session.execute(
            self._eligible_query().order_by(*forward_order()).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_last_eligible(self) -> User | None:
        result = await self.session.execute(
            self._eligible_query().order_by(*backward_order()).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_next_eligible(self, current: User) -> User | None:
        result = await self.session.execute(
            self._eligible_query()
            .where(after_clause(current))
            .order_by(*forward_order())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_previous_eligible(self, current: User) -> User | None:
        result = await self.session.execute(
            self._eligible_query()
            .where(before_clause(current))
            .order_by(*backward_order())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_eligible(self, limit: int = 10, offset: int = 0) -> tuple[list[User], int]:
        count_query = select(func.count()).select_from(User).where(eligible_clause())
        total = (await self.session.execute(count_query)).scalar() or 0

        result = await self.session.execute(
            self._eligible_query().order_by(*forward_order()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total

    async def count_eligible(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(User).where(eligible_clause())
        )
        return result.scalar() or 0

    async def increment_view_count(self, url_id: int) -> int | None:
        """Atomically add one view; returns the new count or None if no such user."""
        result = await self.session.execute(
            update(User)
            .where(User.url_id == url_id)
            .values(view_count=User.view_count + 1)
            .returning(User.view_count)
        )
        return result.scalar_one_or_none()

    # -- admin -------------------------------------------------------------

    async def get_all(
        self,
        filters: UserFilter,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[User], int]:
        query = filters.filter(select(User).options(selectinload(User.verified_by_admin)))
        count_query = filters.filter(select(func.count()).select_from(User))

        total = (await self.session.execute(count_query)).scalar() or 0

        query = filters.sort(query)
        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def set_status(self, user_id: str, status: str, verifier_id: str) -> User | None:
        """Single-statement status transition; returns the updated row."""
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(status=status, verified_by=verifier_id, verified_at=datetime.now(UTC))
            .returning(User)
        )
        return result.scalar_one_or_none()

    async def set_role(self, user_id: str, role: str) -> User | None:
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(role=role, updated_at=datetime.now(UTC))
            .returning(User)
        )
        return result.scalar_one_or_none()

    async def count_verifications(self, admin_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(User)
            .where(User.verified_by == admin_id)
            .where(User.status == VerificationStatus.verified.value)
        )
        return result.scalar() or 0

    # -- profile -----------------------------------------------------------

    async def update_profile(self, user_id: str, changes: dict) -> User | None:
        """Apply profile edits; any edit sends the profile back to review."""
        user = await self.get_by_id(user_id)
        if not user:
            return None

        for field, value in changes.items():
            setattr(user, field, value)
        user.status = VerificationStatus.pending.value
        user.verified_by = None
        user.verified_at = None

        await self.session.flush()
        await self.session.refresh(user)
        return user
