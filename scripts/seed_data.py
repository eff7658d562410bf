"""Seed script for the verified-help database.

Seeds the super admin, demo admins, and demo help seekers (some verified so
the public card stack has content).
Run: python -m scripts.seed_data
"""

import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.auth.security import hash_password
from app.config import get_settings
from app.models.user import User, UserRole, VerificationStatus

logger = logging.getLogger(__name__)

# ── Admins ────────────────────────────────────────────────────────────────────

DEMO_ADMINS = [
    {
        "email": "admin@example.org",
        "full_name": "Review Admin",
        "phone_number": "+10000000001",
        "description": "Reviews and verifies help seeker profiles.",
        "password": "admin12345",
    },
    {
        "email": "reviewer@example.org",
        "full_name": "Second Reviewer",
        "phone_number": "+10000000002",
        "description": "Volunteer reviewer for incoming registrations.",
        "password": "reviewer12345",
    },
]

# ── Demo help seekers ─────────────────────────────────────────────────────────

DEMO_HELP_SEEKERS = [
    {
        "email": "amira@example.org",
        "full_name": "Amira Haddad",
        "phone_number": "+970590000001",
        "description": "Family of five displaced from the north, raising funds for shelter.",
        "campaign_url": "https://example.org/campaigns/amira",
        "status": VerificationStatus.verified,
        "view_count": 3,
    },
    {
        "email": "yousef@example.org",
        "full_name": "Yousef Nasser",
        "phone_number": "+970590000002",
        "description": "Needs medical supplies for a chronically ill parent.",
        "status": VerificationStatus.verified,
        "view_count": 0,
    },
    {
        "email": "lina@example.org",
        "full_name": "Lina Saleh",
        "phone_number": "+970590000003",
        "description": "Student collecting funds to continue university studies.",
        "linkedin_url": "https://www.linkedin.com/in/lina-example",
        "status": VerificationStatus.verified,
        "view_count": 0,
    },
    {
        "email": "omar@example.org",
        "full_name": "Omar Khalil",
        "phone_number": "+970590000004",
        "description": "Awaiting review: requesting help rebuilding a small workshop.",
        "status": VerificationStatus.pending,
        "view_count": 0,
    },
    {
        "email": "flagged@example.org",
        "full_name": "Unconfirmed Campaign",
        "phone_number": "+970590000005",
        "description": "Profile flagged during review for inconsistent details.",
        "status": VerificationStatus.flagged,
        "view_count": 0,
    },
]


async def _get_or_create(session: AsyncSession, email: str, **fields) -> User:
    existing = (await session.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if existing:
        logger.info("User '%s' already exists, skipping", email)
        return existing

    password = fields.pop("password")
    user = User(email=email, hashed_password=hash_password(password), **fields)
    session.add(user)
    await session.flush()
    logger.info("Created %s: %s", user.role, email)
    return user


async def seed_admins(session: AsyncSession) -> User:
    """Seed the super admin and demo admins. Returns the super admin."""
    settings = get_settings()
    super_admin = await _get_or_create(
        session,
        settings.super_admin_email,
        password=settings.super_admin_password,
        full_name="Platform Super Admin",
        phone_number="+10000000000",
        description="Seeded super administrator account.",
        role=UserRole.super_admin.value,
        status=None,
    )

    for admin_data in DEMO_ADMINS:
        data = dict(admin_data)
        await _get_or_create(
            session,
            data.pop("email"),
            role=UserRole.admin.value,
            status=VerificationStatus.verified.value,
            verified_by=super_admin.id,
            verified_at=datetime.now(timezone.utc),
            **data,
        )

    await session.commit()
    return super_admin


async def seed_help_seekers(session: AsyncSession, verifier: User) -> None:
    """Seed demo help seekers; verified and flagged ones are attributed to ``verifier``."""
    for seeker_data in DEMO_HELP_SEEKERS:
        data = dict(seeker_data)
        status = data.pop("status")
        reviewed = status != VerificationStatus.pending
        await _get_or_create(
            session,
            data.pop("email"),
            password="helpseeker123",
            role=UserRole.help_seeker.value,
            status=status.value,
            verified_by=verifier.id if reviewed else None,
            verified_at=datetime.now(timezone.utc) if reviewed else None,
            **data,
        )

    await session.commit()


async def main() -> None:
    """Run all seed steps."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    settings = get_settings()
    engine = create_async_engine(str(settings.database_url))
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        logger.info("Seeding admins...")
        super_admin = await seed_admins(session)

        logger.info("Seeding help seekers...")
        await seed_help_seekers(session, super_admin)

    await engine.dispose()
    logger.info("Seeding complete!")


if __name__ == "__main__":
    asyncio.run(main())
