"""Infrastructure factories and FastAPI dependency providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import Settings, get_settings
from app.repositories.user_repository import UserRepository
from app.services.card_navigation import CardNavigationService
from app.services.verification_service import VerificationService

# ---------------------------------------------------------------------------
# Resource factories (called from the application lifespan)
# ---------------------------------------------------------------------------


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


def create_redis(settings: Settings) -> Redis:
    return Redis.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )


# ---------------------------------------------------------------------------
# Request-scoped dependencies
# ---------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One session per request: commit on success, roll back on error."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_redis(request: Request) -> Redis | None:
    return getattr(request.app.state, "redis", None)


def get_user_repo(db: DBSession) -> UserRepository:
    return UserRepository(db)


UserRepo = Annotated[UserRepository, Depends(get_user_repo)]


def get_card_navigation_service(
    repo: UserRepo,
    redis: Annotated[Redis | None, Depends(get_redis)],
) -> CardNavigationService:
    return CardNavigationService(repo, get_settings(), redis=redis)


def get_verification_service(repo: UserRepo) -> VerificationService:
    return VerificationService(repo)


CardNavigation = Annotated[CardNavigationService, Depends(get_card_navigation_service)]
Verification = Annotated[VerificationService, Depends(get_verification_service)]
