"""Unit tests for dependency injection utilities."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from app.auth.dependencies import get_current_user, get_optional_user
from app.auth.security import create_access_token, create_refresh_token
from app.config import get_settings
from app.dependencies import get_db_session


def _make_mock_request():
    """Create a mock request with a session factory on app.state."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()

    class _ContextManager:
        async def __aenter__(self):
            return session

        async def __aexit__(self, *args):
            pass

    factory = MagicMock()
    factory.return_value = _ContextManager()

    request = MagicMock()
    request.app.state.session_factory = factory

    return request, session


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.mark.asyncio
class TestGetDbSession:
    async def test_commits_on_success(self):
        """Session should be committed when the request handler succeeds."""
        request, session = _make_mock_request()

        gen = get_db_session(request)
        yielded_session = await gen.__anext__()

        assert yielded_session is session

        try:
            await gen.__anext__()
        except StopAsyncIteration:
            pass

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()
        session.close.assert_awaited_once()

    async def test_rolls_back_on_exception(self):
        """Session should be rolled back when the request handler raises."""
        request, session = _make_mock_request()

        gen = get_db_session(request)
        await gen.__anext__()

        with pytest.raises(ValueError):
            await gen.athrow(ValueError("test error"))

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
        session.close.assert_awaited_once()


@pytest.mark.asyncio
class TestGetCurrentUser:
    async def test_valid_access_token(self):
        user = await get_current_user(_bearer(create_access_token("u-1", email="u@x.org")))
        assert user.id == "u-1"
        assert user.email == "u@x.org"

    async def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc:
            await get_current_user(None)
        assert exc.value.status_code == 401

    async def test_refresh_token_rejected(self):
        with pytest.raises(HTTPException) as exc:
            await get_current_user(_bearer(create_refresh_token("u-1")))
        assert exc.value.status_code == 401

    async def test_garbage_token_rejected(self):
        with pytest.raises(HTTPException):
            await get_current_user(_bearer("garbage"))


@pytest.mark.asyncio
class TestGetOptionalUser:
    async def test_anonymous(self):
        assert await get_optional_user(None) is None

    async def test_invalid_token_is_anonymous(self):
        assert await get_optional_user(_bearer("garbage")) is None

    async def test_valid_token(self):
        user = await get_optional_user(_bearer(create_access_token("u-2")))
        assert user is not None
        assert user.id == "u-2"

    async def test_expired_token_is_anonymous(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "u-3", "type": "access", "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        assert await get_optional_user(_bearer(token)) is None
