"""JWT token and password hashing utilities."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import jwt

from app.config import get_settings


def hash_password(password: str) -> str:
    """Hash a plain-text password with bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


def _create_token(user_id: str, email: str, token_type: str, expire_minutes: int) -> str:
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=expire_minutes)
    # Identity only: roles are always re-read from the database.
    payload = {
        "sub": user_id,
        "email": email,
        "type": token_type,
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: str, email: str = "") -> str:
    """Create a short-lived JWT access token."""
    settings = get_settings()
    return _create_token(user_id, email, "access", settings.jwt_access_token_expire_minutes)


def create_refresh_token(user_id: str, email: str = "") -> str:
    """Create a long-lived JWT refresh token."""
    settings = get_settings()
    return _create_token(user_id, email, "refresh", settings.jwt_refresh_token_expire_minutes)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token. Raises JWTError on failure."""
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
