"""Database models package."""

from app.models.base import Base
from app.models.user import (
    BROWSABLE_ROLES,
    VERIFIER_ROLES,
    StatusAction,
    User,
    UserRole,
    VerificationStatus,
)

__all__ = [
    "Base",
    "User",
    "UserRole",
    "VerificationStatus",
    "StatusAction",
    "VERIFIER_ROLES",
    "BROWSABLE_ROLES",
]
