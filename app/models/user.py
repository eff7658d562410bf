"""User model: help seekers, admins and super admins share one table."""

import enum
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Identity,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin


class UserRole(enum.StrEnum):
    help_seeker = "help_seeker"
    admin = "admin"
    super_admin = "super_admin"


class VerificationStatus(enum.StrEnum):
    pending = "pending"
    verified = "verified"
    flagged = "flagged"


class StatusAction(enum.StrEnum):
    verify = "verify"
    flag = "flag"


# Roles that may verify/flag profiles.
VERIFIER_ROLES = frozenset({UserRole.admin.value, UserRole.super_admin.value})

# Roles whose verified profiles appear in public browsing.
BROWSABLE_ROLES = frozenset({UserRole.help_seeker.value, UserRole.admin.value})


class User(UUIDMixin, TimestampMixin, Base):
    """Registered user. Admins are users with an elevated role."""

    __tablename__ = "users"

    url_id: Mapped[int] = mapped_column(
        Integer, Identity(start=1), unique=True, nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.help_seeker.value
    )
    status: Mapped[str | None] = mapped_column(
        String(20), nullable=True, default=VerificationStatus.pending.value
    )
    verified_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    linkedin_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    campaign_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    telegram_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    verified_by_admin = relationship("User", remote_side="User.id", lazy="raise")

    __table_args__ = (
        CheckConstraint("view_count >= 0", name="ck_users_view_count_non_negative"),
        Index("idx_users_status_role", "status", "role"),
        Index("idx_users_card_order", "view_count", "created_at"),
        Index("idx_users_verified_by", "verified_by"),
    )
