"""Pydantic schemas for user profiles, cards and admin actions."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator

from app.models.user import StatusAction
from app.schemas.common import OffsetPage


class VerifierSummary(BaseModel):
    """The admin attributed with a verification."""

    id: str
    full_name: str

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Public card stack
# ---------------------------------------------------------------------------


class PublicUserResponse(BaseModel):
    """Eligible user as shown on a public card. Never includes email or id."""

    url_id: int
    full_name: str
    description: str
    phone_number: str
    role: str
    status: str | None
    verified_at: datetime | None
    view_count: int
    created_at: datetime
    linkedin_url: str | None = None
    campaign_url: str | None = None
    facebook_url: str | None = None
    telegram_url: str | None = None
    verified_by_admin: VerifierSummary | None = None


class UserCardResponse(BaseModel):
    """A card plus the neighbours needed to render Next/Previous controls."""

    user: PublicUserResponse
    next_user_url_id: int | None
    previous_user_url_id: int | None


class CardListResponse(OffsetPage):
    users: list[PublicUserResponse]


class ViewCountResponse(BaseModel):
    success: bool
    counted: bool
    view_count: int | None = None


class ViewCountRequest(BaseModel):
    session_id: str | None = Field(default=None, min_length=8, max_length=128)


class AdminProfileResponse(BaseModel):
    id: str
    url_id: int
    full_name: str
    role: str
    verification_count: int
    description: str | None
    phone_number: str | None
    linkedin_url: str | None
    campaign_url: str | None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Profile (own account)
# ---------------------------------------------------------------------------


class ProfileResponse(BaseModel):
    id: str
    url_id: int
    email: str
    full_name: str
    phone_number: str
    role: str
    description: str
    status: str | None
    verified_at: datetime | None
    verified_by: str | None
    view_count: int
    linkedin_url: str | None
    campaign_url: str | None
    facebook_url: str | None
    telegram_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    """Editable profile content. Role and status are not settable here."""

    full_name: str | None = Field(default=None, min_length=2, max_length=255)
    phone_number: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, min_length=10, max_length=2000)
    linkedin_url: HttpUrl | None = None
    campaign_url: HttpUrl | None = None
    facebook_url: HttpUrl | None = None
    telegram_url: HttpUrl | None = None

    model_config = {"extra": "forbid"}

    @field_validator("full_name", "phone_number", "description", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


class AdminUserResponse(BaseModel):
    id: str
    url_id: int
    email: str
    full_name: str
    description: str
    phone_number: str
    status: str | None
    role: str
    verified_by: str | None
    verified_at: datetime | None
    view_count: int
    created_at: datetime
    verified_by_admin: VerifierSummary | None = None


class AdminUserListData(OffsetPage):
    users: list[AdminUserResponse]


class StatusUpdateRequest(BaseModel):
    action: StatusAction
    remarks: str | None = Field(default=None, max_length=1000)


class StatusUpdateUser(BaseModel):
    id: str
    url_id: int
    status: str | None
    verified_at: datetime | None
    verified_by: str | None

    model_config = {"from_attributes": True}


class StatusUpdateResult(BaseModel):
    user: StatusUpdateUser
    action: StatusAction
    remarks: str | None = None


class RoleUpgradeRequest(BaseModel):
    new_role: Literal["admin", "help_seeker"]
    remarks: str | None = Field(default=None, max_length=1000)


class RoleUpgradeUser(BaseModel):
    id: str
    email: str
    full_name: str
    role: str
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class RoleUpgradeResult(BaseModel):
    user: RoleUpgradeUser
    action: Literal["upgrade_to_admin", "downgrade_to_help_seeker"]
    remarks: str | None = None
