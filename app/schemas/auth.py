"""Pydantic schemas for authentication and registration."""

from pydantic import BaseModel, EmailStr, Field, HttpUrl


class RegisterRequest(BaseModel):
    """Help seeker self-registration."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    full_name: str = Field(min_length=2, max_length=255)
    phone_number: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=10, max_length=2000)
    linkedin_url: HttpUrl | None = None
    campaign_url: HttpUrl | None = None


class RegisterResponse(BaseModel):
    user_id: str
    url_id: int


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenUser(BaseModel):
    """Identity extracted from a validated access token (no role claim)."""

    id: str
    email: str = ""


class MeResponse(BaseModel):
    id: str
    url_id: int
    email: str
    full_name: str
    role: str
    status: str | None

    model_config = {"from_attributes": True}
