"""Authentication and registration endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from app.auth.dependencies import CurrentUser
from app.auth.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from app.config import get_settings
from app.dependencies import UserRepo
from app.models.user import User, UserRole, VerificationStatus
from app.schemas.auth import (
    MeResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from app.schemas.common import ApiResponse
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _issue_tokens(user) -> TokenResponse:
    settings = get_settings()
    return TokenResponse(
        access_token=create_access_token(user.id, email=user.email),
        refresh_token=create_refresh_token(user.id, email=user.email),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


@router.post(
    "/register",
    response_model=ApiResponse[RegisterResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(body: RegisterRequest, repo: UserRepo) -> ApiResponse[RegisterResponse]:
    """Register a new help seeker. The profile starts out pending review."""
    if await repo.get_by_email(body.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists",
        )

    data = body.model_dump(mode="json", exclude={"password"})
    user = await repo.create(
        User(
            **data,
            hashed_password=hash_password(body.password),
            role=UserRole.help_seeker.value,
            status=VerificationStatus.pending.value,
            view_count=0,
        )
    )
    logger.info("Registered help seeker %s (url_id=%s)", user.id, user.url_id)
    return ApiResponse.ok(RegisterResponse(user_id=user.id, url_id=user.url_id))


@router.post("/login", response_model=TokenResponse)
async def login(
    repo: UserRepo,
    form_data: OAuth2PasswordRequestForm = Depends(),  # pyright: ignore[reportCallInDefaultInitializer]
) -> TokenResponse:
    """Authenticate with email (as ``username``) and password."""
    user = await repo.get_by_email(form_data.username)

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(body: RefreshRequest, repo: UserRepo) -> TokenResponse:
    """Exchange a refresh token for a new token pair."""
    try:
        payload = decode_token(body.refresh_token)
    except Exception as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        ) from err

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    user_id: str | None = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing subject",
        )

    user = await repo.get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return _issue_tokens(user)


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(current_user: CurrentUser, repo: UserRepo) -> MeResponse:
    """Return the caller's identity with the role as currently stored."""
    user = await repo.get_by_id(current_user.id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return MeResponse.model_validate(user)
