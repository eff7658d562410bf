"""Bearer-token authentication dependencies.

The token establishes identity only. Authorization decisions re-read the
caller's role from the database inside the service layer.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from app.auth.security import decode_token
from app.schemas.auth import TokenUser

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(token: str) -> TokenUser:
    try:
        payload = decode_token(token)
    except JWTError as err:
        raise _unauthorized("Invalid or expired token") from err

    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token: missing subject")

    return TokenUser(id=user_id, email=payload.get("email", ""))


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenUser:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return _user_from_token(credentials.credentials)


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenUser | None:
    """Identity if a valid bearer token was sent; anonymous otherwise.

    An expired or malformed token is treated as no token at all, so a
    signed-in user whose access token has lapsed browses (and is counted)
    as an anonymous visitor until the client refreshes.
    """
    if credentials is None:
        return None
    try:
        return _user_from_token(credentials.credentials)
    except HTTPException:
        return None


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
