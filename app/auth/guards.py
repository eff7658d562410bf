"""Explicit role guards applied at the start of each privileged operation."""

from collections.abc import Iterable

from app.exceptions import ForbiddenError, UnauthorizedError
from app.models.user import User


def require_role(actor: User | None, allowed: Iterable[str], message: str | None = None) -> User:
    """Return ``actor`` if its stored role is in ``allowed``.

    ``actor`` must be freshly loaded from the database; token claims are
    never consulted for authorization.
    """
    if actor is None:
        raise UnauthorizedError("User not found")
    allowed_roles = {str(role) for role in allowed}
    if actor.role not in allowed_roles:
        raise ForbiddenError(message or "Insufficient permissions")
    return actor
