"""Audit logging for privileged actions."""

from fastapi import Request

from app.auth.dependencies import CurrentUser
from app.utils.logging import get_logger

logger = get_logger("audit")


def audit_logged(action: str):
    """Dependency factory that logs privileged actions.

    Usage::

        @router.post("/users/{user_id}/status", dependencies=[Depends(audit_logged("update_status"))])
    """

    async def _log(request: Request, current_user: CurrentUser) -> None:
        try:
            client_ip = request.client.host if request.client else "unknown"
            request_id = getattr(request.state, "request_id", "n/a")
            target = request.path_params.get("user_id", "-")
            logger.info(
                "AUDIT action=%s user=%s email=%s target=%s ip=%s request_id=%s path=%s",
                action,
                current_user.id,
                current_user.email,
                target,
                client_ip,
                request_id,
                request.url.path,
            )
        except Exception:
            logger.warning("Failed to write audit log for action=%s", action, exc_info=True)

    return _log
