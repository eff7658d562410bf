"""Declarative filters for the admin user listing."""

from __future__ import annotations

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.user import User, UserRole, VerificationStatus


class UserFilter(Filter):
    """FilterSet for admin user list queries.

    Supported query params::

        ?status=pending
        ?role=help_seeker
        ?search=amira
        ?order_by=-created_at
    """

    status: Optional[VerificationStatus] = None
    role: Optional[UserRole] = None
    search: Optional[str] = None
    order_by: Optional[list[str]] = ["-created_at"]

    class Constants(Filter.Constants):
        model = User
        search_model_fields = ["full_name", "email", "phone_number"]
