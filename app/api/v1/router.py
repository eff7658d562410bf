"""API v1 router aggregating all sub-routers."""

from fastapi import APIRouter

from app.api.v1 import admin, auth, profile, public

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(public.router, prefix="/public", tags=["Public"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
