"""Main API router; mounts every sub-router under /api/v1."""

from fastapi import APIRouter

from storeseed.api.admin import router as admin_router
from storeseed.api.health import router as health_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health_router)
api_router.include_router(admin_router)
