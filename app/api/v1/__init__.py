"""API v1 package initialization."""

from fastapi import APIRouter

from app.api.v1 import conversions, health

# Create v1 router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(conversions.router, tags=["conversion"])

__all__ = ["api_router"]
