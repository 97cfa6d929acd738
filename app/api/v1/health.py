"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.schemas import HealthResponse
from app.storage.export_store import conversion_registry

router = APIRouter()


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Annotated[Settings, Depends(get_settings)]):
    """Health check endpoint with conversion store status.

    Returns:
        HealthResponse: Service health status with component details
    """
    active = len(conversion_registry)
    components = {
        "conversion_store": {
            "status": "healthy",
            "active_conversions": active,
            "capacity": conversion_registry.max_sessions,
        },
    }

    endpoints = {
        "conversion": [
            "POST /api/v1/conversions - Upload a BCut project JSON file",
            "GET /api/v1/conversions/{conversion_id} - Get subtitle preview",
            "GET /api/v1/conversions/{conversion_id}/exports/{format} - Download srt/ass/txt/csv",
            "DELETE /api/v1/conversions/{conversion_id} - Release a conversion",
            "POST /api/v1/convert - Convert a parsed project in one request",
        ],
        "health": [
            "GET /api/v1/health - Service health check with component status",
        ],
    }

    return HealthResponse(
        service=settings.app_name,
        status="running",
        version=settings.app_version,
        authentication="enabled" if settings.api_key else "disabled",
        components=components,
        endpoints=endpoints,
    )
