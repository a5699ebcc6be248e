"""Health check endpoints."""

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

from prepository.models.database import ping

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check application health status.

    Returns:
        Health status including database connectivity.
    """
    db_status = "healthy"
    try:
        await ping()
    except RuntimeError:
        db_status = "not initialized"
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        db_status = "error"

    return HealthResponse(
        status="ok" if db_status == "healthy" else "degraded",
        version=request.app.state.settings.app_version,
        database=db_status,
    )
