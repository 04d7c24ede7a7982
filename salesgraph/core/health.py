"""Health check endpoints."""

from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from salesgraph.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["ok", "degraded", "unhealthy"]
    database: Literal["connected", "disconnected"] | None = None
    cache: Literal["connected", "disconnected"] | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe."""
    logger.debug("health.check_started")
    return HealthResponse(status="ok")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(request: Request) -> HealthResponse:
    """Readiness probe pinging MongoDB and Redis.

    The cache is optional for serving queries, so a Redis outage only
    degrades the service while a MongoDB outage makes it unhealthy.
    """
    logger.debug("health.readiness_check_started")

    database_ok = True
    try:
        await request.app.state.mongo_db.command("ping")
    except PyMongoError as e:
        database_ok = False
        logger.error(
            "health.database_disconnected",
            error=str(e),
            error_type=type(e).__name__,
        )

    cache_ok = await request.app.state.cache_store.ping()
    if not cache_ok:
        logger.warning("health.cache_disconnected")

    if not database_ok:
        status: Literal["ok", "degraded", "unhealthy"] = "unhealthy"
    elif not cache_ok:
        status = "degraded"
    else:
        status = "ok"

    return HealthResponse(
        status=status,
        database="connected" if database_ok else "disconnected",
        cache="connected" if cache_ok else "disconnected",
    )
