"""
Health check endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

from flightbook.core.database import get_session
from flightbook.core.redis import get_redis
from flightbook.config import settings

router = APIRouter()


@router.get("/live")
async def liveness() -> Any:
    """
    Kubernetes liveness probe
    """
    return {"status": "alive", "service": "flightbook-api"}


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),
    redis_client=Depends(get_redis)
) -> Any:
    """
    Kubernetes readiness probe - checks all dependencies
    """
    checks = {
        "database": False,
        "redis": False,
        "api": True
    }

    # A failed probe reports not ready instead of erroring
    try:
        result = await db.execute(text("SELECT 1"))
        checks["database"] = result.scalar() == 1
    except Exception:
        pass

    try:
        await redis_client.ping()
        checks["redis"] = True
    except Exception:
        pass

    all_healthy = all(checks.values())

    return {
        "status": "ready" if all_healthy else "not ready",
        "checks": checks,
        "version": settings.APP_VERSION
    }
