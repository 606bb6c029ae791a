# 📄 File: plantdaddy/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick "are you alive?" check for the server and its database, used by load
# balancers and uptime monitors.
# 🧪 Purpose (Technical Summary):
# Liveness and readiness endpoints. Readiness runs the database health check and
# answers 503 when the database is unreachable.
# 🔗 Dependencies:
# FastAPI, plantdaddy.shared.infrastructure.database (database_health_check), settings
# 🔄 Connected Modules / Calls From:
# plantdaddy.api.v1.router, monitoring systems

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from plantdaddy.shared.config import get_settings
from plantdaddy.shared.infrastructure.database import database_health_check

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/health", summary="Basic Health Check")
async def health_check() -> JSONResponse:
    """Liveness check; does not touch the database."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "plantdaddy-api",
            "version": get_settings().APP_VERSION,
        },
    )


@health_router.get("/health/ready", summary="Readiness Check")
async def readiness_check() -> JSONResponse:
    db_health = await database_health_check()
    healthy = db_health.get("status") == "healthy"
    if not healthy:
        logger.warning(f"Readiness check failed: {db_health}")
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ready" if healthy else "not_ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": {"database": db_health},
        },
    )
