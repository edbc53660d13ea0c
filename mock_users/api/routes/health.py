"""Health & Readiness: liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the user store is missing or its file is not writable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness gates traffic
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from mock_users import __version__
import mock_users.infrastructure.user_store as store_module
from mock_users.schemas.problem import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK, response_model=HealthResponse)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "mock-users-api",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness check: includes durable file writability."""
    store = store_module.user_store
    if store is None or not store.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "store_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"store": "healthy", "users": len(store)},
    }
