"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the hosted backend is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts the process,
      readiness removes it from the load balancer
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from seminary_site.api.dependencies import get_backend
from seminary_site.infrastructure.backend_client import HostedBackendClient

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "seminary-site-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(backend: HostedBackendClient = Depends(get_backend)):
    """Readiness probe — includes hosted backend connectivity."""
    if not await backend.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "backend_unavailable",
            },
        )
    return {"status": "ready", "checks": {"backend": "healthy"}}
