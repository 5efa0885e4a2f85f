"""Health check endpoints.

These endpoints are used by container orchestrators (Kubernetes, Container Apps)
to determine application health, readiness, and liveness.

- /health: General health check (no auth required)
- /health/ready: Readiness probe (can accept traffic?)
- /health/live: Liveness probe (is the app running?)
"""

from fastapi import APIRouter

from .. import __version__
from ..tiers import DEPLOYMENT_TIER_CONFIGS

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health")
async def health_check():
    """Health check endpoint (no authentication required).

    Returns:
        Simple status indicating the application is healthy
    """
    return {
        "status": "healthy",
        "service": "CIDR Plan API",
        "version": __version__,
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness check for Kubernetes/Container Apps.

    The service has no external dependencies; it is ready once the static
    tier table is loaded.
    """
    return {"status": "ready", "tiers": len(DEPLOYMENT_TIER_CONFIGS)}


@router.get("/health/live")
async def liveness_check():
    """Liveness check for Kubernetes/Container Apps.

    If this fails, the orchestrator will restart the container.
    """
    return {"status": "alive"}
