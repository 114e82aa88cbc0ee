"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; backend ping for readiness.
"""

from fastapi import APIRouter, HTTPException, status

from app.config import get_settings
from app.core.dependencies import Operations

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(ops: Operations):
    """Readiness: can Elasticsearch be reached?"""
    if not await ops.ping():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Elasticsearch unreachable")
    return {"status": "ready"}
