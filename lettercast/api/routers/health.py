"""
Health check API endpoints.

Routes: GET /health

Dependencies: lettercast.api.deps
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from lettercast.api.deps.dependencies import ServiceCache, get_service_cache
from lettercast.models.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

PROBE_KEY = "health:probe"


async def _probe_kv(cache: ServiceCache) -> str:
    try:
        await cache.kv_store.put(PROBE_KEY, "ok", ttl_seconds=60)
        value = await cache.kv_store.get(PROBE_KEY)
    except Exception as e:
        logger.error(
            "Key-value health probe failed",
            extra={"error_type": type(e).__name__, "error_msg": str(e)},
        )
        return "unhealthy"
    return "healthy" if value == "ok" else "unhealthy"


@router.get("", response_model=HealthResponse)
async def health_check(cache: ServiceCache = Depends(get_service_cache)) -> HealthResponse:
    """Report store reachability and configuration state."""
    checks = {
        "kv": await _probe_kv(cache),
        "upstream": "configured" if cache.settings.upstream.is_configured else "not_configured",
        "audit": "enabled" if cache.settings.storage.audit_enabled else "disabled",
    }
    status = "healthy" if checks["kv"] == "healthy" and checks["upstream"] == "configured" else "degraded"
    return HealthResponse(status=status, checks=checks)
