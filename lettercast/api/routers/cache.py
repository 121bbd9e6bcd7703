"""
LLM response cache maintenance.

Routes: POST /llm-cache/purge

Dependencies: lettercast.application.adapters.response_cache
System role: Cache housekeeping HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from lettercast.api.deps.dependencies import get_response_cache
from lettercast.application.adapters.response_cache import ResponseCache
from lettercast.models.common import PurgeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/llm-cache", tags=["cache"])


@router.post("/purge", response_model=PurgeResponse)
async def purge_expired(cache: ResponseCache = Depends(get_response_cache)) -> PurgeResponse:
    """Delete expired response cache entries."""
    purged = await cache.purge_expired()
    logger.info("Purged expired cache entries", extra={"purged": purged})
    return PurgeResponse(purged=purged)
