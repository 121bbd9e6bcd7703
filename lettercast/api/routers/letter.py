"""
Letter chunk cache endpoint.

Routes: GET /cache-letter-chunks

Dependencies: lettercast.application.services.letter_chunk_service
System role: Narrative letter cache warm-up HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from lettercast.api.deps.dependencies import get_letter_chunk_service
from lettercast.application.services.letter_chunk_service import LetterChunkService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["letter"])


@router.get("/cache-letter-chunks")
async def cache_letter_chunks(
    service: LetterChunkService = Depends(get_letter_chunk_service),
) -> JSONResponse:
    """
    Copy the origin letter into the key-value store.

    Returns 404 when the origin yields no chunks and 500 when the store
    cannot be used.
    """
    try:
        result = await service.warm_cache()
    except Exception as e:
        logger.exception("Error caching letter chunks", extra={"error_type": type(e).__name__})
        return JSONResponse(
            {"success": False, "message": str(e) or "Failed to cache letter chunks"},
            status_code=500,
        )

    status_code = 200 if result.success else 404
    return JSONResponse(result.model_dump(by_alias=True, exclude_none=True), status_code=status_code)
