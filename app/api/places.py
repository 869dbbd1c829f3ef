from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.core.contracts import FindNearestRequest, FindNearestResponse
from app.services.places import Places

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_places_service() -> Places:
    raise RuntimeError("Places must be provided by app dependency override")


@router.post("/find-nearest", response_model=FindNearestResponse)
async def find_nearest(
    req: FindNearestRequest,
    places: Places = Depends(get_places_service),
) -> FindNearestResponse:
    logger.info("find_nearest: pos=%s type=%s", req.pos.as_param(), req.type)
    return await places.nearest(req.pos, req.type)
