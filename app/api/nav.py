from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.core.contracts import RouteRequest, RouteResponse
from app.services.routing import Routing

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_routing_service() -> Routing:
    raise RuntimeError("Routing must be provided by app dependency override")


@router.post("/get-route", response_model=RouteResponse)
async def get_route(
    req: RouteRequest,
    routing: Routing = Depends(get_routing_service),
) -> RouteResponse:
    logger.info(
        "get_route: start=%s destination=%s vehicleType=%s",
        req.start.as_param(), req.destination_param(), req.vehicleType,
    )
    return await routing.get_route(req)
