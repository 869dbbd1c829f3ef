from __future__ import annotations

from fastapi import APIRouter

from app.core.contracts import PathPoint, PolylineDecodeRequest, PolylineDecodeResponse
from app.core.errors import bad_request
from app.core.polyline import PolylineDecodeError, decode_polyline

router = APIRouter(prefix="/api")


@router.post("/decode-polyline", response_model=PolylineDecodeResponse)
def decode(req: PolylineDecodeRequest) -> PolylineDecodeResponse:
    try:
        pts = decode_polyline(req.polyline, precision=req.precision)
    except PolylineDecodeError as e:
        bad_request("bad_polyline", str(e))
    return PolylineDecodeResponse(
        points=[PathPoint(lat=p.lat, lng=p.lng) for p in pts],
        count=len(pts),
    )
