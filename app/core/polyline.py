from __future__ import annotations

from typing import Iterable, List, NamedTuple, Tuple

# Encoded characters live in '?' (63) .. '~' (126).
_MIN_CHAR = 63
_MAX_CHAR = 126


class Point(NamedTuple):
    lat: float
    lng: float


class PolylineDecodeError(ValueError):
    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at offset {position})")
        self.position = position


def _to_int32(v: int) -> int:
    v &= 0xFFFFFFFF
    return v - 0x100000000 if v & 0x80000000 else v


def _encode_value(v: int) -> str:
    v = ~(v << 1) if v < 0 else (v << 1)
    chunks = []
    while v >= 0x20:
        chunks.append(chr((0x20 | (v & 0x1F)) + 63))
        v >>= 5
    chunks.append(chr(v + 63))
    return "".join(chunks)


def encode_polyline(coords: Iterable[Tuple[float, float]], precision: int = 5) -> str:
    """
    Encode [(lat, lng), ...] into a Google encoded polyline.
    """
    factor = 10 ** precision
    last_lat = 0
    last_lng = 0
    out = []
    for lat, lng in coords:
        ilat = int(round(lat * factor))
        ilng = int(round(lng * factor))
        out.append(_encode_value(ilat - last_lat))
        out.append(_encode_value(ilng - last_lng))
        last_lat = ilat
        last_lng = ilng
    return "".join(out)


def _decode_value(s: str, idx: int) -> tuple[int, int]:
    n = len(s)
    result = 0
    shift = 0
    while True:
        if idx >= n:
            raise PolylineDecodeError("truncated polyline: continuation bit set at end of input", idx)
        code = ord(s[idx])
        if code < _MIN_CHAR or code > _MAX_CHAR:
            raise PolylineDecodeError(f"invalid polyline character {s[idx]!r}", idx)
        b = code - 63
        idx += 1
        # Bits at or above 32 are discarded by the int32 wrap below.
        if shift < 32:
            result = (result | ((b & 0x1F) << shift)) & 0xFFFFFFFF
        shift += 5
        if b < 0x20:
            break
    result = _to_int32(result)
    d = ~(result >> 1) if (result & 1) else (result >> 1)
    return d, idx


def decode_polyline(poly: str, precision: int = 5) -> List[Point]:
    """
    Decode a Google encoded polyline into [Point(lat, lng), ...].

    Raises PolylineDecodeError on truncated input or characters outside the
    encoding alphabet.
    """
    factor = 10 ** precision
    idx = 0
    lat = 0
    lng = 0
    points: List[Point] = []
    n = len(poly)
    while idx < n:
        dlat, idx = _decode_value(poly, idx)
        if idx >= n:
            raise PolylineDecodeError("truncated polyline: latitude without longitude", idx)
        dlng, idx = _decode_value(poly, idx)
        lat += dlat
        lng += dlng
        points.append(Point(lat / factor, lng / factor))
    return points
