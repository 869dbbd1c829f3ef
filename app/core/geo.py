from __future__ import annotations

import math
from typing import List, Sequence, Tuple


def haversine_m(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Distance in metres between two (lat, lng) points."""
    R = 6_371_000.0
    lat1, lon1 = math.radians(a[0]), math.radians(a[1])
    lat2, lon2 = math.radians(b[0]), math.radians(b[1])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    x = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2.0 * R * math.asin(min(1.0, math.sqrt(x)))


def _thin(samples: List[Tuple[float, float]], max_samples: int) -> List[Tuple[float, float]]:
    if max_samples <= 0 or len(samples) <= max_samples:
        return samples
    if max_samples == 1:
        return [samples[0]]
    step = (len(samples) - 1) / (max_samples - 1)
    return [samples[int(round(i * step))] for i in range(max_samples)]


def sample_points(
    points: Sequence[Tuple[float, float]],
    interval_km: float,
    max_samples: int = 0,
) -> List[Tuple[float, float]]:
    """
    Walk a decoded route and emit (lat, lng) every `interval_km` kilometres
    of travelled distance.  First and last point are always included.

    interval_km <= 0 keeps every decoded point.  When more than
    `max_samples` points result they are thinned evenly, endpoints kept.
    """
    if not points:
        return []

    pts = [(float(p[0]), float(p[1])) for p in points]

    if interval_km <= 0 or len(pts) == 1:
        return _thin(pts, max_samples)

    interval_m = interval_km * 1000.0
    samples: List[Tuple[float, float]] = [pts[0]]

    dist_acc = 0.0
    next_mark = interval_m
    for i in range(1, len(pts)):
        seg = haversine_m(pts[i - 1], pts[i])
        if seg != seg:  # NaN
            continue
        dist_acc += seg
        if dist_acc >= next_mark:
            samples.append(pts[i])
            # Long segments can cross several marks; emit the vertex once.
            while next_mark <= dist_acc:
                next_mark += interval_m

    if samples[-1] != pts[-1] or len(samples) == 1:
        samples.append(pts[-1])

    return _thin(samples, max_samples)
