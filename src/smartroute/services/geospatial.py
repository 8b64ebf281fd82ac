"""Geospatial helper functions."""

from __future__ import annotations

import math
import random
from typing import Sequence

from ..models.domain import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def polyline_length_km(points: Sequence[Coordinates]) -> float:
    return sum(
        haversine_km(start.lat, start.lng, end.lat, end.lng)
        for start, end in zip(points, points[1:])
    )


def jittered_point(
    reference: Coordinates,
    jitter_degrees: float,
    rng: random.Random | None = None,
) -> Coordinates:
    """Return a point offset from ``reference`` by up to ``jitter_degrees`` on each axis."""

    source = rng or random
    return Coordinates(
        lat=reference.lat + source.uniform(0.0, jitter_degrees),
        lng=reference.lng + source.uniform(0.0, jitter_degrees),
    )
