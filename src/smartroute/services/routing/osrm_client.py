"""HTTP client for the OSRM route service, with mirror fallback."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

import httpx

from ... import messages
from ...config import settings
from ...errors import RoadRoutingError
from ...models.domain import Coordinates, Maneuver, NavigationStep
from .instructions import translate_maneuver
from .models import RoadGeometry

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], Awaitable[None]]


class OSRMClient:
    def __init__(
        self,
        mirrors: Sequence[str] | None = None,
        profile: str | None = None,
        geometries: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.mirrors = tuple(url.rstrip("/") for url in (mirrors if mirrors is not None else settings.osrm_mirrors))
        if not self.mirrors:
            raise ValueError("No OSRM mirror is configured.")
        self.profile = profile or settings.osrm_profile
        self.geometries = geometries or settings.osrm_geometries
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self._transport = transport
        self._sleep = sleep

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    async def route(self, base_url: str, coordinates: Sequence[Coordinates]) -> dict:
        """Query one mirror's route endpoint; raises ``RoadRoutingError`` once retries run out."""
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required for OSRM route.")

        # OSRM expects "lon,lat;lon,lat;..."
        coordinate_str = ";".join(f"{point.lng},{point.lat}" for point in coordinates)
        params = {
            "overview": "full",
            "geometries": self.geometries,
            "steps": "true",
        }
        url = f"{base_url}/route/v1/{self.profile}/{coordinate_str}"

        async with self._get_client() as client:
            attempt = 0
            while True:
                try:
                    response = await client.get(url, params=params)
                    response.raise_for_status()
                    data = response.json()
                    if not isinstance(data, dict):
                        raise RoadRoutingError(f"Unexpected OSRM response shape: {type(data).__name__}")
                    if data.get("code") != "Ok" or not data.get("routes"):
                        error_msg = data.get("message") or data.get("code") or "no route returned"
                        raise RoadRoutingError(f"OSRM route request failed: {error_msg}")
                    return data
                except (httpx.HTTPError, RoadRoutingError, ValueError) as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        if isinstance(exc, RoadRoutingError):
                            raise
                        raise RoadRoutingError(f"OSRM mirror {base_url} failed: {exc}") from exc
                    wait_time = self.backoff_seconds * attempt
                    logger.debug(
                        f"OSRM route error from {base_url}, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt}/{self.max_retries}): {exc}"
                    )
                    await self._sleep(wait_time)

    async def fetch_route_data(self, coordinates: Sequence[Coordinates]) -> RoadGeometry:
        """Road geometry and steps from the first mirror that answers; empty if none does."""
        for base_url in self.mirrors:
            try:
                data = await self.route(base_url, coordinates)
                geometry = self._parse_route(data)
            except RoadRoutingError as exc:
                logger.warning(f"Failed to fetch route from {base_url}: {exc}")
                continue
            geometry.source = base_url
            return geometry

        logger.warning("All OSRM mirrors failed, falling back to straight lines.")
        return RoadGeometry()

    def _parse_route(self, data: dict) -> RoadGeometry:
        """Geometry and steps of the first route; a malformed route raises ``RoadRoutingError``."""
        try:
            route = data["routes"][0]
            return RoadGeometry(
                path=self._extract_geometry(route.get("geometry")),
                steps=flatten_steps(route.get("legs") or []),
            )
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            raise RoadRoutingError(f"Malformed OSRM route: {exc!r}") from exc

    def _extract_geometry(self, geometry) -> list[Coordinates]:
        if geometry is None:
            return []
        if isinstance(geometry, str):
            return [Coordinates(lat=lat, lng=lon) for lat, lon in decode_polyline(geometry)]
        # GeoJSON LineString: [lon, lat] pairs
        return [Coordinates(lat=float(point[1]), lng=float(point[0])) for point in geometry["coordinates"]]


def flatten_steps(legs: Sequence[dict]) -> list[NavigationStep]:
    """Concatenate the steps of every leg, marking each intermediate arrival."""
    steps: list[NavigationStep] = []
    for leg_index, leg in enumerate(legs):
        for raw in leg.get("steps") or []:
            maneuver = raw.get("maneuver") or {}
            maneuver_type = maneuver.get("type", "")
            modifier = maneuver.get("modifier")
            steps.append(
                NavigationStep(
                    instruction=translate_maneuver(maneuver_type, modifier, raw.get("name")),
                    distance_meters=float(raw.get("distance") or 0.0),
                    duration_seconds=float(raw.get("duration") or 0.0),
                    maneuver=Maneuver(type=maneuver_type, modifier=modifier),
                )
            )
        if leg_index < len(legs) - 1:
            steps.append(
                NavigationStep(
                    instruction=messages.ARRIVED_AT_STOP.format(number=leg_index + 1),
                    distance_meters=0.0,
                    duration_seconds=0.0,
                    maneuver=Maneuver(type="arrive"),
                )
            )
    return steps


def decode_polyline(polyline: str) -> list[tuple[float, float]]:
    """Decode Google polyline string to list of (lat, lon) coordinates.

    OSRM uses Google's polyline encoding (precision 5) when ``geometries=polyline``.
    """
    coordinates = []
    index = 0
    lat = 0
    lon = 0

    while index < len(polyline):
        shift = 0
        result = 0
        while True:
            b = ord(polyline[index]) - 63
            index += 1
            result |= (b & 0x1f) << shift
            shift += 5
            if b < 0x20:
                break
        dlat = ~(result >> 1) if (result & 1) else (result >> 1)
        lat += dlat

        shift = 0
        result = 0
        while True:
            b = ord(polyline[index]) - 63
            index += 1
            result |= (b & 0x1f) << shift
            shift += 5
            if b < 0x20:
                break
        dlon = ~(result >> 1) if (result & 1) else (result >> 1)
        lon += dlon

        coordinates.append((lat / 1e5, lon / 1e5))

    return coordinates


async def check_health(mirrors: Sequence[str] | None = None) -> dict[str, bool]:
    """Probe each mirror with a two-point route request (central Bangkok)."""
    probe = [Coordinates(lat=13.7563, lng=100.5018), Coordinates(lat=13.7466, lng=100.5393)]
    client = OSRMClient(mirrors=mirrors, max_retries=0)
    results: dict[str, bool] = {}
    for base_url in client.mirrors:
        try:
            await client.route(base_url, probe)
            results[base_url] = True
        except RoadRoutingError:
            results[base_url] = False
    return results
