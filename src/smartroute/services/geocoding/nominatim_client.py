"""HTTP client for the Nominatim address search service."""

from __future__ import annotations

import logging

import httpx

from ...config import settings
from ...errors import GeocodingError
from ...models.domain import Coordinates

logger = logging.getLogger(__name__)


class NominatimClient:
    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def search(self, address: str, limit: int = 1) -> list[Coordinates]:
        """Return up to ``limit`` matches for ``address``; an empty list means unresolved."""
        params = {"format": "json", "q": address, "limit": str(limit)}
        url = f"{self.base_url}/search"

        async with self._get_client() as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                raise GeocodingError(
                    f"Geocoding failed with HTTP {exc.response.status_code} for '{address}'"
                ) from exc
            except httpx.HTTPError as exc:
                raise GeocodingError(f"Failed to reach geocoding service: {exc}") from exc
            except ValueError as exc:
                raise GeocodingError("Geocoding service returned a non-JSON response.") from exc

        if not isinstance(data, list):
            raise GeocodingError("Unexpected geocoding response shape.")

        matches: list[Coordinates] = []
        for row in data[:limit]:
            try:
                matches.append(Coordinates(lat=float(row["lat"]), lng=float(row["lon"])))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(f"Skipping malformed geocoding match for '{address}': {exc}")
        return matches
