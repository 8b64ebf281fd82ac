import asyncio
import random

import httpx
import pytest

from smartroute.errors import GeocodingError
from smartroute.models.domain import Coordinates
from smartroute.services.geocoding.nominatim_client import NominatimClient
from smartroute.services.geospatial import haversine_km, jittered_point, polyline_length_km


def _client(handler) -> NominatimClient:
    return NominatimClient(
        base_url="https://nominatim.test",
        user_agent="smartroute-tests",
        transport=httpx.MockTransport(handler),
    )


def test_search_returns_first_match():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["agent"] = request.headers["user-agent"]
        return httpx.Response(200, json=[{"lat": "13.7466", "lon": "100.5393", "display_name": "Siam"}])

    matches = asyncio.run(_client(handler).search("Siam Paragon"))

    assert matches == [Coordinates(lat=13.7466, lng=100.5393)]
    assert seen["params"] == {"format": "json", "q": "Siam Paragon", "limit": "1"}
    assert seen["agent"] == "smartroute-tests"


def test_search_without_match_is_empty():
    assert asyncio.run(_client(lambda request: httpx.Response(200, json=[])).search("nowhere")) == []


def test_malformed_rows_are_skipped():
    client = _client(lambda request: httpx.Response(200, json=[{"lat": "x"}, {"lat": "13.7", "lon": "100.5"}]))
    assert asyncio.run(client.search("Silom", limit=2)) == [Coordinates(lat=13.7, lng=100.5)]


def test_http_error_becomes_geocoding_error():
    client = _client(lambda request: httpx.Response(503))
    with pytest.raises(GeocodingError, match="503"):
        asyncio.run(client.search("Silom"))


def test_transport_error_becomes_geocoding_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(GeocodingError):
        asyncio.run(_client(handler).search("Silom"))


def test_jittered_point_stays_within_box():
    reference = Coordinates(lat=13.7563, lng=100.5018)
    rng = random.Random(3)

    for _ in range(50):
        point = jittered_point(reference, 0.01, rng)
        assert reference.lat <= point.lat <= reference.lat + 0.01
        assert reference.lng <= point.lng <= reference.lng + 0.01


def test_polyline_length_sums_legs():
    points = [Coordinates(13.75, 100.50), Coordinates(13.76, 100.50), Coordinates(13.77, 100.50)]

    assert polyline_length_km(points) == pytest.approx(2 * haversine_km(13.75, 100.50, 13.76, 100.50))
    assert polyline_length_km(points[:1]) == 0
