import asyncio

import httpx
import pytest

from smartroute.models.domain import Coordinates, Maneuver
from smartroute.services.routing.instructions import navigation_icon, translate_maneuver
from smartroute.services.routing.osrm_client import OSRMClient, decode_polyline, flatten_steps

PRIMARY = "https://primary.test"
BACKUP = "https://backup.test"

WAYPOINTS = [
    Coordinates(lat=13.7563, lng=100.5018),
    Coordinates(lat=13.7466, lng=100.5393),
    Coordinates(lat=13.7400, lng=100.5600),
]


def _step(maneuver_type: str, modifier: str | None = None, name: str = "", distance: float = 100.0) -> dict:
    maneuver = {"type": maneuver_type}
    if modifier:
        maneuver["modifier"] = modifier
    return {"name": name, "distance": distance, "duration": distance / 10, "maneuver": maneuver}


ROUTE_OK = {
    "code": "Ok",
    "routes": [
        {
            "geometry": {
                "type": "LineString",
                "coordinates": [[100.5018, 13.7563], [100.52, 13.75], [100.5393, 13.7466], [100.56, 13.74]],
            },
            "legs": [
                {"steps": [_step("depart", name="Rama IV"), _step("turn", "left", "Sukhumvit"), _step("arrive")]},
                {"steps": [_step("depart"), _step("turn", "slight right", "Asok"), _step("arrive")]},
            ],
        }
    ],
}


async def _no_sleep(_seconds: float) -> None:
    return None


def _client(handler, **kwargs) -> OSRMClient:
    return OSRMClient(
        mirrors=[PRIMARY, BACKUP],
        profile="driving",
        geometries=kwargs.pop("geometries", "geojson"),
        max_retries=kwargs.pop("max_retries", 0),
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
        sleep=_no_sleep,
        **kwargs,
    )


def test_falls_back_to_backup_mirror():
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.host)
        if request.url.host == "primary.test":
            return httpx.Response(503)
        assert request.url.params["steps"] == "true"
        assert "100.5018,13.7563;100.5393,13.7466" in request.url.path
        return httpx.Response(200, json=ROUTE_OK)

    geometry = asyncio.run(_client(handler).fetch_route_data(WAYPOINTS))

    assert calls == ["primary.test", "backup.test"]
    assert geometry.source == BACKUP
    assert geometry.path[0] == Coordinates(lat=13.7563, lng=100.5018)
    assert len(geometry.path) == 4


def test_non_ok_code_moves_to_next_mirror():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "primary.test":
            return httpx.Response(200, json={"code": "NoRoute", "message": "Impossible route"})
        return httpx.Response(200, json=ROUTE_OK)

    geometry = asyncio.run(_client(handler).fetch_route_data(WAYPOINTS))
    assert geometry.source == BACKUP


def test_all_mirrors_failing_returns_empty_geometry():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "primary.test":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={"code": "Ok", "routes": []})

    geometry = asyncio.run(_client(handler).fetch_route_data(WAYPOINTS))

    assert geometry.is_empty
    assert geometry.source is None


def test_retries_a_mirror_before_moving_on():
    attempts = {"primary.test": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["primary.test"] += 1
        if attempts["primary.test"] == 1:
            return httpx.Response(500)
        return httpx.Response(200, json=ROUTE_OK)

    geometry = asyncio.run(_client(handler, max_retries=1).fetch_route_data(WAYPOINTS))

    assert attempts["primary.test"] == 2
    assert geometry.source == PRIMARY


def test_steps_are_flattened_with_arrival_markers():
    steps = flatten_steps(ROUTE_OK["routes"][0]["legs"])

    assert len(steps) == 7
    marker = steps[3]
    assert marker.instruction == "ถึงจุดส่งสินค้าที่ 1"
    assert marker.distance_meters == 0 and marker.duration_seconds == 0
    assert marker.maneuver.type == "arrive"
    assert steps[1].instruction == "เลี้ยวซ้าย เข้าสู่ Sukhumvit"
    assert steps[-1].maneuver.type == "arrive"
    assert sum(1 for step in steps if step.instruction.startswith("ถึงจุดส่งสินค้าที่")) == 1


def test_polyline_geometry_is_decoded():
    encoded = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
    payload = {
        "code": "Ok",
        "routes": [{"geometry": encoded, "legs": [{"steps": [_step("depart"), _step("arrive")]}]}],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["geometries"] == "polyline"
        return httpx.Response(200, json=payload)

    geometry = asyncio.run(_client(handler, geometries="polyline").fetch_route_data(WAYPOINTS[:2]))

    assert geometry.path[0] == Coordinates(lat=38.5, lng=-120.2)
    assert len(geometry.path) == 3


def test_decode_polyline():
    assert decode_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@") == [
        (38.5, -120.2),
        (40.7, -120.95),
        (43.252, -126.453),
    ]


def test_route_requires_two_coordinates():
    client = _client(lambda request: httpx.Response(200, json=ROUTE_OK))
    with pytest.raises(ValueError):
        asyncio.run(client.route(PRIMARY, WAYPOINTS[:1]))


@pytest.mark.parametrize(
    ("maneuver_type", "modifier", "road", "expected"),
    [
        ("depart", None, "Rama IV", "เริ่มต้นเดินทาง เข้าสู่ Rama IV"),
        ("arrive", None, "", "ถึงจุดหมาย"),
        ("roundabout", "2", "", "ที่วงเวียน ใช้ทางออก 2"),
        ("turn", "right", "Silom", "เลี้ยวขวา เข้าสู่ Silom"),
        ("turn", "sharp left", "", "เลี้ยวซ้ายหักศอก"),
        ("continue", "uturn", "Silom", "กลับรถ"),
        ("new name", "straight", "", "ตรงไป"),
        ("merge", None, "Expressway", "merge เข้าสู่ Expressway"),
    ],
)
def test_translate_maneuver(maneuver_type, modifier, road, expected):
    assert translate_maneuver(maneuver_type, modifier, road) == expected


def test_navigation_icon():
    assert navigation_icon(Maneuver(type="turn", modifier="slight left")) == "left"
    assert navigation_icon(Maneuver(type="turn", modifier="uturn")) == "uturn"
    assert navigation_icon(Maneuver(type="arrive")) == "arrive"
    assert navigation_icon(Maneuver(type="depart")) == "depart"
    assert navigation_icon(Maneuver(type="continue", modifier="straight")) == "straight"


@pytest.mark.parametrize(
    "primary_body",
    [
        ["x"],
        "Ok",
        {"code": "Ok", "routes": ["not a route"]},
        {"code": "Ok", "routes": [{"geometry": {"coordinates": [[100.5]]}, "legs": []}]},
        {"code": "Ok", "routes": [{"geometry": {"coordinates": []}, "legs": [{"steps": ["bad"]}]}]},
    ],
)
def test_malformed_mirror_response_moves_to_next_mirror(primary_body):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "primary.test":
            return httpx.Response(200, json=primary_body)
        return httpx.Response(200, json=ROUTE_OK)

    geometry = asyncio.run(_client(handler).fetch_route_data(WAYPOINTS))

    assert geometry.source == BACKUP
    assert len(geometry.path) == 4


def test_malformed_responses_everywhere_give_empty_geometry():
    client = _client(lambda request: httpx.Response(200, json=["x"]))

    geometry = asyncio.run(client.fetch_route_data(WAYPOINTS[:2]))

    assert geometry.is_empty
