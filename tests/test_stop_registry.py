import pytest

from smartroute import messages
from smartroute.errors import StopLimitReachedError, StopNotFoundError
from smartroute.models.domain import Coordinates, Stop
from smartroute.services.stops.registry import StopRegistry, auto_label, generate_stop_id, is_auto_label


def _point(offset: float = 0.0) -> Coordinates:
    return Coordinates(lat=13.75 + offset, lng=100.50 + offset)


def _imported(name: str, zone: str = "Siam") -> Stop:
    return Stop(
        id=generate_stop_id(),
        name=name,
        coordinates=_point(0.05),
        address="Rama I Rd",
        customer_name=name,
        zone=zone,
    )


def test_first_stop_becomes_depot_with_fixed_label():
    registry = StopRegistry()
    depot = registry.add_at(_point())

    assert depot.is_depot
    assert depot.name == messages.DEPOT_LABEL
    assert depot.zone == messages.DEPOT_ZONE
    assert registry.selected_id == depot.id


def test_following_stops_get_sequential_labels():
    registry = StopRegistry()
    registry.add_at(_point())
    first = registry.add_at(_point(0.01))
    second = registry.add_at(_point(0.02))

    assert not first.is_depot and not second.is_depot
    assert first.name == auto_label(0)
    assert second.name == auto_label(1)
    assert first.zone == messages.DEFAULT_ZONE
    assert registry.selected_id == second.id
    assert [stop.is_depot for stop in registry.stops] == [True, False, False]


@pytest.mark.parametrize("prefill", [3, 30])
def test_add_at_capacity_is_rejected_without_change(prefill: int):
    registry = StopRegistry(max_stops=prefill)
    for i in range(prefill):
        registry.add_at(_point(i * 0.001))
    before = [(stop.id, stop.name) for stop in registry.stops]
    selected = registry.selected_id

    with pytest.raises(StopLimitReachedError) as excinfo:
        registry.add_at(_point(1.0))

    assert str(prefill) in str(excinfo.value)
    assert [(stop.id, stop.name) for stop in registry.stops] == before
    assert registry.selected_id == selected


def test_default_capacity_is_thirty():
    registry = StopRegistry()
    for i in range(30):
        registry.add_at(_point(i * 0.001))
    with pytest.raises(StopLimitReachedError):
        registry.add_at(_point())
    assert len(registry) == 30


def test_remove_middle_stop_renumbers_auto_labels():
    registry = StopRegistry()
    a = registry.add_at(_point())
    b = registry.add_at(_point(0.01))
    c = registry.add_at(_point(0.02))

    registry.remove(b.id)

    assert [stop.id for stop in registry.stops] == [a.id, c.id]
    assert registry.depot.id == a.id
    assert a.name == messages.DEPOT_LABEL
    assert c.name == auto_label(0)


def test_remove_depot_promotes_earliest_remaining_stop():
    registry = StopRegistry()
    depot = registry.add_at(_point())
    registry.add_batch([_imported("Khun Somchai"), _imported("Khun Malee")])

    registry.remove(depot.id)

    promoted = registry.stops[0]
    assert promoted.is_depot
    assert promoted.name == messages.DEPOT_LABEL
    assert sum(1 for stop in registry.stops if stop.is_depot) == 1
    assert registry.stops[1].name == "Khun Malee"


def test_custom_labels_are_never_renumbered():
    registry = StopRegistry()
    registry.add_at(_point())
    auto_stop = registry.add_at(_point(0.01))
    registry.add_batch([_imported("Khun Somchai")])
    trailing = registry.add_at(_point(0.03))
    assert trailing.name == auto_label(2)

    registry.remove(auto_stop.id)

    names = [stop.name for stop in registry.stops]
    assert names == [messages.DEPOT_LABEL, "Khun Somchai", auto_label(1)]


def test_remove_clears_selection_only_for_removed_stop():
    registry = StopRegistry()
    registry.add_at(_point())
    b = registry.add_at(_point(0.01))
    c = registry.add_at(_point(0.02))

    registry.select(b.id)
    registry.remove(c.id)
    assert registry.selected_id == b.id

    registry.remove(b.id)
    assert registry.selected_id is None


def test_remove_unknown_stop_raises():
    registry = StopRegistry()
    registry.add_at(_point())
    with pytest.raises(StopNotFoundError):
        registry.remove("missing")


def test_select_rejects_unknown_id():
    registry = StopRegistry()
    stop = registry.add_at(_point())
    registry.select(None)
    assert registry.selected_id is None

    with pytest.raises(StopNotFoundError):
        registry.select("missing")
    registry.select(stop.id)
    assert registry.selected_id == stop.id


def test_add_batch_into_empty_registry_marks_first_as_depot():
    registry = StopRegistry()
    accepted = registry.add_batch([_imported("Khun A"), _imported("Khun B")])

    assert len(accepted) == 2
    assert accepted[0].is_depot
    assert accepted[0].name == messages.DEPOT_LABEL
    assert accepted[0].customer_name == "Khun A"
    assert not accepted[1].is_depot


def test_add_batch_into_populated_registry_adds_no_depot():
    registry = StopRegistry()
    depot = registry.add_at(_point())
    registry.add_batch([_imported("Khun A")])

    assert [stop.id for stop in registry.stops if stop.is_depot] == [depot.id]
    assert registry.stops[1].name == "Khun A"


def test_add_batch_is_truncated_to_capacity():
    registry = StopRegistry(max_stops=3)
    registry.add_at(_point())
    accepted = registry.add_batch([_imported(f"Khun {i}") for i in range(4)])

    assert len(accepted) == 2
    assert len(registry) == 3


def test_restored_registry_repairs_depot_flag():
    stops = [
        Stop(id="a", name=auto_label(0), coordinates=_point()),
        Stop(id="b", name=auto_label(1), coordinates=_point(0.01), is_depot=True),
    ]
    registry = StopRegistry(stops)

    assert registry.stops[0].is_depot
    assert registry.stops[0].name == messages.DEPOT_LABEL
    assert not registry.stops[1].is_depot


def test_auto_label_pattern():
    assert is_auto_label(auto_label(12))
    assert not is_auto_label(f"{messages.STOP_LABEL_PREFIX} 3 (VIP)")
    assert not is_auto_label("Khun Somchai")
