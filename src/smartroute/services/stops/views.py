"""Pure projections over the stop list and the current route result.

Nothing here is stored; callers recompute the views whenever they render.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ... import messages
from ...models.domain import Coordinates, RouteResult, RouteSegment, Stop
from ..geospatial import polyline_length_km


@dataclass(slots=True)
class GroupedStop:
    stop: Stop
    sequence: int
    next_segment: Optional[RouteSegment] = None


@dataclass(slots=True)
class StopGroup:
    name: str
    stops: list[GroupedStop]


@dataclass(slots=True)
class RouteOverlay:
    coordinates: list[Coordinates]
    follows_roads: bool
    straight_line_km: float
    stop_ids: list[str]


def ordered_stops(stops: Sequence[Stop], route: RouteResult | None) -> list[Stop]:
    """Stops in optimized order, dropping ids unknown to the registry.

    Without a route (or with an empty order) the registry order is returned.
    """
    if route is None or not route.optimized_order:
        return list(stops)
    by_id = {stop.id: stop for stop in stops}
    seen: set[str] = set()
    result: list[Stop] = []
    for stop_id in route.optimized_order:
        stop = by_id.get(stop_id)
        if stop is None or stop_id in seen:
            continue
        seen.add(stop_id)
        result.append(stop)
    return result


def _find_segment(route: RouteResult, from_id: str, to_id: str) -> RouteSegment | None:
    for segment in route.segments:
        if segment.from_id == from_id and segment.to_id == to_id:
            return segment
    return None


def group_stops(stops: Sequence[Stop], route: RouteResult | None) -> list[StopGroup]:
    """Zone grouping before optimization; a single ordered group afterwards."""

    if route is not None and route.optimized_order:
        ordered = ordered_stops(stops, route)
        order = route.optimized_order
        entries: list[GroupedStop] = []
        for stop in ordered:
            position = order.index(stop.id)
            next_id = order[position + 1] if position + 1 < len(order) else None
            segment = _find_segment(route, stop.id, next_id) if next_id else None
            entries.append(GroupedStop(stop=stop, sequence=position, next_segment=segment))
        return [StopGroup(name=messages.ROUTE_GROUP, stops=entries)]

    groups: dict[str, list[GroupedStop]] = {}
    for index, stop in enumerate(stops):
        zone = stop.zone or (messages.DEPOT_GROUP if stop.is_depot else messages.DEFAULT_ZONE)
        groups.setdefault(zone, []).append(GroupedStop(stop=stop, sequence=index))

    # depot group first, the rest in first-seen order
    ordered_groups: list[StopGroup] = []
    if messages.DEPOT_GROUP in groups:
        ordered_groups.append(StopGroup(name=messages.DEPOT_GROUP, stops=groups.pop(messages.DEPOT_GROUP)))
    ordered_groups.extend(StopGroup(name=name, stops=items) for name, items in groups.items())
    return ordered_groups


def build_overlay(stops: Sequence[Stop], route: RouteResult | None) -> RouteOverlay:
    """Road geometry when the route carries it, otherwise straight lines between stops."""

    visited = ordered_stops(stops, route) if route is not None else []
    stop_points = [stop.coordinates for stop in visited]
    if route is not None and route.path_polyline:
        return RouteOverlay(
            coordinates=list(route.path_polyline),
            follows_roads=True,
            straight_line_km=polyline_length_km(stop_points),
            stop_ids=[stop.id for stop in visited],
        )
    return RouteOverlay(
        coordinates=stop_points,
        follows_roads=False,
        straight_line_km=polyline_length_km(stop_points),
        stop_ids=[stop.id for stop in visited],
    )
