"""Conversions between domain objects and their wire/persisted schemas."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import (
    Coordinates,
    Maneuver,
    NavigationStep,
    RouteResult,
    RouteSegment,
    RouteStats,
    Stop,
    StopStatus,
)
from ...schemas.state import (
    CoordinatesModel,
    ManeuverModel,
    NavigationStepModel,
    PersistedStateModel,
    RouteResultModel,
    RouteSegmentModel,
    RouteStatsModel,
    StopModel,
)


def coordinates_to_model(coords: Coordinates) -> CoordinatesModel:
    return CoordinatesModel(lat=coords.lat, lng=coords.lng)


def stop_to_model(stop: Stop) -> StopModel:
    return StopModel(
        id=stop.id,
        name=stop.name,
        coordinates=coordinates_to_model(stop.coordinates),
        address=stop.address,
        isDepot=stop.is_depot,
        customerName=stop.customer_name,
        phoneNumber=stop.phone_number,
        zone=stop.zone,
        status=stop.status.value if stop.status else None,
    )


def stop_from_model(model: StopModel) -> Stop:
    return Stop(
        id=model.id,
        name=model.name,
        coordinates=Coordinates(lat=model.coordinates.lat, lng=model.coordinates.lng),
        address=model.address,
        is_depot=model.isDepot,
        customer_name=model.customerName,
        phone_number=model.phoneNumber,
        zone=model.zone,
        status=StopStatus(model.status) if model.status else None,
    )


def segment_to_model(segment: RouteSegment) -> RouteSegmentModel:
    return RouteSegmentModel(
        fromId=segment.from_id,
        toId=segment.to_id,
        distanceKm=segment.distance_km,
        timeMinutes=segment.time_minutes,
    )


def segment_from_model(model: RouteSegmentModel) -> RouteSegment:
    return RouteSegment(
        from_id=model.fromId,
        to_id=model.toId,
        distance_km=model.distanceKm,
        time_minutes=model.timeMinutes,
    )


def stats_to_model(stats: RouteStats) -> RouteStatsModel:
    return RouteStatsModel(
        totalDistanceKm=stats.total_distance_km,
        totalTimeMinutes=stats.total_time_minutes,
        fuelCostTHB=stats.fuel_cost_thb,
        tollCostTHB=stats.toll_cost_thb,
        totalCostTHB=stats.total_cost_thb,
        advice=stats.advice,
        vehicleType=stats.vehicle_type,
    )


def stats_from_model(model: RouteStatsModel) -> RouteStats:
    return RouteStats(
        total_distance_km=model.totalDistanceKm,
        total_time_minutes=model.totalTimeMinutes,
        fuel_cost_thb=model.fuelCostTHB,
        toll_cost_thb=model.tollCostTHB,
        total_cost_thb=model.totalCostTHB,
        advice=model.advice,
        vehicle_type=model.vehicleType,
    )


def navigation_step_to_model(step: NavigationStep) -> NavigationStepModel:
    return NavigationStepModel(
        instruction=step.instruction,
        distanceMeters=step.distance_meters,
        durationSeconds=step.duration_seconds,
        maneuver=ManeuverModel(type=step.maneuver.type, modifier=step.maneuver.modifier),
    )


def navigation_step_from_model(model: NavigationStepModel) -> NavigationStep:
    return NavigationStep(
        instruction=model.instruction,
        distance_meters=model.distanceMeters,
        duration_seconds=model.durationSeconds,
        maneuver=Maneuver(type=model.maneuver.type, modifier=model.maneuver.modifier),
    )


def route_to_model(route: RouteResult) -> RouteResultModel:
    return RouteResultModel(
        optimizedOrder=list(route.optimized_order),
        segments=[segment_to_model(segment) for segment in route.segments],
        stats=stats_to_model(route.stats),
        pathPolyline=(
            [coordinates_to_model(point) for point in route.path_polyline]
            if route.path_polyline is not None
            else None
        ),
        navigationInstructions=(
            [navigation_step_to_model(step) for step in route.navigation_instructions]
            if route.navigation_instructions is not None
            else None
        ),
    )


def route_from_model(model: RouteResultModel) -> RouteResult:
    return RouteResult(
        optimized_order=list(model.optimizedOrder),
        segments=[segment_from_model(segment) for segment in model.segments],
        stats=stats_from_model(model.stats),
        path_polyline=(
            [Coordinates(lat=point.lat, lng=point.lng) for point in model.pathPolyline]
            if model.pathPolyline is not None
            else None
        ),
        navigation_instructions=(
            [navigation_step_from_model(step) for step in model.navigationInstructions]
            if model.navigationInstructions is not None
            else None
        ),
    )


def state_to_model(stops: Sequence[Stop], route: RouteResult | None) -> PersistedStateModel:
    return PersistedStateModel(
        locations=[stop_to_model(stop) for stop in stops],
        optimizedRoute=route_to_model(route) if route else None,
    )


def state_from_model(model: PersistedStateModel) -> tuple[list[Stop], RouteResult | None]:
    stops = [stop_from_model(item) for item in model.locations]
    route = route_from_model(model.optimizedRoute) if model.optimizedRoute else None
    return stops, route
