"""Route optimization orchestration: planner call, normalization, road geometry."""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import ValidationError

from ... import messages
from ...config import settings
from ...errors import GeminiError, NotEnoughStopsError, OptimizationError
from ...models.domain import VEHICLE_PROFILES, RouteResult, Stop, VehicleType
from ...schemas.state import OptimizationResponseModel
from ..ai.gemini_client import GeminiClient
from ..ai.prompts import ROUTE_OPTIMIZATION_SCHEMA, build_route_prompt
from ..outputs.formatter import segment_from_model, stats_from_model
from .osrm_client import OSRMClient

logger = logging.getLogger(__name__)


def resolve_vehicle_type(value: str | VehicleType) -> VehicleType:
    """Accept either the enum member name (``TRUCK_6W``) or its label."""
    if isinstance(value, VehicleType):
        return value
    try:
        return VehicleType(value)
    except ValueError:
        pass
    try:
        return VehicleType[value.upper()]
    except KeyError as exc:
        raise ValueError(f"Unknown vehicle type '{value}'.") from exc


def split_depot(stops: Sequence[Stop]) -> tuple[Stop, list[Stop]]:
    depot = next((stop for stop in stops if stop.is_depot), stops[0])
    return depot, [stop for stop in stops if stop.id != depot.id]


def normalize_order(order: Sequence[str], depot_id: str) -> list[str]:
    """Depot first, every id once; the depot is moved or inserted as needed."""
    seen: set[str] = {depot_id}
    normalized = [depot_id]
    for stop_id in order:
        if stop_id in seen:
            continue
        seen.add(stop_id)
        normalized.append(stop_id)
    return normalized


def normalize_response(
    response: OptimizationResponseModel,
    depot_id: str,
    vehicle_type: VehicleType,
) -> RouteResult:
    stats = stats_from_model(response.stats)
    stats.vehicle_type = vehicle_type.value
    return RouteResult(
        optimized_order=normalize_order(response.optimizedOrder, depot_id),
        segments=[segment_from_model(segment) for segment in response.segments or []],
        stats=stats,
    )


class RouteOptimizer:
    def __init__(
        self,
        gemini: GeminiClient | None = None,
        osrm: OSRMClient | None = None,
        diesel_price_thb: float | None = None,
    ) -> None:
        self.gemini = gemini
        self.osrm = osrm or OSRMClient()
        self.diesel_price_thb = diesel_price_thb if diesel_price_thb is not None else settings.diesel_price_thb

    def _gemini(self) -> GeminiClient:
        if self.gemini is None:
            try:
                self.gemini = GeminiClient()
            except ValueError as exc:
                raise OptimizationError(messages.OPTIMIZATION_FAILED.format(reason=str(exc))) from exc
        return self.gemini

    async def optimize(self, stops: Sequence[Stop], vehicle_type: VehicleType) -> RouteResult:
        if len(stops) < 2:
            raise NotEnoughStopsError(messages.NOT_ENOUGH_STOPS)

        depot, others = split_depot(stops)
        profile = VEHICLE_PROFILES[vehicle_type]
        prompt = build_route_prompt(depot, others, profile, self.diesel_price_thb)

        try:
            payload = await self._gemini().generate_json(prompt, ROUTE_OPTIMIZATION_SCHEMA)
            response = OptimizationResponseModel.model_validate(payload)
        except GeminiError as exc:
            raise OptimizationError(messages.OPTIMIZATION_FAILED.format(reason=str(exc))) from exc
        except ValidationError as exc:
            logger.warning(f"Route planner returned an invalid payload: {exc.error_count()} error(s)")
            raise OptimizationError(
                messages.OPTIMIZATION_FAILED.format(reason=messages.OPTIMIZATION_FALLBACK_REASON)
            ) from exc

        result = normalize_response(response, depot.id, vehicle_type)
        logger.info(
            f"Route planned for {len(stops)} stops with {vehicle_type.value}: "
            f"{result.stats.total_distance_km:.1f} km, {len(result.segments)} segment(s)"
        )

        by_id = {stop.id: stop for stop in stops}
        ordered = [by_id[stop_id] for stop_id in result.optimized_order if stop_id in by_id]
        if len(ordered) >= 2:
            geometry = await self.osrm.fetch_route_data([stop.coordinates for stop in ordered])
            result.path_polyline = geometry.path
            result.navigation_instructions = geometry.steps
        return result
