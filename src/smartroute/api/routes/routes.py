"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ... import messages
from ...errors import FlowBusyError, OptimizationError
from ...models.domain import VehicleType
from ...schemas.routing import NavigationResponse, NavigationStepView, OptimizeRequest, RouteOverlayModel
from ...schemas.state import RouteResultModel
from ...services.outputs.formatter import coordinates_to_model, navigation_step_to_model, route_to_model, stats_to_model
from ...services.routing.instructions import navigation_icon
from ...services.routing.service import resolve_vehicle_type
from ...services.session import PlannerSession, get_session
from ...services.stops.views import build_overlay

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RouteResultModel, status_code=status.HTTP_200_OK)
async def optimize(payload: OptimizeRequest, session: PlannerSession = Depends(get_session)) -> RouteResultModel:
    vehicle_type: VehicleType | None = None
    if payload.vehicleType:
        try:
            vehicle_type = resolve_vehicle_type(payload.vehicleType)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        result = await session.calculate_route(vehicle_type)
    except FlowBusyError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except OptimizationError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc

    if result is None:
        if len(session.stops) < 2:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=messages.NOT_ENOUGH_STOPS)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Stops changed while the route was being calculated; please recalculate.",
        )
    return route_to_model(result)


@router.get("/current", response_model=RouteResultModel | None, status_code=status.HTTP_200_OK)
def current_route(session: PlannerSession = Depends(get_session)) -> RouteResultModel | None:
    return route_to_model(session.route) if session.route else None


@router.get("/overlay", response_model=RouteOverlayModel, status_code=status.HTTP_200_OK)
def route_overlay(session: PlannerSession = Depends(get_session)) -> RouteOverlayModel:
    """Polyline to draw on the map: road geometry, or straight lines between stops."""
    overlay = build_overlay(session.stops, session.route)
    return RouteOverlayModel(
        coordinates=[coordinates_to_model(point) for point in overlay.coordinates],
        followsRoads=overlay.follows_roads,
        straightLineKm=round(overlay.straight_line_km, 3),
        stopIds=overlay.stop_ids,
    )


@router.get("/navigation", response_model=NavigationResponse, status_code=status.HTTP_200_OK)
def navigation(session: PlannerSession = Depends(get_session)) -> NavigationResponse:
    route = session.route
    if route is None:
        return NavigationResponse(steps=[], stats=None)
    steps = [
        NavigationStepView(**navigation_step_to_model(step).model_dump(), icon=navigation_icon(step.maneuver))
        for step in route.navigation_instructions or []
    ]
    return NavigationResponse(steps=steps, stats=stats_to_model(route.stats))
