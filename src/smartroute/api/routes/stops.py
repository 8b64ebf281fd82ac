"""Stop registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import ConfirmationRequiredError, StopLimitReachedError, StopNotFoundError
from ...models.domain import Coordinates
from ...schemas.state import StopModel
from ...schemas.stops import (
    AddStopRequest,
    GroupedStopModel,
    ResetRequest,
    SessionStateResponse,
    StopGroupModel,
    StopGroupsResponse,
)
from ...services.outputs.formatter import segment_to_model, stop_to_model
from ...services.session import PlannerSession, get_session
from ...services.stops.views import group_stops
from .state import session_state_response

router = APIRouter(prefix="/stops", tags=["stops"])


@router.post("", response_model=StopModel, status_code=status.HTTP_201_CREATED)
def add_stop(payload: AddStopRequest, session: PlannerSession = Depends(get_session)) -> StopModel:
    """Place a stop where the dispatcher clicked on the map."""
    try:
        stop = session.add_stop(Coordinates(lat=payload.coordinates.lat, lng=payload.coordinates.lng))
    except StopLimitReachedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return stop_to_model(stop)


@router.delete("/{stop_id}", response_model=SessionStateResponse, status_code=status.HTTP_200_OK)
def remove_stop(stop_id: str, session: PlannerSession = Depends(get_session)) -> SessionStateResponse:
    try:
        session.remove_stop(stop_id)
    except StopNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return session_state_response(session)


@router.post("/{stop_id}/select", response_model=SessionStateResponse, status_code=status.HTTP_200_OK)
def select_stop(stop_id: str, session: PlannerSession = Depends(get_session)) -> SessionStateResponse:
    try:
        session.select_stop(stop_id)
    except StopNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return session_state_response(session)


@router.post("/reset", response_model=SessionStateResponse, status_code=status.HTTP_200_OK)
def reset_stops(payload: ResetRequest, session: PlannerSession = Depends(get_session)) -> SessionStateResponse:
    try:
        session.reset(confirm=payload.confirm)
    except ConfirmationRequiredError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return session_state_response(session)


@router.get("/groups", response_model=StopGroupsResponse, status_code=status.HTTP_200_OK)
def get_groups(session: PlannerSession = Depends(get_session)) -> StopGroupsResponse:
    """Stops grouped by zone, or in visiting order once a route exists."""
    groups = group_stops(session.stops, session.route)
    return StopGroupsResponse(
        optimized=bool(session.route and session.route.optimized_order),
        groups=[
            StopGroupModel(
                name=group.name,
                stops=[
                    GroupedStopModel(
                        stop=stop_to_model(entry.stop),
                        sequence=entry.sequence,
                        nextSegment=segment_to_model(entry.next_segment) if entry.next_segment else None,
                    )
                    for entry in group.stops
                ],
            )
            for group in groups
        ],
    )
