"""Whole-session state endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas.stops import SessionStateResponse
from ...services.outputs.formatter import route_to_model, stop_to_model
from ...services.session import PlannerSession, get_session

router = APIRouter(tags=["state"])


def session_state_response(session: PlannerSession) -> SessionStateResponse:
    return SessionStateResponse(
        locations=[stop_to_model(stop) for stop in session.stops],
        optimizedRoute=route_to_model(session.route) if session.route else None,
        selectedId=session.selected_id,
        vehicleType=session.vehicle_type.value,
        isCalculating=session.is_calculating,
        importingStatus=session.importing_status,
        error=session.error,
    )


@router.get("/state", response_model=SessionStateResponse, status_code=status.HTTP_200_OK)
def get_state(session: PlannerSession = Depends(get_session)) -> SessionStateResponse:
    return session_state_response(session)


@router.delete("/errors", response_model=SessionStateResponse, status_code=status.HTTP_200_OK)
def dismiss_error(session: PlannerSession = Depends(get_session)) -> SessionStateResponse:
    """Close the error banner."""
    session.dismiss_error()
    return session_state_response(session)
