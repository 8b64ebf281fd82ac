"""Order import endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import FlowBusyError, ImportFailedError
from ...schemas.imports import ImportOutcomeModel, ImportRequest, ImportResponse, ImportStatusResponse
from ...services.outputs.formatter import stop_to_model
from ...services.session import PlannerSession, get_session

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/import", response_model=ImportResponse, status_code=status.HTTP_200_OK)
async def import_orders(payload: ImportRequest, session: PlannerSession = Depends(get_session)) -> ImportResponse:
    try:
        report = await session.import_orders(payload.text)
    except FlowBusyError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ImportFailedError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error importing orders: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to import orders: {str(exc)}",
        ) from exc

    return ImportResponse(
        imported=len(report.outcomes),
        resolved=report.resolved_count,
        unresolved=report.unresolved_count,
        dropped=report.dropped,
        outcomes=[
            ImportOutcomeModel(stop=stop_to_model(outcome.stop), resolved=outcome.resolved, error=outcome.error)
            for outcome in report.outcomes
        ],
    )


@router.get("/import/status", response_model=ImportStatusResponse, status_code=status.HTTP_200_OK)
def import_status(session: PlannerSession = Depends(get_session)) -> ImportStatusResponse:
    """Progress line of the running import, polled by the front-end."""
    return ImportStatusResponse(state=session.importing.state.value, status=session.importing_status)
