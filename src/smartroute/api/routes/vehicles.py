"""Vehicle profile endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.domain import VEHICLE_PROFILES
from ...schemas.routing import VehicleModel, VehicleSelection
from ...services.routing.service import resolve_vehicle_type
from ...services.session import PlannerSession, get_session

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


def _vehicle_models(session: PlannerSession) -> List[VehicleModel]:
    return [
        VehicleModel(
            vehicleType=profile.vehicle_type.value,
            description=profile.description,
            fuelKmPerLitre=profile.fuel_km_per_litre,
            tollClass=profile.toll_class,
            constraints=profile.constraints,
            selected=profile.vehicle_type is session.vehicle_type,
        )
        for profile in VEHICLE_PROFILES.values()
    ]


@router.get("", response_model=List[VehicleModel], status_code=status.HTTP_200_OK)
def list_vehicles(session: PlannerSession = Depends(get_session)) -> List[VehicleModel]:
    return _vehicle_models(session)


@router.put("/current", response_model=List[VehicleModel], status_code=status.HTTP_200_OK)
def select_vehicle(payload: VehicleSelection, session: PlannerSession = Depends(get_session)) -> List[VehicleModel]:
    try:
        session.set_vehicle(resolve_vehicle_type(payload.vehicleType))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _vehicle_models(session)
