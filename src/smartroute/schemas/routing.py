"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .state import CoordinatesModel, NavigationStepModel, RouteStatsModel


class OptimizeRequest(BaseModel):
    vehicleType: Optional[str] = Field(
        default=None,
        description="Vehicle profile label; defaults to the session's current vehicle.",
    )


class VehicleSelection(BaseModel):
    vehicleType: str


class VehicleModel(BaseModel):
    vehicleType: str
    description: str
    fuelKmPerLitre: float
    tollClass: str
    constraints: str
    selected: bool = False


class RouteOverlayModel(BaseModel):
    coordinates: List[CoordinatesModel]
    followsRoads: bool
    straightLineKm: float
    stopIds: List[str]


class NavigationStepView(NavigationStepModel):
    icon: str


class NavigationResponse(BaseModel):
    steps: List[NavigationStepView]
    stats: Optional[RouteStatsModel] = None
