"""Wire schemas for stops and route results.

Field names follow the camelCase layout the map front-end and the persisted
record use.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class CoordinatesModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class StopModel(BaseModel):
    id: str
    name: str
    coordinates: CoordinatesModel
    address: Optional[str] = None
    isDepot: bool = False
    customerName: Optional[str] = None
    phoneNumber: Optional[str] = None
    zone: Optional[str] = None
    status: Optional[str] = Field(default=None, pattern="^(pending|delivered|failed)$")


class RouteSegmentModel(BaseModel):
    fromId: str
    toId: str
    distanceKm: float
    timeMinutes: float


class RouteStatsModel(BaseModel):
    totalDistanceKm: float
    totalTimeMinutes: float
    fuelCostTHB: float
    tollCostTHB: float
    totalCostTHB: float
    advice: str = ""
    vehicleType: Optional[str] = None


class ManeuverModel(BaseModel):
    type: str
    modifier: Optional[str] = None


class NavigationStepModel(BaseModel):
    instruction: str
    distanceMeters: float
    durationSeconds: float
    maneuver: ManeuverModel


class RouteResultModel(BaseModel):
    optimizedOrder: List[str]
    segments: List[RouteSegmentModel] = Field(default_factory=list)
    stats: RouteStatsModel
    pathPolyline: Optional[List[CoordinatesModel]] = None
    navigationInstructions: Optional[List[NavigationStepModel]] = None


class PersistedStateModel(BaseModel):
    """The single record mirrored to storage."""

    locations: List[StopModel] = Field(default_factory=list)
    optimizedRoute: Optional[RouteResultModel] = None


class OptimizationResponseModel(BaseModel):
    """Shape returned by the route-planning model before normalization."""

    optimizedOrder: List[str] = Field(default_factory=list)
    segments: Optional[List[RouteSegmentModel]] = None
    stats: RouteStatsModel


class ExtractedOrderModel(BaseModel):
    customerName: str = ""
    phoneNumber: Optional[str] = None
    address: str
    zone: str = "General"
