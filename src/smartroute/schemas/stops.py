"""Stop registry request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .state import CoordinatesModel, RouteResultModel, RouteSegmentModel, StopModel


class AddStopRequest(BaseModel):
    coordinates: CoordinatesModel


class ResetRequest(BaseModel):
    confirm: bool = Field(default=False, description="Must be true; reset cannot be undone.")


class GroupedStopModel(BaseModel):
    stop: StopModel
    sequence: int
    nextSegment: Optional[RouteSegmentModel] = None


class StopGroupModel(BaseModel):
    name: str
    stops: List[GroupedStopModel]


class StopGroupsResponse(BaseModel):
    optimized: bool
    groups: List[StopGroupModel]


class SessionStateResponse(BaseModel):
    locations: List[StopModel]
    optimizedRoute: Optional[RouteResultModel] = None
    selectedId: Optional[str] = None
    vehicleType: str
    isCalculating: bool
    importingStatus: Optional[str] = None
    error: Optional[str] = None
