"""Domain models for delivery stops, vehicles and optimized routes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(slots=True, frozen=True)
class Coordinates:
    lat: float
    lng: float


class StopStatus(str, Enum):
    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"


@dataclass(slots=True)
class Stop:
    """A delivery point placed on the map or produced by an order import."""

    id: str
    name: str
    coordinates: Coordinates
    address: Optional[str] = None
    is_depot: bool = False
    customer_name: Optional[str] = None
    phone_number: Optional[str] = None
    zone: Optional[str] = None
    status: Optional[StopStatus] = None


class VehicleType(str, Enum):
    PICKUP_CLOSED = "กระบะตู้ทึบ"
    PICKUP_OPEN = "กระบะคอก"
    TRUCK_6W = "รถบรรทุก 6 ล้อ"


@dataclass(slots=True, frozen=True)
class VehicleProfile:
    """Assumptions handed to the route planner as context, never enforced locally."""

    vehicle_type: VehicleType
    description: str
    fuel_km_per_litre: float
    toll_class: str
    constraints: str


VEHICLE_PROFILES: dict[VehicleType, VehicleProfile] = {
    VehicleType.PICKUP_CLOSED: VehicleProfile(
        vehicle_type=VehicleType.PICKUP_CLOSED,
        description="Pickup Truck (กระบะ)",
        fuel_km_per_litre=12.0,
        toll_class="standard 4-wheel vehicle rates",
        constraints="None (Can enter all areas).",
    ),
    VehicleType.PICKUP_OPEN: VehicleProfile(
        vehicle_type=VehicleType.PICKUP_OPEN,
        description="Pickup Truck (กระบะ)",
        fuel_km_per_litre=12.0,
        toll_class="standard 4-wheel vehicle rates",
        constraints="None (Can enter all areas).",
    ),
    VehicleType.TRUCK_6W: VehicleProfile(
        vehicle_type=VehicleType.TRUCK_6W,
        description="6-Wheel Truck (รถบรรทุก 6 ล้อ)",
        fuel_km_per_litre=7.0,
        toll_class="6-wheel vehicle rates (higher than cars)",
        constraints=(
            "Avoid narrow residential alleys. Consider time restrictions in Bangkok "
            "(No-entry hours for trucks)."
        ),
    ),
}


@dataclass(slots=True)
class RouteSegment:
    from_id: str
    to_id: str
    distance_km: float
    time_minutes: float


@dataclass(slots=True)
class RouteStats:
    total_distance_km: float
    total_time_minutes: float
    fuel_cost_thb: float
    toll_cost_thb: float
    total_cost_thb: float
    advice: str
    vehicle_type: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Maneuver:
    type: str
    modifier: Optional[str] = None


@dataclass(slots=True)
class NavigationStep:
    instruction: str
    distance_meters: float
    duration_seconds: float
    maneuver: Maneuver


@dataclass(slots=True)
class RouteResult:
    """Reconciled output of the planner call and the road-routing call."""

    optimized_order: List[str]
    segments: List[RouteSegment]
    stats: RouteStats
    path_polyline: Optional[List[Coordinates]] = None
    navigation_instructions: Optional[List[NavigationStep]] = None


@dataclass(slots=True)
class ExtractedOrder:
    customer_name: str
    address: str
    zone: str
    phone_number: Optional[str] = None


@dataclass(slots=True)
class ImportOutcome:
    """Result of resolving one extracted order; ``resolved`` is False for placeholders."""

    order: ExtractedOrder
    stop: Stop
    resolved: bool
    error: Optional[str] = None


@dataclass(slots=True)
class ImportReport:
    outcomes: List[ImportOutcome] = field(default_factory=list)
    dropped: int = 0

    @property
    def resolved_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.resolved)

    @property
    def unresolved_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.resolved)
