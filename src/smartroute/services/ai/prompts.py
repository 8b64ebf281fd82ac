"""Prompts and response schemas for the generative planner calls."""

from __future__ import annotations

import json
from typing import Sequence

from ...models.domain import Stop, VehicleProfile

ORDER_EXTRACTION_SCHEMA: dict = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "customerName": {"type": "STRING"},
            "phoneNumber": {"type": "STRING"},
            "address": {"type": "STRING"},
            "zone": {"type": "STRING"},
        },
        "required": ["customerName", "address", "zone"],
    },
}

ROUTE_OPTIMIZATION_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "optimizedOrder": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "The sequence of Location IDs, starting with the Depot ID.",
        },
        "segments": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "fromId": {"type": "STRING"},
                    "toId": {"type": "STRING"},
                    "distanceKm": {"type": "NUMBER"},
                    "timeMinutes": {"type": "NUMBER"},
                },
                "required": ["fromId", "toId", "distanceKm", "timeMinutes"],
            },
            "description": "Detailed stats for the leg between each consecutive stop.",
        },
        "stats": {
            "type": "OBJECT",
            "properties": {
                "totalDistanceKm": {"type": "NUMBER"},
                "totalTimeMinutes": {"type": "NUMBER"},
                "fuelCostTHB": {"type": "NUMBER"},
                "tollCostTHB": {"type": "NUMBER"},
                "totalCostTHB": {"type": "NUMBER"},
                "advice": {"type": "STRING", "description": "Advice in Thai language"},
            },
            "required": [
                "totalDistanceKm",
                "totalTimeMinutes",
                "fuelCostTHB",
                "tollCostTHB",
                "totalCostTHB",
                "advice",
            ],
        },
    },
    "required": ["optimizedOrder", "segments", "stats"],
}


def build_order_extraction_prompt(raw_text: str) -> str:
    return f"""
You are a smart logistics assistant for Thailand.
Extract delivery orders from the following raw text.

Raw Text:
"{raw_text}"

Tasks:
1. Identify each distinct order.
2. Extract Customer Name, Phone Number, and Address.
3. Assign a "Zone" based on the district/sub-district (e.g., "Bang Kapi", "Siam", "Nonthaburi"). If unknown, use "General".
4. Return valid JSON only.
"""


def _vehicle_specs(profile: VehicleProfile) -> str:
    return (
        f"- Vehicle: {profile.description}.\n"
        f"- Fuel: ~{profile.fuel_km_per_litre:g} km/L (Diesel).\n"
        f"- Tolls: {profile.toll_class}.\n"
        f"- Constraints: {profile.constraints}"
    )


def build_route_prompt(
    depot: Stop,
    stops: Sequence[Stop],
    profile: VehicleProfile,
    diesel_price_thb: float,
) -> str:
    depot_payload = {"id": depot.id, "lat": depot.coordinates.lat, "lng": depot.coordinates.lng}
    stops_payload = [
        {"id": stop.id, "lat": stop.coordinates.lat, "lng": stop.coordinates.lng, "zone": stop.zone}
        for stop in stops
    ]
    return f"""
You are an expert logistics route planner for Thailand.

Task: Optimize the delivery route starting from the Depot, visiting all Stops exactly once, and optionally returning to Depot.

Vehicle Configuration:
{_vehicle_specs(profile)}

Price Context (Approx): Diesel ~{diesel_price_thb:g} THB/L.

Locations:
Depot: {json.dumps(depot_payload, ensure_ascii=False)}
Stops: {json.dumps(stops_payload, ensure_ascii=False)}

Requirements:
1. Sort stops efficiently (TSP). Group stops in the same 'zone' if efficient.
2. Estimate realistic driving distance/time.
3. Calculate estimated Fuel Cost and Toll Fees based on {profile.vehicle_type.value} specs.
4. Provide advice in Thai (e.g. mention if the truck might hit time restrictions).
5. Provide stats for each segment.
"""
