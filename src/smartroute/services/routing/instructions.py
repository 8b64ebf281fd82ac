"""Turn OSRM maneuver descriptors into Thai driving instructions."""

from __future__ import annotations

from typing import Optional

from ...models.domain import Maneuver

_MODIFIER_PHRASES = {
    "left": "เลี้ยวซ้าย",
    "right": "เลี้ยวขวา",
    "slight left": "เบี่ยงซ้ายเล็กน้อย",
    "slight right": "เบี่ยงขวาเล็กน้อย",
    "sharp left": "เลี้ยวซ้ายหักศอก",
    "sharp right": "เลี้ยวขวาหักศอก",
    "straight": "ตรงไป",
}


def translate_maneuver(maneuver_type: str, modifier: Optional[str], road_name: Optional[str]) -> str:
    road = f"เข้าสู่ {road_name}" if road_name else ""

    if maneuver_type == "depart":
        return f"เริ่มต้นเดินทาง {road}".strip()
    if maneuver_type == "arrive":
        return "ถึงจุดหมาย"
    if maneuver_type == "roundabout":
        return " ".join(part for part in ("ที่วงเวียน ใช้ทางออก", modifier or "", road) if part)
    if modifier == "uturn" or maneuver_type == "uturn":
        return "กลับรถ"
    phrase = _MODIFIER_PHRASES.get(modifier or "")
    if phrase:
        return f"{phrase} {road}".strip()
    return f"{maneuver_type} {road}".strip()


def navigation_icon(maneuver: Maneuver) -> str:
    """Icon category the front-end renders next to a step."""
    modifier = maneuver.modifier or ""
    if maneuver.type == "uturn" or modifier == "uturn":
        return "uturn"
    if "left" in modifier:
        return "left"
    if "right" in modifier:
        return "right"
    if maneuver.type == "arrive":
        return "arrive"
    if maneuver.type == "depart":
        return "depart"
    return "straight"
