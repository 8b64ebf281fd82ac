"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Coordinates, NavigationStep


@dataclass(slots=True)
class RoadGeometry:
    """Road-following path and flattened turn steps; both empty when no mirror answered."""

    path: List[Coordinates] = field(default_factory=list)
    steps: List[NavigationStep] = field(default_factory=list)
    source: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.path and not self.steps
