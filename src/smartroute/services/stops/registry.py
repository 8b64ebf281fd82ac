"""In-memory ordered collection of delivery stops."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Iterable, Sequence

from ... import messages
from ...config import settings
from ...errors import StopLimitReachedError, StopNotFoundError
from ...models.domain import Coordinates, Stop

logger = logging.getLogger(__name__)

_AUTO_LABEL = re.compile(rf"^{re.escape(messages.STOP_LABEL_PREFIX)} \d+$")


def generate_stop_id() -> str:
    return uuid.uuid4().hex


def auto_label(index: int) -> str:
    return f"{messages.STOP_LABEL_PREFIX} {index}"


def is_auto_label(name: str) -> bool:
    return bool(_AUTO_LABEL.match(name))


class StopRegistry:
    """Owns stop identity, the depot designation, sequential labels and the selection.

    Invariants kept after every mutation:
    - at most one stop is the depot, and it is the earliest remaining stop;
    - the registry never holds more than ``max_stops`` stops;
    - ``selected_id`` is either None or the id of a registered stop.
    """

    def __init__(self, stops: Iterable[Stop] | None = None, max_stops: int | None = None) -> None:
        self.max_stops = max_stops if max_stops is not None else settings.max_stops
        self._stops: list[Stop] = list(stops or [])[: self.max_stops]
        self.selected_id: str | None = None
        self._ensure_depot()

    def __len__(self) -> int:
        return len(self._stops)

    def __iter__(self):
        return iter(list(self._stops))

    @property
    def stops(self) -> list[Stop]:
        return list(self._stops)

    @property
    def remaining_capacity(self) -> int:
        return max(self.max_stops - len(self._stops), 0)

    @property
    def depot(self) -> Stop | None:
        for stop in self._stops:
            if stop.is_depot:
                return stop
        return self._stops[0] if self._stops else None

    def get(self, stop_id: str) -> Stop | None:
        for stop in self._stops:
            if stop.id == stop_id:
                return stop
        return None

    def add_at(self, coordinates: Coordinates) -> Stop:
        if len(self._stops) >= self.max_stops:
            raise StopLimitReachedError(messages.STOP_LIMIT_REACHED.format(limit=self.max_stops))

        is_first = not self._stops
        if is_first:
            stop = Stop(
                id=generate_stop_id(),
                name=messages.DEPOT_LABEL,
                coordinates=coordinates,
                is_depot=True,
                zone=messages.DEPOT_ZONE,
            )
        else:
            non_depot_count = sum(1 for item in self._stops if not item.is_depot)
            stop = Stop(
                id=generate_stop_id(),
                name=auto_label(non_depot_count),
                coordinates=coordinates,
                is_depot=False,
                zone=messages.DEFAULT_ZONE,
            )
        self._stops.append(stop)
        self.selected_id = stop.id
        return stop

    def add_batch(self, stops: Sequence[Stop]) -> list[Stop]:
        """Append imported stops in one step, truncated to the remaining capacity.

        The depot flag is decided against the registry as it is now, so a batch
        only supplies the depot when the registry is empty.
        """
        accepted = list(stops[: self.remaining_capacity])
        if len(accepted) < len(stops):
            logger.warning(
                f"Stop limit {self.max_stops} reached; dropped {len(stops) - len(accepted)} imported stop(s)"
            )
        if not accepted:
            return []

        registry_was_empty = not self._stops
        for index, stop in enumerate(accepted):
            stop.is_depot = registry_was_empty and index == 0
            if stop.is_depot:
                stop.name = messages.DEPOT_LABEL
        self._stops.extend(accepted)
        return accepted

    def remove(self, stop_id: str) -> Stop:
        removed = self.get(stop_id)
        if removed is None:
            raise StopNotFoundError(messages.STOP_NOT_FOUND.format(stop_id=stop_id))

        self._stops = [stop for stop in self._stops if stop.id != stop_id]
        if removed.is_depot:
            self._ensure_depot()
        self._renumber()
        if self.selected_id == stop_id:
            self.selected_id = None
        return removed

    def select(self, stop_id: str | None) -> None:
        if stop_id is not None and self.get(stop_id) is None:
            raise StopNotFoundError(messages.STOP_NOT_FOUND.format(stop_id=stop_id))
        self.selected_id = stop_id

    def clear(self) -> None:
        self._stops = []
        self.selected_id = None

    def _ensure_depot(self) -> None:
        if not self._stops:
            return
        first = self._stops[0]
        for stop in self._stops[1:]:
            stop.is_depot = False
        if not first.is_depot:
            first.is_depot = True
            first.name = messages.DEPOT_LABEL

    def _renumber(self) -> None:
        position = 0
        for stop in self._stops:
            if stop.is_depot:
                continue
            if is_auto_label(stop.name):
                stop.name = auto_label(position)
            position += 1
