"""Shared planner state mutated by the dispatcher's actions.

The session owns the stop registry, the current route result, the vehicle
selection, the error banner and one state machine per long-running flow. Every
mutation is mirrored to the state store.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

from .. import messages
from ..errors import (
    ConfirmationRequiredError,
    FlowBusyError,
    ImportFailedError,
    NotEnoughStopsError,
    OptimizationError,
    StopLimitReachedError,
)
from ..models.domain import Coordinates, ImportReport, RouteResult, Stop, VehicleType
from ..persistence.state_store import StateStore
from .imports.service import OrderImportPipeline
from .routing.service import RouteOptimizer
from .stops.registry import StopRegistry

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class FlowGuard:
    """One-at-a-time guard for a flow, with the status line shown while it runs."""

    def __init__(self, busy_message: str) -> None:
        self.busy_message = busy_message
        self.state = FlowState.IDLE
        self.status: str | None = None

    @property
    def running(self) -> bool:
        return self.state is FlowState.RUNNING

    def start(self, status: str | None = None) -> None:
        if self.running:
            raise FlowBusyError(self.busy_message)
        self.state = FlowState.RUNNING
        self.status = status

    def update(self, status: str) -> None:
        self.status = status

    def finish(self) -> None:
        self.state = FlowState.DONE
        self.status = None


class PlannerSession:
    def __init__(
        self,
        store: StateStore | None = None,
        optimizer: RouteOptimizer | None = None,
        importer: OrderImportPipeline | None = None,
        restore: bool = True,
    ) -> None:
        self.store = store or StateStore()
        self._optimizer = optimizer
        self._importer = importer

        stops, route = self.store.load() if restore else ([], None)
        self.registry = StopRegistry(stops)
        self.route: RouteResult | None = route
        self.vehicle_type = VehicleType.PICKUP_CLOSED
        self.error: str | None = None
        self.calculation = FlowGuard(messages.CALCULATION_BUSY)
        self.importing = FlowGuard(messages.IMPORT_BUSY)
        # bumped on every stop-set change so in-flight results can detect staleness
        self._revision = 0

    @property
    def optimizer(self) -> RouteOptimizer:
        if self._optimizer is None:
            self._optimizer = RouteOptimizer()
        return self._optimizer

    @property
    def importer(self) -> OrderImportPipeline:
        if self._importer is None:
            self._importer = OrderImportPipeline()
        return self._importer

    @property
    def stops(self) -> list[Stop]:
        return self.registry.stops

    @property
    def selected_id(self) -> str | None:
        return self.registry.selected_id

    @property
    def is_calculating(self) -> bool:
        return self.calculation.running

    @property
    def importing_status(self) -> str | None:
        return self.importing.status if self.importing.running else None

    def _persist(self) -> None:
        self.store.save(self.registry.stops, self.route)

    def _stops_changed(self) -> None:
        self._revision += 1
        self.route = None
        self._persist()

    def add_stop(self, coordinates: Coordinates) -> Stop:
        try:
            stop = self.registry.add_at(coordinates)
        except StopLimitReachedError as exc:
            self.error = str(exc)
            raise
        self.error = None
        self._stops_changed()
        return stop

    def remove_stop(self, stop_id: str) -> Stop:
        removed = self.registry.remove(stop_id)
        self._stops_changed()
        return removed

    def select_stop(self, stop_id: str | None) -> None:
        self.registry.select(stop_id)

    def reset(self, confirm: bool) -> None:
        if not confirm:
            raise ConfirmationRequiredError(messages.RESET_CONFIRMATION)
        self.registry.clear()
        self.route = None
        self.error = None
        self._revision += 1
        self.store.clear()
        logger.info("Planner state reset")

    def set_vehicle(self, vehicle_type: VehicleType) -> None:
        self.vehicle_type = vehicle_type

    def dismiss_error(self) -> None:
        self.error = None

    async def calculate_route(self, vehicle_type: VehicleType | None = None) -> RouteResult | None:
        """Plan the route for the current stops; returns None when not attempted.

        On failure the previous route is kept and the error banner is set.
        """
        if len(self.registry) < 2:
            return None
        if vehicle_type is not None:
            self.vehicle_type = vehicle_type

        self.calculation.start()
        self.error = None
        revision = self._revision
        try:
            result = await self.optimizer.optimize(self.registry.stops, self.vehicle_type)
        except NotEnoughStopsError:
            return None
        except OptimizationError as exc:
            logger.warning(f"Route optimization failed: {exc}")
            self.error = str(exc)
            raise
        finally:
            self.calculation.finish()

        if revision != self._revision:
            logger.info("Discarding route computed for a stop set that has since changed")
            return None
        self.route = result
        self._persist()
        return result

    async def import_orders(self, raw_text: str) -> ImportReport:
        self.importing.start(messages.IMPORT_STATUS_PARSING)
        try:
            outcomes = await self.importer.run(raw_text, on_status=self.importing.update)
        except ImportFailedError as exc:
            logger.warning(f"Order import failed: {exc}")
            self.error = str(exc)
            raise
        finally:
            self.importing.finish()

        # appended to the registry as it is now, not as it was when the import began
        accepted = self.registry.add_batch([outcome.stop for outcome in outcomes])
        accepted_ids = {stop.id for stop in accepted}
        report = ImportReport(
            outcomes=[outcome for outcome in outcomes if outcome.stop.id in accepted_ids],
            dropped=len(outcomes) - len(accepted),
        )
        if accepted:
            self._stops_changed()
        if report.dropped:
            self.error = messages.STOP_LIMIT_REACHED.format(limit=self.registry.max_stops)
        logger.info(
            f"Imported {len(accepted)} stop(s): {report.resolved_count} resolved, "
            f"{report.unresolved_count} unresolved, {report.dropped} dropped"
        )
        return report


@lru_cache()
def get_session() -> PlannerSession:
    """Process-wide session restored from storage on first use."""
    return PlannerSession()
