"""Exception hierarchy shared by the planner services and API routes."""

from __future__ import annotations


class SmartRouteError(Exception):
    """Base error; ``str(error)`` is safe to show to the dispatcher."""


class StopLimitReachedError(SmartRouteError):
    pass


class StopNotFoundError(SmartRouteError):
    pass


class NotEnoughStopsError(SmartRouteError):
    pass


class ConfirmationRequiredError(SmartRouteError):
    pass


class FlowBusyError(SmartRouteError):
    """Raised when a flow is started while the same flow is still running."""


class ImportFailedError(SmartRouteError):
    pass


class OptimizationError(SmartRouteError):
    pass


class ExternalServiceError(SmartRouteError):
    """A call to an external collaborator failed or returned unusable data."""


class GeminiError(ExternalServiceError):
    pass


class GeocodingError(ExternalServiceError):
    pass


class RoadRoutingError(ExternalServiceError):
    pass
