"""Order import pipeline: free text to stops via extraction then geocoding."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

from ... import messages
from ...config import settings
from ...errors import GeminiError, GeocodingError, ImportFailedError
from ...models.domain import Coordinates, ExtractedOrder, ImportOutcome, Stop
from ...schemas.state import ExtractedOrderModel
from ..ai.gemini_client import GeminiClient
from ..ai.prompts import ORDER_EXTRACTION_SCHEMA, build_order_extraction_prompt
from ..geocoding.nominatim_client import NominatimClient
from ..geospatial import jittered_point
from ..stops.registry import generate_stop_id

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]
Sleeper = Callable[[float], Awaitable[None]]


async def extract_orders(client: GeminiClient, raw_text: str) -> list[ExtractedOrder]:
    """Ask the text-extraction model for the orders contained in ``raw_text``."""
    try:
        payload = await client.generate_json(build_order_extraction_prompt(raw_text), ORDER_EXTRACTION_SCHEMA)
    except GeminiError as exc:
        raise ImportFailedError(messages.IMPORT_FAILED.format(reason=str(exc))) from exc

    if not isinstance(payload, list):
        raise ImportFailedError(messages.IMPORT_FAILED.format(reason="unexpected extraction response"))

    orders: list[ExtractedOrder] = []
    for index, item in enumerate(payload):
        try:
            model = ExtractedOrderModel.model_validate(item)
        except ValidationError as exc:
            logger.warning(f"Skipping extracted order #{index + 1}: {exc.error_count()} validation error(s)")
            continue
        orders.append(
            ExtractedOrder(
                customer_name=model.customerName.strip(),
                address=model.address.strip(),
                zone=model.zone.strip() or "General",
                phone_number=model.phoneNumber or None,
            )
        )

    if not orders:
        raise ImportFailedError(messages.IMPORT_FAILED.format(reason=messages.NO_ORDERS_FOUND))
    return orders


class OrderImportPipeline:
    """Resolves extracted orders one at a time, with a fixed pause between geocoding calls.

    Each order yields an ``ImportOutcome``: a geocoded stop, or a placeholder
    near the reference point when the address could not be resolved. Only a
    failure of the extraction step aborts the batch.
    """

    def __init__(
        self,
        gemini: GeminiClient | None = None,
        geocoder: NominatimClient | None = None,
        delay_seconds: float | None = None,
        reference: Coordinates | None = None,
        jitter_degrees: float | None = None,
        rng: random.Random | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.gemini = gemini
        self.geocoder = geocoder or NominatimClient()
        self.delay_seconds = delay_seconds if delay_seconds is not None else settings.geocode_delay_seconds
        self.reference = reference or Coordinates(lat=settings.fallback_latitude, lng=settings.fallback_longitude)
        self.jitter_degrees = jitter_degrees if jitter_degrees is not None else settings.fallback_jitter_degrees
        self.rng = rng
        self._sleep = sleep

    def _gemini(self) -> GeminiClient:
        if self.gemini is None:
            try:
                self.gemini = GeminiClient()
            except ValueError as exc:
                raise ImportFailedError(messages.IMPORT_FAILED.format(reason=str(exc))) from exc
        return self.gemini

    async def run(self, raw_text: str, on_status: Optional[StatusCallback] = None) -> list[ImportOutcome]:
        notify = on_status or (lambda _message: None)

        notify(messages.IMPORT_STATUS_PARSING)
        orders = await extract_orders(self._gemini(), raw_text)
        logger.info(f"Extracted {len(orders)} order(s) from pasted text")

        notify(messages.IMPORT_STATUS_GEOCODING.format(count=len(orders)))
        outcomes: list[ImportOutcome] = []
        for index, order in enumerate(orders):
            notify(messages.IMPORT_STATUS_PROGRESS.format(index=index + 1, count=len(orders)))
            outcomes.append(await self.resolve_order(index, order))
            if index < len(orders) - 1 and self.delay_seconds > 0:
                await self._sleep(self.delay_seconds)

        unresolved = sum(1 for outcome in outcomes if not outcome.resolved)
        if unresolved:
            logger.warning(f"{unresolved}/{len(outcomes)} imported address(es) could not be resolved")
        return outcomes

    async def resolve_order(self, index: int, order: ExtractedOrder) -> ImportOutcome:
        error: str | None = None
        matches: list[Coordinates] = []
        try:
            matches = await self.geocoder.search(order.address, limit=1)
        except GeocodingError as exc:
            error = str(exc)
            logger.warning(f"Geocoding failed for '{order.address}': {exc}")

        if matches:
            stop = Stop(
                id=generate_stop_id(),
                name=order.customer_name or f"{messages.IMPORTED_STOP_LABEL_PREFIX} {index + 1}",
                coordinates=matches[0],
                address=order.address,
                customer_name=order.customer_name or None,
                phone_number=order.phone_number,
                zone=order.zone,
            )
            return ImportOutcome(order=order, stop=stop, resolved=True)

        if error is None:
            error = "address not found"
            logger.warning(f"No geocoding match for '{order.address}'")
        stop = Stop(
            id=generate_stop_id(),
            name=f"{order.customer_name or messages.UNKNOWN_CUSTOMER} {messages.UNRESOLVED_SUFFIX}",
            coordinates=jittered_point(self.reference, self.jitter_degrees, self.rng),
            address=order.address,
            customer_name=order.customer_name or None,
            phone_number=order.phone_number,
            zone=messages.UNRESOLVED_ZONE,
        )
        return ImportOutcome(order=order, stop=stop, resolved=False, error=error)
