"""File-backed storage for the planner's stop list and last route result."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from ..config import settings
from ..models.domain import RouteResult, Stop
from ..services.outputs.formatter import state_from_model, state_to_model
from ..schemas.state import PersistedStateModel

logger = logging.getLogger(__name__)


class StateStore:
    """Mirrors the in-memory state to one JSON record under a fixed key.

    The record is a cache: reads fall back to empty defaults and writes never
    raise.
    """

    def __init__(self, root: Path | None = None, key: str | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.key = key or settings.storage_key

    @property
    def path(self) -> Path:
        return self.root / f"{self.key}.json"

    def load(self) -> tuple[list[Stop], RouteResult | None]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return [], None
        except OSError as exc:
            logger.warning(f"Failed to read persisted state from {self.path}: {exc}")
            return [], None

        try:
            model = PersistedStateModel.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring unreadable persisted state in {self.path}: {exc.error_count()} error(s)")
            return [], None
        return state_from_model(model)

    def save(self, stops: Sequence[Stop], route: RouteResult | None) -> None:
        try:
            payload = state_to_model(stops, route).model_dump(mode="json")
        except ValidationError as exc:
            logger.error(f"Refusing to save invalid state to {self.path}: {exc.error_count()} error(s)")
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False)
        except OSError as exc:
            logger.error(f"Failed to save state to {self.path}: {exc}")

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error(f"Failed to remove persisted state {self.path}: {exc}")
