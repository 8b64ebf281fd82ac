"""Order import request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .state import StopModel


class ImportRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Raw pasted text containing one or more orders.")


class ImportOutcomeModel(BaseModel):
    stop: StopModel
    resolved: bool
    error: Optional[str] = None


class ImportResponse(BaseModel):
    imported: int
    resolved: int
    unresolved: int
    dropped: int
    outcomes: List[ImportOutcomeModel]


class ImportStatusResponse(BaseModel):
    state: str
    status: Optional[str] = None
