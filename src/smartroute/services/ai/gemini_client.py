"""HTTP client for the Gemini ``generateContent`` endpoint in JSON response mode."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ...config import settings
from ...errors import GeminiError

logger = logging.getLogger(__name__)


class GeminiClient:
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.gemini_api_key
        if not self.api_key:
            raise ValueError("Gemini API key is not configured.")
        self.model = model or settings.gemini_model
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    async def generate_json(self, prompt: str, response_schema: dict) -> Any:
        """Send ``prompt`` and return the parsed JSON document the model produced."""
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }
        headers = {"x-goog-api-key": self.api_key}

        async with self._get_client() as client:
            try:
                response = await client.post(url, json=body, headers=headers)
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as exc:
                raise GeminiError(
                    f"Gemini request failed with HTTP {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                raise GeminiError(f"Failed to reach Gemini service: {exc}") from exc
            except ValueError as exc:
                raise GeminiError("Gemini returned a non-JSON response.") from exc

        text = _extract_text(payload)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning(f"Gemini produced invalid JSON ({len(text)} chars)")
            raise GeminiError("Gemini produced invalid JSON.") from exc


def _extract_text(payload: Any) -> str:
    try:
        candidates = payload.get("candidates") or []
        if not candidates:
            feedback = (payload.get("promptFeedback") or {}).get("blockReason")
            raise GeminiError(f"Gemini returned no candidates{f' ({feedback})' if feedback else ''}.")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text") or "" for part in parts)
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        raise GeminiError("Unexpected Gemini response shape.") from exc
    if not text.strip():
        raise GeminiError("Gemini returned an empty response.")
    return text
