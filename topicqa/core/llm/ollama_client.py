from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class OllamaError(Exception):
    """Base error for inference failures (mapped to 500 with the message exposed)."""


class OllamaTransportError(OllamaError):
    """Raised when the server cannot be reached, the connection breaks, or the call times out."""


class OllamaResponseError(OllamaError):
    """Raised when the server answers with an error status or an unreadable body."""


@dataclass(frozen=True)
class OllamaConfig:
    base_url: str
    model: str
    timeout_seconds: float


class OllamaClient:
    """
    Thin client for Ollama's non-streaming `/api/generate` endpoint.

    One instance is shared by all requests. It keeps a single `httpx.AsyncClient`
    (connection pool) and no per-request state, so concurrent calls need no locking.
    """

    def __init__(self, *, config: OllamaConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def generate(self, *, prompt: str) -> str | None:
        """Return the full generated text, or None when the server sent none."""

        payload: dict[str, Any] = {
            "model": self._config.model,
            "prompt": prompt,
            "stream": False,
            "options": {},
        }

        try:
            resp = await self._http.post("api/generate", json=payload)
        except httpx.TimeoutException as exc:
            raise OllamaTransportError(
                f"Inference request timed out after {self._config.timeout_seconds:g} seconds"
            ) from exc
        except httpx.HTTPError as exc:
            raise OllamaTransportError(f"Inference request failed: {exc}") from exc

        if resp.status_code != 200:
            raise OllamaResponseError(
                f"Inference server returned HTTP {resp.status_code}: {_error_detail(resp)}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise OllamaResponseError("Inference server returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise OllamaResponseError("Inference server response must be a JSON object")

        text = data.get("response")
        if text is not None and not isinstance(text, str):
            raise OllamaResponseError("Inference server response text must be a string")
        return text

    async def aclose(self) -> None:
        await self._http.aclose()


def _error_detail(resp: httpx.Response) -> str:
    # Ollama reports failures as {"error": "..."}; fall back to the raw body.
    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip() or resp.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return resp.text.strip() or resp.reason_phrase
