"""HTTP transport for the generative text backend."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from netsentry._redact import redact_for_log, redact_url
from netsentry.config import SentryConfig
from netsentry.exceptions import SentryApiError, SentryConfigError, SentryTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the classifier and summarizer.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`GenerativeTransport`) concrete.
    """

    async def generate(self, prompt: str, *, response_schema: Mapping[str, Any] | None = None) -> str:
        ...


def _extract_text(body: Mapping[str, Any], endpoint: str) -> str:
    """Concatenate the text parts of the first candidate."""
    feedback = body.get("promptFeedback")
    if isinstance(feedback, Mapping) and feedback.get("blockReason"):
        raise SentryApiError(
            f"Prompt blocked: {feedback.get('blockReason')}",
            code=str(feedback.get("blockReason")),
            endpoint=endpoint,
        )

    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    content = candidates[0].get("content") if isinstance(candidates[0], Mapping) else None
    parts = content.get("parts") if isinstance(content, Mapping) else None
    if not isinstance(parts, list):
        return ""
    return "".join(str(part.get("text", "")) for part in parts if isinstance(part, Mapping))


class GenerativeTransport:
    """Sends ``generateContent`` requests with aiohttp.

    Each call is attempted once and bounded by ``config.request_timeout``.
    """

    def __init__(self, config: SentryConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    @property
    def endpoint(self) -> str:
        return f"/v1beta/models/{self._config.model}:generateContent"

    async def generate(self, prompt: str, *, response_schema: Mapping[str, Any] | None = None) -> str:
        """Run *prompt* through the model and return the response text.

        With *response_schema* the model is asked for JSON matching it; the
        returned text is then a JSON document (not parsed here).
        """
        if not self._config.api_key:
            raise SentryConfigError("API key not configured")

        endpoint = self.endpoint
        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        payload: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if response_schema is not None:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": dict(response_schema),
            }
        headers = {
            "content-type": "application/json",
            "x-goog-api-key": self._config.api_key,
        }

        _logger.debug("POST %s", redact_url(url))
        if self._config.api_trace_enabled:
            _logger.debug("Request headers=%s body=%s", redact_for_log(headers), redact_for_log(payload))

        try:
            async with self._http.post(url, json=payload, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise SentryTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except SentryTransportError:
            raise
        except TimeoutError as exc:
            raise SentryTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise SentryTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SentryTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise SentryTransportError(f"Unexpected response shape from {endpoint}", endpoint=endpoint)

        if self._config.api_trace_enabled:
            _logger.debug("Response body=%s", redact_for_log(body))

        return _extract_text(body, endpoint)
