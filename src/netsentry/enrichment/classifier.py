"""Device classification through the generative backend."""

from __future__ import annotations

import json
import logging

from netsentry.enrichment._transport import Transport
from netsentry.enrichment.prompts import CLASSIFY_RESPONSE_SCHEMA, classify_prompt
from netsentry.exceptions import SentryApiError
from netsentry.models.profile import DeviceProfile

_logger = logging.getLogger(__name__)


class DeviceClassifier:
    """Turns an opaque hardware identifier into a :class:`DeviceProfile`.

    The identifier is not validated; malformed input goes to the backend,
    which is asked for a best-effort hypothesis.  Any failure (no
    transport, network, HTTP status, empty or unparseable answer) yields
    :meth:`DeviceProfile.fallback`.  One attempt per call, no retries.
    """

    def __init__(self, transport: Transport | None) -> None:
        self._transport = transport

    async def classify(self, identifier: str) -> DeviceProfile:
        if self._transport is None:
            _logger.warning("No classification backend configured; using fallback profile for %s", identifier)
            return DeviceProfile.fallback()
        try:
            text = await self._transport.generate(
                classify_prompt(identifier),
                response_schema=CLASSIFY_RESPONSE_SCHEMA,
            )
            if not text.strip():
                raise SentryApiError("Empty classification response")
            payload = json.loads(text)
            if not isinstance(payload, dict):
                raise SentryApiError(f"Classification response is not an object: {text[:64]}")
            profile = DeviceProfile.model_validate(payload)
        except Exception:
            _logger.warning("Classification failed for %s; using fallback profile", identifier, exc_info=True)
            return DeviceProfile.fallback()
        _logger.debug("Classified %s as %s (%s)", identifier, profile.display_name, profile.risk_level)
        return profile
