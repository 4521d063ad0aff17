"""Natural-language fleet status line."""

from __future__ import annotations

import logging

from netsentry._constants import SUMMARY_EMPTY, SUMMARY_FALLBACK, SUMMARY_NO_API_KEY
from netsentry.enrichment._transport import Transport
from netsentry.enrichment.prompts import summary_prompt
from netsentry.exceptions import DeviceInvariantError

_logger = logging.getLogger(__name__)


def _check_counts(total: int, at_risk: int) -> None:
    if total < 0:
        raise DeviceInvariantError(f"total must not be negative, got {total}")
    if at_risk < 0:
        raise DeviceInvariantError(f"at_risk must not be negative, got {at_risk}")
    if at_risk > total:
        raise DeviceInvariantError(f"at_risk ({at_risk}) exceeds total ({total})")


class FleetSummarizer:
    """Produces a two-sentence status summary from aggregate counts.

    Invalid counts are rejected with :class:`DeviceInvariantError`; backend
    failures return ``"System analysis unavailable."``.
    """

    def __init__(self, transport: Transport | None) -> None:
        self._transport = transport

    async def summarize(self, total: int, at_risk: int) -> str:
        _check_counts(total, at_risk)
        if self._transport is None:
            return SUMMARY_NO_API_KEY
        try:
            text = await self._transport.generate(summary_prompt(total, at_risk))
        except Exception:
            _logger.warning("Fleet summary failed; using fallback text", exc_info=True)
            return SUMMARY_FALLBACK
        return text.strip() or SUMMARY_EMPTY
