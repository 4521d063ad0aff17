"""Classification profile returned by the enrichment pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, model_validator

from netsentry._constants import FALLBACK_DEVICE_TYPE, FALLBACK_MANUFACTURER, FALLBACK_USAGE_NOTE
from netsentry.models._base import SentryBaseModel
from netsentry.models.device import RiskLevel


class DeviceProfile(SentryBaseModel):
    """Best-effort hypothesis about what a hardware identifier belongs to.

    The generative backend answers with ``securityRisk`` (free text such as
    ``"Medium - default credentials common"``) and ``likelyUsage``; both are
    accepted alongside the canonical ``riskLevel``/``usageNote`` keys.
    """

    manufacturer: str = FALLBACK_MANUFACTURER
    device_type: str = FALLBACK_DEVICE_TYPE
    risk_level: RiskLevel = RiskLevel.LOW
    usage_note: str = Field(
        default=FALLBACK_USAGE_NOTE,
        validation_alias=AliasChoices("usage_note", "usageNote", "likelyUsage"),
    )

    @model_validator(mode="before")
    @classmethod
    def _map_security_risk(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        assessment = None
        for key in ("risk_level", "riskLevel", "securityRisk"):
            if key in merged:
                value = merged.pop(key)
                if assessment is None:
                    assessment = value
        if assessment is not None:
            merged["risk_level"] = (
                assessment if isinstance(assessment, RiskLevel) else RiskLevel.from_assessment(str(assessment))
            )
        return merged

    @classmethod
    def fallback(cls) -> DeviceProfile:
        """The profile used whenever classification cannot be completed."""
        return cls(
            manufacturer=FALLBACK_MANUFACTURER,
            device_type=FALLBACK_DEVICE_TYPE,
            risk_level=RiskLevel.LOW,
            usage_note=FALLBACK_USAGE_NOTE,
        )

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.device_type}"
