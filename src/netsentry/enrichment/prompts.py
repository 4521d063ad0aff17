"""Prompt text and response schemas for the generative backend."""

from __future__ import annotations

from typing import Any

CLASSIFY_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "manufacturer": {"type": "STRING", "description": "The likely manufacturer of the device"},
        "deviceType": {
            "type": "STRING",
            "description": "Typical device type (e.g., Smartphone, IoT Camera, Laptop)",
        },
        "securityRisk": {"type": "STRING", "description": "Risk level (Low, Medium, High) and brief reason"},
        "likelyUsage": {
            "type": "STRING",
            "description": "Common context for this device (e.g., Personal use, Industrial automation)",
        },
    },
    "required": ["manufacturer", "deviceType", "securityRisk", "likelyUsage"],
}


def classify_prompt(identifier: str) -> str:
    return (
        f"Analyze this MAC Address (OUI): {identifier}.\n"
        "Provide the most likely manufacturer, the typical device type associated with this "
        "manufacturer/range, a potential security risk assessment (Low/Medium/High) with a brief "
        "reason, and its likely usage context.\n"
        "If the MAC is a placeholder or invalid, provide a realistic hypothesis based on standard formats."
    )


def summary_prompt(total: int, at_risk: int) -> str:
    return (
        "Generate a short, professional, executive summary (2 sentences) for a network security "
        f"dashboard. There are {total} active tracked devices and {at_risk} potential high-risk "
        "anomalies detected."
    )
