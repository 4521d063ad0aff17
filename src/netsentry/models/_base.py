"""Base model and enum for netsentry records.

Every record model inherits from :class:`SentryBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase keys (as sent by browsers
  and by the generative backend) map to snake_case fields.
* Frozen instances: a mutation is always a ``model_copy(update=...)``
  that yields a new record.
* A ``model_validator(mode="before")`` that drops blank placeholder
  values (``""``, ``"--"``, NaN) so the field default is used.

Enumerations inherit from :class:`SentryEnum` which matches values
case-insensitively and resolves unknown values to the class
``_FALLBACK`` member when one is declared.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Placeholder strings treated as "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan", "null", "None"})


class SentryEnum(StrEnum):
    """Base for string-valued enums.

    Subclasses may set ``_FALLBACK`` (via ``_missing_``) to name the member
    used for values with no mapping; without it, unknown values raise.
    """

    @classmethod
    def _fallback(cls) -> SentryEnum | None:
        return None

    @classmethod
    def _missing_(cls, value: object) -> SentryEnum | None:
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted or member.name.lower() == wanted:
                    return member
        return cls._fallback()


class SentryBaseModel(BaseModel):
    """Base for immutable netsentry records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        """Drop placeholder values from *values*."""
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_placeholders(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return SentryBaseModel._clean_dict(values)
