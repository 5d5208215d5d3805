# src/pricing/enums.py
"""
Categorical inputs of a quote request.

Every enum carries an explicit UNSET member (value "") so the rate tables
stay exhaustive. Unknown values resolve to UNSET instead of raising.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class _Choice(str, Enum):
    @classmethod
    def _missing_(cls, value: Any):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        return cls("")

    @classmethod
    def parse(cls, value: Any):
        if isinstance(value, cls):
            return value
        if value is None:
            return cls("")
        return cls(value if isinstance(value, str) else str(value))

    def __str__(self):
        return self.value


class VehicleType(_Choice):
    PERSONAL = "personal"
    COMMERCIAL = "commercial"
    TAXI = "taxi"
    UNSET = ""


class CoverageType(_Choice):
    THIRD_PARTY_ONLY = "third-party-only"
    THIRD_PARTY_FIRE_THEFT = "third-party-fire-theft"
    COMPREHENSIVE = "comprehensive"
    UNSET = ""


class PaymentPeriod(_Choice):
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    THREE_QUARTERS = "three-quarters"
    ANNUAL = "annual"
    UNSET = ""


class ClaimsAnswer(_Choice):
    YES = "yes"
    NO = "no"
    UNSET = ""
