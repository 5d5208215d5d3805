# src/pricing/config.py
"""
Pricing configuration.

Every rate table the premium calculator reads, kept in one frozen object:
- base rate per coverage type (fraction of sum insured)
- vehicle type multipliers
- new-import surcharge, age bands, license inexperience penalty
- claims loading per previous claim
- no-claim discount tiers and the own-damage share they apply to
- payment period multipliers, annual prompt-pay discount, minimum premium

Tables are static. Missing keys fall back to the default entries, so an
UNSET category always lands on a defined rate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from src.pricing.enums import CoverageType, PaymentPeriod, VehicleType


def _base_rates() -> Dict[CoverageType, float]:
    return {
        CoverageType.THIRD_PARTY_ONLY: 0.02,
        CoverageType.THIRD_PARTY_FIRE_THEFT: 0.03,
        CoverageType.COMPREHENSIVE: 0.05,
    }


def _vehicle_multipliers() -> Dict[VehicleType, float]:
    return {
        VehicleType.COMMERCIAL: 1.5,
        VehicleType.TAXI: 2.5,
        VehicleType.PERSONAL: 1.1,
    }


def _period_multipliers() -> Dict[PaymentPeriod, float]:
    return {
        PaymentPeriod.QUARTERLY: 0.25,
        PaymentPeriod.SEMI_ANNUAL: 0.5,
        PaymentPeriod.THREE_QUARTERS: 0.75,
        PaymentPeriod.ANNUAL: 1.0,
    }


@dataclass(frozen=True)
class PricingConfig:
    # Base premium = sum_insured * rate
    base_rates: Dict[CoverageType, float] = field(default_factory=_base_rates)
    default_base_rate: float = 0.03

    vehicle_multipliers: Dict[VehicleType, float] = field(default_factory=_vehicle_multipliers)

    # Temporary cover for vehicles not yet locally registered
    new_import_surcharge: float = 1.2

    # (upper bound exclusive, multiplier), checked in order
    young_age_bands: Tuple[Tuple[int, float], ...] = ((21, 1.8), (25, 1.4))
    senior_age: int = 65
    senior_multiplier: float = 1.2

    min_license_years: int = 2
    inexperience_multiplier: float = 1.5

    loading_per_claim: float = 0.25

    # claim-free years -> discount; years beyond the last tier get max_ncd
    ncd_tiers: Tuple[float, ...] = (0.0, 0.15, 0.25, 0.40, 0.60)
    max_ncd: float = 0.65
    own_damage_share: float = 0.7

    period_multipliers: Dict[PaymentPeriod, float] = field(default_factory=_period_multipliers)
    annual_prompt_pay_discount: float = 0.02

    # Floor is scaled by the period multiplier
    min_annual_premium: float = 125.0
