# src/pricing/quote.py
"""
Premium calculation.

Provides:
- parse_int: text -> number coercion used for every numeric field
- one function per rating rule (base rate, vehicle type, age band, ...)
- calculate_premium: the ordered rule sequence producing a Quote

Notes:
- The calculator is total: malformed numbers degrade to 0 and unknown
  categories to UNSET, it never raises.
- Rules are multiplicative and applied in a fixed order; later steps
  compound on earlier ones.
"""

from __future__ import annotations

import math
import re
from typing import Any, List, Optional, Union

import numpy as np

from src.pricing.config import PricingConfig
from src.pricing.enums import ClaimsAnswer, CoverageType, PaymentPeriod, VehicleType
from src.pricing.schemas import Adjustment, Quote, QuoteRequest

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")

# Digit runs longer than this are read as floats, +/-inf past the float range.
_MAX_EXACT_DIGITS = 15


def _to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_int(value: Any) -> Union[int, float]:
    """
    Parse the leading integer of a text field, 0 when there is none.

    Mirrors what a browser form does with the same text:
      "100000"    -> 100000
      " 42abc"    -> 42
      "1500.75"   -> 1500
      "", "abc"   -> 0
      "١٠٠"       -> 0 (only ASCII digits count)
    Very long digit runs come back as a float, inf past the float range.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, np.integer)):
        value = int(value)
        if abs(value) < 10 ** _MAX_EXACT_DIGITS:
            return value
        return _to_float(value)
    if isinstance(value, (float, np.floating)):
        return int(value) if np.isfinite(value) else 0
    m = _LEADING_INT.match(str(value))
    if not m:
        return 0
    digits = m.group(1)
    if len(digits.lstrip("+-")) <= _MAX_EXACT_DIGITS:
        return int(digits)
    return float(digits)


def base_rate(coverage: CoverageType, cfg: PricingConfig) -> float:
    return cfg.base_rates.get(coverage, cfg.default_base_rate)


def vehicle_type_multiplier(vehicle_type: VehicleType, cfg: PricingConfig) -> float:
    return cfg.vehicle_multipliers.get(vehicle_type, 1.0)


def age_band_multiplier(age: int, cfg: PricingConfig) -> float:
    """
    Bands are exclusive and checked youngest first.
    An age of 0 (missing or unparsable) is not rated.
    """
    if age <= 0:
        return 1.0
    for upper, multiplier in cfg.young_age_bands:
        if age < upper:
            return multiplier
    if age > cfg.senior_age:
        return cfg.senior_multiplier
    return 1.0


def license_multiplier(license_years: int, cfg: PricingConfig) -> float:
    if license_years < cfg.min_license_years:
        return cfg.inexperience_multiplier
    return 1.0


def claims_loading(previous_claims: Any, cfg: PricingConfig) -> float:
    """
    Loading for an owner who answered "yes" to previous claims.

    A count that is missing or parses to 0 still counts as one claim.
    """
    count = parse_int(previous_claims) or 1
    return 1.0 + count * cfg.loading_per_claim


def no_claim_discount(claim_free_years: int, cfg: PricingConfig) -> float:
    if claim_free_years <= 0:
        return 0.0
    if claim_free_years < len(cfg.ncd_tiers):
        return cfg.ncd_tiers[claim_free_years]
    return cfg.max_ncd


def ncd_applies(coverage: CoverageType, claims: ClaimsAnswer) -> bool:
    return coverage is CoverageType.COMPREHENSIVE and claims is ClaimsAnswer.NO


def period_multiplier(period: PaymentPeriod, cfg: PricingConfig) -> float:
    return cfg.period_multipliers.get(period, 1.0)


def calculate_premium(
    request: QuoteRequest,
    cfg: Optional[PricingConfig] = None,
) -> Quote:
    """
    Price a quote request.

    Order of application:
      base rate -> vehicle type -> new import -> age band -> license years
      -> claims loading -> no-claim discount -> payment period and floor
    """
    cfg = cfg or PricingConfig()

    sum_insured = parse_int(request.vehicle.sum_insured)
    if sum_insured == 0:
        return Quote(amount=0.0, period=PaymentPeriod.ANNUAL.value, admin_fee=0.0)

    coverage = CoverageType.parse(request.coverage.type)
    claims = ClaimsAnswer.parse(request.owner.claims)
    period = PaymentPeriod.parse(request.coverage.period)
    owner = request.owner
    adjustments: List[Adjustment] = []

    rate = base_rate(coverage, cfg)
    premium = sum_insured * rate
    adjustments.append(Adjustment("base_rate", rate))

    factor = vehicle_type_multiplier(VehicleType.parse(request.vehicle_type.type), cfg)
    if factor != 1.0:
        premium *= factor
        adjustments.append(Adjustment("vehicle_type", factor))

    if request.vehicle.is_new_import:
        premium *= cfg.new_import_surcharge
        adjustments.append(Adjustment("new_import", cfg.new_import_surcharge))

    factor = age_band_multiplier(parse_int(owner.age), cfg)
    if factor != 1.0:
        premium *= factor
        adjustments.append(Adjustment("owner_age", factor))

    # Stacks with the age band
    factor = license_multiplier(parse_int(owner.license_years), cfg)
    if factor != 1.0:
        premium *= factor
        adjustments.append(Adjustment("license_experience", factor))

    if claims is ClaimsAnswer.YES:
        factor = claims_loading(owner.previous_claims, cfg)
        premium *= factor
        adjustments.append(Adjustment("claims_history", factor))

    discount = 0.0
    if ncd_applies(coverage, claims):
        discount = no_claim_discount(parse_int(owner.claim_free_years), cfg)
        # Only the own-damage share is discounted
        own_damage = premium * cfg.own_damage_share
        third_party = premium * (1.0 - cfg.own_damage_share)
        premium = third_party + own_damage * (1.0 - discount)
        if discount:
            adjustments.append(
                Adjustment("no_claim_discount", 1.0 - cfg.own_damage_share * discount)
            )

    annual_premium = premium

    multiplier = period_multiplier(period, cfg)
    if period is PaymentPeriod.ANNUAL:
        final_premium = annual_premium * (1.0 - cfg.annual_prompt_pay_discount)
        adjustments.append(
            Adjustment("annual_prompt_pay", 1.0 - cfg.annual_prompt_pay_discount)
        )
    else:
        final_premium = annual_premium * multiplier
        if multiplier != 1.0:
            adjustments.append(Adjustment("payment_period", multiplier))

    floor = cfg.min_annual_premium * multiplier
    amount = float(max(floor, final_premium))

    return Quote(
        amount=amount,
        period=period.value,
        admin_fee=0.0,
        annual_equivalent=float(annual_premium),
        no_claim_discount=float(discount),
        period_multiplier=float(multiplier),
        minimum_premium=float(floor),
        adjustments=adjustments,
    )
