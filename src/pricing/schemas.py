# src/pricing/schemas.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from src.pricing.enums import ClaimsAnswer, CoverageType, PaymentPeriod, VehicleType


@dataclass(frozen=True)
class VehicleTypeSelection:
    type: VehicleType = VehicleType.UNSET


@dataclass(frozen=True)
class VehicleDetails:
    make: str = ""
    model: str = ""
    year: str = ""
    chassis_number: str = ""
    plate_number: str = ""
    engine_number: str = ""
    # Numeric fields stay as the text the wizard collected
    sum_insured: str = ""
    is_new_import: bool = False


@dataclass(frozen=True)
class OwnerDetails:
    age: str = ""
    license_years: str = ""
    claims: ClaimsAnswer = ClaimsAnswer.NO
    claim_free_years: str = "0"
    previous_claims: str = "0"


@dataclass(frozen=True)
class CoverageSelection:
    type: CoverageType = CoverageType.UNSET
    period: PaymentPeriod = PaymentPeriod.UNSET


@dataclass(frozen=True)
class QuoteRequest:
    """
    A finalized wizard submission.

    Defaults mirror the wizard's initial state, so QuoteRequest() is the
    empty form (and quotes to zero).
    """

    vehicle_type: VehicleTypeSelection = field(default_factory=VehicleTypeSelection)
    vehicle: VehicleDetails = field(default_factory=VehicleDetails)
    owner: OwnerDetails = field(default_factory=OwnerDetails)
    coverage: CoverageSelection = field(default_factory=CoverageSelection)


@dataclass(frozen=True)
class Adjustment:
    name: str
    factor: float


@dataclass(frozen=True)
class Quote:
    amount: float
    period: str
    admin_fee: float = 0.0
    # Annual premium before proration and before the annual prompt-pay discount
    annual_equivalent: Optional[float] = None
    no_claim_discount: float = 0.0
    period_multiplier: float = 1.0
    minimum_premium: float = 0.0
    adjustments: List[Adjustment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
