# src/pricing/quotation.py
"""
Quotation document.

Wraps a priced Quote with what the summary screen shows next to it:
quotation number, issue and validity dates, display labels, the
no-claim discount percentage and the standard notes.

Formatting (currency strings, rounding for display) is left to the caller.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from src.pricing.config import PricingConfig
from src.pricing.enums import ClaimsAnswer, CoverageType, PaymentPeriod, VehicleType
from src.pricing.quote import calculate_premium, no_claim_discount, parse_int
from src.pricing.schemas import Quote, QuoteRequest
from src.utils.config import QuoteSettings, get_quote_settings

PERIOD_LABELS = {
    PaymentPeriod.QUARTERLY: "Quarterly (3 months)",
    PaymentPeriod.SEMI_ANNUAL: "Semi-Annual (6 months)",
    PaymentPeriod.THREE_QUARTERS: "Three Quarters (9 months)",
    PaymentPeriod.ANNUAL: "Annual (12 months)",
}

COVERAGE_DESCRIPTIONS = {
    CoverageType.THIRD_PARTY_ONLY: (
        "Third Party Only - Covers third-party bodily injury and property damage only"
    ),
    CoverageType.THIRD_PARTY_FIRE_THEFT: (
        "Third Party Fire & Theft - Includes third-party coverage plus fire and theft protection"
    ),
    CoverageType.COMPREHENSIVE: (
        "Comprehensive - Complete protection including own vehicle damage, theft, fire, "
        "and third-party liability"
    ),
}


@dataclass(frozen=True)
class Quotation:
    quotation_number: str
    issue_date: date
    valid_until: date
    currency: str
    quote: Quote
    vehicle_type_label: str
    coverage_label: str
    coverage_description: str
    period_label: str
    no_claim_discount_percent: int
    show_annual_equivalent: bool
    temporary_cover: bool
    important_notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["issue_date"] = self.issue_date.isoformat()
        out["valid_until"] = self.valid_until.isoformat()
        return out


def quotation_number(now: datetime, prefix: str = "ZMI") -> str:
    """Prefix plus the last 8 digits of the millisecond timestamp."""
    millis = int(now.timestamp() * 1000)
    return f"{prefix}-{str(millis)[-8:]}"


def title_case(value: str) -> str:
    """'third-party-fire-theft' -> 'Third Party Fire Theft'"""
    words = value.replace("-", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


def period_label(period: Any) -> str:
    return PERIOD_LABELS.get(PaymentPeriod.parse(period), "Annual")


def coverage_description(coverage: Any) -> str:
    return COVERAGE_DESCRIPTIONS.get(CoverageType.parse(coverage), "")


def no_claim_discount_percent(request: QuoteRequest, cfg: Optional[PricingConfig] = None) -> int:
    """
    NCD as a whole percentage, for display.

    Shown for comprehensive cover unless the owner reported claims, so an
    unanswered claims question still displays the discount.
    """
    cfg = cfg or PricingConfig()
    coverage = CoverageType.parse(request.coverage.type)
    claims = ClaimsAnswer.parse(request.owner.claims)
    if coverage is not CoverageType.COMPREHENSIVE or claims is ClaimsAnswer.YES:
        return 0
    return int(round(no_claim_discount(parse_int(request.owner.claim_free_years), cfg) * 100))


def important_notes(request: QuoteRequest, settings: QuoteSettings) -> List[str]:
    notes = [
        f"This quotation is valid for {settings.validity_days} days from the date of issue",
        "Premium is subject to final underwriting approval",
        "Policy terms and conditions apply",
        f"All amounts are in {settings.currency}",
    ]
    if request.vehicle.is_new_import:
        notes.append("Vehicle must be registered with RTSA within 30 days")
    notes.append("Payment must be received before policy commencement")
    return notes


def build_quotation(
    request: QuoteRequest,
    now: Optional[datetime] = None,
    cfg: Optional[PricingConfig] = None,
    settings: Optional[QuoteSettings] = None,
) -> Quotation:
    """
    Price the request and wrap the result in a quotation document.
    """
    now = now or datetime.now()
    settings = settings or get_quote_settings()
    quote = calculate_premium(request, cfg=cfg)

    period = PaymentPeriod.parse(request.coverage.period)
    coverage = CoverageType.parse(request.coverage.type)
    issue = now.date()

    return Quotation(
        quotation_number=quotation_number(now, settings.number_prefix),
        issue_date=issue,
        valid_until=issue + timedelta(days=settings.validity_days),
        currency=settings.currency,
        quote=quote,
        vehicle_type_label=title_case(VehicleType.parse(request.vehicle_type.type).value),
        coverage_label=title_case(coverage.value),
        coverage_description=coverage_description(coverage),
        period_label=period_label(period),
        no_claim_discount_percent=no_claim_discount_percent(request, cfg),
        show_annual_equivalent=period is not PaymentPeriod.ANNUAL,
        temporary_cover=bool(request.vehicle.is_new_import),
        important_notes=important_notes(request, settings),
    )
