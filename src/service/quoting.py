# src/service/quoting.py
"""
End-to-end quoting service for the Motor Quote Engine.

Single source of truth:
- raw wizard payload -> runtime request builder -> QuoteRequest
- QuoteRequest -> premium calculator -> Quote (or Quotation document)
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from src.features.runtime import build_request_from_raw
from src.pricing.config import PricingConfig
from src.pricing.quotation import Quotation, build_quotation
from src.pricing.quote import calculate_premium
from src.pricing.schemas import Quote
from src.utils.config import QuoteSettings

logger = logging.getLogger(__name__)

ENGINE_VERSION = "0.1.0"


def json_safe(obj: Any) -> Any:
    """Replace non-finite floats with None; JSON has no inf or nan."""
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, dict):
        return {k: json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [json_safe(v) for v in obj]
    return obj


def _amount_warnings(q: Quote) -> list[str]:
    if math.isfinite(q.amount):
        return []
    return ["Sum insured or claims count is too large to price; the amount is withheld."]


def quote_from_form(
    raw: Mapping[str, Any],
    *,
    pricing_cfg: Optional[PricingConfig] = None,
) -> Tuple[Quote, list[str]]:
    """
    Price a raw wizard payload.
    Returns (Quote, warnings).
    """
    built = build_request_from_raw(raw)
    if built.warnings:
        logger.debug("Request built with %d warning(s): %s", len(built.warnings), built.warnings)

    q = calculate_premium(built.request, cfg=pricing_cfg)
    logger.debug("Quoted amount=%.2f period=%r", q.amount, q.period)
    return q, built.warnings + _amount_warnings(q)


def quotation_from_form(
    raw: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
    pricing_cfg: Optional[PricingConfig] = None,
    settings: Optional[QuoteSettings] = None,
) -> Tuple[Quotation, list[str]]:
    """
    Full quotation document for a raw wizard payload.
    Returns (Quotation, warnings).
    """
    built = build_request_from_raw(raw)
    doc = build_quotation(built.request, now=now, cfg=pricing_cfg, settings=settings)
    logger.info("Issued quotation %s amount=%.2f", doc.quotation_number, doc.quote.amount)
    return doc, built.warnings + _amount_warnings(doc.quote)


def quote_from_form_dict(
    raw: Mapping[str, Any],
    *,
    pricing_cfg: Optional[PricingConfig] = None,
) -> Dict[str, Any]:
    """
    Convenience: returns a JSON-ready dict and includes warnings.
    """
    q, warnings = quote_from_form(raw, pricing_cfg=pricing_cfg)
    return {"quote": json_safe(q.to_dict()), "warnings": warnings}
