# src/api/app.py
"""
FastAPI service for the Motor Quote Engine (thin API wrapper).

Endpoints:
- GET  /health
- POST /quote      -> premium quote (+ warnings)
- POST /quotation  -> quote wrapped in a quotation document (+ warnings)

The API layer stays thin:
- validates the payload shape
- calls src.service.quoting

Field contents are not validated here. Malformed numbers and unknown
categories come back as warnings next to a quote, never as errors.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from fastapi import FastAPI
from pydantic import BaseModel, ConfigDict, Field

from src.service.quoting import ENGINE_VERSION, json_safe, quotation_from_form, quote_from_form


logger = logging.getLogger(__name__)

app = FastAPI(title="Motor Quote Engine", version=ENGINE_VERSION)

# Numbers may arrive as text or as JSON numbers
NumberLike = Optional[Union[str, int, float]]


# -----------------------------
# Schemas
# -----------------------------
class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class VehicleTypeInput(_CamelModel):
    type: Optional[str] = None


class VehicleInput(_CamelModel):
    make: Optional[str] = None
    model: Optional[str] = None
    year: NumberLike = None
    chassis_number: Optional[str] = Field(default=None, alias="chassisNumber")
    plate_number: Optional[str] = Field(default=None, alias="plateNumber")
    engine_number: Optional[str] = Field(default=None, alias="engineNumber")
    sum_insured: NumberLike = Field(default=None, alias="sumInsured")

    # Accept bool or yes/no strings
    is_new_import: Optional[Union[bool, str]] = Field(default=None, alias="isNewImport")


class OwnerInput(_CamelModel):
    age: NumberLike = None
    license_years: NumberLike = Field(default=None, alias="licenseYears")
    claims: Optional[Union[bool, str]] = None
    claim_free_years: NumberLike = Field(default=None, alias="claimFreeYears")
    previous_claims: NumberLike = Field(default=None, alias="previousClaims")


class CoverageInput(_CamelModel):
    type: Optional[str] = None
    period: Optional[str] = None


class QuoteForm(_CamelModel):
    vehicle_type: Optional[Union[VehicleTypeInput, str]] = Field(default=None, alias="vehicleType")
    vehicle: VehicleInput = Field(default_factory=VehicleInput)
    owner: OwnerInput = Field(default_factory=OwnerInput)
    coverage: CoverageInput = Field(default_factory=CoverageInput)

    def to_raw(self) -> Dict[str, Any]:
        # Unset fields are dropped so the builder applies its own defaults
        return self.model_dump(exclude_none=True)


class QuoteResponse(BaseModel):
    quote: Dict[str, Any]
    warnings: list[str] = Field(default_factory=list)


class QuotationResponse(BaseModel):
    quotation: Dict[str, Any]
    warnings: list[str] = Field(default_factory=list)


# -----------------------------
# Routes
# -----------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok", "engine": ENGINE_VERSION}


@app.post("/quote", response_model=QuoteResponse)
def quote(form: QuoteForm) -> QuoteResponse:
    q, warnings = quote_from_form(form.to_raw())
    if warnings:
        logger.info("Quote computed with warnings: %s", warnings)
    return QuoteResponse(quote=json_safe(q.to_dict()), warnings=warnings)


@app.post("/quotation", response_model=QuotationResponse)
def quotation(form: QuoteForm) -> QuotationResponse:
    doc, warnings = quotation_from_form(form.to_raw())
    return QuotationResponse(quotation=json_safe(doc.to_dict()), warnings=warnings)
