# src/features/runtime.py
"""
Runtime request builder for API and batch quoting.

Goal:
- Convert a raw wizard payload (dict) into the QuoteRequest the premium
  calculator expects.

Accepted shapes:
- nested, as the wizard sends it:
    {"vehicleType": {"type": "taxi"}, "vehicle": {"sumInsured": "50000", ...},
     "owner": {...}, "coverage": {"type": ..., "period": ...}}
  camelCase and snake_case keys are both accepted at every level
- flat, one column per field (see FLAT_COLUMNS), for tabular batches

This builder never rejects a payload:
- numbers given as int/float are turned into text
- unknown categorical values become UNSET
- text that will not parse as a number is kept (the calculator reads it as 0)
Each of those is reported as a warning.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from src.pricing.enums import ClaimsAnswer, CoverageType, PaymentPeriod, VehicleType
from src.pricing.quote import parse_int
from src.pricing.schemas import (
    CoverageSelection,
    OwnerDetails,
    QuoteRequest,
    VehicleDetails,
    VehicleTypeSelection,
)

# Text fields of the vehicle section: (attribute, camelCase key)
VEHICLE_TEXT_FIELDS = [
    ("make", "make"),
    ("model", "model"),
    ("year", "year"),
    ("chassis_number", "chassisNumber"),
    ("plate_number", "plateNumber"),
    ("engine_number", "engineNumber"),
    ("sum_insured", "sumInsured"),
]

OWNER_NUMERIC_FIELDS = [
    ("age", "age"),
    ("license_years", "licenseYears"),
    ("claim_free_years", "claimFreeYears"),
    ("previous_claims", "previousClaims"),
]

# Flat layout used for CSV/parquet batches
FLAT_COLUMNS = [
    "vehicle_type",
    "make",
    "model",
    "year",
    "chassis_number",
    "plate_number",
    "engine_number",
    "sum_insured",
    "is_new_import",
    "age",
    "license_years",
    "claims",
    "claim_free_years",
    "previous_claims",
    "coverage_type",
    "period",
]


@dataclass(frozen=True)
class RuntimeBuildResult:
    request: QuoteRequest
    warnings: List[str]


_YN_MAP = {
    "yes": True,
    "no": False,
    "y": True,
    "n": False,
    "true": True,
    "false": False,
    "1": True,
    "0": False,
    "": False,
}


def _section(raw: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    for k in keys:
        v = raw.get(k)
        if isinstance(v, Mapping):
            return v
    return {}


def _pick(section: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in section:
            return section[k]
    return None


def _to_text(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, float):
        if math.isnan(val):
            return ""
        # 50000.0 -> "50000"
        return str(int(val)) if val.is_integer() else str(val)
    return str(val).strip()


def _to_bool(val: Any, name: str, warnings: List[str]) -> bool:
    if val is None:
        return False
    if isinstance(val, bool):
        return val
    if isinstance(val, (int, float)):
        return bool(val) and not (isinstance(val, float) and math.isnan(val))
    key = str(val).strip().lower()
    if key in _YN_MAP:
        return _YN_MAP[key]
    warnings.append(f"Could not map {name}='{val}' to yes/no; treated as no.")
    return False


def _numeric_text(val: Any, name: str, warnings: List[str]) -> str:
    text = _to_text(val)
    if text and parse_int(text) == 0 and not text.lstrip("+-").startswith("0"):
        warnings.append(f"Could not parse {name}='{text}' as a number; it will count as 0.")
    return text


def _choice(enum_cls, val: Any, name: str, warnings: List[str]):
    text = _to_text(val)
    member = enum_cls.parse(text)
    if text and member.value == "":
        warnings.append(f"Unknown {name}='{text}'; treated as unset.")
    return member


def build_request(
    *,
    vehicle_type: Any = None,
    vehicle: Optional[Mapping[str, Any]] = None,
    owner: Optional[Mapping[str, Any]] = None,
    coverage_type: Any = None,
    period: Any = None,
    warnings: Optional[List[str]] = None,
) -> RuntimeBuildResult:
    """
    Assemble a QuoteRequest from already-separated sections.

    vehicle/owner are mappings keyed by attribute name or camelCase name.
    """
    warnings = [] if warnings is None else warnings
    vehicle = vehicle or {}
    owner = owner or {}

    vehicle_kwargs: Dict[str, Any] = {}
    for attr, camel in VEHICLE_TEXT_FIELDS:
        val = _pick(vehicle, attr, camel)
        if attr == "sum_insured":
            vehicle_kwargs[attr] = _numeric_text(val, "vehicle.sum_insured", warnings)
        else:
            vehicle_kwargs[attr] = _to_text(val)
    vehicle_kwargs["is_new_import"] = _to_bool(
        _pick(vehicle, "is_new_import", "isNewImport"), "vehicle.is_new_import", warnings
    )

    owner_kwargs: Dict[str, Any] = {}
    defaults = OwnerDetails()
    for attr, camel in OWNER_NUMERIC_FIELDS:
        val = _pick(owner, attr, camel)
        if val is None:
            owner_kwargs[attr] = getattr(defaults, attr)
        else:
            owner_kwargs[attr] = _numeric_text(val, f"owner.{attr}", warnings)

    claims_raw = _pick(owner, "claims")
    if claims_raw is None:
        owner_kwargs["claims"] = defaults.claims
    else:
        if isinstance(claims_raw, bool):
            claims_raw = "yes" if claims_raw else "no"
        owner_kwargs["claims"] = _choice(ClaimsAnswer, claims_raw, "owner.claims", warnings)

    request = QuoteRequest(
        vehicle_type=VehicleTypeSelection(
            type=_choice(VehicleType, vehicle_type, "vehicle_type", warnings)
        ),
        vehicle=VehicleDetails(**vehicle_kwargs),
        owner=OwnerDetails(**owner_kwargs),
        coverage=CoverageSelection(
            type=_choice(CoverageType, coverage_type, "coverage.type", warnings),
            period=_choice(PaymentPeriod, period, "coverage.period", warnings),
        ),
    )
    return RuntimeBuildResult(request=request, warnings=warnings)


def build_request_from_raw(raw: Mapping[str, Any]) -> RuntimeBuildResult:
    """
    Build a QuoteRequest from a nested wizard payload.

    raw: dict shaped like the wizard's form data (camelCase or snake_case)
    """
    vt = _pick(raw, "vehicleType", "vehicle_type")
    if isinstance(vt, Mapping):
        vt = vt.get("type")

    coverage = _section(raw, "coverage")

    return build_request(
        vehicle_type=vt,
        vehicle=_section(raw, "vehicle"),
        # Older payloads call the owner section "driver"
        owner=_section(raw, "owner", "driver"),
        coverage_type=coverage.get("type"),
        period=coverage.get("period"),
    )


def build_request_from_flat(row: Mapping[str, Any]) -> RuntimeBuildResult:
    """Build a QuoteRequest from one flat record (see FLAT_COLUMNS)."""
    vehicle = {attr: row.get(attr) for attr, _ in VEHICLE_TEXT_FIELDS}
    vehicle["is_new_import"] = row.get("is_new_import")
    owner = {
        attr: row.get(attr)
        for attr, _ in OWNER_NUMERIC_FIELDS
        if row.get(attr) not in (None, "")
    }
    if row.get("claims") not in (None, ""):
        owner["claims"] = row.get("claims")

    return build_request(
        vehicle_type=row.get("vehicle_type"),
        vehicle=vehicle,
        owner=owner,
        coverage_type=row.get("coverage_type"),
        period=row.get("period"),
    )


def flatten_request(request: QuoteRequest) -> Dict[str, str]:
    """Inverse of build_request_from_flat, all values as text."""
    v = request.vehicle
    o = request.owner
    return {
        "vehicle_type": request.vehicle_type.type.value,
        "make": v.make,
        "model": v.model,
        "year": v.year,
        "chassis_number": v.chassis_number,
        "plate_number": v.plate_number,
        "engine_number": v.engine_number,
        "sum_insured": v.sum_insured,
        "is_new_import": "yes" if v.is_new_import else "no",
        "age": o.age,
        "license_years": o.license_years,
        "claims": o.claims.value,
        "claim_free_years": o.claim_free_years,
        "previous_claims": o.previous_claims,
        "coverage_type": request.coverage.type.value,
        "period": request.coverage.period.value,
    }
