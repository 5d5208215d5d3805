import pytest

from src.pricing.enums import ClaimsAnswer, CoverageType, PaymentPeriod, VehicleType
from src.pricing.schemas import (
    CoverageSelection,
    OwnerDetails,
    QuoteRequest,
    VehicleDetails,
    VehicleTypeSelection,
)


def build(
    sum_insured="100000",
    vehicle_type="",
    is_new_import=False,
    age="30",
    license_years="5",
    claims="no",
    claim_free_years="0",
    previous_claims="0",
    coverage_type="third-party-only",
    period="",
):
    """Flat keyword helper for QuoteRequest; defaults rate to a plain 2000 premium."""
    return QuoteRequest(
        vehicle_type=VehicleTypeSelection(type=VehicleType.parse(vehicle_type)),
        vehicle=VehicleDetails(
            make="Toyota",
            model="Corolla",
            year="2018",
            sum_insured=sum_insured,
            is_new_import=is_new_import,
        ),
        owner=OwnerDetails(
            age=age,
            license_years=license_years,
            claims=ClaimsAnswer.parse(claims),
            claim_free_years=claim_free_years,
            previous_claims=previous_claims,
        ),
        coverage=CoverageSelection(
            type=CoverageType.parse(coverage_type),
            period=PaymentPeriod.parse(period),
        ),
    )


@pytest.fixture
def make_request():
    return build


@pytest.fixture
def wizard_form():
    """A complete wizard payload in the shape the form sends it."""
    return {
        "vehicleType": {"type": "personal"},
        "vehicle": {
            "make": "Toyota",
            "model": "Corolla",
            "year": "2018",
            "chassisNumber": "JTDBR32E720123456",
            "plateNumber": "ABC1234",
            "engineNumber": "1NZFE1234567",
            "sumInsured": "100000",
            "isNewImport": False,
        },
        "owner": {
            "age": "30",
            "licenseYears": "5",
            "claims": "no",
            "claimFreeYears": "0",
            "previousClaims": "0",
        },
        "coverage": {"type": "third-party-only", "period": "annual"},
    }
