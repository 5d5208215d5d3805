import pytest
from fastapi.testclient import TestClient

from src.api.app import app
from src.service.quoting import quote_from_form, quote_from_form_dict


@pytest.fixture
def client():
    return TestClient(app)


class TestQuotingService:
    def test_quote_from_form(self, wizard_form):
        q, warnings = quote_from_form(wizard_form)

        assert warnings == []
        assert q.amount == pytest.approx(2156.0)
        assert q.annual_equivalent == pytest.approx(2200.0)

    def test_quote_from_form_dict_shape(self, wizard_form):
        out = quote_from_form_dict(wizard_form)

        assert set(out) == {"quote", "warnings"}
        assert set(out["quote"]) >= {"amount", "period", "admin_fee", "annual_equivalent"}
        assert out["quote"]["period"] == "annual"

    def test_malformed_form_still_quotes(self):
        q, warnings = quote_from_form({"vehicle": {"sumInsured": "n/a"}, "coverage": {"period": "weekly"}})

        assert q.amount == 0
        assert q.period == "annual"
        assert len(warnings) == 2

    def test_oversized_sum_insured_is_withheld_with_warning(self, wizard_form):
        wizard_form["vehicle"]["sumInsured"] = "9" * 5000
        out = quote_from_form_dict(wizard_form)

        assert out["quote"]["amount"] is None
        assert out["quote"]["annual_equivalent"] is None
        assert len(out["warnings"]) == 1
        assert "too large" in out["warnings"][0]


class TestEndpoints:
    def test_health(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"

    def test_quote(self, client, wizard_form):
        res = client.post("/quote", json=wizard_form)
        body = res.json()

        assert res.status_code == 200
        assert body["warnings"] == []
        assert body["quote"]["amount"] == pytest.approx(2156.0)
        assert body["quote"]["admin_fee"] == 0

    def test_quote_accepts_json_numbers(self, client):
        res = client.post("/quote", json={
            "vehicleType": "taxi",
            "vehicle": {"sumInsured": 50000},
            "owner": {"age": 19, "licenseYears": 1, "claims": "yes", "previousClaims": 2},
            "coverage": {"type": "third-party-fire-theft", "period": "quarterly"},
        })

        assert res.status_code == 200
        assert res.json()["quote"]["amount"] == pytest.approx(3796.875)

    def test_bad_numbers_are_warnings_not_errors(self, client):
        res = client.post("/quote", json={"vehicle": {"sumInsured": "abc"}})
        body = res.json()

        assert res.status_code == 200
        assert body["quote"]["amount"] == 0
        assert body["quote"]["annual_equivalent"] is None
        assert len(body["warnings"]) == 1

    def test_empty_body_quotes_zero(self, client):
        res = client.post("/quote", json={})
        assert res.status_code == 200
        assert res.json()["quote"]["amount"] == 0

    def test_wrong_shape_is_rejected(self, client):
        res = client.post("/quote", json={"vehicle": "not an object"})
        assert res.status_code == 422

    def test_quotation(self, client, wizard_form):
        wizard_form["vehicle"]["isNewImport"] = True
        res = client.post("/quotation", json=wizard_form)
        doc = res.json()["quotation"]

        assert res.status_code == 200
        assert doc["quotation_number"].startswith("ZMI-")
        assert doc["temporary_cover"] is True
        assert doc["period_label"] == "Annual (12 months)"
        assert doc["quote"]["annual_equivalent"] == pytest.approx(2640.0)

    @pytest.mark.parametrize("vehicle,owner", [
        ({"sumInsured": "9" * 5000}, {}),
        ({"sumInsured": "100000"}, {"claims": "yes", "previousClaims": "9" * 400}),
    ])
    def test_oversized_numbers_are_warnings_not_errors(self, client, vehicle, owner):
        res = client.post("/quote", json={"vehicle": vehicle, "owner": owner})
        body = res.json()

        assert res.status_code == 200
        assert body["quote"]["amount"] is None
        assert len(body["warnings"]) == 1

    def test_oversized_quotation(self, client, wizard_form):
        wizard_form["vehicle"]["sumInsured"] = "9" * 5000
        res = client.post("/quotation", json=wizard_form)

        assert res.status_code == 200
        assert res.json()["quotation"]["quote"]["amount"] is None
