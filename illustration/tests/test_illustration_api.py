from __future__ import annotations

from flask.testing import FlaskClient

CLIENT_DATA = {
    "birthday": "1960-06-02",
    "premium": 100000,
    "first_term": 5,
    "second_term": 0,
    "withdrawal_type": "none",
    "withdrawal_amount": 0,
    "withdrawal_from_year": 1,
    "withdrawal_to_year": 1,
    "frequency": 1,
}

ALLOCATIONS = {
    "ptp_w_cap_rate": 40,
    "ptp_w_participation_rate_500": 15,
    "ptp_w_participation_rate_marc5": 15,
    "ptp_w_participation_rate_tca": 10,
    "fixed_interest_account": 20,
}


def test_fixed_illustration_with_custom_constants(client: FlaskClient):
    constants = {
        "mgir": 0.03,
        "guaranteed": {"year_rates": {str(year): 0.05 for year in range(1, 6)}},
        "surrender_charges": {"1": 0.07},
        "free_withdrawal": {"1": 0.1},
    }
    resp = client.post(
        "/api/illustration/fixed",
        json={"client_data": CLIENT_DATA, "constants": constants},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["table"][0]["account_value"] == "105,000.00"
    assert body["mgir"] == "3.00%"
    assert body["table"][-1]["age"] == 100
    assert len(body["data"]) == body["durations"]


def test_fixed_illustration_rejects_bad_frequency(client: FlaskClient):
    resp = client.post(
        "/api/illustration/fixed",
        json={"client_data": {**CLIENT_DATA, "frequency": 5}},
    )

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"][-1] == "frequency"


def test_missing_premium_is_reported(client: FlaskClient):
    data = {key: value for key, value in CLIENT_DATA.items() if key != "premium"}
    resp = client.post("/api/illustration/fixed", json={"client_data": data})

    assert resp.status_code == 422
    locations = [tuple(err["loc"]) for err in resp.get_json()["detail"]]
    assert ("client_data", "premium") in locations


def test_indexed_illustration(client: FlaskClient):
    resp = client.post(
        "/api/illustration/indexed",
        json={"client_data": {**CLIENT_DATA, **ALLOCATIONS}},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["durations"] == "10 Years"
    assert len(body["table"]) == 11
    assert body["accumulated_values"][0] == "$110,000.00"
    assert body["index_allocations"]["ptp_w_cap_rate"] == "40.00%"


def test_indexed_illustration_rejects_allocations(client: FlaskClient):
    resp = client.post(
        "/api/illustration/indexed",
        json={"client_data": {**CLIENT_DATA, **ALLOCATIONS, "fixed_interest_account": 10}},
    )

    assert resp.status_code == 422
    assert "Current total: 90.00%" in resp.get_json()["detail"][0]["msg"]


def test_annuity_factor_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/illustration/annuity-factor",
        json={
            "account_values": ["150,000.00", "175,000.00"],
            "annuitization_rate": 0.03,
            "gender": "Female",
            "certain_year": 10,
            "maturity_age": 100,
        },
    )

    assert resp.status_code == 200
    body = resp.get_json()
    factor = float(body["monthly_factor_per_1000"].replace(",", ""))
    guaranteed = float(body["guaranteed_monthly_annuity_income"].replace(",", ""))
    assert factor > 0
    assert abs(guaranteed - 150 * factor) < 0.01 * 150


def test_annuity_factor_unknown_gender(client: FlaskClient):
    resp = client.post(
        "/api/illustration/annuity-factor",
        json={"account_values": [1000, 1000], "annuitization_rate": 0.03, "gender": "other"},
    )

    assert resp.status_code == 404
    assert "other" in resp.get_json()["detail"]


def test_annuity_factor_rate_of_minus_one(client: FlaskClient):
    resp = client.post(
        "/api/illustration/annuity-factor",
        json={"account_values": [1000, 1000], "annuitization_rate": -1, "gender": "male"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["detail"]


def test_surrender_chart_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/illustration/surrender-chart",
        json={"current_surrender_values": ["93,000.00"] * 11, "term_1": 5, "term": 10},
    )

    assert resp.status_code == 200
    assert "<svg" in resp.get_json()["svg"]


def test_annuity_factor_rejects_unparseable_money(client: FlaskClient):
    resp = client.post(
        "/api/illustration/annuity-factor",
        json={"account_values": ["abc", "1,000"], "annuitization_rate": 0.03, "gender": "male"},
    )

    assert resp.status_code == 422
    errors = resp.get_json()["detail"]
    assert [tuple(err["loc"]) for err in errors] == [("account_values", 0)]


def test_surrender_chart_rejects_unparseable_money(client: FlaskClient):
    resp = client.post(
        "/api/illustration/surrender-chart",
        json={"current_surrender_values": ["n/a"] * 11, "term_1": 5, "term": 10},
    )

    assert resp.status_code == 422
    locations = {tuple(err["loc"]) for err in resp.get_json()["detail"]}
    assert ("current_surrender_values", 0) in locations
