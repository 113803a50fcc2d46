import json

import pytest

FARM = {
    "farm_id": "farm-1",
    "name": "North 500",
    "acres": 500,
    "aph": 200,
    "projected_yield": 200,
    "commodity_type": "CORN",
}
COSTS = {"fertilizer": 250, "chemical": 80, "seed": 120, "land_rent": 250}
POLICY = {"plan_type": "RP", "coverage_level": 80, "projected_price": 4.5, "premium_per_acre": 15}


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_profit_matrix_endpoint(client):
    r = client.post(
        "/profit-matrix",
        json={
            "farm": FARM,
            "costs": COSTS,
            "policy": POLICY,
            "county_yield": {"expected_county_yield": 200, "simulated_county_yield": 160},
        },
    )
    assert r.status_code == 200
    body = r.json()

    assert len(body["yield_scenarios"]) == 15
    assert len(body["price_scenarios"]) == 17
    assert body["break_even_price"] == pytest.approx(3.5)
    assert body["summary"]["guarantee_per_acre"] == pytest.approx(720.0)
    assert body["summary"]["projected_cell"]["net_profit_per_acre"] == pytest.approx(185.0)


def test_profit_matrix_rolls_up_contracts(client):
    r = client.post(
        "/profit-matrix",
        json={
            "farm": FARM,
            "costs": COSTS,
            "year": 2026,
            "contracts": [
                {"allocated_bushels": 50000, "year": 2026, "commodity_type": "CORN", "cash_price": 4.8},
            ],
        },
    )
    assert r.status_code == 200
    body = r.json()

    assert body["marketed_bushels_per_acre"] == pytest.approx(100.0)
    assert body["marketed_avg_price"] == pytest.approx(4.8)
    assert body["summary"]["pct_marketed"] == pytest.approx(50.0)
    assert body["policy"] is None


def test_profit_matrix_validation_error_names_field(client):
    r = client.post(
        "/profit-matrix",
        json={"farm": FARM, "costs": COSTS, "policy": {**POLICY, "has_eco": True}},
    )
    assert r.status_code == 422
    assert r.json()["field"] == "policy.eco_level"


def test_profit_matrix_rejects_infinite_inputs(client):
    # json.dumps writes the non-standard Infinity literal, which the server parses
    body = json.dumps({"farm": {**FARM, "aph": float("inf")}, "policy": POLICY})
    r = client.post("/profit-matrix", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 422
    assert r.json()["field"] == "farm.aph"

    body = json.dumps({"farm": FARM, "costs": {"seed": float("inf")}})
    r = client.post("/profit-matrix", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 422
    assert r.json()["field"] == "costs.seed"


def test_profit_matrix_rejects_negative_cost(client):
    r = client.post("/profit-matrix", json={"farm": FARM, "costs": {**COSTS, "seed": -1}})
    assert r.status_code == 422
    assert r.json()["field"] == "costs.seed"


def test_stored_policy_is_used(client):
    r = client.put("/farms/farm-1/insurance", json={**POLICY, "plan_type": "YP", "coverage_level": 75})
    assert r.status_code == 200
    assert r.json()["farm_id"] == "farm-1"

    r = client.post("/profit-matrix", json={"farm": FARM, "costs": COSTS})
    assert r.status_code == 200
    body = r.json()
    assert body["policy"]["plan_type"] == "YP"
    # 200 x 0.75 x 4.50
    assert body["summary"]["guarantee_per_acre"] == pytest.approx(675.0)


def test_policy_crud(client):
    assert client.get("/farms/farm-2/insurance").status_code == 404

    r = client.put("/farms/farm-2/insurance", json={**POLICY, "has_sco": True, "sco_premium_per_acre": 6})
    assert r.status_code == 200
    assert client.get("/farms/farm-2/insurance").json()["has_sco"] is True
    assert [p["farm_id"] for p in client.get("/insurance").json()] == ["farm-2"]

    assert client.delete("/farms/farm-2/insurance").status_code == 200
    assert client.delete("/farms/farm-2/insurance").status_code == 404
    assert client.get("/farms/farm-2/insurance").status_code == 404


def test_policy_put_rejects_bad_coverage(client):
    r = client.put("/farms/farm-3/insurance", json={**POLICY, "coverage_level": 88})
    assert r.status_code == 422
    assert r.json()["field"] == "coverage_level"


def test_cost_csv_import(client):
    csv_text = "category,amount,unit_price,is_per_acre\nfertilizer,1000,50,\nland rent,250,,yes\n"
    r = client.post(
        "/costs/import_csv",
        params={"acres": 500},
        files={"file": ("costs.csv", csv_text, "text/csv")},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["fertilizer"] == pytest.approx(100.0)
    assert body["land_rent"] == pytest.approx(250.0)


def test_cost_csv_import_rejects_other_files(client):
    r = client.post(
        "/costs/import_csv",
        params={"acres": 500},
        files={"file": ("costs.txt", "category,amount\n", "text/plain")},
    )
    assert r.status_code == 400
