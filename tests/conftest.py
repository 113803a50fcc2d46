import pytest
from fastapi.testclient import TestClient

from app.engine.inputs import resolve_config
from app.main import app, get_store
from app.programs.models_farm import CommodityType, CostBreakdown, FarmSnapshot, MarketedPosition
from app.programs.models_insurance import InsurancePolicy, PlanType
from app.services.policy_store import PolicyStore


@pytest.fixture
def corn_farm():
    return FarmSnapshot(
        farm_id="farm-1",
        name="North 500",
        acres=500,
        aph=200,
        projected_yield=200,
        commodity_type=CommodityType.CORN,
    )


@pytest.fixture
def costs_700():
    return CostBreakdown(fertilizer=250, chemical=80, seed=120, land_rent=250)


@pytest.fixture
def rp_policy():
    return InsurancePolicy(
        plan_type=PlanType.RP,
        coverage_level=80,
        projected_price=4.50,
        premium_per_acre=15,
    )


@pytest.fixture
def make_config(corn_farm, costs_700):
    def _make(**overrides):
        kwargs = {"farm": corn_farm, "costs": costs_700}
        kwargs.update(overrides)
        return resolve_config(**kwargs)

    return _make


@pytest.fixture
def store(tmp_path):
    s = PolicyStore(str(tmp_path / "policies.db"))
    yield s
    s.close()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fully_marketed():
    return MarketedPosition(bushels_per_acre=200, weighted_avg_price=4.80)
