import pytest

from app.engine.indemnity import (
    _BASE_FORMULAS,
    base_indemnity,
    calculate_indemnity,
    county_loss_ratio,
    eco_indemnity,
    guarantee_per_acre,
    sco_indemnity,
    total_premium_per_acre,
)
from app.programs.models_insurance import CountyYieldSimulation, InsurancePolicy, PlanType


def policy(plan_type=PlanType.RP, **kw):
    kw.setdefault("coverage_level", 80)
    kw.setdefault("projected_price", 4.50)
    return InsurancePolicy(plan_type=plan_type, **kw)


def county(expected, simulated):
    return CountyYieldSimulation(expected_county_yield=expected, simulated_county_yield=simulated)


def test_every_plan_type_has_a_formula():
    assert set(_BASE_FORMULAS) == set(PlanType)


# =======================================================
# Base plans
# =======================================================

def test_rp_no_loss_at_projected_outcome():
    rp = policy()
    assert guarantee_per_acre(rp, 200, 4.50) == pytest.approx(720.0)
    assert base_indemnity(rp, 200, 200, 4.50) == 0.0


def test_rp_pays_revenue_shortfall():
    # guarantee 720, actual 100 x 4.50 = 450
    assert base_indemnity(policy(), 200, 100, 4.50) == pytest.approx(270.0)


def test_rp_guarantee_revises_up_with_harvest_price():
    rp = policy(PlanType.RP)
    hpe = policy(PlanType.RP_HPE)

    assert guarantee_per_acre(rp, 200, 5.50) > guarantee_per_acre(hpe, 200, 5.50)
    # 200 x 0.8 x 6.00 = 960 vs fixed 720, actual 600
    assert base_indemnity(rp, 200, 100, 6.00) == pytest.approx(360.0)
    assert base_indemnity(hpe, 200, 100, 6.00) == pytest.approx(120.0)


def test_rp_hpe_matches_rp_below_projected_price():
    assert base_indemnity(policy(PlanType.RP), 200, 120, 3.50) == pytest.approx(
        base_indemnity(policy(PlanType.RP_HPE), 200, 120, 3.50)
    )


def test_yp_ignores_scenario_price():
    yp = policy(PlanType.YP)
    # (160 - 100) bu x 4.50 projected price
    assert base_indemnity(yp, 200, 100, 3.00) == pytest.approx(270.0)
    assert base_indemnity(yp, 200, 100, 6.00) == pytest.approx(270.0)
    assert base_indemnity(yp, 200, 170, 3.00) == 0.0


@pytest.mark.parametrize("plan_type", list(PlanType))
def test_indemnity_bounded_by_guarantee(plan_type):
    p = policy(plan_type)
    for y in (0, 50, 100, 160, 250):
        for price in (2.0, 4.5, 7.0):
            paid = base_indemnity(p, 200, y, price)
            assert 0.0 <= paid <= guarantee_per_acre(p, 200, price) + 1e-9


@pytest.mark.parametrize("plan_type", list(PlanType))
def test_zero_aph_pays_nothing(plan_type):
    p = policy(plan_type, has_sco=True, has_eco=True, eco_level=95)
    result = calculate_indemnity(p, 0, 0, 4.50, county(200, 100))

    assert result.base == 0.0
    assert result.sco == 0.0
    assert result.eco == 0.0
    assert guarantee_per_acre(p, 0) == 0.0


# =======================================================
# Area endorsements
# =======================================================

def test_sco_full_band_at_coverage_boundary():
    p = policy(has_sco=True)
    c = county(200, 160)

    assert county_loss_ratio(p.plan_type, c, 4.50, 4.50) == pytest.approx(0.80)
    # band: 200 x (0.86 - 0.80) x 4.50
    assert sco_indemnity(p, 200, 4.50, c) == pytest.approx(54.0)


def test_sco_scales_linearly_inside_band():
    p = policy(has_sco=True)
    # ratio 0.83 is halfway down the 0.86..0.80 band
    assert sco_indemnity(p, 200, 4.50, county(200, 166)) == pytest.approx(27.0)
    # below the band pays no more than the full band
    assert sco_indemnity(p, 200, 4.50, county(200, 100)) == pytest.approx(54.0)


def test_sco_not_triggered_above_86_pct():
    p = policy(has_sco=True)
    assert sco_indemnity(p, 200, 4.50, county(200, 180)) == 0.0


def test_area_endorsements_need_county_simulation():
    p = policy(has_sco=True, has_eco=True, eco_level=90)

    assert sco_indemnity(p, 200, 4.50, None) == 0.0
    assert eco_indemnity(p, 200, 4.50, None) == 0.0
    assert sco_indemnity(p, 200, 4.50, county(0, 100)) == 0.0
    assert eco_indemnity(p, 200, 4.50, county(0, 100)) == 0.0


def test_eco_band_sits_above_sco():
    p = policy(has_eco=True, eco_level=95)

    # ratio 0.80 is below the 0.95..0.86 band: full 200 x 0.09 x 4.50
    assert eco_indemnity(p, 200, 4.50, county(200, 160)) == pytest.approx(81.0)
    # ratio 0.90: 0.05 of the 0.09 band
    assert eco_indemnity(p, 200, 4.50, county(200, 180)) == pytest.approx(45.0)
    assert eco_indemnity(p, 200, 4.50, county(200, 192)) == 0.0


def test_yp_endorsements_use_county_yield_ratio():
    p = policy(PlanType.YP, has_eco=True, eco_level=95)
    assert eco_indemnity(p, 200, 3.00, county(200, 180)) == pytest.approx(45.0)


def test_rp_endorsements_use_county_revenue_ratio():
    p = policy(PlanType.RP, has_eco=True, eco_level=95)

    # price drop: 180 x 3.00 / (200 x 4.50) = 0.60, full band
    assert eco_indemnity(p, 200, 3.00, county(200, 180)) == pytest.approx(81.0)
    # price rise revises both sides: ratio 0.90, band priced at 6.00
    assert eco_indemnity(p, 200, 6.00, county(200, 180)) == pytest.approx(60.0)


def test_disabled_endorsements_pay_nothing():
    p = policy()
    result = calculate_indemnity(p, 200, 100, 4.50, county(200, 100))

    assert result.sco == 0.0
    assert result.eco == 0.0
    assert result.total == pytest.approx(270.0)


def test_premium_counts_only_enabled_endorsements():
    assert total_premium_per_acre(None) == 0.0
    assert total_premium_per_acre(
        policy(premium_per_acre=15, sco_premium_per_acre=5, eco_premium_per_acre=8)
    ) == pytest.approx(15.0)
    assert total_premium_per_acre(
        policy(premium_per_acre=15, has_sco=True, sco_premium_per_acre=5,
               has_eco=True, eco_level=90, eco_premium_per_acre=8)
    ) == pytest.approx(28.0)
