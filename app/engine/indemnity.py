# app/engine/indemnity.py

"""
Per-acre crop insurance indemnities for one yield/price scenario.

Base plans:
  - YP      guarantee = APH x coverage (bushels), shortfall paid at the projected price
  - RP      guarantee = APH x coverage x max(projected, harvest price)
  - RP_HPE  guarantee = APH x coverage x projected price

Area endorsements (SCO, ECO) pay on a county-level loss ratio inside their
own coverage band, scaled by the farm's APH:
  - SCO band: 86% down to the base coverage level
  - ECO band: eco_level (90/95%) down to 86%

For YP the county ratio is simulated / expected county yield. For RP and
RP_HPE it is a county revenue ratio, with the expected side priced by the
same harvest-price rule as the farm guarantee.
"""

from typing import Callable, Dict, NamedTuple, Optional

from ..config import SCO_TOP_PCT
from ..programs.models_insurance import CountyYieldSimulation, InsurancePolicy, PlanType


class IndemnityBreakdown(NamedTuple):
    base: float = 0.0
    sco: float = 0.0
    eco: float = 0.0

    @property
    def total(self) -> float:
        return self.base + self.sco + self.eco


NO_INDEMNITY = IndemnityBreakdown()


def effective_price(plan_type: PlanType, projected_price: float, harvest_price: float) -> float:
    """Price the guarantee is written at. Only RP revises upward at harvest."""
    if plan_type == PlanType.RP:
        return max(projected_price, harvest_price)
    return projected_price


def guarantee_per_acre(policy: InsurancePolicy, aph: float, harvest_price: Optional[float] = None) -> float:
    """
    Dollar guarantee per acre. Without a harvest price this is the
    guarantee at the projected price.
    """
    if aph <= 0:
        return 0.0
    price = policy.projected_price if harvest_price is None else harvest_price
    coverage = policy.coverage_level / 100.0
    return aph * coverage * effective_price(policy.plan_type, policy.projected_price, price)


# =======================================================
# Base plans
# =======================================================

def _yp_indemnity(policy: InsurancePolicy, aph: float, actual_yield: float, harvest_price: float) -> float:
    guarantee_bu = aph * (policy.coverage_level / 100.0)
    shortfall = max(0.0, guarantee_bu - actual_yield)
    return shortfall * policy.projected_price


def _revenue_indemnity(policy: InsurancePolicy, aph: float, actual_yield: float, harvest_price: float) -> float:
    guarantee = guarantee_per_acre(policy, aph, harvest_price)
    actual_revenue = actual_yield * harvest_price
    return max(0.0, guarantee - actual_revenue)


_BASE_FORMULAS: Dict[PlanType, Callable[[InsurancePolicy, float, float, float], float]] = {
    PlanType.YP: _yp_indemnity,
    PlanType.RP: _revenue_indemnity,
    PlanType.RP_HPE: _revenue_indemnity,
}


def base_indemnity(policy: InsurancePolicy, aph: float, actual_yield: float, harvest_price: float) -> float:
    if aph <= 0:
        return 0.0

    try:
        formula = _BASE_FORMULAS[PlanType(policy.plan_type)]
    except KeyError:
        raise ValueError(f"no indemnity formula for plan type {policy.plan_type!r}") from None

    indemnity = formula(policy, aph, max(0.0, actual_yield), harvest_price)
    # Never pay more than was guaranteed
    return min(max(0.0, indemnity), guarantee_per_acre(policy, aph, harvest_price))


# =======================================================
# Area endorsements
# =======================================================

def county_loss_ratio(
    plan_type: PlanType,
    county: CountyYieldSimulation,
    projected_price: float,
    harvest_price: float,
) -> Optional[float]:
    """
    County outcome as a fraction of expected. None when the county
    simulation is not configured (expected county yield of zero).
    """
    if county.expected_county_yield <= 0:
        return None

    if plan_type == PlanType.YP:
        return county.simulated_county_yield / county.expected_county_yield

    expected_revenue = county.expected_county_yield * effective_price(plan_type, projected_price, harvest_price)
    if expected_revenue <= 0:
        return None
    return county.simulated_county_yield * harvest_price / expected_revenue


def band_payout(top_pct: float, bottom_pct: float, ratio: float, aph: float, band_price: float) -> float:
    """
    Linear payout inside [bottom_pct, top_pct]: nothing at or above the
    top, the full band at or below the bottom.
    """
    width = top_pct - bottom_pct
    if width <= 0 or ratio >= top_pct:
        return 0.0
    loss_pct = min(top_pct - ratio, width)
    band_value = aph * width * band_price
    return (loss_pct / width) * band_value


def _area_indemnity(
    policy: InsurancePolicy,
    top_pct: float,
    bottom_pct: float,
    aph: float,
    harvest_price: float,
    county: Optional[CountyYieldSimulation],
) -> float:
    if aph <= 0 or county is None:
        return 0.0
    ratio = county_loss_ratio(policy.plan_type, county, policy.projected_price, harvest_price)
    if ratio is None:
        return 0.0
    band_price = effective_price(policy.plan_type, policy.projected_price, harvest_price)
    return band_payout(top_pct, bottom_pct, ratio, aph, band_price)


def sco_indemnity(
    policy: InsurancePolicy,
    aph: float,
    harvest_price: float,
    county: Optional[CountyYieldSimulation],
) -> float:
    if not policy.has_sco:
        return 0.0
    return _area_indemnity(policy, SCO_TOP_PCT, policy.coverage_level / 100.0, aph, harvest_price, county)


def eco_indemnity(
    policy: InsurancePolicy,
    aph: float,
    harvest_price: float,
    county: Optional[CountyYieldSimulation],
) -> float:
    if not policy.has_eco or not policy.eco_level:
        return 0.0
    return _area_indemnity(policy, policy.eco_level / 100.0, SCO_TOP_PCT, aph, harvest_price, county)


# =======================================================
# Combined
# =======================================================

def calculate_indemnity(
    policy: Optional[InsurancePolicy],
    aph: float,
    actual_yield: float,
    harvest_price: float,
    county: Optional[CountyYieldSimulation] = None,
) -> IndemnityBreakdown:
    if policy is None or aph <= 0:
        return NO_INDEMNITY

    return IndemnityBreakdown(
        base=base_indemnity(policy, aph, actual_yield, harvest_price),
        sco=sco_indemnity(policy, aph, harvest_price, county),
        eco=eco_indemnity(policy, aph, harvest_price, county),
    )


def total_premium_per_acre(policy: Optional[InsurancePolicy]) -> float:
    """Base premium plus any endorsement premiums; charged regardless of payout."""
    if policy is None:
        return 0.0
    premium = policy.premium_per_acre
    if policy.has_sco:
        premium += policy.sco_premium_per_acre
    if policy.has_eco:
        premium += policy.eco_premium_per_acre
    return premium
