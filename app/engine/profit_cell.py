# app/engine/profit_cell.py

from ..programs.models_matrix import ProfitMatrixCell
from .cost_aggregator import total_cost_per_acre
from .indemnity import calculate_indemnity, total_premium_per_acre
from .inputs import EngineConfig
from .marketed_blend import blended_revenue_per_acre


def _cents(x: float) -> float:
    return round(x, 2)


def evaluate_cell(config: EngineConfig, scenario_yield: float, scenario_price: float) -> ProfitMatrixCell:
    """
    Net profit per acre for one (yield, price) outcome:

        net = gross revenue - cost + indemnities - premiums

    Everything is computed unrounded and rounded to cents on the way out.
    """
    farm = config.farm
    marketed = config.marketed

    gross = blended_revenue_per_acre(
        scenario_yield,
        marketed.bushels_per_acre,
        marketed.weighted_avg_price,
        scenario_price,
    )
    cost = total_cost_per_acre(config.costs)
    indemnity = calculate_indemnity(
        config.policy,
        farm.aph,
        scenario_yield,
        scenario_price,
        config.county_yield,
    )
    premium = total_premium_per_acre(config.policy)

    profit_without_insurance = gross - cost
    net = profit_without_insurance + indemnity.total - premium

    return ProfitMatrixCell(
        yield_bu_acre=scenario_yield,
        price_bu=scenario_price,
        gross_revenue_per_acre=_cents(gross),
        total_cost_per_acre=_cents(cost),
        profit_without_insurance=_cents(profit_without_insurance),
        insurance_indemnity=_cents(indemnity.base),
        sco_indemnity=_cents(indemnity.sco),
        eco_indemnity=_cents(indemnity.eco),
        total_insurance_payout=_cents(indemnity.total),
        insurance_premium_cost=_cents(premium),
        net_profit_per_acre=_cents(net),
    )
