# app/engine/matrix.py

import logging
from typing import List, Optional, Sequence

from ..config import PRICE_DISTANCE_WEIGHT
from ..programs.models_matrix import ProfitMatrixCell, ProfitMatrixResponse, ProfitMatrixSummary
from .cost_aggregator import total_cost_per_acre
from .indemnity import guarantee_per_acre, total_premium_per_acre
from .inputs import EngineConfig
from .marketed_blend import pct_marketed, unmarketed_bushels_per_acre
from .profit_cell import evaluate_cell
from .scenario_grid import build_price_scenarios, build_yield_scenarios, default_price

logger = logging.getLogger(__name__)


def assemble_matrix(
    config: EngineConfig,
    yield_scenarios: Sequence[float],
    price_scenarios: Sequence[float],
) -> List[List[ProfitMatrixCell]]:
    """One row per yield scenario, one column per price scenario."""
    return [
        [evaluate_cell(config, y, p) for p in price_scenarios]
        for y in yield_scenarios
    ]


def find_projected_cell(
    matrix: Sequence[Sequence[ProfitMatrixCell]],
    target_yield: float,
    target_price: float,
) -> Optional[ProfitMatrixCell]:
    """
    Cell closest to the projected outcome. Price distance is weighted up
    so a few cents count about as much as a few bushels. First cell wins ties.
    """
    best: Optional[ProfitMatrixCell] = None
    best_dist = float("inf")
    for row in matrix:
        for cell in row:
            dist = (
                abs(cell.yield_bu_acre - target_yield)
                + abs(cell.price_bu - target_price) * PRICE_DISTANCE_WEIGHT
            )
            if dist < best_dist:
                best_dist = dist
                best = cell
    return best


def break_even_price(cost_per_acre: float, projected_yield: float) -> float:
    if projected_yield <= 0:
        return 0.0
    return cost_per_acre / projected_yield


def compute_summary(
    config: EngineConfig,
    matrix: Sequence[Sequence[ProfitMatrixCell]],
) -> ProfitMatrixSummary:
    farm = config.farm
    policy = config.policy

    cost = total_cost_per_acre(config.costs)
    target_price = policy.projected_price if policy else default_price(farm.commodity_type)
    projected_cell = find_projected_cell(matrix, farm.projected_yield, target_price)

    return ProfitMatrixSummary(
        break_even_price=round(break_even_price(cost, farm.projected_yield), 2),
        guarantee_per_acre=round(guarantee_per_acre(policy, farm.aph), 2) if policy else 0.0,
        total_premium_per_acre=round(total_premium_per_acre(policy), 2),
        pct_marketed=round(pct_marketed(farm.projected_yield, config.marketed.bushels_per_acre), 2),
        projected_cell=projected_cell,
        projected_net_profit=(
            round(projected_cell.net_profit_per_acre * farm.acres, 2) if projected_cell else 0.0
        ),
    )


def build_profit_matrix(config: EngineConfig) -> ProfitMatrixResponse:
    """
    Full profit matrix for one farm: scenario axes, every cell, and the
    summary figures. Pure function of `config`.
    """
    farm = config.farm
    policy = config.policy
    marketed = config.marketed

    yield_scenarios = build_yield_scenarios(farm.aph, farm.projected_yield, config.yield_steps)
    price_scenarios = build_price_scenarios(
        policy.projected_price if policy else None,
        config.price_steps,
        farm.commodity_type,
    )
    logger.debug(
        "profit matrix grid %dx%d for farm=%s",
        len(yield_scenarios),
        len(price_scenarios),
        farm.farm_id,
    )

    matrix = assemble_matrix(config, yield_scenarios, price_scenarios)
    summary = compute_summary(config, matrix)
    cost = total_cost_per_acre(config.costs)

    return ProfitMatrixResponse(
        farm_id=farm.farm_id,
        farm_name=farm.name,
        commodity_type=farm.commodity_type,
        acres=farm.acres,
        aph=farm.aph,
        projected_yield=farm.projected_yield,
        policy=policy,
        county_yield=config.county_yield,
        cost_breakdown=config.costs,
        total_cost_per_acre=round(cost, 2),
        break_even_price=summary.break_even_price,
        marketed_bushels_per_acre=round(marketed.bushels_per_acre, 2),
        marketed_avg_price=round(marketed.weighted_avg_price, 2),
        unmarketed_bushels_per_acre=round(
            unmarketed_bushels_per_acre(farm.projected_yield, marketed.bushels_per_acre), 2
        ),
        yield_scenarios=list(yield_scenarios),
        price_scenarios=list(price_scenarios),
        matrix=matrix,
        summary=summary,
    )
