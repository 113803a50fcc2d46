# app/services/profit_matrix.py

import logging
from typing import Optional

from ..engine.inputs import resolve_config
from ..engine.matrix import build_profit_matrix
from ..programs.models_insurance import InsurancePolicy
from ..programs.models_matrix import ProfitMatrixRequest, ProfitMatrixResponse
from .marketed_position import summarize_contract_allocations

logger = logging.getLogger(__name__)


def quote_profit_matrix(
    request: ProfitMatrixRequest,
    stored_policy: Optional[InsurancePolicy] = None,
) -> ProfitMatrixResponse:
    """
    Resolve one farm's request into engine inputs and build its profit matrix.

    - `request.marketed` wins over `request.contracts`; contracts are rolled
      up for the farm's year and commodity
    - a policy in the request wins over the stored one; neither = no insurance

    Raises ProfitMatrixInputError on invalid input.
    """
    farm = request.farm

    marketed = request.marketed
    if marketed is None and request.contracts:
        marketed = summarize_contract_allocations(
            request.contracts,
            acres=farm.acres,
            year=request.year,
            commodity_type=farm.commodity_type,
        )

    policy = request.policy if request.policy is not None else stored_policy

    config = resolve_config(
        farm=farm,
        costs=request.costs,
        marketed=marketed,
        policy=policy,
        county_yield=request.county_yield,
        yield_steps=request.yield_steps,
        price_steps=request.price_steps,
    )

    result = build_profit_matrix(config)
    logger.info(
        "profit matrix farm=%s commodity=%s plan=%s grid=%dx%d break_even=%.2f",
        farm.farm_id,
        farm.commodity_type.value,
        policy.plan_type.value if policy else "none",
        len(result.yield_scenarios),
        len(result.price_scenarios),
        result.break_even_price,
    )
    return result
