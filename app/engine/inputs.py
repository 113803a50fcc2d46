# app/engine/inputs.py

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import DEFAULT_PRICE_STEPS, DEFAULT_YIELD_STEPS, MAX_STEPS, MIN_STEPS
from ..programs.models_farm import CostBreakdown, FarmSnapshot, MarketedPosition
from ..programs.models_insurance import CountyYieldSimulation, InsurancePolicy
from .errors import input_error_from_errors

logger = logging.getLogger(__name__)


class EngineConfig(BaseModel):
    """
    Fully validated, immutable input snapshot for one profit matrix run.
    Optional inputs are already resolved: `policy is None` means no
    insurance, `county_yield is None` means SCO/ECO pay nothing.
    """

    model_config = ConfigDict(frozen=True)

    farm: FarmSnapshot
    costs: CostBreakdown = CostBreakdown()
    marketed: MarketedPosition = MarketedPosition()
    policy: Optional[InsurancePolicy] = None
    county_yield: Optional[CountyYieldSimulation] = None
    yield_steps: int = Field(DEFAULT_YIELD_STEPS, ge=MIN_STEPS, le=MAX_STEPS)
    price_steps: int = Field(DEFAULT_PRICE_STEPS, ge=MIN_STEPS, le=MAX_STEPS)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def resolve_config(
    farm: Any,
    costs: Any = None,
    marketed: Any = None,
    policy: Any = None,
    county_yield: Any = None,
    yield_steps: Optional[int] = None,
    price_steps: Optional[int] = None,
) -> EngineConfig:
    """
    Validate raw inputs (dicts or models) into an EngineConfig.

    Raises ProfitMatrixInputError naming the first offending field;
    nothing is computed when validation fails.
    """
    raw = {"farm": _dump(farm)}
    if costs is not None:
        raw["costs"] = _dump(costs)
    if marketed is not None:
        raw["marketed"] = _dump(marketed)
    if policy is not None:
        raw["policy"] = _dump(policy)
    if county_yield is not None:
        raw["county_yield"] = _dump(county_yield)
    if yield_steps is not None:
        raw["yield_steps"] = yield_steps
    if price_steps is not None:
        raw["price_steps"] = price_steps

    try:
        config = EngineConfig.model_validate(raw)
    except ValidationError as e:
        err = input_error_from_errors(e.errors(), skip_prefix=())
        logger.info("rejected profit matrix input: %s", err)
        raise err from e

    # Expected county yield of zero = simulation not configured
    if config.county_yield is not None and config.county_yield.expected_county_yield <= 0:
        config = config.model_copy(update={"county_yield": None})

    return config
