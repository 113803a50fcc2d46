# app/engine/scenario_grid.py

import logging
import math
from typing import List, Optional

from ..config import (
    DEFAULT_PRICES,
    FALLBACK_PRICE,
    PRICE_MAX_PCT,
    PRICE_MIN_PCT,
    PRICE_TICK,
    YIELD_MAX_PCT,
    YIELD_MIN_PCT,
)
from ..programs.models_farm import CommodityType

logger = logging.getLogger(__name__)


def _pct_steps(min_pct: float, max_pct: float, steps: int) -> List[float]:
    step_size = (max_pct - min_pct) / (steps - 1)
    return [min_pct + i * step_size for i in range(steps)]


def _round_half_up(value: float, tick: float) -> float:
    # round() is banker's rounding; grid prices must round half up
    return round(math.floor(value / tick + 0.5) * tick, 2)


def _distinct(values: List[float]) -> List[float]:
    # Neighbouring points can round onto the same value for tiny anchors
    return list(dict.fromkeys(values))


def default_price(commodity_type: CommodityType) -> float:
    return DEFAULT_PRICES.get(CommodityType(commodity_type).value, FALLBACK_PRICE)


def build_yield_scenarios(aph: float, projected_yield: float, steps: int) -> List[float]:
    """
    Yield axis (bu/acre), ascending, from 50% to 120% of the anchor.

    The anchor is APH, falling back to projected yield when APH is not
    set. With neither, every row is a zero-yield scenario.
    """
    anchor = aph if aph and aph > 0 else (projected_yield or 0.0)
    if anchor <= 0:
        logger.debug("no APH or projected yield, using %d zero-yield rows", steps)
        return [0.0] * steps

    return _distinct([round(anchor * pct, 1) for pct in _pct_steps(YIELD_MIN_PCT, YIELD_MAX_PCT, steps)])


def build_price_scenarios(
    base_price: Optional[float],
    steps: int,
    commodity_type: CommodityType,
) -> List[float]:
    """
    Price axis ($/bu), ascending, from 60% to 140% of the base price.
    Corn and wheat round to the nearest nickel, soybeans to the nearest dime.
    """
    if not base_price or base_price <= 0:
        base_price = default_price(commodity_type)

    tick = PRICE_TICK.get(CommodityType(commodity_type).value, 0.05)
    return _distinct([
        _round_half_up(base_price * pct, tick)
        for pct in _pct_steps(PRICE_MIN_PCT, PRICE_MAX_PCT, steps)
    ])
