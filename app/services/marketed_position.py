# app/services/marketed_position.py

import logging
from typing import Iterable, Optional

from ..programs.models_farm import CommodityType, ContractAllocation, MarketedPosition

logger = logging.getLogger(__name__)


def contract_effective_price(alloc: ContractAllocation) -> float:
    """
    $/bu a contract is worth today:
      - cash price when set
      - otherwise futures + basis
      - otherwise whichever half is known (basis-only contracts are
        still waiting on their futures leg)
    """
    if alloc.cash_price:
        return float(alloc.cash_price)
    if alloc.futures_price and alloc.basis_price:
        return float(alloc.futures_price) + float(alloc.basis_price)
    if alloc.futures_price:
        return float(alloc.futures_price)
    if alloc.basis_price:
        return float(alloc.basis_price)
    return 0.0


def summarize_contract_allocations(
    allocations: Iterable[ContractAllocation],
    acres: float,
    year: Optional[int] = None,
    commodity_type: Optional[CommodityType] = None,
) -> MarketedPosition:
    """
    Roll a farm's contract allocations up into bushels/acre sold and the
    weighted average price. Inactive or deleted contracts, and contracts
    for another year or commodity, are ignored.
    """
    total_bushels = 0.0
    total_value = 0.0
    skipped = 0

    for alloc in allocations:
        if alloc.deleted or not alloc.is_active:
            skipped += 1
            continue
        if year is not None and alloc.year is not None and alloc.year != year:
            skipped += 1
            continue
        if (
            commodity_type is not None
            and alloc.commodity_type is not None
            and alloc.commodity_type != commodity_type
        ):
            skipped += 1
            continue

        bushels = float(alloc.allocated_bushels)
        total_bushels += bushels
        total_value += bushels * contract_effective_price(alloc)

    if skipped:
        logger.debug("skipped %d contract allocations outside this farm/year", skipped)

    if acres <= 0 or total_bushels <= 0:
        return MarketedPosition()

    return MarketedPosition(
        bushels_per_acre=total_bushels / acres,
        weighted_avg_price=total_value / total_bushels,
    )
