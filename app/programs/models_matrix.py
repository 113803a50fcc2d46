# app/programs/models_matrix.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import MAX_STEPS, MIN_STEPS
from .models_farm import (
    CommodityType,
    ContractAllocation,
    CostBreakdown,
    FarmSnapshot,
    MarketedPosition,
)
from .models_insurance import CountyYieldSimulation, InsurancePolicy


class ProfitMatrixCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    yield_bu_acre: float
    price_bu: float
    gross_revenue_per_acre: float
    total_cost_per_acre: float
    profit_without_insurance: float
    insurance_indemnity: float      # base policy layer
    sco_indemnity: float
    eco_indemnity: float
    total_insurance_payout: float
    insurance_premium_cost: float
    net_profit_per_acre: float


class ProfitMatrixSummary(BaseModel):
    break_even_price: float
    guarantee_per_acre: float
    total_premium_per_acre: float
    pct_marketed: float
    projected_cell: Optional[ProfitMatrixCell] = None
    projected_net_profit: float     # whole farm, projected cell x acres


class ProfitMatrixResponse(BaseModel):
    farm_id: Optional[str] = None
    farm_name: Optional[str] = None
    commodity_type: CommodityType
    acres: float
    aph: float
    projected_yield: float

    policy: Optional[InsurancePolicy] = None
    county_yield: Optional[CountyYieldSimulation] = None
    cost_breakdown: CostBreakdown

    total_cost_per_acre: float
    break_even_price: float
    marketed_bushels_per_acre: float
    marketed_avg_price: float
    unmarketed_bushels_per_acre: float

    yield_scenarios: List[float]
    price_scenarios: List[float]
    matrix: List[List[ProfitMatrixCell]]
    summary: ProfitMatrixSummary


class ProfitMatrixRequest(BaseModel):
    """
    Everything the engine needs for one farm. Either a resolved
    `marketed` position or the raw `contracts` may be sent; when both
    are present `marketed` wins.
    """

    farm: FarmSnapshot
    costs: CostBreakdown = CostBreakdown()
    marketed: Optional[MarketedPosition] = None
    contracts: List[ContractAllocation] = []
    year: Optional[int] = None
    policy: Optional[InsurancePolicy] = None
    county_yield: Optional[CountyYieldSimulation] = None
    yield_steps: Optional[int] = Field(None, ge=MIN_STEPS, le=MAX_STEPS)
    price_steps: Optional[int] = Field(None, ge=MIN_STEPS, le=MAX_STEPS)
