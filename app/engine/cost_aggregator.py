# app/engine/cost_aggregator.py

from ..programs.models_farm import CostBreakdown

COST_COMPONENTS = (
    "fertilizer",
    "chemical",
    "seed",
    "land_rent",
    "equipment_loan",
    "land_loan",
    "operating_interest",
    "other",
)


def total_cost_per_acre(costs: CostBreakdown) -> float:
    """
    Sum of all per-acre cost components. Negative components never get
    here: CostBreakdown rejects them at validation.
    """
    return sum(float(getattr(costs, name) or 0.0) for name in COST_COMPONENTS)
