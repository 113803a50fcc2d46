# app/services/cost_sheet.py

import logging
from typing import Dict, Set

import pandas as pd

from ..engine.cost_aggregator import COST_COMPONENTS
from ..programs.models_farm import CostBreakdown

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: Set[str] = {"category", "amount"}

# Sheet category -> CostBreakdown component
CATEGORY_ALIASES: Dict[str, str] = {
    "fertilizer": "fertilizer",
    "fert": "fertilizer",
    "chemical": "chemical",
    "chem": "chemical",
    "herbicide": "chemical",
    "seed": "seed",
    "land_rent": "land_rent",
    "land rent": "land_rent",
    "rent": "land_rent",
    "equipment_loan": "equipment_loan",
    "equipment loan": "equipment_loan",
    "land_loan": "land_loan",
    "land loan": "land_loan",
    "operating_interest": "operating_interest",
    "operating interest": "operating_interest",
    "operating_loan": "operating_interest",
    "other": "other",
}

# Covered by the insurance policy premium; counting them here would double it
SKIPPED_CATEGORIES: Set[str] = {"insurance"}

TRUTHY = {"1", "true", "t", "yes", "y"}


def load_cost_sheet(source) -> pd.DataFrame:
    """
    Read a cost sheet CSV (path or file-like) and normalize its columns:
      category, amount, unit_price (optional), is_per_acre (optional)
    """
    df = pd.read_csv(source)
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"cost sheet must contain: {', '.join(sorted(REQUIRED_COLUMNS))}")

    return df


def cost_breakdown_from_frame(df: pd.DataFrame, acres: float) -> CostBreakdown:
    """
    Roll cost line items up into a per-acre CostBreakdown.

    Each row costs:
      - amount x unit_price when a unit price is given (usage rows)
      - amount x acres when is_per_acre is set
      - amount otherwise (whole-farm cost)
    Unknown categories go to 'other'; insurance rows are skipped.
    """
    if acres <= 0:
        raise ValueError("acres must be positive")
    if df is None or df.empty:
        return CostBreakdown()

    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]

    category = df["category"].astype(str).str.strip().str.lower()
    amount = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0).astype(float)

    if "unit_price" in df.columns:
        unit_price = pd.to_numeric(df["unit_price"], errors="coerce")
    else:
        unit_price = pd.Series(float("nan"), index=df.index)

    if "is_per_acre" in df.columns:
        per_acre = df["is_per_acre"].astype(str).str.strip().str.lower().isin(TRUTHY)
    else:
        per_acre = pd.Series(False, index=df.index)

    has_price = unit_price.notna()
    line_total = amount.copy()
    line_total[has_price] = amount[has_price] * unit_price[has_price]
    line_total[~has_price & per_acre] = amount[~has_price & per_acre] * acres

    keep = ~category.isin(SKIPPED_CATEGORIES)
    negative = line_total < 0
    if negative.any():
        logger.warning("skipping %d cost rows with negative amounts", int(negative.sum()))
        keep &= ~negative

    component = category.map(lambda c: CATEGORY_ALIASES.get(c, "other"))
    totals = line_total[keep].groupby(component[keep]).sum()

    per_acre_costs = {
        name: float(totals.get(name, 0.0)) / acres
        for name in COST_COMPONENTS
    }
    return CostBreakdown(**per_acre_costs)
