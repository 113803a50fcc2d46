# app/programs/models_farm.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class CommodityType(str, Enum):
    CORN = "CORN"
    SOYBEANS = "SOYBEANS"
    WHEAT = "WHEAT"


class FarmSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    farm_id: Optional[str] = None
    name: Optional[str] = None
    acres: float = Field(..., gt=0)
    aph: float = Field(0.0, ge=0)                # bu/acre, historical average
    projected_yield: float = Field(0.0, ge=0)    # bu/acre, this season
    commodity_type: CommodityType


class CostBreakdown(BaseModel):
    """
    Per-acre production costs. Every component is $/acre and must be
    non-negative; anything not supplied counts as zero.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    fertilizer: float = Field(0.0, ge=0)
    chemical: float = Field(0.0, ge=0)
    seed: float = Field(0.0, ge=0)
    land_rent: float = Field(0.0, ge=0)
    equipment_loan: float = Field(0.0, ge=0)
    land_loan: float = Field(0.0, ge=0)
    operating_interest: float = Field(0.0, ge=0)
    other: float = Field(0.0, ge=0)


class MarketedPosition(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    bushels_per_acre: float = Field(0.0, ge=0)
    weighted_avg_price: float = Field(0.0, ge=0, validate_default=True)

    @field_validator("weighted_avg_price")
    @classmethod
    def _ignore_price_without_bushels(cls, v: float, info: ValidationInfo) -> float:
        # Nothing sold means there is no contract price to carry
        if not info.data.get("bushels_per_acre"):
            return 0.0
        return v


class ContractAllocation(BaseModel):
    """
    One grain contract's allocation to this farm, as resolved by the
    contract store. Prices are $/bu; any of them may be missing.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    allocated_bushels: float = Field(..., ge=0)
    year: Optional[int] = None
    commodity_type: Optional[CommodityType] = None
    cash_price: Optional[float] = None
    futures_price: Optional[float] = None
    basis_price: Optional[float] = None
    is_active: bool = True
    deleted: bool = False
