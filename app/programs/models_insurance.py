# app/programs/models_insurance.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..config import ALLOWED_COVERAGE_LEVELS, ALLOWED_ECO_LEVELS, DEFAULT_VOLATILITY_FACTOR


class PlanType(str, Enum):
    RP = "RP"          # Revenue Protection
    YP = "YP"          # Yield Protection
    RP_HPE = "RP_HPE"  # Revenue Protection, Harvest Price Exclusion


class InsurancePolicy(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    plan_type: PlanType
    coverage_level: int
    projected_price: float = Field(..., gt=0)
    premium_per_acre: float = Field(0.0, ge=0)
    volatility_factor: float = Field(DEFAULT_VOLATILITY_FACTOR, ge=0)

    has_sco: bool = False
    has_eco: bool = False
    eco_level: Optional[int] = Field(None, validate_default=True)
    sco_premium_per_acre: float = Field(0.0, ge=0)
    eco_premium_per_acre: float = Field(0.0, ge=0)

    @field_validator("coverage_level")
    @classmethod
    def _check_coverage(cls, v: int) -> int:
        if v not in ALLOWED_COVERAGE_LEVELS:
            raise ValueError("coverage_level must be 50-85 in steps of 5")
        return v

    @field_validator("eco_level")
    @classmethod
    def _check_eco_level(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        if v is None:
            if info.data.get("has_eco"):
                raise ValueError("eco_level is required when has_eco is true")
            return None
        if v not in ALLOWED_ECO_LEVELS:
            raise ValueError("eco_level must be 90 or 95")
        return v


class InsurancePolicyOut(InsurancePolicy):
    farm_id: str


class CountyYieldSimulation(BaseModel):
    """
    County-level yields used to trigger SCO/ECO. An expected county
    yield of zero means the simulation is not configured.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    expected_county_yield: float = Field(..., ge=0)
    simulated_county_yield: float = Field(..., ge=0)
