import logging
from functools import lru_cache
from io import BytesIO
from typing import List

from fastapi import Depends, FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import DB_PATH, LOG_LEVEL

# Program models
from .programs.models_farm import CostBreakdown
from .programs.models_insurance import InsurancePolicy, InsurancePolicyOut
from .programs.models_matrix import ProfitMatrixRequest, ProfitMatrixResponse

# Service layers
from .services.cost_sheet import cost_breakdown_from_frame, load_cost_sheet
from .services.policy_store import PolicyStore
from .services.profit_matrix import quote_profit_matrix

# Engine layers
from .engine.errors import ProfitMatrixInputError, input_error_from_errors

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


# =======================================================
# Policy store
# =======================================================

@lru_cache(maxsize=1)
def get_store() -> PolicyStore:
    return PolicyStore(DB_PATH)


# =======================================================
# FastAPI app
# =======================================================

app = FastAPI(title="Profit Matrix API", version="1.0")


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    err = input_error_from_errors(exc.errors())
    return JSONResponse(status_code=422, content=err.to_dict())


@app.exception_handler(ProfitMatrixInputError)
def input_error_handler(request: Request, exc: ProfitMatrixInputError):
    return JSONResponse(status_code=422, content=exc.to_dict())


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Profit Matrix API running with SQLite policy store",
    }


# =======================================================
# PROFIT MATRIX (computed, no DB write)
# =======================================================

@app.post("/profit-matrix", response_model=ProfitMatrixResponse)
def profit_matrix(payload: ProfitMatrixRequest, store: PolicyStore = Depends(get_store)):
    """
    Net profit per acre across yield x price scenarios for one farm.

    When the body has no policy and the farm has a stored one, the
    stored policy is used.
    """
    stored = None
    if payload.policy is None and payload.farm.farm_id:
        stored = store.get_policy(payload.farm.farm_id)

    return quote_profit_matrix(payload, stored_policy=stored)


# =======================================================
# INSURANCE POLICIES
# =======================================================

@app.get("/insurance", response_model=List[InsurancePolicyOut])
def list_policies(store: PolicyStore = Depends(get_store)):
    return store.list_policies()


@app.get("/farms/{farm_id}/insurance", response_model=InsurancePolicyOut)
def get_policy(farm_id: str, store: PolicyStore = Depends(get_store)):
    policy = store.get_policy(farm_id)
    if policy is None:
        raise HTTPException(status_code=404, detail="Insurance policy not found")
    return policy


@app.put("/farms/{farm_id}/insurance", response_model=InsurancePolicyOut)
def upsert_policy(farm_id: str, policy: InsurancePolicy, store: PolicyStore = Depends(get_store)):
    return store.upsert_policy(farm_id, policy)


@app.delete("/farms/{farm_id}/insurance")
def delete_policy(farm_id: str, store: PolicyStore = Depends(get_store)):
    if not store.delete_policy(farm_id):
        raise HTTPException(status_code=404, detail="Insurance policy not found")
    return {"deleted": True, "farm_id": farm_id}


# =======================================================
# COST SHEET IMPORT: roll up, no DB write
# =======================================================

@app.post("/costs/import_csv", response_model=CostBreakdown)
async def import_cost_csv(
    acres: float = Query(..., gt=0, description="Farm acres, to spread whole-farm costs"),
    file: UploadFile = File(...),
):
    """
    Roll a cost line-item CSV up into a per-acre cost breakdown.
    Headers: category, amount, unit_price (optional), is_per_acre (optional)
    """
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="File must be a .csv")

    content = await file.read()
    try:
        df = load_cost_sheet(BytesIO(content))
        return cost_breakdown_from_frame(df, acres)
    except ValueError as e:
        logger.warning("rejected cost sheet %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))
