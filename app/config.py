# app/config.py

import os

# =======================================================
# Paths
# =======================================================

BASE_DIR = os.path.dirname(__file__)

# SQLite DB lives one level up: root/profit_matrix.db
DB_PATH = os.environ.get(
    "PROFIT_MATRIX_DB_PATH",
    os.path.abspath(os.path.join(BASE_DIR, "..", "profit_matrix.db")),
)


# =======================================================
# Scenario grid
# =======================================================

# Yield axis runs from 50% to 120% of APH (5% steps with the default count)
YIELD_MIN_PCT = 0.50
YIELD_MAX_PCT = 1.20
DEFAULT_YIELD_STEPS = 15

# Price axis runs from 60% to 140% of the projected price
PRICE_MIN_PCT = 0.60
PRICE_MAX_PCT = 1.40
DEFAULT_PRICE_STEPS = 17

MIN_STEPS = 2
MAX_STEPS = 25

# Price rounding increments ($/bu)
PRICE_TICK = {
    "CORN": 0.05,
    "WHEAT": 0.05,
    "SOYBEANS": 0.10,
}

# Used when the farm has no insurance policy to anchor the price axis
DEFAULT_PRICES = {
    "CORN": 4.66,
    "SOYBEANS": 11.20,
    "WHEAT": 5.50,
}
FALLBACK_PRICE = 5.00


# =======================================================
# Insurance
# =======================================================

# SCO covers from 86% down to the base coverage level, ECO from eco_level down to 86%
SCO_TOP_PCT = 0.86

ALLOWED_COVERAGE_LEVELS = tuple(range(50, 90, 5))
ALLOWED_ECO_LEVELS = (90, 95)
DEFAULT_VOLATILITY_FACTOR = 0.20


# =======================================================
# Summary
# =======================================================

# Price distance is scaled up when searching for the projected cell,
# since price steps are cents while yield steps are bushels.
PRICE_DISTANCE_WEIGHT = 30.0


# =======================================================
# Logging
# =======================================================

LOG_LEVEL = os.environ.get("PROFIT_MATRIX_LOG_LEVEL", "INFO")
