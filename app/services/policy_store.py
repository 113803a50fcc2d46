# app/services/policy_store.py

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from ..programs.models_insurance import InsurancePolicy, InsurancePolicyOut

logger = logging.getLogger(__name__)


class PolicyStore:
    """
    SQLite-backed insurance policies, one per farm. Deletes are soft:
    `deleted_at` is set, and a later upsert revives the row.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        # Single shared connection (FastAPI dev / small-scale use)
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.init_db()

    def init_db(self) -> None:
        with self.conn:
            self.conn.execute(
                """
                CREATE TABLE IF NOT EXISTS insurance_policies (
                    farm_id TEXT PRIMARY KEY,
                    plan_type TEXT NOT NULL,
                    coverage_level INTEGER NOT NULL,
                    projected_price REAL NOT NULL,
                    volatility_factor REAL NOT NULL,
                    premium_per_acre REAL NOT NULL,
                    has_sco INTEGER NOT NULL DEFAULT 0,
                    has_eco INTEGER NOT NULL DEFAULT 0,
                    eco_level INTEGER,
                    sco_premium_per_acre REAL NOT NULL DEFAULT 0,
                    eco_premium_per_acre REAL NOT NULL DEFAULT 0,
                    updated_at TEXT NOT NULL,
                    deleted_at TEXT
                )
                """
            )

    def close(self) -> None:
        self.conn.close()

    @staticmethod
    def row_to_policy(row: sqlite3.Row) -> InsurancePolicyOut:
        return InsurancePolicyOut(
            farm_id=row["farm_id"],
            plan_type=row["plan_type"],
            coverage_level=row["coverage_level"],
            projected_price=row["projected_price"],
            volatility_factor=row["volatility_factor"],
            premium_per_acre=row["premium_per_acre"],
            has_sco=bool(row["has_sco"]),
            has_eco=bool(row["has_eco"]),
            eco_level=row["eco_level"],
            sco_premium_per_acre=row["sco_premium_per_acre"],
            eco_premium_per_acre=row["eco_premium_per_acre"],
        )

    def get_policy(self, farm_id: str) -> Optional[InsurancePolicyOut]:
        row = self.conn.execute(
            "SELECT * FROM insurance_policies WHERE farm_id = ? AND deleted_at IS NULL",
            (farm_id,),
        ).fetchone()
        if row is None:
            return None
        return self.row_to_policy(row)

    def list_policies(self) -> List[InsurancePolicyOut]:
        rows = self.conn.execute(
            "SELECT * FROM insurance_policies WHERE deleted_at IS NULL ORDER BY farm_id ASC"
        ).fetchall()
        return [self.row_to_policy(r) for r in rows]

    def upsert_policy(self, farm_id: str, policy: InsurancePolicy) -> InsurancePolicyOut:
        now = datetime.now(timezone.utc).isoformat()
        with self.conn:
            self.conn.execute(
                """
                INSERT INTO insurance_policies (
                    farm_id, plan_type, coverage_level, projected_price,
                    volatility_factor, premium_per_acre,
                    has_sco, has_eco, eco_level,
                    sco_premium_per_acre, eco_premium_per_acre,
                    updated_at, deleted_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, NULL)
                ON CONFLICT(farm_id) DO UPDATE SET
                    plan_type = excluded.plan_type,
                    coverage_level = excluded.coverage_level,
                    projected_price = excluded.projected_price,
                    volatility_factor = excluded.volatility_factor,
                    premium_per_acre = excluded.premium_per_acre,
                    has_sco = excluded.has_sco,
                    has_eco = excluded.has_eco,
                    eco_level = excluded.eco_level,
                    sco_premium_per_acre = excluded.sco_premium_per_acre,
                    eco_premium_per_acre = excluded.eco_premium_per_acre,
                    updated_at = excluded.updated_at,
                    deleted_at = NULL
                """,
                (
                    farm_id,
                    policy.plan_type.value,
                    policy.coverage_level,
                    policy.projected_price,
                    policy.volatility_factor,
                    policy.premium_per_acre,
                    1 if policy.has_sco else 0,
                    1 if policy.has_eco else 0,
                    policy.eco_level,
                    policy.sco_premium_per_acre,
                    policy.eco_premium_per_acre,
                    now,
                ),
            )
        logger.info("saved %s insurance policy for farm=%s", policy.plan_type.value, farm_id)
        return self.get_policy(farm_id)

    def delete_policy(self, farm_id: str) -> bool:
        now = datetime.now(timezone.utc).isoformat()
        with self.conn:
            cur = self.conn.execute(
                "UPDATE insurance_policies SET deleted_at = ? WHERE farm_id = ? AND deleted_at IS NULL",
                (now, farm_id),
            )
        if cur.rowcount:
            logger.info("deleted insurance policy for farm=%s", farm_id)
        return cur.rowcount > 0
