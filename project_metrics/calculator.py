"""
Project Metrics - Calculator.

============================================================
PURPOSE
============================================================
Runs the aggregation query over mc_transaction_details for a
single contract and feeds the result into the scoring engine.

Aggregates per (contract_address, chain_id):
- COUNT(*)                         total_transactions
- COUNT(status = 'success')        successful_transactions
- COUNT(status = 'failed')         failed_transactions
- COUNT(DISTINCT from_address)     total_customers
- SUM / AVG(transaction_value)     volume in ETH
- SUM(gas_fee_eth)                 fees in ETH

============================================================
"""

import logging
from typing import Optional

from sqlalchemy import case, distinct, func, select
from sqlalchemy.orm import Session

from database.models import TransactionDetail

from .engine import MetricsScoringEngine
from .types import RawProjectMetrics, ScoredMetrics


logger = logging.getLogger(__name__)


class MetricsCalculator:
    """Aggregates indexed transactions and scores the result."""

    def __init__(
        self,
        session: Session,
        engine: Optional[MetricsScoringEngine] = None,
    ) -> None:
        self._session = session
        self._engine = engine or MetricsScoringEngine()

    def aggregate_project(self, contract_address: str, chain_id: str) -> RawProjectMetrics:
        """
        Aggregate transaction figures for one contract.

        A contract with no indexed transactions yields an all-zero
        record rather than an error.
        """
        chain_id = str(chain_id)
        tx = TransactionDetail

        stmt = (
            select(
                func.count(tx.id).label("total_transactions"),
                func.count(case((tx.status == "success", 1))).label("successful_transactions"),
                func.count(case((tx.status == "failed", 1))).label("failed_transactions"),
                func.count(distinct(tx.from_address)).label("total_customers"),
                func.coalesce(func.sum(tx.transaction_value), 0.0).label("total_volume_eth"),
                func.coalesce(func.sum(tx.gas_fee_eth), 0.0).label("total_fees_eth"),
                func.coalesce(func.avg(tx.transaction_value), 0.0).label("avg_transaction_value_eth"),
            )
            .where(tx.contract_address == contract_address)
            .where(tx.chain_id == chain_id)
        )

        row = self._session.execute(stmt).one()

        return RawProjectMetrics(
            contract_address=contract_address,
            chain_id=chain_id,
            total_transactions=int(row.total_transactions or 0),
            successful_transactions=int(row.successful_transactions or 0),
            failed_transactions=int(row.failed_transactions or 0),
            total_customers=int(row.total_customers or 0),
            total_volume_eth=float(row.total_volume_eth or 0.0),
            total_fees_eth=float(row.total_fees_eth or 0.0),
            avg_transaction_value_eth=float(row.avg_transaction_value_eth or 0.0),
        )

    def calculate_project_metrics(self, contract_address: str, chain_id: str) -> ScoredMetrics:
        """Aggregate and score one contract."""
        raw = self.aggregate_project(contract_address, chain_id)
        scored = self._engine.score(raw)

        logger.info(
            f"Calculated metrics for {contract_address} (chain {raw.chain_id}): "
            f"{raw.total_transactions} tx, {raw.total_customers} customers, "
            f"growth={scored.growth_score} health={scored.health_score} risk={scored.risk_score}"
        )
        return scored
