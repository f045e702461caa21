"""
Project Metrics - Refresh Pipeline.

============================================================
PURPOSE
============================================================
Recalculates and stores metrics for tracked contracts.

- refresh_project: one contract, one transaction
- refresh_all: every contract in bi_contract_index
  (optionally one chain); contracts with no transactions are
  skipped, failures are recorded and the batch continues

============================================================
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from database.engine import DatabasePersistenceError, transaction_scope
from database.models import ContractIndex

from .calculator import MetricsCalculator
from .config import MetricsScoringConfig
from .engine import MetricsScoringEngine
from .repository import ProjectMetricsRepository
from .types import MetricsError, ProjectNotFoundError, ScoredMetrics


logger = logging.getLogger(__name__)


@dataclass
class PipelineRunSummary:
    """Outcome of one batch refresh."""

    started_at: datetime
    finished_at: Optional[datetime] = None
    processed: int = 0
    skipped: int = 0
    failures: List[Tuple[str, str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.processed + self.skipped + len(self.failures)

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "processed": self.processed,
            "skipped": self.skipped,
            "failed": len(self.failures),
            "failures": [
                {"contract_address": address, "chain_id": chain_id, "error": error}
                for address, chain_id, error in self.failures
            ],
            "duration_seconds": self.duration_seconds,
        }


class MetricsPipeline:
    """Batch and single-contract metrics refresh."""

    def __init__(
        self,
        session_factory: sessionmaker,
        config: Optional[MetricsScoringConfig] = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = MetricsScoringEngine(config)

    def refresh_project(self, contract_address: str, chain_id: str) -> ScoredMetrics:
        """
        Recalculate and store metrics for one contract.

        Raises:
            ProjectNotFoundError: if the contract has no indexed transactions
        """
        with transaction_scope(self._session_factory) as session:
            calculator = MetricsCalculator(session, self._engine)
            scored = calculator.calculate_project_metrics(contract_address, chain_id)

            if scored.total_transactions == 0:
                raise ProjectNotFoundError(
                    f"No transactions indexed for {contract_address} on chain {chain_id}",
                    contract_address=contract_address,
                    chain_id=str(chain_id),
                )

            ProjectMetricsRepository(session).upsert_metrics(scored)

        return scored

    def list_contracts(self, chain_id: Optional[str] = None) -> List[Tuple[str, str]]:
        session = self._session_factory()
        try:
            stmt = select(ContractIndex.contract_address, ContractIndex.chain_id)
            if chain_id is not None:
                stmt = stmt.where(ContractIndex.chain_id == str(chain_id))
            stmt = stmt.order_by(ContractIndex.id)
            return [(row.contract_address, row.chain_id) for row in session.execute(stmt)]
        finally:
            session.close()

    def refresh_all(self, chain_id: Optional[str] = None) -> PipelineRunSummary:
        """Refresh every tracked contract, continuing past failures."""
        summary = PipelineRunSummary(started_at=datetime.now(timezone.utc))
        contracts = self.list_contracts(chain_id)

        logger.info(f"Refreshing metrics for {len(contracts)} contracts")

        for contract_address, contract_chain in contracts:
            try:
                self.refresh_project(contract_address, contract_chain)
                summary.processed += 1
            except ProjectNotFoundError:
                logger.info(f"Skipping {contract_address} (no transactions)")
                summary.skipped += 1
            except (MetricsError, DatabasePersistenceError) as e:
                logger.error(f"Failed to refresh metrics for {contract_address}: {e}")
                summary.failures.append((contract_address, contract_chain, str(e)))

        summary.finished_at = datetime.now(timezone.utc)
        logger.info(
            f"Metrics refresh complete: {summary.processed} processed, "
            f"{summary.skipped} skipped, {len(summary.failures)} failed "
            f"in {summary.duration_seconds:.2f}s"
        )
        return summary
