"""
Database Query Services for Dashboard.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.orm import Session

from cross_chain import compare_projects, get_supported_chains
from project_metrics import (
    MetricsCalculator,
    ProjectMetricsFilter,
    ProjectMetricsRepository,
    ProjectNotFoundError,
    ScoredMetrics,
    get_default_config,
)

logger = logging.getLogger(__name__)


class MetricsDashboardService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = ProjectMetricsRepository(session)

    # =======================
    # 1. PROJECT METRICS
    # =======================
    def get_project_metrics(self, contract_address: str, chain_id: str) -> Tuple[ScoredMetrics, str]:
        """
        Stored metrics for a contract, calculated and stored on a miss.

        Returns the metrics and their source ("stored" or "calculated").
        """
        row = self.repository.get_metrics(contract_address, chain_id)
        if row is not None:
            return self.repository.to_scored_metrics(row), "stored"

        logger.info(f"No stored metrics for {contract_address} on chain {chain_id}, calculating")
        return self.refresh_project_metrics(contract_address, chain_id), "calculated"

    def refresh_project_metrics(self, contract_address: str, chain_id: str) -> ScoredMetrics:
        """Recalculate from transactions and upsert."""
        scored = MetricsCalculator(self.session).calculate_project_metrics(contract_address, chain_id)
        if scored.total_transactions == 0:
            raise ProjectNotFoundError(
                f"No transactions indexed for {contract_address} on chain {chain_id}",
                contract_address=contract_address,
                chain_id=str(chain_id),
            )

        self.repository.upsert_metrics(scored)
        self.session.commit()
        return scored

    def get_last_updated(self, contract_address: str, chain_id: str) -> Optional[str]:
        row = self.repository.get_metrics(contract_address, chain_id)
        if row is None or row.last_updated is None:
            return None
        return row.last_updated.isoformat()

    def get_top_projects(self, filters: ProjectMetricsFilter) -> List[Dict[str, Any]]:
        return self.repository.list_top_projects(filters)

    # =======================
    # 2. STATUS
    # =======================
    def get_status(self) -> Dict[str, Any]:
        stats = self.repository.get_statistics()
        stats["supported_chains"] = len(get_supported_chains())
        stats["engine_version"] = get_default_config().engine_version
        return stats

    def check_database(self) -> bool:
        self.session.execute(text("SELECT 1")).fetchone()
        return True

    # =======================
    # 3. CROSS-CHAIN
    # =======================
    def compare_stored_projects(
        self,
        contract_a: str,
        chain_a: str,
        contract_b: str,
        chain_b: str,
    ) -> Dict[str, Any]:
        """Compare two projects from their stored metrics."""
        scored = []
        for address, chain_id in ((contract_a, chain_a), (contract_b, chain_b)):
            row = self.repository.get_metrics(address, chain_id)
            if row is None:
                raise ProjectNotFoundError(
                    f"No stored metrics for {address} on chain {chain_id}",
                    contract_address=address,
                    chain_id=str(chain_id),
                )
            scored.append(self.repository.to_scored_metrics(row))

        return compare_projects(scored[0], scored[1]).to_dict()
