"""
Project Metrics - Repository.

============================================================
PURPOSE
============================================================
Repository for the project_metrics_realtime table.

- upsert_metrics: Persist the latest ScoredMetrics for a contract
- get_metrics: Stored row for one contract
- list_top_projects: Filtered, sorted ranking joined with
  bi_contract_index for names and categories
- get_statistics: Table-wide counts and score averages

============================================================
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, asc, case, desc, func, select
from sqlalchemy.orm import Session

from database.models import ContractIndex, ProjectMetricsRealtime

from .types import (
    InvalidSortFieldError,
    MetricsError,
    RawProjectMetrics,
    ScoredMetrics,
)


SORTABLE_FIELDS = {
    "growth_score": ProjectMetricsRealtime.growth_score,
    "health_score": ProjectMetricsRealtime.health_score,
    "risk_score": ProjectMetricsRealtime.risk_score,
    "total_customers": ProjectMetricsRealtime.total_customers,
    "total_transactions": ProjectMetricsRealtime.total_transactions,
    "total_volume_eth": ProjectMetricsRealtime.total_volume_eth,
    "success_rate_percent": ProjectMetricsRealtime.success_rate_percent,
    "last_updated": ProjectMetricsRealtime.last_updated,
}

MAX_RESULTS = 200


@dataclass(frozen=True)
class ProjectMetricsFilter:
    """Filters and ordering for project rankings."""

    chain_id: Optional[str] = None
    category: Optional[str] = None

    min_growth_score: Optional[int] = None
    max_growth_score: Optional[int] = None
    min_health_score: Optional[int] = None
    max_health_score: Optional[int] = None
    min_risk_score: Optional[int] = None
    max_risk_score: Optional[int] = None

    sort_by: str = "growth_score"
    sort_direction: str = "desc"
    limit: int = 50


class ProjectMetricsRepository:
    """Persistence operations for scored project metrics."""

    def __init__(self, session: Session):
        self._session = session

    # --------------------------------------------------------
    # WRITE OPERATIONS
    # --------------------------------------------------------

    def upsert_metrics(self, scored: ScoredMetrics) -> ProjectMetricsRealtime:
        """Insert or update the realtime row for a contract."""
        raw = scored.raw
        if not raw.contract_address:
            raise MetricsError("Cannot persist metrics without a contract address", chain_id=raw.chain_id)

        key = (raw.contract_address, str(raw.chain_id))
        row = self._session.get(ProjectMetricsRealtime, key)
        if row is None:
            row = ProjectMetricsRealtime(contract_address=key[0], chain_id=key[1])
            self._session.add(row)

        row.total_customers = raw.total_customers
        row.total_transactions = raw.total_transactions
        row.successful_transactions = raw.successful_transactions
        row.failed_transactions = raw.failed_transactions
        row.success_rate_percent = scored.success_rate
        row.total_volume_eth = raw.total_volume_eth
        row.total_fees_eth = raw.total_fees_eth
        row.avg_transaction_value_eth = raw.avg_transaction_value_eth
        row.growth_score = scored.growth_score
        row.health_score = scored.health_score
        row.risk_score = scored.risk_score
        row.last_updated = datetime.now(timezone.utc)

        self._session.flush()
        return row

    # --------------------------------------------------------
    # READ OPERATIONS
    # --------------------------------------------------------

    def get_metrics(self, contract_address: str, chain_id: str) -> Optional[ProjectMetricsRealtime]:
        return self._session.get(ProjectMetricsRealtime, (contract_address, str(chain_id)))

    def list_top_projects(self, filters: Optional[ProjectMetricsFilter] = None) -> List[Dict[str, Any]]:
        """
        Ranked projects with contract name and category.

        Raises:
            InvalidSortFieldError: if sort_by is not a sortable column
        """
        filters = filters or ProjectMetricsFilter()

        sort_column = SORTABLE_FIELDS.get(filters.sort_by)
        if sort_column is None:
            raise InvalidSortFieldError(
                f"Cannot sort by '{filters.sort_by}'. "
                f"Allowed: {', '.join(sorted(SORTABLE_FIELDS))}"
            )

        pmr = ProjectMetricsRealtime
        stmt = select(pmr, ContractIndex).outerjoin(
            ContractIndex,
            and_(
                ContractIndex.contract_address == pmr.contract_address,
                ContractIndex.chain_id == pmr.chain_id,
            ),
        )

        conditions = []
        if filters.chain_id is not None:
            conditions.append(pmr.chain_id == str(filters.chain_id))
        if filters.category is not None:
            conditions.append(ContractIndex.category == filters.category)

        bounds = [
            (pmr.growth_score, filters.min_growth_score, filters.max_growth_score),
            (pmr.health_score, filters.min_health_score, filters.max_health_score),
            (pmr.risk_score, filters.min_risk_score, filters.max_risk_score),
        ]
        for column, lower, upper in bounds:
            if lower is not None:
                conditions.append(column >= lower)
            if upper is not None:
                conditions.append(column <= upper)

        if conditions:
            stmt = stmt.where(and_(*conditions))

        order = asc if filters.sort_direction.lower() == "asc" else desc
        limit = max(1, min(MAX_RESULTS, filters.limit))
        stmt = stmt.order_by(order(sort_column), pmr.contract_address).limit(limit)

        return [
            self._row_to_dict(metrics, contract)
            for metrics, contract in self._session.execute(stmt).all()
        ]

    def get_statistics(self) -> Dict[str, Any]:
        """Counts and average scores across all stored projects."""
        pmr = ProjectMetricsRealtime
        now = datetime.now(timezone.utc)

        stmt = select(
            func.count().label("total_projects"),
            func.count(case((pmr.last_updated >= now - timedelta(hours=1), 1))).label("updated_last_hour"),
            func.count(case((pmr.last_updated >= now - timedelta(days=1), 1))).label("updated_last_day"),
            func.avg(pmr.growth_score).label("avg_growth_score"),
            func.avg(pmr.health_score).label("avg_health_score"),
            func.avg(pmr.risk_score).label("avg_risk_score"),
        ).select_from(pmr)

        row = self._session.execute(stmt).one()
        return {
            "total_projects": int(row.total_projects or 0),
            "updated_last_hour": int(row.updated_last_hour or 0),
            "updated_last_day": int(row.updated_last_day or 0),
            "avg_growth_score": float(row.avg_growth_score) if row.avg_growth_score is not None else None,
            "avg_health_score": float(row.avg_health_score) if row.avg_health_score is not None else None,
            "avg_risk_score": float(row.avg_risk_score) if row.avg_risk_score is not None else None,
        }

    # --------------------------------------------------------
    # CONVERSION
    # --------------------------------------------------------

    @staticmethod
    def to_scored_metrics(row: ProjectMetricsRealtime) -> ScoredMetrics:
        """Rebuild a ScoredMetrics record from a stored row."""
        raw = RawProjectMetrics(
            contract_address=row.contract_address,
            chain_id=row.chain_id,
            total_transactions=row.total_transactions,
            total_customers=row.total_customers,
            successful_transactions=row.successful_transactions,
            failed_transactions=row.failed_transactions,
            total_volume_eth=row.total_volume_eth,
            success_rate=row.success_rate_percent,
            total_fees_eth=row.total_fees_eth,
            avg_transaction_value_eth=row.avg_transaction_value_eth,
        )
        return ScoredMetrics(
            raw=raw,
            success_rate=row.success_rate_percent,
            growth_score=row.growth_score,
            health_score=row.health_score,
            risk_score=row.risk_score,
        )

    @classmethod
    def _row_to_dict(
        cls,
        metrics: ProjectMetricsRealtime,
        contract: Optional[ContractIndex],
    ) -> Dict[str, Any]:
        data = cls.to_scored_metrics(metrics).to_dict()
        data["last_updated"] = metrics.last_updated
        data["contract_name"] = contract.contract_name if contract else None
        data["category"] = contract.category if contract else None
        return data
