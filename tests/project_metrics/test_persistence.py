"""
Tests for metrics aggregation, storage and batch refresh.

Tests cover:
- Aggregation query over mc_transaction_details
- Upsert and read-back of project_metrics_realtime rows
- Ranking filters, sorting and sort-field validation
- Pipeline refresh (single and batch) with skip/failure handling
"""

from unittest.mock import patch

import pytest

from database import DatabasePersistenceError, ProjectMetricsRealtime, transaction_scope
from project_metrics import (
    InvalidSortFieldError,
    MetricsCalculator,
    MetricsError,
    MetricsPipeline,
    ProjectMetricsFilter,
    ProjectMetricsRepository,
    ProjectNotFoundError,
    RawProjectMetrics,
    score_project,
)

from tests.conftest import ETH_CONTRACT, IDLE_CONTRACT, STARKNET_CONTRACT


# =============================================================
# TEST: Aggregation
# =============================================================

class TestMetricsCalculator:
    """Test the aggregation query."""

    def test_aggregates_transactions(self, seeded_session_factory):
        session = seeded_session_factory()
        raw = MetricsCalculator(session).aggregate_project(ETH_CONTRACT, "1")
        session.close()

        assert raw.total_transactions == 100
        assert raw.successful_transactions == 98
        assert raw.failed_transactions == 2
        assert raw.total_customers == 60
        assert raw.total_volume_eth == pytest.approx(1200.0)
        assert raw.total_fees_eth == pytest.approx(0.1)
        assert raw.avg_transaction_value_eth == pytest.approx(12.0)

    def test_chain_is_part_of_the_key(self, seeded_session_factory):
        session = seeded_session_factory()
        raw = MetricsCalculator(session).aggregate_project(ETH_CONTRACT, "137")
        session.close()

        assert raw.total_transactions == 0

    def test_unknown_contract_is_all_zero(self, seeded_session_factory):
        session = seeded_session_factory()
        raw = MetricsCalculator(session).aggregate_project(IDLE_CONTRACT, "1")
        session.close()

        assert raw.total_transactions == 0
        assert raw.total_volume_eth == 0.0
        assert raw.avg_transaction_value_eth == 0.0

    def test_calculates_scores(self, seeded_session_factory):
        session = seeded_session_factory()
        scored = MetricsCalculator(session).calculate_project_metrics(ETH_CONTRACT, 1)
        session.close()

        assert scored.chain_id == "1"
        assert (scored.growth_score, scored.health_score, scored.risk_score) == (85, 85, 20)


# =============================================================
# TEST: Repository
# =============================================================

class TestProjectMetricsRepository:
    """Test project_metrics_realtime persistence."""

    def _store(self, session_factory, contract_address, chain_id, **figures):
        scored = score_project(RawProjectMetrics(
            contract_address=contract_address,
            chain_id=chain_id,
            **figures,
        ))
        with transaction_scope(session_factory) as session:
            ProjectMetricsRepository(session).upsert_metrics(scored)
        return scored

    def test_upsert_inserts_then_updates(self, session_factory):
        self._store(session_factory, "0xaaa", "1", total_transactions=10, successful_transactions=10)
        self._store(session_factory, "0xaaa", "1", total_transactions=20, successful_transactions=10, failed_transactions=10)

        session = session_factory()
        rows = session.query(ProjectMetricsRealtime).all()
        session.close()

        assert len(rows) == 1
        assert rows[0].total_transactions == 20
        assert rows[0].success_rate_percent == pytest.approx(50.0)
        assert rows[0].last_updated is not None

    def test_upsert_requires_contract_address(self, session_factory):
        scored = score_project(RawProjectMetrics(chain_id="1"))
        session = session_factory()
        with pytest.raises(MetricsError):
            ProjectMetricsRepository(session).upsert_metrics(scored)
        session.close()

    def test_round_trip_through_row(self, session_factory):
        stored = self._store(
            session_factory, "0xbbb", "starknet",
            total_transactions=100, successful_transactions=98, failed_transactions=2,
            total_customers=60, total_volume_eth=1200.0,
        )

        session = session_factory()
        repository = ProjectMetricsRepository(session)
        loaded = repository.to_scored_metrics(repository.get_metrics("0xbbb", "starknet"))
        session.close()

        assert loaded.growth_score == stored.growth_score
        assert loaded.risk_score == stored.risk_score
        assert loaded.total_customers == 60
        assert loaded.contract_address == "0xbbb"

    def test_get_missing_returns_none(self, session_factory):
        session = session_factory()
        assert ProjectMetricsRepository(session).get_metrics("0xnope", "1") is None
        session.close()

    def test_list_top_projects_sorted_and_joined(self, seeded_session_factory):
        pipeline = MetricsPipeline(seeded_session_factory)
        pipeline.refresh_all()

        session = seeded_session_factory()
        projects = ProjectMetricsRepository(session).list_top_projects()
        session.close()

        assert [p["contract_address"] for p in projects] == [ETH_CONTRACT, STARKNET_CONTRACT]
        assert projects[0]["contract_name"] == "Alpha DEX"
        assert projects[0]["category"] == "defi"
        assert projects[0]["growth_score"] >= projects[1]["growth_score"]

    def test_list_top_projects_filters(self, seeded_session_factory):
        MetricsPipeline(seeded_session_factory).refresh_all()
        session = seeded_session_factory()
        repository = ProjectMetricsRepository(session)

        by_chain = repository.list_top_projects(ProjectMetricsFilter(chain_id="starknet"))
        by_category = repository.list_top_projects(ProjectMetricsFilter(category="gaming"))
        low_risk = repository.list_top_projects(ProjectMetricsFilter(max_risk_score=30))
        ascending = repository.list_top_projects(ProjectMetricsFilter(sort_by="risk_score", sort_direction="asc"))
        limited = repository.list_top_projects(ProjectMetricsFilter(limit=1))
        session.close()

        assert [p["contract_address"] for p in by_chain] == [STARKNET_CONTRACT]
        assert [p["contract_address"] for p in by_category] == [STARKNET_CONTRACT]
        assert [p["contract_address"] for p in low_risk] == [ETH_CONTRACT]
        assert [p["risk_score"] for p in ascending] == [20, 60]
        assert len(limited) == 1

    def test_invalid_sort_field_rejected(self, session_factory):
        session = session_factory()
        with pytest.raises(InvalidSortFieldError):
            ProjectMetricsRepository(session).list_top_projects(
                ProjectMetricsFilter(sort_by="growth_score; DROP TABLE x")
            )
        session.close()

    def test_statistics(self, seeded_session_factory):
        MetricsPipeline(seeded_session_factory).refresh_all()
        session = seeded_session_factory()
        stats = ProjectMetricsRepository(session).get_statistics()
        session.close()

        assert stats["total_projects"] == 2
        assert stats["avg_growth_score"] == pytest.approx((85 + 55) / 2)
        assert stats["avg_risk_score"] == pytest.approx((20 + 60) / 2)

    def test_statistics_on_empty_table(self, session_factory):
        session = session_factory()
        stats = ProjectMetricsRepository(session).get_statistics()
        session.close()

        assert stats["total_projects"] == 0
        assert stats["avg_health_score"] is None


# =============================================================
# TEST: Pipeline
# =============================================================

class TestMetricsPipeline:
    """Test single and batch refresh."""

    def test_refresh_project_stores_row(self, seeded_session_factory):
        scored = MetricsPipeline(seeded_session_factory).refresh_project(STARKNET_CONTRACT, "starknet")

        assert scored.success_rate == pytest.approx(75.0)
        assert (scored.growth_score, scored.health_score, scored.risk_score) == (55, 50, 60)

        session = seeded_session_factory()
        row = ProjectMetricsRepository(session).get_metrics(STARKNET_CONTRACT, "starknet")
        session.close()
        assert row.total_transactions == 40
        assert row.failed_transactions == 10

    def test_refresh_project_without_transactions(self, seeded_session_factory):
        with pytest.raises(ProjectNotFoundError):
            MetricsPipeline(seeded_session_factory).refresh_project(IDLE_CONTRACT, "1")

        session = seeded_session_factory()
        assert ProjectMetricsRepository(session).get_metrics(IDLE_CONTRACT, "1") is None
        session.close()

    def test_refresh_all_skips_idle_contracts(self, seeded_session_factory):
        summary = MetricsPipeline(seeded_session_factory).refresh_all()

        assert summary.processed == 2
        assert summary.skipped == 1
        assert summary.failures == []
        assert summary.total == 3
        assert summary.finished_at is not None

    def test_refresh_all_single_chain(self, seeded_session_factory):
        summary = MetricsPipeline(seeded_session_factory).refresh_all(chain_id="starknet")

        assert summary.processed == 1
        assert summary.skipped == 0

    def test_refresh_all_continues_after_failure(self, seeded_session_factory):
        pipeline = MetricsPipeline(seeded_session_factory)
        real_refresh = pipeline.refresh_project

        def flaky(contract_address, chain_id):
            if contract_address == ETH_CONTRACT:
                raise DatabasePersistenceError("connection reset")
            return real_refresh(contract_address, chain_id)

        with patch.object(pipeline, "refresh_project", side_effect=flaky):
            summary = pipeline.refresh_all()

        assert summary.processed == 1
        assert summary.skipped == 1
        assert summary.failures == [(ETH_CONTRACT, "1", "connection reset")]

        data = summary.to_dict()
        assert data["failed"] == 1
        assert data["failures"][0]["contract_address"] == ETH_CONTRACT
