"""
Project Metrics - Package.

============================================================
PURPOSE
============================================================
Scores on-chain projects from their indexed transactions.

============================================================
WHAT IT IS
============================================================
- Deterministic, threshold-based scoring of aggregated figures
- Produces three integer scores in [0, 100]
- Aggregation, persistence and batch refresh around the scorer

============================================================
WHAT IT IS NOT
============================================================
- NOT a transaction indexer (reads mc_transaction_details)
- NOT chain-aware (see cross_chain for normalization)

============================================================
THREE SCORES
============================================================
1. GROWTH: Success rate and customer base (higher = better)
2. HEALTH: Success rate and ETH volume (higher = better)
3. RISK: Success rate and failed transactions (higher = riskier)

============================================================
USAGE
============================================================
    from project_metrics import RawProjectMetrics, MetricsScoringEngine

    engine = MetricsScoringEngine()

    scored = engine.score(RawProjectMetrics(
        chain_id="1",
        contract_address="0xabc...",
        total_transactions=100,
        successful_transactions=98,
        failed_transactions=2,
        total_customers=60,
        total_volume_eth=1200.0,
    ))

    print(f"Growth: {scored.growth_score}/100")
    print(f"Risk:   {scored.risk_score}/100")

    # Batch refresh against the database
    from database import DatabaseConfig, create_database_engine, create_session_factory
    from project_metrics import MetricsPipeline

    engine = create_database_engine(DatabaseConfig.from_env())
    summary = MetricsPipeline(create_session_factory(engine)).refresh_all()

============================================================
"""

# Types
from .types import (
    # Enums
    ScoreDimension,
    TierDirection,

    # Data contracts
    RawProjectMetrics,
    ScoredMetrics,

    # Exceptions
    MetricsError,
    ProjectNotFoundError,
    InvalidSortFieldError,
)

# Configuration
from .config import (
    ScoreTier,
    GrowthScoreConfig,
    HealthScoreConfig,
    RiskScoreConfig,
    MetricsScoringConfig,
    apply_tiers,
    get_default_config,
)

# Engine
from .engine import (
    MetricsScoringEngine,
    calculate_success_rate,
    calculate_growth_score,
    calculate_health_score,
    calculate_risk_score,
    score_project,
    format_metrics_summary,
)

# Persistence
from .calculator import MetricsCalculator
from .repository import (
    ProjectMetricsFilter,
    ProjectMetricsRepository,
    SORTABLE_FIELDS,
)
from .pipeline import MetricsPipeline, PipelineRunSummary


__all__ = [
    # Enums
    "ScoreDimension",
    "TierDirection",

    # Data contracts
    "RawProjectMetrics",
    "ScoredMetrics",

    # Exceptions
    "MetricsError",
    "ProjectNotFoundError",
    "InvalidSortFieldError",

    # Configuration
    "ScoreTier",
    "GrowthScoreConfig",
    "HealthScoreConfig",
    "RiskScoreConfig",
    "MetricsScoringConfig",
    "apply_tiers",
    "get_default_config",

    # Engine
    "MetricsScoringEngine",
    "calculate_success_rate",
    "calculate_growth_score",
    "calculate_health_score",
    "calculate_risk_score",
    "score_project",
    "format_metrics_summary",

    # Persistence
    "MetricsCalculator",
    "ProjectMetricsFilter",
    "ProjectMetricsRepository",
    "SORTABLE_FIELDS",
    "MetricsPipeline",
    "PipelineRunSummary",
]
