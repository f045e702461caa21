"""
Project Metrics - Scoring Engine.

============================================================
PURPOSE
============================================================
Turns aggregated transaction figures into three bounded
composite scores: growth, health and risk.

============================================================
DESIGN PRINCIPLES
============================================================
- Pure: no I/O, no clock, no mutation of the input
- Deterministic: same input = same output
- Never raises for numeric input
  * total_transactions == 0 -> success rate 0
  * negative or NaN figures are treated as 0
  * figures beyond the float range are capped at MAX_FIGURE
  * success rate is clamped to [0, 100]
- Every score is an int clamped to [0, 100]

============================================================
USAGE
============================================================
    from project_metrics import RawProjectMetrics, score_project

    scored = score_project(RawProjectMetrics(
        chain_id="1",
        total_transactions=100,
        successful_transactions=98,
        failed_transactions=2,
        total_customers=60,
        total_volume_eth=1200.0,
    ))

    scored.growth_score   # 85
    scored.health_score   # 85
    scored.risk_score     # 20

============================================================
"""

import logging
import math
import sys
from typing import Dict, Optional

from .config import MetricsScoringConfig, apply_tiers, get_default_config
from .types import RawProjectMetrics, ScoreDimension, ScoredMetrics


logger = logging.getLogger(__name__)


# ============================================================
# SANITISING HELPERS
# ============================================================


MAX_FIGURE = sys.float_info.max


def _non_negative(value: Optional[float]) -> float:
    """Map None, NaN and negatives to 0; cap huge figures at MAX_FIGURE."""
    if value is None:
        return 0.0
    try:
        value = float(value)
    except OverflowError:
        return MAX_FIGURE if value > 0 else 0.0
    if math.isnan(value) or value < 0:
        return 0.0
    return min(value, MAX_FIGURE)


def _clamp_score(value: int, config: MetricsScoringConfig) -> int:
    return max(config.min_score, min(config.max_score, int(value)))


def calculate_success_rate(successful: Optional[float], total: Optional[float]) -> float:
    """
    Percentage of successful transactions.

    Returns 0.0 when there are no transactions. The result is
    clamped to [0, 100] so inconsistent counts from the caller
    (successful > total) cannot leak out of range.
    """
    total = _non_negative(total)
    if total == 0:
        return 0.0
    rate = _non_negative(successful) / total * 100
    return max(0.0, min(100.0, rate))


# ============================================================
# SCORE CALCULATIONS
# ============================================================


def calculate_growth_score(
    success_rate: float,
    total_customers: float,
    config: Optional[MetricsScoringConfig] = None,
) -> int:
    """Growth score from success rate and customer count."""
    config = config or get_default_config()
    tiers = config.growth
    score = (
        tiers.baseline
        + apply_tiers(_non_negative(success_rate), tiers.success_rate_tiers)
        + apply_tiers(_non_negative(total_customers), tiers.customer_tiers)
    )
    return _clamp_score(score, config)


def calculate_health_score(
    success_rate: float,
    total_volume_eth: float,
    config: Optional[MetricsScoringConfig] = None,
) -> int:
    """Health score from success rate and ETH volume."""
    config = config or get_default_config()
    tiers = config.health
    score = (
        tiers.baseline
        + apply_tiers(_non_negative(success_rate), tiers.success_rate_tiers)
        + apply_tiers(_non_negative(total_volume_eth), tiers.volume_tiers)
    )
    return _clamp_score(score, config)


def calculate_risk_score(
    success_rate: float,
    failed_transactions: float,
    config: Optional[MetricsScoringConfig] = None,
) -> int:
    """Risk score from success rate and failed transaction count."""
    config = config or get_default_config()
    tiers = config.risk
    score = (
        tiers.baseline
        + apply_tiers(_non_negative(success_rate), tiers.success_rate_tiers)
        + apply_tiers(_non_negative(failed_transactions), tiers.failed_transaction_tiers)
    )
    return _clamp_score(score, config)


# ============================================================
# ENGINE
# ============================================================


class MetricsScoringEngine:
    """
    Scores one project at a time.

    Stateless between calls; safe to share across requests.
    """

    def __init__(self, config: Optional[MetricsScoringConfig] = None) -> None:
        self.config = config or get_default_config()

    def score(self, raw: RawProjectMetrics) -> ScoredMetrics:
        """Derive success rate and all three scores for a project."""
        success_rate = calculate_success_rate(
            raw.successful_transactions,
            raw.total_transactions,
        )

        growth = calculate_growth_score(success_rate, raw.total_customers, self.config)
        health = calculate_health_score(success_rate, raw.total_volume_eth, self.config)
        risk = calculate_risk_score(success_rate, raw.failed_transactions, self.config)

        logger.debug(
            f"Scored {raw.contract_address or '<unknown>'} on chain {raw.chain_id}: "
            f"growth={growth} health={health} risk={risk} success_rate={success_rate:.2f}"
        )

        return ScoredMetrics(
            raw=raw,
            success_rate=success_rate,
            growth_score=growth,
            health_score=health,
            risk_score=risk,
            breakdown=self._breakdown(raw, success_rate),
        )

    def _breakdown(self, raw: RawProjectMetrics, success_rate: float) -> Dict[str, Dict[str, int]]:
        """Per-component adjustments, for transparency in API responses."""
        growth, health, risk = self.config.growth, self.config.health, self.config.risk
        return {
            ScoreDimension.GROWTH.value: {
                "baseline": growth.baseline,
                "success_rate": apply_tiers(success_rate, growth.success_rate_tiers),
                "customers": apply_tiers(_non_negative(raw.total_customers), growth.customer_tiers),
            },
            ScoreDimension.HEALTH.value: {
                "baseline": health.baseline,
                "success_rate": apply_tiers(success_rate, health.success_rate_tiers),
                "volume": apply_tiers(_non_negative(raw.total_volume_eth), health.volume_tiers),
            },
            ScoreDimension.RISK.value: {
                "baseline": risk.baseline,
                "success_rate": apply_tiers(success_rate, risk.success_rate_tiers),
                "failed_transactions": apply_tiers(
                    _non_negative(raw.failed_transactions), risk.failed_transaction_tiers
                ),
            },
        }

    def get_config(self) -> MetricsScoringConfig:
        return self.config


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================


def score_project(
    raw: RawProjectMetrics,
    config: Optional[MetricsScoringConfig] = None,
) -> ScoredMetrics:
    """Score a project in one call."""
    return MetricsScoringEngine(config=config).score(raw)


def format_metrics_summary(scored: ScoredMetrics) -> str:
    """Human-readable summary for logs and CLI output."""
    raw = scored.raw
    lines = [
        "=" * 50,
        f"PROJECT METRICS: {raw.contract_address or 'N/A'} (chain {raw.chain_id})",
        "=" * 50,
        f"Transactions:  {raw.total_transactions} "
        f"({raw.successful_transactions} ok / {raw.failed_transactions} failed)",
        f"Customers:     {raw.total_customers}",
        f"Volume:        {raw.total_volume_eth:.4f} ETH",
        f"Success Rate:  {scored.success_rate:.1f}%",
        "",
        f"Growth Score:  {scored.growth_score}/100",
        f"Health Score:  {scored.health_score}/100",
        f"Risk Score:    {scored.risk_score}/100",
        "=" * 50,
    ]
    return "\n".join(lines)
