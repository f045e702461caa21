"""
Cross-Chain - Comparator.

============================================================
PURPOSE
============================================================
Decides which of two projects is ahead on each dimension and
overall.

============================================================
RULES
============================================================
- diff = |a - b|, avg = a / 2 + b / 2
- avg == 0 or diff / avg < tie_threshold   -> tie
- otherwise the larger value wins
- Risk is compared with the operands swapped (lower risk wins)
- Swapping the projects inverts every A/B and keeps every tie

============================================================
"""

import logging
from typing import Optional

from project_metrics.types import ScoredMetrics

from .chains import normalize_chain_id
from .config import (
    ComparatorConfig,
    NormalizerConfig,
    OverallScoreWeights,
    get_default_comparator_config,
)
from .normalizer import CrossChainNormalizer
from .types import (
    ComparisonResult,
    ComparisonWinners,
    CrossChainContext,
    NormalizedMetrics,
    Winner,
)


logger = logging.getLogger(__name__)


def determine_winner(value_a: float, value_b: float, tie_threshold: float = 0.05) -> Winner:
    """Tie-tolerant comparison of two non-negative values."""
    diff = abs(value_a - value_b)
    avg = value_a / 2 + value_b / 2

    if avg == 0 or diff / avg < tie_threshold:
        return Winner.TIE

    return Winner.A if value_a > value_b else Winner.B


def calculate_overall_score(
    metrics: NormalizedMetrics,
    weights: Optional[OverallScoreWeights] = None,
) -> float:
    """Weighted composite of the cross-chain scores."""
    weights = weights or OverallScoreWeights()

    score = (
        metrics.cross_chain_growth_score * weights.growth
        + metrics.cross_chain_health_score * weights.health
        + (100 - metrics.cross_chain_risk_score) * weights.risk
    )

    if weights.volume:
        volume = min(100.0, metrics.normalized_transaction_volume / weights.volume_scale * 100)
        score += volume * weights.volume
    if weights.revenue:
        revenue = min(100.0, metrics.normalized_revenue_usd / weights.revenue_scale * 100)
        score += revenue * weights.revenue

    return score


class CrossChainComparator:
    """Normalizes two projects and picks winners."""

    def __init__(
        self,
        config: Optional[ComparatorConfig] = None,
        normalizer_config: Optional[NormalizerConfig] = None,
    ) -> None:
        self.config = config or get_default_comparator_config()
        self.normalizer = CrossChainNormalizer(normalizer_config)

    def compare_normalized(self, a: NormalizedMetrics, b: NormalizedMetrics) -> ComparisonResult:
        threshold = self.config.tie_threshold

        score_a = calculate_overall_score(a, self.config.weights)
        score_b = calculate_overall_score(b, self.config.weights)

        winners = ComparisonWinners(
            volume_winner=determine_winner(
                a.normalized_transaction_volume, b.normalized_transaction_volume, threshold
            ),
            customer_winner=determine_winner(
                a.normalized_customer_acquisition, b.normalized_customer_acquisition, threshold
            ),
            revenue_winner=determine_winner(
                a.normalized_revenue_usd, b.normalized_revenue_usd, threshold
            ),
            growth_winner=determine_winner(
                a.cross_chain_growth_score, b.cross_chain_growth_score, threshold
            ),
            health_winner=determine_winner(
                a.cross_chain_health_score, b.cross_chain_health_score, threshold
            ),
            # swapped: lower risk wins
            risk_winner=determine_winner(
                b.cross_chain_risk_score, a.cross_chain_risk_score, threshold
            ),
            overall_winner=determine_winner(score_a, score_b, threshold),
        )

        same_chain = normalize_chain_id(a.chain_id) == normalize_chain_id(b.chain_id)
        context = CrossChainContext(
            same_chain=same_chain,
            normalization_applied=not same_chain,
            chain_a=a.chain_id,
            chain_b=b.chain_id,
            chain_a_name=a.chain_name,
            chain_b_name=b.chain_name,
        )

        logger.debug(
            f"Compared {a.chain_name} vs {b.chain_name}: "
            f"overall {score_a:.2f} vs {score_b:.2f} -> {winners.overall_winner.value}"
        )

        return ComparisonResult(
            project_a=a,
            project_b=b,
            comparison=winners,
            cross_chain_context=context,
            overall_score_a=score_a,
            overall_score_b=score_b,
        )

    def compare(self, a: ScoredMetrics, b: ScoredMetrics) -> ComparisonResult:
        """Normalize both projects (always) and compare them."""
        return self.compare_normalized(
            self.normalizer.normalize(a),
            self.normalizer.normalize(b),
        )


def compare_projects(
    project_a: ScoredMetrics,
    project_b: ScoredMetrics,
    config: Optional[ComparatorConfig] = None,
    normalizer_config: Optional[NormalizerConfig] = None,
) -> ComparisonResult:
    """Compare two scored projects in one call."""
    return CrossChainComparator(config, normalizer_config).compare(project_a, project_b)
