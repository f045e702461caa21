"""
Cross-Chain - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for normalization and comparison.

- NormalizationFactors: per-chain multipliers
- NormalizedMetrics: ScoredMetrics rescaled for one chain
- ComparisonResult: two normalized projects plus per-dimension
  winners and chain context

============================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from project_metrics.types import ScoredMetrics


# ============================================================
# ENUMS
# ============================================================


class Winner(str, Enum):
    """Outcome of one tie-tolerant comparison."""

    A = "A"
    B = "B"
    TIE = "tie"

    def inverted(self) -> "Winner":
        """Winner after swapping the two projects."""
        if self == Winner.A:
            return Winner.B
        if self == Winner.B:
            return Winner.A
        return Winner.TIE


# ============================================================
# NORMALIZATION
# ============================================================


@dataclass(frozen=True)
class NormalizationFactors:
    """Multipliers applied to a project's figures on one chain."""

    volume_factor: float
    customer_factor: float
    revenue_factor: float
    maturity_factor: float

    def to_dict(self) -> Dict[str, float]:
        """Rounded for display; the math always uses the exact values."""
        return {
            "volume_factor": round(self.volume_factor, 3),
            "customer_factor": round(self.customer_factor, 3),
            "revenue_factor": round(self.revenue_factor, 2),
            "maturity_factor": round(self.maturity_factor, 2),
        }


@dataclass(frozen=True)
class NormalizedMetrics:
    """
    Scored metrics rescaled for cross-chain ranking.

    ============================================================
    OUTPUT GUARANTEES
    ============================================================
    - normalized_* figures: >= 0 for non-negative input
    - cross_chain_* scores: int in [0, 100]
    - factors.maturity_factor: in (0, 1]

    ============================================================
    """

    scored: ScoredMetrics
    chain_name: str

    normalized_transaction_volume: int
    normalized_customer_acquisition: int
    normalized_revenue_usd: float

    cross_chain_growth_score: int
    cross_chain_health_score: int
    cross_chain_risk_score: int

    factors: NormalizationFactors

    @property
    def chain_id(self) -> str:
        return self.scored.chain_id

    def to_dict(self) -> Dict[str, Any]:
        data = self.scored.to_dict()
        data.update({
            "chain_name": self.chain_name,
            "normalized_transaction_volume": self.normalized_transaction_volume,
            "normalized_customer_acquisition": self.normalized_customer_acquisition,
            "normalized_revenue_usd": self.normalized_revenue_usd,
            "cross_chain_growth_score": self.cross_chain_growth_score,
            "cross_chain_health_score": self.cross_chain_health_score,
            "cross_chain_risk_score": self.cross_chain_risk_score,
            "normalization_factors": self.factors.to_dict(),
        })
        return data


# ============================================================
# COMPARISON
# ============================================================


@dataclass(frozen=True)
class ComparisonWinners:
    """One winner per dimension plus the overall roll-up."""

    volume_winner: Winner
    customer_winner: Winner
    revenue_winner: Winner
    growth_winner: Winner
    health_winner: Winner
    risk_winner: Winner     # lower risk wins
    overall_winner: Winner

    def inverted(self) -> "ComparisonWinners":
        return ComparisonWinners(
            volume_winner=self.volume_winner.inverted(),
            customer_winner=self.customer_winner.inverted(),
            revenue_winner=self.revenue_winner.inverted(),
            growth_winner=self.growth_winner.inverted(),
            health_winner=self.health_winner.inverted(),
            risk_winner=self.risk_winner.inverted(),
            overall_winner=self.overall_winner.inverted(),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "volume_winner": self.volume_winner.value,
            "customer_winner": self.customer_winner.value,
            "revenue_winner": self.revenue_winner.value,
            "growth_winner": self.growth_winner.value,
            "health_winner": self.health_winner.value,
            "risk_winner": self.risk_winner.value,
            "overall_winner": self.overall_winner.value,
        }


@dataclass(frozen=True)
class CrossChainContext:
    """Informational metadata about the two chains being compared."""

    same_chain: bool
    normalization_applied: bool
    chain_a: str
    chain_b: str
    chain_a_name: str
    chain_b_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "same_chain": self.same_chain,
            "normalization_applied": self.normalization_applied,
            "chain_a": self.chain_a,
            "chain_b": self.chain_b,
            "chain_a_name": self.chain_a_name,
            "chain_b_name": self.chain_b_name,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Two normalized projects and who is ahead on each dimension."""

    project_a: NormalizedMetrics
    project_b: NormalizedMetrics
    comparison: ComparisonWinners
    cross_chain_context: CrossChainContext

    overall_score_a: float
    overall_score_b: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_a": self.project_a.to_dict(),
            "project_b": self.project_b.to_dict(),
            "comparison": self.comparison.to_dict(),
            "cross_chain_context": self.cross_chain_context.to_dict(),
            "overall_scores": {
                "project_a": round(self.overall_score_a, 2),
                "project_b": round(self.overall_score_b, 2),
            },
        }
