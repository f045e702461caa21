"""
Cross-Chain - Configuration.

============================================================
PURPOSE
============================================================
Tunable constants for normalization and comparison.

- NormalizerConfig: maturity adjustments and factor bounds
- ComparatorConfig: tie tolerance and overall-score weights

============================================================
OVERALL SCORE
============================================================
    growth * 0.30 + health * 0.25 + (100 - risk) * 0.20

The weights sum to 0.75. Volume and revenue weights exist but
default to 0.0, so the composite matches the three-term formula
exactly; raising them adds the capped volume / revenue terms.

============================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class NormalizerConfig:
    """Constants used to derive factors and cross-chain scores."""

    # Cross-chain score adjustments per unit of (1 - maturity) / maturity
    growth_maturity_bonus: float = 10.0
    health_maturity_penalty: float = 5.0
    risk_maturity_penalty: float = 15.0

    # Factor bounds
    block_time_ratio_bounds: tuple = (0.1, 10.0)
    volume_gas_ratio_bounds: tuple = (0.1, 1000.0)
    volume_factor_bounds: tuple = (0.1, 5.0)
    customer_gas_ratio_bounds: tuple = (0.001, 1000.0)
    customer_factor_bounds: tuple = (0.5, 2.0)

    # Network-activity multipliers on the volume factor
    activity_volume_multipliers: Dict[str, float] = field(
        default_factory=lambda: {"high": 0.8, "medium": 1.0, "low": 1.2}
    )

    # Fixed factors for chains outside the registry
    unknown_chain_volume_factor: float = 1.0
    unknown_chain_customer_factor: float = 1.0
    unknown_chain_revenue_factor: float = 3000.0

    # Extra score nudges by network activity (off by default)
    apply_activity_adjustments: bool = False
    activity_growth_adjustments: Dict[str, int] = field(
        default_factory=lambda: {"high": 5, "medium": 2, "low": -2}
    )
    activity_risk_adjustments: Dict[str, int] = field(
        default_factory=lambda: {"high": -5, "medium": 0, "low": 10}
    )
    fast_chain_health_bonus: int = 3
    fast_chain_max_block_time: float = 5.0
    fast_chain_max_gas_price: float = 0.00001

    def to_dict(self) -> Dict[str, Any]:
        return {
            "growth_maturity_bonus": self.growth_maturity_bonus,
            "health_maturity_penalty": self.health_maturity_penalty,
            "risk_maturity_penalty": self.risk_maturity_penalty,
            "volume_factor_bounds": list(self.volume_factor_bounds),
            "customer_factor_bounds": list(self.customer_factor_bounds),
            "unknown_chain_revenue_factor": self.unknown_chain_revenue_factor,
            "apply_activity_adjustments": self.apply_activity_adjustments,
        }


@dataclass(frozen=True)
class OverallScoreWeights:
    """Weights of the composite score used for the overall winner."""

    growth: float = 0.30
    health: float = 0.25
    risk: float = 0.20          # applied to (100 - risk)
    volume: float = 0.0
    revenue: float = 0.0

    # Caps that map volume / revenue onto 0-100 when weighted
    volume_scale: float = 1000.0
    revenue_scale: float = 10000.0

    @property
    def total(self) -> float:
        return self.growth + self.health + self.risk + self.volume + self.revenue

    def to_dict(self) -> Dict[str, float]:
        return {
            "growth": self.growth,
            "health": self.health,
            "risk": self.risk,
            "volume": self.volume,
            "revenue": self.revenue,
        }


@dataclass(frozen=True)
class ComparatorConfig:
    """Configuration for winner determination."""

    # Relative difference below which two values tie
    tie_threshold: float = 0.05

    weights: OverallScoreWeights = field(default_factory=OverallScoreWeights)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tie_threshold": self.tie_threshold,
            "weights": self.weights.to_dict(),
        }


def get_default_normalizer_config() -> NormalizerConfig:
    return NormalizerConfig()


def get_default_comparator_config() -> ComparatorConfig:
    return ComparatorConfig()
