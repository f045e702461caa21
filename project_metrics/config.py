"""
Project Metrics - Configuration.

============================================================
PURPOSE
============================================================
Tier tables for the growth, health and risk scores.

Every score starts from a baseline and adds the adjustment of
the FIRST matching tier in each table. Tables are data, not
branching, so each breakpoint can be tested on its own.

============================================================
DEFAULT TIERS
============================================================
Growth (baseline 50):
- success rate  >95 +20 | >90 +15 | >80 +10 | <70 -10
- customers     >50 +15 | >20 +10 | >10 +5  | <5  -5

Health (baseline 50):
- success rate  >98 +25 | >95 +20 | >90 +15 | >80 +10 | <70 -15
- volume (ETH)  >1000 +15 | >500 +10 | >100 +5 | <10 -5

Risk (baseline 50, higher = riskier):
- success rate  <50 +30 | <70 +20 | <80 +10 | >95 -20 | >90 -10
- failed tx     >100 +20 | >50 +15 | >20 +10 | <5 -10

============================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .types import TierDirection


# ============================================================
# TIER PRIMITIVES
# ============================================================


@dataclass(frozen=True)
class ScoreTier:
    """One threshold -> adjustment rule."""

    threshold: float
    adjustment: int
    direction: TierDirection = TierDirection.ABOVE

    def matches(self, value: float) -> bool:
        if self.direction == TierDirection.ABOVE:
            return value > self.threshold
        return value < self.threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "threshold": self.threshold,
            "adjustment": self.adjustment,
            "direction": self.direction.value,
        }


TierTable = Tuple[ScoreTier, ...]


def above(threshold: float, adjustment: int) -> ScoreTier:
    return ScoreTier(threshold, adjustment, TierDirection.ABOVE)


def below(threshold: float, adjustment: int) -> ScoreTier:
    return ScoreTier(threshold, adjustment, TierDirection.BELOW)


def apply_tiers(value: float, tiers: TierTable) -> int:
    """Return the adjustment of the first matching tier, or 0."""
    for tier in tiers:
        if tier.matches(value):
            return tier.adjustment
    return 0


# ============================================================
# PER-SCORE CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class GrowthScoreConfig:
    """Growth rewards reliable execution and a broad customer base."""

    baseline: int = 50
    success_rate_tiers: TierTable = (
        above(95, 20),
        above(90, 15),
        above(80, 10),
        below(70, -10),
    )
    customer_tiers: TierTable = (
        above(50, 15),
        above(20, 10),
        above(10, 5),
        below(5, -5),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseline": self.baseline,
            "success_rate_tiers": [t.to_dict() for t in self.success_rate_tiers],
            "customer_tiers": [t.to_dict() for t in self.customer_tiers],
        }


@dataclass(frozen=True)
class HealthScoreConfig:
    """Health rewards near-perfect success rates and sustained volume."""

    baseline: int = 50
    success_rate_tiers: TierTable = (
        above(98, 25),
        above(95, 20),
        above(90, 15),
        above(80, 10),
        below(70, -15),
    )
    volume_tiers: TierTable = (
        above(1000, 15),
        above(500, 10),
        above(100, 5),
        below(10, -5),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseline": self.baseline,
            "success_rate_tiers": [t.to_dict() for t in self.success_rate_tiers],
            "volume_tiers": [t.to_dict() for t in self.volume_tiers],
        }


@dataclass(frozen=True)
class RiskScoreConfig:
    """Risk starts at medium; low success and many failures push it up."""

    baseline: int = 50
    success_rate_tiers: TierTable = (
        below(50, 30),
        below(70, 20),
        below(80, 10),
        above(95, -20),
        above(90, -10),
    )
    failed_transaction_tiers: TierTable = (
        above(100, 20),
        above(50, 15),
        above(20, 10),
        below(5, -10),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseline": self.baseline,
            "success_rate_tiers": [t.to_dict() for t in self.success_rate_tiers],
            "failed_transaction_tiers": [t.to_dict() for t in self.failed_transaction_tiers],
        }


# ============================================================
# MASTER CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class MetricsScoringConfig:
    """Master configuration for the metrics scorer."""

    growth: GrowthScoreConfig = field(default_factory=GrowthScoreConfig)
    health: HealthScoreConfig = field(default_factory=HealthScoreConfig)
    risk: RiskScoreConfig = field(default_factory=RiskScoreConfig)

    # Output bounds shared by all three scores
    min_score: int = 0
    max_score: int = 100

    engine_version: str = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "growth": self.growth.to_dict(),
            "health": self.health.to_dict(),
            "risk": self.risk.to_dict(),
            "min_score": self.min_score,
            "max_score": self.max_score,
            "engine_version": self.engine_version,
        }


def get_default_config() -> MetricsScoringConfig:
    """Return the default scorer configuration."""
    return MetricsScoringConfig()
