"""
Project Metrics - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for the project metrics scorer.

- RawProjectMetrics: aggregated transaction figures for one
  contract on one chain (produced by the aggregation query)
- ScoredMetrics: raw figures plus derived success rate and the
  growth / health / risk composite scores

============================================================
DESIGN PRINCIPLES
============================================================
- All records are immutable
- Inputs are trusted as-is (successful + failed may differ
  from total); the scorer sanitises instead of validating
- Scores are always integers in [0, 100]

============================================================
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# ============================================================
# ENUMS
# ============================================================


class ScoreDimension(str, Enum):
    """The three composite scores derived for every project."""

    GROWTH = "growth"
    HEALTH = "health"
    RISK = "risk"

    @classmethod
    def all_dimensions(cls) -> List["ScoreDimension"]:
        """Return all score dimensions in evaluation order."""
        return [cls.GROWTH, cls.HEALTH, cls.RISK]


class TierDirection(str, Enum):
    """
    How a tier threshold is compared against a value.

    - ABOVE: value > threshold
    - BELOW: value < threshold
    """

    ABOVE = "above"
    BELOW = "below"


# ============================================================
# INPUT DATA CONTRACT
# ============================================================


@dataclass(frozen=True)
class RawProjectMetrics:
    """
    Aggregated transaction figures for one project.

    Produced by the aggregation query over mc_transaction_details.
    Read-only to the scorer.
    """

    chain_id: str
    total_transactions: int = 0
    total_customers: int = 0
    successful_transactions: int = 0
    failed_transactions: int = 0
    total_volume_eth: float = 0.0

    # Reported success rate (0-100); the scorer recomputes it from counts
    success_rate: Optional[float] = None

    # Identification and financial extras from the aggregation query
    contract_address: Optional[str] = None
    total_fees_eth: float = 0.0
    avg_transaction_value_eth: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_address": self.contract_address,
            "chain_id": self.chain_id,
            "total_transactions": self.total_transactions,
            "total_customers": self.total_customers,
            "successful_transactions": self.successful_transactions,
            "failed_transactions": self.failed_transactions,
            "total_volume_eth": self.total_volume_eth,
            "success_rate": self.success_rate,
            "total_fees_eth": self.total_fees_eth,
            "avg_transaction_value_eth": self.avg_transaction_value_eth,
        }


# ============================================================
# OUTPUT DATA CONTRACT
# ============================================================


@dataclass(frozen=True)
class ScoredMetrics:
    """
    Raw project metrics plus derived scores.

    ============================================================
    OUTPUT GUARANTEES
    ============================================================
    - success_rate: Always 0-100 (0 for zero-transaction projects)
    - growth_score / health_score / risk_score: Always int 0-100
    - raw: The untouched input record

    ============================================================
    """

    raw: RawProjectMetrics
    success_rate: float
    growth_score: int
    health_score: int
    risk_score: int

    # Per-dimension adjustments that produced each score
    breakdown: Dict[str, Dict[str, int]] = field(default_factory=dict, compare=False)

    @property
    def chain_id(self) -> str:
        return self.raw.chain_id

    @property
    def contract_address(self) -> Optional[str]:
        return self.raw.contract_address

    @property
    def total_transactions(self) -> int:
        return self.raw.total_transactions

    @property
    def total_customers(self) -> int:
        return self.raw.total_customers

    @property
    def failed_transactions(self) -> int:
        return self.raw.failed_transactions

    @property
    def total_volume_eth(self) -> float:
        return self.raw.total_volume_eth

    @property
    def overall_score(self) -> int:
        """Unweighted mean of growth, health and inverted risk."""
        return int((self.growth_score + self.health_score + (100 - self.risk_score)) / 3 + 0.5)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the project_metrics_realtime row shape."""
        data = self.raw.to_dict()
        data.update({
            "success_rate": self.success_rate,
            "growth_score": self.growth_score,
            "health_score": self.health_score,
            "risk_score": self.risk_score,
            "overall_score": self.overall_score,
        })
        return data


# ============================================================
# ERROR TYPES
# ============================================================


class MetricsError(Exception):
    """Base exception for project metrics errors."""

    def __init__(
        self,
        message: str,
        contract_address: Optional[str] = None,
        chain_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.contract_address = contract_address
        self.chain_id = chain_id


class ProjectNotFoundError(MetricsError):
    """Raised when a contract has no indexed transactions or stored metrics."""
    pass


class InvalidSortFieldError(MetricsError):
    """Raised when a ranking is requested on a column that is not sortable."""
    pass
