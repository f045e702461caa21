"""
Pydantic schemas for Dashboard API requests and responses.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from project_metrics.types import RawProjectMetrics


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =======================
# COMMON
# =======================

class BaseResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utc_now)


class HealthResponse(BaseModel):
    status: str  # healthy, degraded
    timestamp: datetime = Field(default_factory=_utc_now)
    version: str = "1.0.0"
    uptime_seconds: float = 0
    database: str  # connected, unavailable


# =======================
# 1. REQUEST BODIES
# =======================

class RawMetricsRequest(BaseModel):
    """Aggregated figures for one project, as submitted by a client."""
    chain_id: str = Field(min_length=1)
    contract_address: Optional[str] = None
    total_transactions: int = Field(default=0, ge=0)
    total_customers: int = Field(default=0, ge=0)
    successful_transactions: int = Field(default=0, ge=0)
    failed_transactions: int = Field(default=0, ge=0)
    total_volume_eth: float = Field(default=0.0, ge=0)
    total_fees_eth: float = Field(default=0.0, ge=0)
    avg_transaction_value_eth: float = Field(default=0.0, ge=0)

    def to_raw(self) -> RawProjectMetrics:
        return RawProjectMetrics(
            chain_id=self.chain_id,
            contract_address=self.contract_address,
            total_transactions=self.total_transactions,
            total_customers=self.total_customers,
            successful_transactions=self.successful_transactions,
            failed_transactions=self.failed_transactions,
            total_volume_eth=self.total_volume_eth,
            total_fees_eth=self.total_fees_eth,
            avg_transaction_value_eth=self.avg_transaction_value_eth,
        )


class CompareRequest(BaseModel):
    project_a: RawMetricsRequest
    project_b: RawMetricsRequest


# =======================
# 2. PROJECT METRICS
# =======================

class ProjectMetricsResponse(BaseResponse):
    data: Dict[str, Any]


class ProjectListResponse(BaseResponse):
    count: int
    data: List[Dict[str, Any]]


class MetricsStatusResponse(BaseResponse):
    data: Dict[str, Any]


# =======================
# 3. CROSS-CHAIN
# =======================

class ChainInfo(BaseModel):
    chain_id: str
    name: str
    avg_block_time: float
    avg_gas_price: float
    native_token_price: float
    network_activity: str  # high, medium, low
    maturity_factor: float
    normalization_factors: Dict[str, float]


class ChainListResponse(BaseResponse):
    data: List[ChainInfo]


class ChainDetailResponse(BaseResponse):
    data: ChainInfo


class NormalizedMetricsResponse(BaseResponse):
    data: Dict[str, Any]


class ComparisonResponse(BaseResponse):
    data: Dict[str, Any]
