"""
Database ORM Models - Metrics Tables.

============================================================
SCHEMA
============================================================

1. bi_contract_index         Tracked contracts (read)
2. mc_transaction_details    Indexed transactions (read)
3. project_metrics_realtime  Latest scored metrics per contract (upsert)

Chain ids are stored as strings so EVM ids ("1", "137") and
non-EVM ids ("starknet") share one column.

============================================================
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, BigInteger, String, Float, Boolean,
    DateTime, Index, UniqueConstraint,
)

from .engine import Base


# =============================================================
# HELPER FUNCTIONS
# =============================================================

def utc_now():
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


# =============================================================
# 1. CONTRACT INDEX
# =============================================================

class ContractIndex(Base):
    """
    Contracts tracked by the dashboard.

    Identified by (contract_address, chain_id).
    """
    __tablename__ = "bi_contract_index"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_address = Column(String(128), nullable=False, index=True)
    chain_id = Column(String(64), nullable=False, index=True)

    contract_name = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True, index=True)
    subcategory = Column(String(100), nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (
        UniqueConstraint("contract_address", "chain_id", name="uq_bi_contract_chain"),
    )

    def __repr__(self):
        return f"<ContractIndex({self.contract_name}, {self.contract_address}, chain={self.chain_id})>"


# =============================================================
# 2. TRANSACTION DETAILS
# =============================================================

class TransactionDetail(Base):
    """
    One indexed transaction against a tracked contract.

    status is 'success' or 'failed'.
    """
    __tablename__ = "mc_transaction_details"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    transaction_hash = Column(String(128), nullable=False)
    contract_address = Column(String(128), nullable=False)
    chain_id = Column(String(64), nullable=False)

    from_address = Column(String(128), nullable=False)
    to_address = Column(String(128), nullable=True)
    status = Column(String(20), nullable=False, default="success")

    transaction_value = Column(Float, nullable=False, default=0.0)
    gas_fee_eth = Column(Float, nullable=False, default=0.0)

    block_number = Column(BigInteger, nullable=True)
    block_timestamp = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_mc_tx_contract_chain", "contract_address", "chain_id"),
        Index("idx_mc_tx_block_timestamp", "block_timestamp"),
    )

    def __repr__(self):
        return f"<TransactionDetail({self.transaction_hash}, {self.status})>"


# =============================================================
# 3. PROJECT METRICS (REALTIME)
# =============================================================

class ProjectMetricsRealtime(Base):
    """
    Latest scored metrics for a contract.

    Source: project_metrics.pipeline
    Update Frequency: On demand / batch refresh
    """
    __tablename__ = "project_metrics_realtime"

    contract_address = Column(String(128), primary_key=True)
    chain_id = Column(String(64), primary_key=True)

    # Customer / transaction metrics
    total_customers = Column(Integer, nullable=False, default=0)
    total_transactions = Column(Integer, nullable=False, default=0)
    successful_transactions = Column(Integer, nullable=False, default=0)
    failed_transactions = Column(Integer, nullable=False, default=0)
    success_rate_percent = Column(Float, nullable=False, default=0.0)

    # Financial metrics
    total_volume_eth = Column(Float, nullable=False, default=0.0)
    total_fees_eth = Column(Float, nullable=False, default=0.0)
    avg_transaction_value_eth = Column(Float, nullable=False, default=0.0)

    # Scores (0-100)
    growth_score = Column(Integer, nullable=False, default=50)
    health_score = Column(Integer, nullable=False, default=50)
    risk_score = Column(Integer, nullable=False, default=50)

    last_updated = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    __table_args__ = (
        Index("idx_pmr_growth_score", "growth_score"),
        Index("idx_pmr_last_updated", "last_updated"),
    )

    def __repr__(self):
        return (
            f"<ProjectMetricsRealtime({self.contract_address}, chain={self.chain_id}, "
            f"growth={self.growth_score}, health={self.health_score}, risk={self.risk_score})>"
        )
