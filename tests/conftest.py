"""
Shared fixtures: an in-memory SQLite database with the metrics tables.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from database import (
    ContractIndex,
    TransactionDetail,
    create_all_tables,
    create_session_factory,
)


ETH_CONTRACT = "0x1111111111111111111111111111111111111111"
STARKNET_CONTRACT = "0x2222222222222222222222222222222222222222"
IDLE_CONTRACT = "0x3333333333333333333333333333333333333333"


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


def add_transactions(session, contract_address, chain_id, count, failed=0, customers=None, value=1.0, fee=0.001):
    """Insert `count` transactions, the last `failed` of them failed."""
    customers = customers or count
    for i in range(count):
        session.add(TransactionDetail(
            transaction_hash=f"{contract_address}-{chain_id}-{i}",
            contract_address=contract_address,
            chain_id=chain_id,
            from_address=f"0xwallet{i % customers}",
            to_address=contract_address,
            status="failed" if i >= count - failed else "success",
            transaction_value=value,
            gas_fee_eth=fee,
            block_number=1000 + i,
        ))


@pytest.fixture
def seeded_session_factory(session_factory):
    """
    Three tracked contracts:
    - ETH_CONTRACT on chain 1: 100 tx, 2 failed, 60 customers, 12 ETH each
    - STARKNET_CONTRACT on starknet: 40 tx, 10 failed, 15 customers
    - IDLE_CONTRACT on chain 1: tracked, no transactions
    """
    session = session_factory()
    session.add_all([
        ContractIndex(contract_address=ETH_CONTRACT, chain_id="1", contract_name="Alpha DEX", category="defi"),
        ContractIndex(contract_address=STARKNET_CONTRACT, chain_id="starknet", contract_name="Stark Game", category="gaming"),
        ContractIndex(contract_address=IDLE_CONTRACT, chain_id="1", contract_name="Idle Vault", category="defi"),
    ])
    add_transactions(session, ETH_CONTRACT, "1", count=100, failed=2, customers=60, value=12.0)
    add_transactions(session, STARKNET_CONTRACT, "starknet", count=40, failed=10, customers=15, value=0.5)
    session.commit()
    session.close()
    return session_factory
