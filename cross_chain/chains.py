"""
Cross-Chain - Chain Registry.

============================================================
PURPOSE
============================================================
Static economics of every supported chain, measured against
Ethereum mainnet as the baseline.

| chain                 | block s | gas (native) | token USD | activity | maturity |
|-----------------------|---------|--------------|-----------|----------|----------|
| Ethereum (1)          | 12      | 0.00002      | 3000      | high     | 1.0      |
| Polygon (137)         | 2       | 0.00000003   | 0.8       | high     | 0.9      |
| Lisk (1135, 4202)     | 2       | 0.000001     | 1.2       | medium   | 0.7      |
| StarkNet              | 10      | 0.000001     | 3000      | medium   | 0.6      |

Unknown chain ids resolve to a neutral default (maturity 1.0,
medium activity) instead of raising.

============================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class NetworkActivity(str, Enum):
    """Relative transaction activity of a chain."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ChainConfig:
    """Economic profile of one chain."""

    chain_id: str
    name: str
    avg_block_time: float          # seconds
    avg_gas_price: float           # native token units
    native_token_price: float      # USD
    network_activity: NetworkActivity
    maturity_factor: float         # (0, 1], 1.0 = most mature

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "name": self.name,
            "avg_block_time": self.avg_block_time,
            "avg_gas_price": self.avg_gas_price,
            "native_token_price": self.native_token_price,
            "network_activity": self.network_activity.value,
            "maturity_factor": self.maturity_factor,
        }


# ============================================================
# REGISTRY
# ============================================================

ETHEREUM_CHAIN_ID = "1"

ETHEREUM = ChainConfig(
    chain_id=ETHEREUM_CHAIN_ID,
    name="Ethereum",
    avg_block_time=12,
    avg_gas_price=0.00002,
    native_token_price=3000,
    network_activity=NetworkActivity.HIGH,
    maturity_factor=1.0,
)

POLYGON = ChainConfig(
    chain_id="137",
    name="Polygon",
    avg_block_time=2,
    avg_gas_price=0.00000003,
    native_token_price=0.8,
    network_activity=NetworkActivity.HIGH,
    maturity_factor=0.9,
)

LISK = ChainConfig(
    chain_id="1135",
    name="Lisk",
    avg_block_time=2,
    avg_gas_price=0.000001,
    native_token_price=1.2,
    network_activity=NetworkActivity.MEDIUM,
    maturity_factor=0.7,
)

LISK_SEPOLIA = ChainConfig(
    chain_id="4202",
    name="Lisk Sepolia",
    avg_block_time=2,
    avg_gas_price=0.000001,
    native_token_price=1.2,
    network_activity=NetworkActivity.MEDIUM,
    maturity_factor=0.7,
)

STARKNET = ChainConfig(
    chain_id="starknet",
    name="StarkNet",
    avg_block_time=10,
    avg_gas_price=0.000001,
    native_token_price=3000,
    network_activity=NetworkActivity.MEDIUM,
    maturity_factor=0.6,
)

# StarkNet mainnet also appears under its numeric chain id
STARKNET_NUMERIC = ChainConfig(
    chain_id="23448594291968334",
    name="StarkNet",
    avg_block_time=STARKNET.avg_block_time,
    avg_gas_price=STARKNET.avg_gas_price,
    native_token_price=STARKNET.native_token_price,
    network_activity=STARKNET.network_activity,
    maturity_factor=STARKNET.maturity_factor,
)

CHAIN_REGISTRY: Dict[str, ChainConfig] = {
    chain.chain_id: chain
    for chain in (ETHEREUM, POLYGON, LISK, LISK_SEPOLIA, STARKNET, STARKNET_NUMERIC)
}


# ============================================================
# LOOKUPS
# ============================================================


def normalize_chain_id(chain_id: Union[str, int]) -> str:
    """Canonical registry key: 1, "1" and " 1 " all map to "1"."""
    return str(chain_id).strip().lower()


def get_chain_info(chain_id: Union[str, int]) -> Optional[ChainConfig]:
    """Registered chain, or None for an unknown id."""
    return CHAIN_REGISTRY.get(normalize_chain_id(chain_id))


def is_supported_chain(chain_id: Union[str, int]) -> bool:
    return get_chain_info(chain_id) is not None


def get_chain_config(chain_id: Union[str, int]) -> ChainConfig:
    """
    Registered chain, or a neutral default for unknown ids.

    The default carries the Ethereum economics with medium
    activity and full maturity, and keeps the caller's id as name.
    """
    chain = get_chain_info(chain_id)
    if chain is not None:
        return chain

    key = normalize_chain_id(chain_id)
    return ChainConfig(
        chain_id=key,
        name=key,
        avg_block_time=ETHEREUM.avg_block_time,
        avg_gas_price=ETHEREUM.avg_gas_price,
        native_token_price=ETHEREUM.native_token_price,
        network_activity=NetworkActivity.MEDIUM,
        maturity_factor=1.0,
    )


def get_chain_name(chain_id: Union[str, int]) -> str:
    """Display name, falling back to the id itself."""
    chain = get_chain_info(chain_id)
    return chain.name if chain else str(chain_id)


def get_supported_chains() -> List[ChainConfig]:
    return list(CHAIN_REGISTRY.values())
