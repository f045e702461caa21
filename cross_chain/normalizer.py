"""
Cross-Chain - Normalizer.

============================================================
PURPOSE
============================================================
Rescales a scored project so that figures from chains with
different transaction economics can be ranked together.

============================================================
FACTORS (Ethereum = baseline)
============================================================
- volume:   1 / (block_ratio * sqrt(gas_ratio)), times the
            network-activity multiplier, clamped [0.1, 5.0]
            * block_ratio = eth_block / block,   clamped [0.1, 10]
            * gas_ratio   = eth_gas / gas,       clamped [0.1, 1000]
- customer: (2 - maturity) * sqrt(gas / eth_gas),
            gas ratio clamped [0.001, 1000], result [0.5, 2.0]
- revenue:  the chain's native token USD price

Chains outside the registry use fixed factors
(volume 1.0, customer 1.0, revenue 3000.0).

============================================================
SCORES
============================================================
- growth = growth + (1 - maturity) * 10
- health = health - maturity * 5
- risk   = risk   + (1 - maturity) * 15

Each is rounded half-up and clamped to [0, 100].

============================================================
"""

import logging
import math
import sys
from typing import Optional, Union

from project_metrics.types import ScoredMetrics

from .chains import ETHEREUM, ChainConfig, get_chain_config, get_chain_info
from .config import NormalizerConfig, get_default_normalizer_config
from .types import NormalizationFactors, NormalizedMetrics


logger = logging.getLogger(__name__)

MAX_FIGURE = sys.float_info.max


# ============================================================
# NUMERIC HELPERS
# ============================================================


def _clamp(value: float, bounds: tuple) -> float:
    low, high = bounds
    return max(low, min(high, value))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with .5 going up, independent of banker's rounding."""
    scale = 10 ** digits
    scaled = value * scale
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / scale


def _scaled(value: float, factor: float) -> float:
    """Non-negative product of a raw figure and a factor, capped at the float range."""
    try:
        product = float(value) * factor
    except OverflowError:
        product = math.inf if value > 0 else 0.0
    if math.isnan(product) or product <= 0:
        return 0.0
    return min(product, MAX_FIGURE)


def _clamp_score(value: float) -> int:
    return int(max(0, min(100, round_half_up(value))))


# ============================================================
# FACTOR CALCULATIONS
# ============================================================


def calculate_volume_factor(
    chain: ChainConfig,
    config: Optional[NormalizerConfig] = None,
) -> float:
    """Fast, cheap chains are normalized down relative to Ethereum."""
    config = config or get_default_normalizer_config()

    block_ratio = _clamp(ETHEREUM.avg_block_time / chain.avg_block_time, config.block_time_ratio_bounds)
    gas_ratio = _clamp(ETHEREUM.avg_gas_price / chain.avg_gas_price, config.volume_gas_ratio_bounds)

    factor = 1.0 / (block_ratio * math.sqrt(gas_ratio))
    factor *= config.activity_volume_multipliers.get(chain.network_activity.value, 1.0)

    return _clamp(factor, config.volume_factor_bounds)


def calculate_customer_factor(
    chain: ChainConfig,
    config: Optional[NormalizerConfig] = None,
) -> float:
    """Younger chains and cheaper gas make customers easier to acquire."""
    config = config or get_default_normalizer_config()

    gas_ratio = _clamp(chain.avg_gas_price / ETHEREUM.avg_gas_price, config.customer_gas_ratio_bounds)
    factor = (2.0 - chain.maturity_factor) * math.sqrt(gas_ratio)

    return _clamp(factor, config.customer_factor_bounds)


def calculate_normalization_factors(
    chain_id: Union[str, int],
    config: Optional[NormalizerConfig] = None,
) -> NormalizationFactors:
    """Factors for a chain id; unknown chains get the fixed defaults."""
    config = config or get_default_normalizer_config()
    chain = get_chain_info(chain_id)

    if chain is None:
        return NormalizationFactors(
            volume_factor=config.unknown_chain_volume_factor,
            customer_factor=config.unknown_chain_customer_factor,
            revenue_factor=config.unknown_chain_revenue_factor,
            maturity_factor=get_chain_config(chain_id).maturity_factor,
        )

    return NormalizationFactors(
        volume_factor=calculate_volume_factor(chain, config),
        customer_factor=calculate_customer_factor(chain, config),
        revenue_factor=chain.native_token_price,
        maturity_factor=chain.maturity_factor,
    )


# ============================================================
# NORMALIZER
# ============================================================


class CrossChainNormalizer:
    """
    Normalizes scored projects.

    Pure and deterministic in (metrics, chain_id).
    """

    def __init__(self, config: Optional[NormalizerConfig] = None) -> None:
        self.config = config or get_default_normalizer_config()

    def normalize(self, scored: ScoredMetrics) -> NormalizedMetrics:
        chain = get_chain_config(scored.chain_id)
        factors = calculate_normalization_factors(scored.chain_id, self.config)
        maturity = factors.maturity_factor

        growth = scored.growth_score + (1.0 - maturity) * self.config.growth_maturity_bonus
        health = scored.health_score - maturity * self.config.health_maturity_penalty
        risk = scored.risk_score + (1.0 - maturity) * self.config.risk_maturity_penalty

        if self.config.apply_activity_adjustments:
            activity = chain.network_activity.value
            growth += self.config.activity_growth_adjustments.get(activity, 0)
            risk += self.config.activity_risk_adjustments.get(activity, 0)
            if (
                chain.avg_block_time < self.config.fast_chain_max_block_time
                and chain.avg_gas_price < self.config.fast_chain_max_gas_price
            ):
                health += self.config.fast_chain_health_bonus

        raw = scored.raw
        normalized = NormalizedMetrics(
            scored=scored,
            chain_name=chain.name,
            normalized_transaction_volume=int(
                round_half_up(_scaled(raw.total_transactions, factors.volume_factor))
            ),
            normalized_customer_acquisition=int(
                round_half_up(_scaled(raw.total_customers, factors.customer_factor))
            ),
            normalized_revenue_usd=round_half_up(_scaled(raw.total_volume_eth, factors.revenue_factor), 2),
            cross_chain_growth_score=_clamp_score(growth),
            cross_chain_health_score=_clamp_score(health),
            cross_chain_risk_score=_clamp_score(risk),
            factors=factors,
        )

        logger.debug(
            f"Normalized {raw.contract_address or '<unknown>'} for {chain.name}: "
            f"volume={normalized.normalized_transaction_volume} "
            f"growth={normalized.cross_chain_growth_score} "
            f"health={normalized.cross_chain_health_score} "
            f"risk={normalized.cross_chain_risk_score}"
        )
        return normalized


def normalize_metrics(
    scored: ScoredMetrics,
    config: Optional[NormalizerConfig] = None,
) -> NormalizedMetrics:
    """Normalize a scored project in one call."""
    return CrossChainNormalizer(config).normalize(scored)
