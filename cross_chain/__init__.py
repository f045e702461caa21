"""
Cross-Chain - Package.

============================================================
PURPOSE
============================================================
Makes projects on different chains comparable.

- Chain registry with block time, gas price, token price,
  network activity and maturity per chain
- Normalizer: rescales volume, customers and revenue and
  adjusts scores by chain maturity
- Comparator: tie-tolerant per-dimension and overall winners

All of it is pure: no I/O, no clock, no randomness.

============================================================
USAGE
============================================================
    from project_metrics import RawProjectMetrics, score_project
    from cross_chain import compare_projects

    eth = score_project(RawProjectMetrics(chain_id="1", total_transactions=500, ...))
    stark = score_project(RawProjectMetrics(chain_id="starknet", total_transactions=500, ...))

    result = compare_projects(eth, stark)
    result.comparison.overall_winner       # Winner.A / Winner.B / Winner.TIE
    result.cross_chain_context.same_chain  # False

============================================================
"""

from .chains import (
    NetworkActivity,
    ChainConfig,
    CHAIN_REGISTRY,
    ETHEREUM_CHAIN_ID,
    normalize_chain_id,
    get_chain_info,
    get_chain_config,
    get_chain_name,
    get_supported_chains,
    is_supported_chain,
)

from .types import (
    Winner,
    NormalizationFactors,
    NormalizedMetrics,
    ComparisonWinners,
    CrossChainContext,
    ComparisonResult,
)

from .config import (
    NormalizerConfig,
    OverallScoreWeights,
    ComparatorConfig,
    get_default_normalizer_config,
    get_default_comparator_config,
)

from .normalizer import (
    CrossChainNormalizer,
    calculate_volume_factor,
    calculate_customer_factor,
    calculate_normalization_factors,
    normalize_metrics,
    round_half_up,
)

from .comparator import (
    CrossChainComparator,
    determine_winner,
    calculate_overall_score,
    compare_projects,
)


__all__ = [
    # Registry
    "NetworkActivity",
    "ChainConfig",
    "CHAIN_REGISTRY",
    "ETHEREUM_CHAIN_ID",
    "normalize_chain_id",
    "get_chain_info",
    "get_chain_config",
    "get_chain_name",
    "get_supported_chains",
    "is_supported_chain",

    # Types
    "Winner",
    "NormalizationFactors",
    "NormalizedMetrics",
    "ComparisonWinners",
    "CrossChainContext",
    "ComparisonResult",

    # Configuration
    "NormalizerConfig",
    "OverallScoreWeights",
    "ComparatorConfig",
    "get_default_normalizer_config",
    "get_default_comparator_config",

    # Normalizer
    "CrossChainNormalizer",
    "calculate_volume_factor",
    "calculate_customer_factor",
    "calculate_normalization_factors",
    "normalize_metrics",
    "round_half_up",

    # Comparator
    "CrossChainComparator",
    "determine_winner",
    "calculate_overall_score",
    "compare_projects",
]
