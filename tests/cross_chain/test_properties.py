"""
Property-based tests for normalization and comparison.

Tests cover:
- Non-negativity of normalized figures
- Boundedness of cross-chain scores and maturity
- Determinism of normalization
- Winner validity and antisymmetry of comparison
- Self-comparison always ties
"""

from hypothesis import given, strategies as st

from cross_chain import Winner, compare_projects, normalize_metrics
from project_metrics import RawProjectMetrics, score_project


CHAIN_IDS = ["1", "137", "1135", "4202", "starknet", "23448594291968334", "999", "unknown-l2"]


@st.composite
def scored_projects(draw):
    total = draw(st.one_of(
        st.integers(min_value=0, max_value=5_000_000),
        st.integers(min_value=0, max_value=10 ** 400),
    ))
    successful = draw(st.integers(min_value=0, max_value=total))
    return score_project(RawProjectMetrics(
        chain_id=draw(st.sampled_from(CHAIN_IDS)),
        total_transactions=total,
        successful_transactions=successful,
        failed_transactions=total - successful,
        total_customers=draw(st.integers(min_value=0, max_value=max(total, 1))),
        total_volume_eth=draw(st.floats(min_value=0, allow_nan=False, allow_infinity=False)),
    ))


class TestNormalizationProperties:
    """Invariants of normalize_metrics."""

    @given(scored_projects())
    def test_normalized_figures_non_negative(self, scored):
        normalized = normalize_metrics(scored)
        assert normalized.normalized_transaction_volume >= 0
        assert normalized.normalized_customer_acquisition >= 0
        assert normalized.normalized_revenue_usd >= 0

    @given(scored_projects())
    def test_cross_chain_scores_bounded(self, scored):
        normalized = normalize_metrics(scored)
        for score in (
            normalized.cross_chain_growth_score,
            normalized.cross_chain_health_score,
            normalized.cross_chain_risk_score,
        ):
            assert isinstance(score, int)
            assert 0 <= score <= 100

    @given(scored_projects())
    def test_factors_positive_and_maturity_bounded(self, scored):
        factors = normalize_metrics(scored).factors
        assert factors.volume_factor > 0
        assert factors.customer_factor > 0
        assert factors.revenue_factor > 0
        assert 0 < factors.maturity_factor <= 1

    @given(scored_projects())
    def test_normalization_is_deterministic(self, scored):
        assert normalize_metrics(scored) == normalize_metrics(scored)


class TestComparisonProperties:
    """Invariants of compare_projects."""

    @given(scored_projects(), scored_projects())
    def test_winners_are_valid(self, a, b):
        winners = compare_projects(a, b).comparison.to_dict()
        assert set(winners.values()) <= {"A", "B", "tie"}

    @given(scored_projects(), scored_projects())
    def test_swapping_inverts_every_winner(self, a, b):
        forward = compare_projects(a, b).comparison
        backward = compare_projects(b, a).comparison
        assert backward == forward.inverted()

    @given(scored_projects(), scored_projects())
    def test_context_matches_chains(self, a, b):
        context = compare_projects(a, b).cross_chain_context
        assert context.same_chain == (a.chain_id == b.chain_id)
        assert context.normalization_applied == (not context.same_chain)

    @given(scored_projects())
    def test_self_comparison_ties(self, p):
        winners = compare_projects(p, p).comparison.to_dict()
        assert set(winners.values()) == {Winner.TIE.value}
