"""
Tests for the Project Metrics Scorer.

Tests cover:
- Success rate derivation and its boundary rules
- Tier breakpoints for growth, health and risk
- Reference scenarios
- Defensive handling of inconsistent or invalid input
- Configurable tiers and clamping
"""

import math

import pytest

from project_metrics import (
    GrowthScoreConfig,
    MetricsScoringConfig,
    MetricsScoringEngine,
    RawProjectMetrics,
    ScoreDimension,
    ScoreTier,
    TierDirection,
    apply_tiers,
    calculate_growth_score,
    calculate_health_score,
    calculate_risk_score,
    calculate_success_rate,
    format_metrics_summary,
    get_default_config,
    score_project,
)


def make_raw(**overrides):
    values = dict(
        chain_id="1",
        total_transactions=100,
        successful_transactions=98,
        failed_transactions=2,
        total_customers=60,
        total_volume_eth=1200.0,
    )
    values.update(overrides)
    return RawProjectMetrics(**values)


# =============================================================
# TEST: Success Rate
# =============================================================

class TestSuccessRate:
    """Test success rate derivation."""

    def test_basic_percentage(self):
        assert calculate_success_rate(98, 100) == pytest.approx(98.0)

    def test_zero_transactions_is_zero(self):
        """No transactions is a boundary rule, not a division error."""
        assert calculate_success_rate(0, 0) == 0.0
        assert calculate_success_rate(5, 0) == 0.0

    def test_more_successes_than_total_is_clamped(self):
        assert calculate_success_rate(150, 100) == 100.0

    def test_negative_and_nan_treated_as_zero(self):
        assert calculate_success_rate(-5, 10) == 0.0
        assert calculate_success_rate(float("nan"), 10) == 0.0
        assert calculate_success_rate(5, -10) == 0.0

    def test_fractional_rate(self):
        assert calculate_success_rate(1, 3) == pytest.approx(33.333, rel=1e-3)


# =============================================================
# TEST: Tier Tables
# =============================================================

class TestTierTables:
    """Test first-match-wins tier evaluation."""

    def test_first_matching_tier_wins(self):
        tiers = (
            ScoreTier(90, 15, TierDirection.ABOVE),
            ScoreTier(80, 10, TierDirection.ABOVE),
        )
        assert apply_tiers(95, tiers) == 15
        assert apply_tiers(85, tiers) == 10

    def test_no_match_returns_zero(self):
        tiers = (ScoreTier(90, 15), ScoreTier(10, -5, TierDirection.BELOW))
        assert apply_tiers(50, tiers) == 0

    def test_thresholds_are_strict(self):
        assert ScoreTier(90, 15).matches(90) is False
        assert ScoreTier(10, -5, TierDirection.BELOW).matches(10) is False

    def test_default_config_serializes(self):
        data = get_default_config().to_dict()
        assert data["growth"]["baseline"] == 50
        assert data["health"]["success_rate_tiers"][0] == {
            "threshold": 98,
            "adjustment": 25,
            "direction": "above",
        }
        assert len(data["risk"]["failed_transaction_tiers"]) == 4


# =============================================================
# TEST: Growth Score
# =============================================================

class TestGrowthScore:
    """Test growth score breakpoints."""

    @pytest.mark.parametrize("success_rate,expected", [
        (95.01, 85),   # >95: +20
        (95.0, 80),    # >90: +15
        (90.0, 75),    # >80: +10
        (80.0, 65),    # no tier
        (70.0, 65),    # no tier
        (69.9, 55),    # <70: -10
    ])
    def test_success_rate_tiers(self, success_rate, expected):
        # 60 customers always adds +15
        assert calculate_growth_score(success_rate, 60) == expected

    @pytest.mark.parametrize("customers,expected", [
        (51, 65),   # >50: +15
        (50, 60),   # >20: +10
        (20, 55),   # >10: +5
        (10, 50),   # no tier
        (5, 50),    # no tier
        (4, 45),    # <5: -5
    ])
    def test_customer_tiers(self, customers, expected):
        # success rate 75 hits no tier
        assert calculate_growth_score(75.0, customers) == expected


# =============================================================
# TEST: Health Score
# =============================================================

class TestHealthScore:
    """Test health score breakpoints."""

    @pytest.mark.parametrize("success_rate,expected", [
        (98.5, 75),   # >98: +25
        (98.0, 70),   # >95: +20
        (95.0, 65),   # >90: +15
        (90.0, 60),   # >80: +10
        (75.0, 50),   # no tier
        (69.0, 35),   # <70: -15
    ])
    def test_success_rate_tiers(self, success_rate, expected):
        # volume 50 ETH hits no tier
        assert calculate_health_score(success_rate, 50.0) == expected

    @pytest.mark.parametrize("volume,expected", [
        (1000.01, 65),  # >1000: +15
        (1000.0, 60),   # >500: +10
        (500.0, 55),    # >100: +5
        (100.0, 50),    # no tier
        (10.0, 50),     # no tier
        (9.99, 45),     # <10: -5
    ])
    def test_volume_tiers(self, volume, expected):
        assert calculate_health_score(75.0, volume) == expected


# =============================================================
# TEST: Risk Score
# =============================================================

class TestRiskScore:
    """Test risk score breakpoints (higher = riskier)."""

    @pytest.mark.parametrize("success_rate,expected", [
        (49.9, 80),   # <50: +30
        (50.0, 70),   # <70: +20
        (70.0, 60),   # <80: +10
        (80.0, 50),   # no tier
        (90.0, 50),   # no tier
        (90.5, 40),   # >90: -10
        (95.5, 30),   # >95: -20
    ])
    def test_success_rate_tiers(self, success_rate, expected):
        # 10 failures hits no tier
        assert calculate_risk_score(success_rate, 10) == expected

    @pytest.mark.parametrize("failed,expected", [
        (101, 70),  # >100: +20
        (100, 65),  # >50: +15
        (50, 60),   # >20: +10
        (20, 50),   # no tier
        (5, 50),    # no tier
        (4, 40),    # <5: -10
    ])
    def test_failed_transaction_tiers(self, failed, expected):
        assert calculate_risk_score(85.0, failed) == expected


# =============================================================
# TEST: Reference Scenarios
# =============================================================

class TestScenarios:
    """Test the documented reference scenarios end to end."""

    def test_healthy_project(self):
        scored = score_project(make_raw())

        assert scored.success_rate == pytest.approx(98.0)
        assert scored.growth_score == 85
        assert scored.health_score == 85
        assert scored.risk_score == 20

    def test_empty_project(self):
        scored = score_project(RawProjectMetrics(chain_id="1"))

        assert scored.success_rate == 0.0
        assert scored.growth_score == 35
        assert scored.health_score == 30
        assert scored.risk_score == 70

    def test_overall_score(self):
        # (85 + 85 + (100 - 20)) / 3 = 83.33
        assert score_project(make_raw()).overall_score == 83

    def test_breakdown_explains_scores(self):
        scored = score_project(make_raw())

        growth = scored.breakdown["growth"]
        assert growth == {"baseline": 50, "success_rate": 20, "customers": 15}
        assert sum(scored.breakdown["risk"].values()) == scored.risk_score

    def test_breakdown_covers_every_dimension(self):
        scored = score_project(make_raw())
        assert list(scored.breakdown) == [d.value for d in ScoreDimension.all_dimensions()]

    def test_input_is_not_mutated(self):
        raw = make_raw()
        scored = score_project(raw)

        assert scored.raw is raw
        assert raw.success_rate is None


# =============================================================
# TEST: Defensive Input Handling
# =============================================================

class TestDefensiveInput:
    """The scorer never raises and never leaves [0, 100]."""

    def test_successes_exceeding_total(self):
        scored = score_project(make_raw(successful_transactions=500))
        assert scored.success_rate == 100.0
        assert 0 <= scored.growth_score <= 100

    def test_negative_inputs(self):
        scored = score_project(make_raw(
            total_transactions=-10,
            total_customers=-5,
            failed_transactions=-1,
            total_volume_eth=-100.0,
        ))
        assert scored.success_rate == 0.0
        # Negatives behave like zero
        assert (scored.growth_score, scored.health_score, scored.risk_score) == (35, 30, 70)

    def test_nan_volume(self):
        scored = score_project(make_raw(total_volume_eth=float("nan")))
        assert scored.health_score == 65  # 50 + 20 (98%) - 5 (volume 0)
        assert not math.isnan(scored.health_score)

    def test_reported_success_rate_is_ignored(self):
        scored = score_project(make_raw(success_rate=10.0))
        assert scored.success_rate == pytest.approx(98.0)

    def test_counts_beyond_float_range(self):
        scored = score_project(make_raw(
            total_transactions=10 ** 400,
            successful_transactions=10 ** 400,
            failed_transactions=-(10 ** 400),
            total_customers=10 ** 400,
        ))
        assert scored.success_rate == 100.0
        for score in (scored.growth_score, scored.health_score, scored.risk_score):
            assert 0 <= score <= 100

    def test_huge_volume_scores_like_top_tier(self):
        huge = score_project(make_raw(total_volume_eth=1e306))
        large = score_project(make_raw(total_volume_eth=1e9))
        assert huge.health_score == large.health_score


# =============================================================
# TEST: Configuration
# =============================================================

class TestConfiguration:
    """Test custom tier configuration."""

    def test_scores_clamped_to_max(self):
        config = MetricsScoringConfig(growth=GrowthScoreConfig(baseline=95))
        engine = MetricsScoringEngine(config)

        assert engine.score(make_raw()).growth_score == 100

    def test_scores_clamped_to_min(self):
        config = MetricsScoringConfig(growth=GrowthScoreConfig(baseline=5))
        scored = score_project(RawProjectMetrics(chain_id="1"), config=config)

        assert scored.growth_score == 0

    def test_engine_exposes_config(self):
        config = MetricsScoringConfig(engine_version="2.0.0")
        assert MetricsScoringEngine(config).get_config().engine_version == "2.0.0"


# =============================================================
# TEST: Formatting
# =============================================================

class TestFormatting:
    """Test human-readable summary."""

    def test_summary_contains_scores(self):
        summary = format_metrics_summary(score_project(make_raw(contract_address="0xabc")))

        assert "0xabc" in summary
        assert "Growth Score:  85/100" in summary
        assert "Risk Score:    20/100" in summary
        assert "Success Rate:  98.0%" in summary
