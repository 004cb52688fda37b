"""Unit tests for the pure scoring functions."""
from __future__ import annotations

import pytest

from pool_health import scoring
from pool_health.models import HealthStatus, IssueTag


class TestBandScores:
    @pytest.mark.parametrize(
        ("tvl", "expected"),
        [
            (1_000_000.0, 100),
            (100_000.0, 100),
            (99_999.99, 80),
            (50_000.0, 80),
            (25_000.0, 60),
            (10_000.0, 40),
            (9_999.99, 20),
            (0.0, 20),
        ],
    )
    def test_liquidity_bands(self, tvl: float, expected: int) -> None:
        assert scoring.liquidity_score(tvl) == expected

    @pytest.mark.parametrize(
        ("slippage", "expected"),
        [
            (0.0, 100),
            (1.0, 100),
            (1.01, 80),
            (3.0, 80),
            (5.0, 60),
            (10.0, 40),
            (10.01, 20),
            (50.0, 20),
        ],
    )
    def test_slippage_bands(self, slippage: float, expected: int) -> None:
        assert scoring.slippage_score(slippage) == expected

    @pytest.mark.parametrize(
        ("volume", "expected"),
        [
            (50_000.0, 100),
            (25_000.0, 80),
            (24_999.0, 60),
            (10_000.0, 60),
            (5_000.0, 40),
            (4_999.99, 20),
            (0.0, 20),
        ],
    )
    def test_volume_bands(self, volume: float, expected: int) -> None:
        assert scoring.volume_score(volume) == expected

    def test_liquidity_monotonic(self) -> None:
        values = [0, 5_000, 10_000, 20_000, 25_000, 49_999, 50_000, 100_000, 500_000]
        scores = [scoring.liquidity_score(v) for v in values]
        assert scores == sorted(scores)

    def test_slippage_monotonic(self) -> None:
        values = [40.0, 10.5, 10.0, 7.0, 5.0, 4.0, 3.0, 2.0, 1.0, 0.1]
        scores = [scoring.slippage_score(v) for v in values]
        assert scores == sorted(scores)


class TestOverallScore:
    def test_equal_weights_is_mean(self) -> None:
        assert scoring.overall_score((100, 80, 60)) == pytest.approx(80.0)
        assert scoring.overall_score((20, 20, 20)) == 20.0

    def test_custom_weights(self) -> None:
        assert scoring.overall_score((100, 20, 20), (2.0, 1.0, 1.0)) == pytest.approx(60.0)

    def test_zero_weights_raise(self) -> None:
        with pytest.raises(ValueError):
            scoring.overall_score((100, 100, 100), (0.0, 0.0, 0.0))


class TestClassifyStatus:
    @pytest.mark.parametrize(
        ("overall", "expected"),
        [
            (100.0, HealthStatus.HEALTHY),
            (80.0, HealthStatus.HEALTHY),
            (79.99, HealthStatus.WARNING),
            (60.0, HealthStatus.WARNING),
            (59.99, HealthStatus.CRITICAL),
            (20.0, HealthStatus.CRITICAL),
        ],
    )
    def test_boundaries(self, overall: float, expected: HealthStatus) -> None:
        assert scoring.classify_status(overall) is expected

    def test_custom_thresholds(self) -> None:
        assert scoring.classify_status(70.0, 70.0, 50.0) is HealthStatus.HEALTHY
        assert scoring.classify_status(49.0, 70.0, 50.0) is HealthStatus.CRITICAL


class TestIssues:
    def test_no_issues(self) -> None:
        assert scoring.identify_issues(100, 100, 100, 10) == ()

    def test_all_issues_in_order(self) -> None:
        assert scoring.identify_issues(20, 20, 20, 2) == (
            IssueTag.LOW_LIQUIDITY,
            IssueTag.HIGH_SLIPPAGE,
            IssueTag.LOW_VOLUME,
            IssueTag.FEW_PROVIDERS,
        )

    def test_thresholds_are_strict(self) -> None:
        # 60 is not below 60, 40 is not below 40, 5 is not below 5.
        assert scoring.identify_issues(60, 60, 40, 5) == ()

    def test_volume_issue_only_below_40(self) -> None:
        assert scoring.identify_issues(100, 100, 20, 10) == (IssueTag.LOW_VOLUME,)

    def test_min_providers_configurable(self) -> None:
        assert scoring.identify_issues(100, 100, 100, 8, min_liquidity_providers=10) == (
            IssueTag.FEW_PROVIDERS,
        )

    def test_issue_text(self) -> None:
        assert IssueTag.LOW_LIQUIDITY == "Low liquidity depth - risk of high slippage"
        assert IssueTag.FEW_PROVIDERS == (
            "Very few liquidity providers - high concentration risk"
        )


class TestRecommendations:
    def test_one_per_issue_in_order(self) -> None:
        issues = (IssueTag.FEW_PROVIDERS, IssueTag.LOW_LIQUIDITY)
        assert scoring.recommendations_for(issues) == (
            "Diversify LP base through targeted incentive programs",
            "Consider increasing LP incentives or emergency liquidity injection",
        )

    def test_empty(self) -> None:
        assert scoring.recommendations_for(()) == ()

    def test_mapping_is_total(self) -> None:
        assert set(scoring.RECOMMENDATIONS) == set(IssueTag)
