"""Pure scoring functions for pool health — no I/O."""
from __future__ import annotations

from .models import HealthStatus, IssueTag

# (threshold, score) pairs, tested top-down; first match wins.
LIQUIDITY_BANDS: tuple[tuple[float, int], ...] = (
    (100_000.0, 100),
    (50_000.0, 80),
    (25_000.0, 60),
    (10_000.0, 40),
)
SLIPPAGE_BANDS: tuple[tuple[float, int], ...] = (
    (1.0, 100),
    (3.0, 80),
    (5.0, 60),
    (10.0, 40),
)
VOLUME_BANDS: tuple[tuple[float, int], ...] = (
    (50_000.0, 100),
    (25_000.0, 80),
    (10_000.0, 60),
    (5_000.0, 40),
)
FLOOR_SCORE = 20

# Issues fire when a component score falls strictly below these values.
LIQUIDITY_ISSUE_BELOW = 60
SLIPPAGE_ISSUE_BELOW = 60
VOLUME_ISSUE_BELOW = 40

RECOMMENDATIONS: dict[IssueTag, str] = {
    IssueTag.LOW_LIQUIDITY: (
        "Consider increasing LP incentives or emergency liquidity injection"
    ),
    IssueTag.HIGH_SLIPPAGE: "Add more liquidity to reduce slippage impact",
    IssueTag.LOW_VOLUME: "Review marketing strategy and community engagement",
    IssueTag.FEW_PROVIDERS: "Diversify LP base through targeted incentive programs",
}


def _band_at_least(value: float, bands: tuple[tuple[float, int], ...]) -> int:
    for threshold, score in bands:
        if value >= threshold:
            return score
    return FLOOR_SCORE


def _band_at_most(value: float, bands: tuple[tuple[float, int], ...]) -> int:
    for threshold, score in bands:
        if value <= threshold:
            return score
    return FLOOR_SCORE


def liquidity_score(total_liquidity_usd: float) -> int:
    return _band_at_least(total_liquidity_usd, LIQUIDITY_BANDS)


def slippage_score(slippage_1_percent: float) -> int:
    """Lower slippage scores higher."""
    return _band_at_most(slippage_1_percent, SLIPPAGE_BANDS)


def volume_score(volume_24h_usd: float) -> int:
    return _band_at_least(volume_24h_usd, VOLUME_BANDS)


def overall_score(
    scores: tuple[int, int, int],
    weights: tuple[float, float, float] = (1.0, 1.0, 1.0),
) -> float:
    """Weighted mean of the liquidity, slippage and volume scores."""
    total_weight = sum(weights)
    if total_weight <= 0:
        raise ValueError("Score weights must have a positive sum")
    return sum(s * w for s, w in zip(scores, weights)) / total_weight


def classify_status(
    overall: float, healthy_score: float = 80.0, warning_score: float = 60.0
) -> HealthStatus:
    """Map an overall score to a status; lower bounds are inclusive."""
    if overall >= healthy_score:
        return HealthStatus.HEALTHY
    if overall >= warning_score:
        return HealthStatus.WARNING
    return HealthStatus.CRITICAL


def identify_issues(
    liquidity: int,
    slippage: int,
    volume: int,
    liquidity_provider_count: int,
    min_liquidity_providers: int = 5,
) -> tuple[IssueTag, ...]:
    """Run the fixed issue checklist; order of the result is detection order."""
    issues: list[IssueTag] = []
    if liquidity < LIQUIDITY_ISSUE_BELOW:
        issues.append(IssueTag.LOW_LIQUIDITY)
    if slippage < SLIPPAGE_ISSUE_BELOW:
        issues.append(IssueTag.HIGH_SLIPPAGE)
    if volume < VOLUME_ISSUE_BELOW:
        issues.append(IssueTag.LOW_VOLUME)
    if liquidity_provider_count < min_liquidity_providers:
        issues.append(IssueTag.FEW_PROVIDERS)
    return tuple(issues)


def recommendations_for(issues: tuple[IssueTag, ...]) -> tuple[str, ...]:
    return tuple(RECOMMENDATIONS[issue] for issue in issues)
