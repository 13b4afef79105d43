from typing import Dict, List, Optional

from brandmatch.config import TREND_THRESHOLD_PCT
from brandmatch.models import TrendResult


def calculate_trend_direction(previous_score: Optional[float], current_score: float) -> str:
    """Return 'rising', 'falling' or 'stable' for a score change between two runs."""
    if not previous_score:
        return "stable"

    change = (current_score - previous_score) / previous_score * 100
    if change > TREND_THRESHOLD_PCT:
        return "rising"
    if change < -TREND_THRESHOLD_PCT:
        return "falling"
    return "stable"


def calculate_trend_percentage(previous_score: Optional[float], current_score: float) -> float:
    if not previous_score or previous_score <= 0:
        return 0.0
    return round((current_score - previous_score) / previous_score * 100, 2)


def compare_with_previous(
    current: Dict[str, float],
    previous: Dict[str, float],
) -> List[TrendResult]:
    """
    Compare each brand's current score with its score in the previous run.

    Args:
        current (Dict[str, float]): Brand name → score in this run.
        previous (Dict[str, float]): Brand name → score in the previous run.

    Returns:
        List[TrendResult]: One result per current brand; brands not seen before are 'new'.
    """
    trends = []
    for name, score in current.items():
        if name not in previous:
            trends.append(TrendResult(
                brand_name=name,
                trend_direction="new",
                trend_percentage=0.0,
                previous_score=None,
                current_score=score,
                is_new=True,
            ))
            continue

        prev = previous[name]
        trends.append(TrendResult(
            brand_name=name,
            trend_direction=calculate_trend_direction(prev, score),
            trend_percentage=calculate_trend_percentage(prev, score),
            previous_score=prev,
            current_score=score,
            is_new=False,
        ))
    return trends


def calculate_overall_trend(trends: List[TrendResult]) -> str:
    rising = sum(1 for t in trends if t.trend_direction == "rising")
    falling = sum(1 for t in trends if t.trend_direction == "falling")
    new = sum(1 for t in trends if t.trend_direction == "new")

    if rising + new > falling:
        return "rising"
    if falling > rising + new:
        return "falling"
    return "stable"
