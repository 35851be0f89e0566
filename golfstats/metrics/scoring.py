"""Scalar scoring statistics.

Small, pure helpers shared by the handicap engine, the aggregators and the
formatters. Sign conventions matter here:

- improvement_trend: second half minus first half. Negative = improving.
- Lower golf scores are better everywhere.

Empty input to average() returns None (insufficient data). The standard
deviation of fewer than two rounds is 0.0, a separate minimum-sample rule.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from statistics import pstdev
from typing import TYPE_CHECKING

from golfstats.models.results import ConsistencyRating, Difficulty, PerformanceLevel

if TYPE_CHECKING:
    from golfstats.models.round import Round

# Performance thresholds by hole count: (excellent, good, average) upper bounds
SCORE_THRESHOLDS: dict[int, tuple[int, int, int]] = {
    18: (105, 110, 115),
    9: (52, 55, 57),
}

STANDARD_PAR = {9: 36, 18: 72}


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero on the decimal representation.

    round() in Python rounds half to even (round(0.25, 1) == 0.2); displayed
    golf figures round 0.25 up to 0.3.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def average(values: Iterable[float]) -> float | None:
    """Arithmetic mean, or None when there are no values."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def _sorted_by_date(rounds: Iterable[Round], *, descending: bool = False) -> list[Round]:
    return sorted(rounds, key=lambda r: r.date_played, reverse=descending)


def standard_deviation(rounds: Sequence[Round]) -> float:
    """Population standard deviation of scores, one decimal. 0.0 below two rounds."""
    if len(rounds) < 2:
        return 0.0
    return round_half_up(pstdev(r.score for r in rounds), 1)


def improvement_trend(rounds: Sequence[Round]) -> float:
    """Second-half average minus first-half average, chronologically.

    Negative means the later rounds scored lower, i.e. the golfer improved.
    """
    if len(rounds) < 2:
        return 0.0

    ordered = _sorted_by_date(rounds)
    midpoint = len(ordered) // 2
    first_avg = average(r.score for r in ordered[:midpoint])
    second_avg = average(r.score for r in ordered[midpoint:])
    return round_half_up(second_avg - first_avg, 1)


def best_score(rounds: Iterable[Round]) -> int | None:
    scores = [r.score for r in rounds]
    return min(scores) if scores else None


def worst_score(rounds: Iterable[Round]) -> int | None:
    scores = [r.score for r in rounds]
    return max(scores) if scores else None


def consistency_rating(std_dev: float) -> ConsistencyRating:
    """Map a score standard deviation to a five-tier rating."""
    if std_dev < 3:
        return ConsistencyRating(rating="excellent", description="Very Consistent", color="text-green-400")
    if std_dev < 5:
        return ConsistencyRating(rating="good", description="Consistent", color="text-blue-400")
    if std_dev < 7:
        return ConsistencyRating(rating="average", description="Average Consistency", color="text-yellow-400")
    if std_dev < 9:
        return ConsistencyRating(rating="below-average", description="Inconsistent", color="text-orange-400")
    return ConsistencyRating(rating="poor", description="Very Inconsistent", color="text-red-400")


def score_performance_level(score: float, hole_count: int = 18) -> PerformanceLevel:
    excellent, good, avg = SCORE_THRESHOLDS.get(hole_count, SCORE_THRESHOLDS[18])
    if score < excellent:
        return "excellent"
    if score < good:
        return "good"
    if score < avg:
        return "average"
    return "needs-improvement"


def hole_difficulty(over_under_par: float) -> Difficulty:
    """Rank a hole by its average strokes over par."""
    if over_under_par < 0.5:
        return "Easy"
    if over_under_par < 1.0:
        return "Moderate"
    if over_under_par < 1.5:
        return "Difficult"
    return "Very Difficult"


def score_to_par(score: int, hole_count: int = 18) -> int:
    return score - STANDARD_PAR.get(hole_count, STANDARD_PAR[18])


def format_score_to_par(score: int, hole_count: int = 18) -> str:
    """Format as golf notation: "E", "+3", "-2"."""
    to_par = score_to_par(score, hole_count)
    if to_par == 0:
        return "E"
    return f"{to_par:+d}"


def format_signed(value: float, digits: int = 1) -> str:
    return f"{round_half_up(value, digits):+.{digits}f}"


def format_extremum(value: int | None) -> str:
    """Display form of a running best/worst; "-" while unresolved."""
    return "-" if value is None else str(value)
