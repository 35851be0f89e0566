"""Year-over-year analysis built on YearAggregate."""

from __future__ import annotations

from collections.abc import Sequence
from statistics import pstdev
from typing import Any

from golfstats.aggregation.year import YearAggregate
from golfstats.metrics.scoring import average, consistency_rating
from golfstats.models.results import CourseCount, YearSummary

SEASONS: tuple[tuple[str, tuple[int, ...]], ...] = (
    ("Spring", (2, 3, 4)),
    ("Summer", (5, 6, 7)),
    ("Fall", (8, 9, 10)),
    ("Winter", (11, 0, 1)),
)


def _percent_change(change: float, base: float | None) -> float | None:
    if not base:
        return None
    return change / base * 100


def year_over_year_trends(summaries: Sequence[YearSummary]) -> dict[str, Any]:
    """Compare the latest two years. Positive score/differential change = improved."""
    if len(summaries) < 2:
        return {"has_comparison": False, "message": "Need at least 2 years of data for trends"}

    previous, latest = summaries[-2], summaries[-1]

    def compare(prev: float | None, last: float | None) -> dict[str, Any] | None:
        if prev is None or last is None:
            return None
        change = prev - last
        return {"value": change, "percentage": _percent_change(change, prev), "is_improved": change > 0}

    rounds_change = latest.rounds - previous.rounds
    return {
        "has_comparison": True,
        "latest_year": latest.year,
        "previous_year": previous.year,
        "score_improvement": compare(previous.average_score, latest.average_score),
        "differential_improvement": compare(previous.average_differential, latest.average_differential),
        "rounds_change": {"value": rounds_change, "percentage": _percent_change(rounds_change, previous.rounds)},
    }


def best_and_worst_years(summaries: Sequence[YearSummary]) -> tuple[YearSummary | None, YearSummary | None]:
    """(best, worst) year by average score; lower is better."""
    scored = [s for s in summaries if s.average_score is not None]
    if not scored:
        return None, None
    ordered = sorted(scored, key=lambda s: s.average_score)
    return ordered[0], ordered[-1]


def seasonal_analysis(aggregate: YearAggregate) -> list[dict[str, Any]]:
    """Average of monthly averages per season; seasons without rounds are dropped.

    Winter groups Dec, Jan and Feb of the same calendar year.
    """
    monthly = {m.month_index: m for m in aggregate.monthly_chart_data()}
    result = []
    for season, months in SEASONS:
        present = [monthly[m] for m in months if m in monthly]
        if not present:
            continue
        result.append(
            {
                "season": season,
                "average_score": average(m.average_score for m in present),
                "rounds": sum(m.rounds for m in present),
            }
        )
    return result


def top_courses_for_year(aggregate: YearAggregate, limit: int = 5) -> list[CourseCount]:
    return aggregate.course_breakdown()[:limit]


def yearly_consistency(aggregates: Sequence[YearAggregate]) -> list[dict[str, Any]]:
    """Per-year score spread; consistency is None below two rounds."""
    result = []
    for aggregate in aggregates:
        entry: dict[str, Any] = {"year": aggregate.year, "rounds": aggregate.rounds, "consistency": None}
        if len(aggregate.scores) >= 2:
            std_dev = pstdev(aggregate.scores)
            mean_score = aggregate.average_score
            entry["consistency"] = {
                "standard_deviation": std_dev,
                "coefficient_of_variation": std_dev / mean_score * 100,
                "rating": consistency_rating(std_dev).rating,
            }
        result.append(entry)
    return result
