"""Chart data shaping.

Pure reshaping of aggregator output into plotting-ready rows. Two month
conventions coexist and must not be mixed:

- monthly_performance_data: months without rounds are omitted
- complete_monthly_series: all 12 months, empty ones flagged has_data=False

Colour bands use fixed breakpoints, never computed scales.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from golfstats.aggregation.year import MONTH_NAMES
from golfstats.metrics.scoring import round_half_up
from golfstats.models.results import (
    CourseCount,
    CourseSummary,
    DistributionSlice,
    HandicapTrendPoint,
    HoleAverage,
    HoleScoringDistribution,
    MonthlyScore,
    YearSummary,
)
from golfstats.models.round import Round

GREEN = "#10b981"
YELLOW = "#fbbf24"
ORANGE = "#f59e0b"
RED = "#ef4444"

COURSE_RANK_COLORS = ("#10b981", "#3b82f6", "#8b5cf6")
COURSE_DEFAULT_COLOR = "#6b7280"

SEASON_COLORS = {
    "Spring": "#10b981",
    "Summer": "#fbbf24",
    "Fall": "#f97316",
    "Winter": "#3b82f6",
}
SEASON_DEFAULT_COLOR = "#8b5cf6"

# (distribution field, slice name, colour), best result first
HOLE_RESULT_SLICES = (
    ("eagles", "Eagles", "#8b5cf6"),
    ("birdies", "Birdies", "#3b82f6"),
    ("pars", "Pars", "#10b981"),
    ("bogeys", "Bogeys", "#eab308"),
    ("doubles", "Doubles", "#f97316"),
    ("triples", "Triples+", "#ef4444"),
)


def _r(value: float | None, digits: int = 1) -> float | None:
    return None if value is None else round_half_up(value, digits)


# -----------------------------
# Fixed colour bands
# -----------------------------


def hole_performance_color(over_under_par: float) -> str:
    if over_under_par <= 0.5:
        return GREEN
    if over_under_par <= 1.0:
        return YELLOW
    if over_under_par <= 1.5:
        return ORANGE
    return RED


def par_performance_color(over_par: float) -> str:
    if over_par <= 0.5:
        return "text-green-400"
    if over_par <= 1.0:
        return "text-yellow-400"
    if over_par <= 1.5:
        return "text-orange-400"
    return "text-red-400"


def differential_color(differential: float) -> str:
    if differential < 35.0:
        return "text-green-400"
    if differential < 38.0:
        return "text-yellow-400"
    if differential < 40.0:
        return "text-orange-400"
    return "text-red-400"


# -----------------------------
# Year charts
# -----------------------------


def monthly_performance_data(monthly: Sequence[MonthlyScore]) -> list[dict[str, Any]]:
    """Bars for months that have rounds only."""
    return [{"month": m.month, "average_score": _r(m.average_score), "rounds": m.rounds} for m in monthly]


def complete_monthly_series(monthly: Sequence[MonthlyScore]) -> list[dict[str, Any]]:
    """All twelve months in order; months without rounds carry has_data=False."""
    by_index = {m.month_index: m for m in monthly}
    series = []
    for index, name in enumerate(MONTH_NAMES):
        existing = by_index.get(index)
        if existing is None:
            series.append({"month": name, "average_score": None, "rounds": 0, "has_data": False})
        else:
            series.append({"month": name, "average_score": _r(existing.average_score), "rounds": existing.rounds, "has_data": True})
    return series


def year_trend_data(summaries: Sequence[YearSummary]) -> list[dict[str, Any]]:
    return [
        {
            "year": s.year,
            "average_score": _r(s.average_score),
            "best_score": s.best_score,
            "worst_score": s.worst_score,
            "rounds": s.rounds,
            "average_differential": _r(s.average_differential),
        }
        for s in sorted(summaries, key=lambda s: s.year)
    ]


def year_comparison_data(summaries: Sequence[YearSummary]) -> list[dict[str, Any]]:
    """Year rows with the average-score improvement over the previous year.

    improvement = previous average - this average (positive = better); None
    for the first year or when either average is missing.
    """
    rows = []
    previous: float | None = None
    for s in sorted(summaries, key=lambda s: s.year):
        improvement = None
        if previous is not None and s.average_score is not None:
            improvement = round_half_up(previous - s.average_score, 1)
        rows.append(
            {
                "year": s.year,
                "rounds": s.rounds,
                "average_score": _r(s.average_score),
                "average_differential": _r(s.average_differential),
                "best_score": s.best_score,
                "worst_score": s.worst_score,
                "improvement": improvement,
            }
        )
        previous = s.average_score
    return rows


def year_scoring_distribution(slices: Sequence[DistributionSlice]) -> list[dict[str, Any]]:
    total = sum(s.value for s in slices)
    return [
        {
            "name": s.name,
            "value": s.value,
            "color": s.color,
            "percentage": round_half_up(s.value / total * 100, 1) if total else 0.0,
        }
        for s in slices
    ]


def hole_scoring_distribution_data(distribution: HoleScoringDistribution) -> list[dict[str, Any]]:
    """One slice per hole result; results that never occurred are dropped."""
    total = distribution.total_holes
    rows = []
    for field_name, name, color in HOLE_RESULT_SLICES:
        value = getattr(distribution, field_name)
        if not value:
            continue
        rows.append(
            {
                "name": name,
                "value": value,
                "color": color,
                "percentage": round_half_up(value / total * 100, 1),
            }
        )
    return rows


def course_breakdown_data(breakdown: Sequence[CourseCount]) -> list[dict[str, Any]]:
    """Most-played courses get the rank colours, the rest share a neutral one."""
    return [
        {
            "course": c.course,
            "rounds": c.rounds,
            "color": COURSE_RANK_COLORS[i] if i < len(COURSE_RANK_COLORS) else COURSE_DEFAULT_COLOR,
        }
        for i, c in enumerate(breakdown)
    ]


def par_type_comparison(par_averages: Mapping[int, float | None]) -> list[dict[str, Any]]:
    rows = []
    for par in (3, 4, 5):
        avg = par_averages.get(par)
        over_par = None if avg is None else avg - par
        rows.append(
            {
                "type": f"Par {par}",
                "average": _r(avg, 2),
                "over_par": _r(over_par, 2),
                "color": None if over_par is None else par_performance_color(over_par),
            }
        )
    return rows


def seasonal_data(seasons: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [
        {
            "season": s["season"],
            "average_score": _r(s["average_score"]),
            "rounds": s["rounds"],
            "color": SEASON_COLORS.get(s["season"], SEASON_DEFAULT_COLOR),
        }
        for s in seasons
    ]


# -----------------------------
# Course charts
# -----------------------------


def course_comparison_data(summaries: Sequence[CourseSummary]) -> list[dict[str, Any]]:
    rows = [
        {
            "course": s.name,
            "rounds": s.total_rounds,
            "average_score": _r(s.average_score_18),
            "average_differential": _r(s.average_differential_18),
            "best_score": s.best_score_18,
            "rating": s.rating,
            "slope": s.slope,
        }
        for s in summaries
    ]
    return sorted(rows, key=lambda row: row["rounds"], reverse=True)


def hole_performance_data(holes: Sequence[HoleAverage]) -> list[dict[str, Any]]:
    return [
        {
            "hole": h.hole_number,
            "par": h.par,
            "average_score": round_half_up(h.average_score, 2),
            "over_under_par": round_half_up(h.over_under_par, 2),
            "rounds_played": h.rounds_played,
            "difficulty": h.difficulty,
            "color": hole_performance_color(h.over_under_par),
        }
        for h in holes
    ]


# -----------------------------
# Round and handicap series
# -----------------------------


def score_trend_data(rounds: Iterable[Round]) -> list[dict[str, Any]]:
    ordered = sorted(rounds, key=lambda r: r.date_played)
    return [
        {
            "index": i,
            "date": r.date_played.isoformat(),
            "score": r.score,
            "differential": r.differential,
            "course": r.course_name,
        }
        for i, r in enumerate(ordered, start=1)
    ]


def score_frequency_data(rounds: Sequence[Round], bin_size: int = 2) -> list[dict[str, Any]]:
    """Histogram of scores in fixed-width bins, lowest bin first."""
    if bin_size < 1:
        raise ValueError(f"bin_size must be at least 1, got {bin_size}")

    bins = Counter((r.score // bin_size) * bin_size for r in rounds)
    total = len(rounds)
    return [
        {
            "range": f"{start}-{start + bin_size - 1}",
            "count": count,
            "percentage": round_half_up(count / total * 100, 1),
        }
        for start, count in sorted(bins.items())
    ]


def scorecard_data(round_: Round) -> dict[str, list[dict[str, Any]]]:
    """Front and back nine rows for a hole-by-hole scorecard."""
    card: dict[str, list[dict[str, Any]]] = {"front_nine": [], "back_nine": []}
    for hole in round_.holes:
        row = {
            "hole": hole.hole_number,
            "par": hole.par,
            "score": hole.score if hole.is_complete else None,
            "to_par": hole.score_to_par if hole.is_complete else None,
            "stroke_index": hole.stroke_index,
        }
        card["front_nine" if hole.is_front_nine else "back_nine"].append(row)
    return card


def handicap_trend_series(points: Iterable[HandicapTrendPoint]) -> list[tuple[str, float]]:
    """(ISO date, index) tuples for a line chart."""
    return [(p.date_played.isoformat(), p.index) for p in points]
