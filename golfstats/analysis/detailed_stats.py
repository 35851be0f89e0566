"""Detailed statistics for a set of rounds.

Combines score distribution buckets, a recent-vs-older comparison, the
consistency rating and par-type performance into one structure, plus a
display formatter.

Sign convention: improvement = older average - recent average, so a
positive value means the golfer is scoring lower now. This is the opposite
of metrics.scoring.improvement_trend, which reports recent - older.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from loguru import logger

from golfstats.metrics.scoring import average, consistency_rating, format_signed, round_half_up, standard_deviation
from golfstats.models.results import (
    DetailedStatistics,
    ImprovementDirection,
    ParTypePerformance,
    RecentImprovement,
    ScoreRangeBucket,
)
from golfstats.models.round import Round

DEFAULT_RECENT_WINDOW = 10

# (key, label, inclusive upper bound); the last bucket is open-ended
SCORE_RANGES: tuple[tuple[str, str, int | None], ...] = (
    ("under90", "< 90", 89),
    ("range90to94", "90-94", 94),
    ("range95to99", "95-99", 99),
    ("over100", "100+", None),
)


def score_distribution(rounds: Sequence[Round]) -> list[ScoreRangeBucket]:
    """Count rounds per fixed score range; percentages use the full input length."""
    counts = dict.fromkeys((key for key, _, _ in SCORE_RANGES), 0)
    for round_ in rounds:
        for key, _, upper in SCORE_RANGES:
            if upper is None or round_.score <= upper:
                counts[key] += 1
                break

    total = len(rounds)
    return [
        ScoreRangeBucket(
            key=key,
            label=label,
            count=counts[key],
            percentage=round_half_up(counts[key] / total * 100, 1) if total else 0.0,
        )
        for key, label, _ in SCORE_RANGES
    ]


def _direction(improvement: float) -> ImprovementDirection:
    if improvement > 0:
        return "improving"
    if improvement < 0:
        return "declining"
    return "stable"


def comparison_slices(
    rounds: Sequence[Round],
    *,
    window: int = DEFAULT_RECENT_WINDOW,
    exclude_overlap: bool = False,
) -> tuple[list[Round], list[Round]]:
    """Split rounds into (recent, older) slices, newest first.

    The recent slice is the newest `window` rounds. The older slice is the
    oldest `window` rounds of the full list, so with fewer than 2 * window
    rounds the slices share rounds; with exactly `window` rounds both hold
    every round. exclude_overlap draws the older slice only from rounds
    outside the recent slice.
    """
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")

    ordered = sorted(rounds, key=lambda r: r.date_played, reverse=True)
    recent = ordered[:window]
    pool = ordered[window:] if exclude_overlap else ordered
    return recent, pool[-window:]


def recent_improvement(
    rounds: Sequence[Round],
    *,
    window: int = DEFAULT_RECENT_WINDOW,
    exclude_overlap: bool = False,
) -> RecentImprovement:
    """Compare the most recent rounds with the oldest ones.

    Below `window` rounds only the overall average is reported.
    """
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")

    if len(rounds) < window:
        recent_avg = average(r.score for r in rounds)
        return RecentImprovement(
            recent_average=round_half_up(recent_avg, 1) if recent_avg is not None else None,
            recent_rounds=len(rounds),
        )

    recent, older = comparison_slices(rounds, window=window, exclude_overlap=exclude_overlap)

    recent_avg = average(r.score for r in recent)
    if not older:
        return RecentImprovement(recent_average=round_half_up(recent_avg, 1), recent_rounds=len(recent))

    older_avg = average(r.score for r in older)
    improvement = round_half_up(older_avg - recent_avg, 1)

    return RecentImprovement(
        recent_average=round_half_up(recent_avg, 1),
        older_average=round_half_up(older_avg, 1),
        improvement=improvement,
        direction=_direction(improvement),
        recent_rounds=len(recent),
        comparison_rounds=len(older),
    )


def par_type_performance(rounds: Sequence[Round]) -> ParTypePerformance | None:
    """Average par-3/4/5 scores and strokes vs par; None without statistic-bearing rounds."""
    with_stats = [r.statistics for r in rounds if r.statistics is not None]
    if not with_stats:
        return None

    averages = {
        3: average(s.par3_average for s in with_stats if s.par3_average is not None),
        4: average(s.par4_average for s in with_stats if s.par4_average is not None),
        5: average(s.par5_average for s in with_stats if s.par5_average is not None),
    }
    rounded = {par: None if avg is None else round_half_up(avg, 2) for par, avg in averages.items()}
    vs_par = {par: None if avg is None else round_half_up(avg - par, 2) for par, avg in averages.items()}

    return ParTypePerformance(
        par3_average=rounded[3],
        par4_average=rounded[4],
        par5_average=rounded[5],
        par3_vs_par=vs_par[3],
        par4_vs_par=vs_par[4],
        par5_vs_par=vs_par[5],
    )


def calculate_detailed_statistics(
    rounds: Sequence[Round],
    *,
    recent_window: int = DEFAULT_RECENT_WINDOW,
    exclude_overlap: bool = False,
) -> DetailedStatistics | None:
    """Build detailed statistics, or None when there are no rounds."""
    if not rounds:
        return None

    consistency = standard_deviation(rounds)
    stats = DetailedStatistics(
        score_distribution=score_distribution(rounds),
        recent=recent_improvement(rounds, window=recent_window, exclude_overlap=exclude_overlap),
        consistency=consistency,
        consistency_rating=consistency_rating(consistency),
        par_types=par_type_performance(rounds),
        total_rounds=len(rounds),
    )
    logger.debug(f"Detailed statistics over {len(rounds)} rounds: consistency={consistency}")
    return stats


def _improvement_display(improvement: float | None) -> str:
    if improvement is None:
        return "N/A"
    # Fewer strokes is shown as a negative change; no change shows as +0.0
    sign = "-" if improvement > 0 else "+"
    return f"{sign}{abs(improvement):.1f} strokes"


def _par_display(avg: float | None, vs_par: float | None) -> dict[str, Any]:
    return {
        "average": avg,
        "vs_par": vs_par,
        "display": "N/A" if avg is None else f"{avg:.2f}",
        "vs_par_display": "N/A" if vs_par is None else format_signed(vs_par, 2),
    }


def format_detailed_statistics(stats: DetailedStatistics) -> dict[str, Any]:
    """Project detailed statistics into display-ready values."""
    par_types = stats.par_types
    return {
        "score_distribution": [
            {
                "range": bucket.label,
                "count": bucket.count,
                "percentage": bucket.percentage,
                "display_percentage": f"{bucket.percentage:.1f}%",
            }
            for bucket in stats.score_distribution
        ],
        "improvement": {
            "value": stats.recent.improvement,
            "display": _improvement_display(stats.recent.improvement),
            "is_improving": stats.recent.direction == "improving",
        },
        "recent_average": stats.recent.recent_average,
        "consistency": {
            "value": stats.consistency,
            "display": f"±{stats.consistency:.1f}",
            "rating": stats.consistency_rating.model_dump(),
        },
        "par_type_performance": {
            "par3": _par_display(par_types.par3_average if par_types else None, par_types.par3_vs_par if par_types else None),
            "par4": _par_display(par_types.par4_average if par_types else None, par_types.par4_vs_par if par_types else None),
            "par5": _par_display(par_types.par5_average if par_types else None, par_types.par5_vs_par if par_types else None),
        },
        "total_rounds": stats.total_rounds,
    }
