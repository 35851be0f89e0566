"""Cross-round hole statistics and the headline overview of a set of rounds.

Hole figures come only from completed holes (score and par both recorded),
pooled across every round given. Par types with no completed hole are left
out rather than reported as zero.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from golfstats.metrics.scoring import (
    average,
    best_score,
    consistency_rating,
    improvement_trend,
    round_half_up,
    standard_deviation,
    worst_score,
)
from golfstats.models.results import HoleScoringDistribution, ParTypeHoleStats, RoundsOverview, ScoreRangeBucket
from golfstats.models.round import Round

# Round.performance_counts key -> distribution field
RESULT_FIELDS = {
    "eagle": "eagles",
    "birdie": "birdies",
    "par": "pars",
    "bogey": "bogeys",
    "double": "doubles",
    "triple+": "triples",
}

# (key, label, inclusive upper bound); the last range is open-ended
OVERVIEW_SCORE_RANGES: tuple[tuple[str, str, int | None], ...] = (
    ("under105", "< 105", 104),
    ("range105to109", "105-109", 109),
    ("range110to114", "110-114", 114),
    ("over115", "115+", None),
)


def hole_scoring_distribution(rounds: Sequence[Round]) -> HoleScoringDistribution:
    """Eagles through triples+ over every completed hole of the given rounds."""
    counts = dict.fromkeys(RESULT_FIELDS.values(), 0)
    for round_ in rounds:
        for name, count in round_.performance_counts().items():
            counts[RESULT_FIELDS[name]] += count

    total = sum(counts.values())
    percentages = {
        name: round_half_up(count / total * 100, 1) if total else 0.0 for name, count in counts.items()
    }
    return HoleScoringDistribution(**counts, total_holes=total, percentages=percentages)


def par_type_hole_performance(rounds: Sequence[Round]) -> list[ParTypeHoleStats]:
    """Per-par-type hole scoring, par 3 first; par types never played are omitted."""
    scores: dict[int, list[int]] = {3: [], 4: [], 5: []}
    for round_ in rounds:
        for hole in round_.completed_holes:
            if hole.par in scores:
                scores[hole.par].append(hole.score)

    result = []
    for par, par_scores in scores.items():
        if not par_scores:
            continue
        avg = average(par_scores)
        result.append(
            ParTypeHoleStats(
                par=par,
                holes_played=len(par_scores),
                total_score=sum(par_scores),
                total_par=par * len(par_scores),
                average_score=round_half_up(avg, 2),
                average_to_par=round_half_up(avg - par, 2),
            )
        )
    return result


def _score_ranges(rounds: Sequence[Round]) -> list[ScoreRangeBucket]:
    counts = dict.fromkeys((key for key, _, _ in OVERVIEW_SCORE_RANGES), 0)
    for round_ in rounds:
        for key, _, upper in OVERVIEW_SCORE_RANGES:
            if upper is None or round_.score <= upper:
                counts[key] += 1
                break

    total = len(rounds)
    return [
        ScoreRangeBucket(
            key=key,
            label=label,
            count=counts[key],
            percentage=round_half_up(counts[key] / total * 100, 1),
        )
        for key, label, _ in OVERVIEW_SCORE_RANGES
    ]


def rounds_overview(rounds: Sequence[Round]) -> RoundsOverview | None:
    """Headline scoring figures, or None when there are no rounds."""
    if not rounds:
        return None

    differentials = [r.differential for r in rounds if r.has_differential]
    std_dev = standard_deviation(rounds)

    overview = RoundsOverview(
        total_rounds=len(rounds),
        average_score=round_half_up(average(r.score for r in rounds), 1),
        best_score=best_score(rounds),
        worst_score=worst_score(rounds),
        average_differential=round_half_up(average(differentials), 1) if differentials else None,
        best_differential=min(differentials) if differentials else None,
        worst_differential=max(differentials) if differentials else None,
        standard_deviation=std_dev,
        improvement_trend=improvement_trend(rounds),
        score_ranges=_score_ranges(rounds),
        consistency=consistency_rating(std_dev),
    )
    logger.debug(f"Rounds overview: rounds={overview.total_rounds}, std_dev={std_dev}, trend={overview.improvement_trend}")
    return overview
