"""Per-year aggregation.

Folds 18-hole rounds into yearly running statistics: monthly score buckets,
course breakdown, par-type averages and an approximate scoring distribution.
Rounds of any other length are left out of the year entirely.

The scoring distribution converts each round's percentages into hole counts
using a fixed 18 holes per round, rounded per round. The rounding error
accumulates across rounds; it is kept as-is so yearly totals match
historical reports.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger

from golfstats.metrics.scoring import average, round_half_up
from golfstats.models.results import (
    CourseCount,
    DistributionSlice,
    MonthlyScore,
    ScoringDistributionTotals,
    YearSummary,
)
from golfstats.models.round import Round

HOLES_PER_ROUND_ESTIMATE = 18

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DISTRIBUTION_COLORS = {
    "Pars": "#10b981",
    "Bogeys": "#f59e0b",
    "Double+": "#ef4444",
}


def _percent_to_holes(percent: float) -> int:
    return int(round_half_up(percent / 100 * HOLES_PER_ROUND_ESTIMATE, 0))


@dataclass
class YearAggregate:
    """Running statistics for one calendar year."""

    year: int
    rounds: int = 0
    scores: list[int] = field(default_factory=list)
    differentials: list[float] = field(default_factory=list)

    # month index (0-11) -> scores
    monthly_scores: dict[int, list[int]] = field(default_factory=dict)
    course_counts: dict[str, int] = field(default_factory=dict)

    par3_averages: list[float] = field(default_factory=list)
    par4_averages: list[float] = field(default_factory=list)
    par5_averages: list[float] = field(default_factory=list)

    pars: int = 0
    bogeys: int = 0
    double_plus: int = 0

    def add_round(self, round_: Round) -> None:
        if round_.hole_count != 18:
            logger.debug(f"Skipping {round_.hole_count}-hole round in {self.year}")
            return

        self.rounds += 1
        self.scores.append(round_.score)
        if round_.has_differential:
            self.differentials.append(round_.differential)

        month = round_.date_played.month - 1
        self.monthly_scores.setdefault(month, []).append(round_.score)

        self.course_counts[round_.course_name] = self.course_counts.get(round_.course_name, 0) + 1

        stats = round_.statistics
        if stats is None:
            return

        if stats.par3_average is not None:
            self.par3_averages.append(stats.par3_average)
        if stats.par4_average is not None:
            self.par4_averages.append(stats.par4_average)
        if stats.par5_average is not None:
            self.par5_averages.append(stats.par5_average)

        if stats.pars_percent is not None:
            self.pars += _percent_to_holes(stats.pars_percent)
        if stats.bogeys_percent is not None:
            self.bogeys += _percent_to_holes(stats.bogeys_percent)
        if stats.double_bogeys_percent is not None and stats.triple_bogeys_or_worse_percent is not None:
            self.double_plus += _percent_to_holes(stats.double_bogeys_percent + stats.triple_bogeys_or_worse_percent)

    # -----------------------------
    # Derived views
    # -----------------------------

    @property
    def average_score(self) -> float | None:
        return average(self.scores)

    @property
    def best_score(self) -> int | None:
        return min(self.scores) if self.scores else None

    @property
    def worst_score(self) -> int | None:
        return max(self.scores) if self.scores else None

    @property
    def average_differential(self) -> float | None:
        return average(self.differentials)

    def par_type_averages(self) -> dict[int, float | None]:
        return {
            3: average(self.par3_averages),
            4: average(self.par4_averages),
            5: average(self.par5_averages),
        }

    def monthly_chart_data(self) -> list[MonthlyScore]:
        """One entry per month with at least one round, in calendar order."""
        return [
            MonthlyScore(
                month=MONTH_NAMES[month],
                month_index=month,
                average_score=average(scores),
                rounds=len(scores),
            )
            for month, scores in sorted(self.monthly_scores.items())
        ]

    def course_breakdown(self) -> list[CourseCount]:
        """Courses by round count, most played first."""
        counts = [CourseCount(course=name, rounds=n) for name, n in self.course_counts.items()]
        return sorted(counts, key=lambda c: c.rounds, reverse=True)

    def scoring_distribution(self) -> ScoringDistributionTotals:
        return ScoringDistributionTotals(pars=self.pars, bogeys=self.bogeys, double_plus=self.double_plus)

    def scoring_distribution_data(self) -> list[DistributionSlice]:
        """Slices for a proportional chart; empty when nothing was recorded."""
        if self.pars + self.bogeys + self.double_plus == 0:
            return []
        return [
            DistributionSlice(name="Pars", value=self.pars, color=DISTRIBUTION_COLORS["Pars"]),
            DistributionSlice(name="Bogeys", value=self.bogeys, color=DISTRIBUTION_COLORS["Bogeys"]),
            DistributionSlice(name="Double+", value=self.double_plus, color=DISTRIBUTION_COLORS["Double+"]),
        ]

    def summary(self) -> YearSummary:
        par_avgs = self.par_type_averages()
        return YearSummary(
            year=self.year,
            rounds=self.rounds,
            average_score=self.average_score,
            best_score=self.best_score,
            worst_score=self.worst_score,
            average_differential=self.average_differential,
            par3_average=par_avgs[3],
            par4_average=par_avgs[4],
            par5_average=par_avgs[5],
            monthly=self.monthly_chart_data(),
            course_breakdown=self.course_breakdown(),
            scoring_distribution=self.scoring_distribution(),
            scoring_distribution_data=self.scoring_distribution_data(),
        )


def aggregate_years(rounds: Iterable[Round]) -> list[YearAggregate]:
    """Group rounds by calendar year into fresh aggregates, oldest year first."""
    grouped: dict[int, list[Round]] = defaultdict(list)
    for round_ in rounds:
        grouped[round_.date_played.year].append(round_)

    aggregates = []
    for year in sorted(grouped):
        aggregate = YearAggregate(year=year)
        for round_ in grouped[year]:
            aggregate.add_round(round_)
        aggregates.append(aggregate)

    logger.debug(f"Built {len(aggregates)} year aggregates")
    return aggregates
