"""Per-course aggregation.

A CourseAggregate folds rounds one at a time into running totals, kept
separately for 18-hole and 9-hole rounds. Derived figures are computed on
demand from the retained values; nothing is cached.

Rules:
- Rounds with a hole count other than 9 or 18 are ignored
- Per-round statistics and hole details are only taken from 18-hole rounds
- A missing statistic contributes nothing (no zero fill)
- Best/worst are nullable running extrema, shown as "-" until set
- Tee names are collected from every round, before the hole-count check
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from loguru import logger

from golfstats.metrics.scoring import average, format_extremum, hole_difficulty, score_performance_level
from golfstats.models.results import CourseSummary, HoleAverage, PerformanceLevel
from golfstats.models.round import Round, RoundStatistics


def _min(current: int | None, value: int) -> int:
    return value if current is None else min(current, value)


def _max(current: int | None, value: int) -> int:
    return value if current is None else max(current, value)


def _vs_par(avg: float | None, par: int) -> float | None:
    return None if avg is None else avg - par


@dataclass
class HoleTotals:
    par: int
    scores: list[int] = field(default_factory=list)


@dataclass
class CourseAggregate:
    """Running statistics for one course name."""

    name: str
    rating: float | None = None
    slope: int | None = None

    rounds_18: int = 0
    rounds_9: int = 0
    total_score_18: int = 0
    total_score_9: int = 0
    best_score_18: int | None = None
    worst_score_18: int | None = None
    best_score_9: int | None = None
    worst_score_9: int | None = None

    differentials_18: list[float] = field(default_factory=list)
    differentials_9: list[float] = field(default_factory=list)

    # 18-hole round statistics
    par3_averages: list[float] = field(default_factory=list)
    par4_averages: list[float] = field(default_factory=list)
    par5_averages: list[float] = field(default_factory=list)
    birdie_percentages: list[float] = field(default_factory=list)
    par_percentages: list[float] = field(default_factory=list)
    bogey_percentages: list[float] = field(default_factory=list)
    double_bogey_percentages: list[float] = field(default_factory=list)
    triple_bogey_percentages: list[float] = field(default_factory=list)
    putts_totals: list[float] = field(default_factory=list)
    fairway_hit_percentages: list[float] = field(default_factory=list)
    gir_percentages: list[float] = field(default_factory=list)

    holes: dict[int, HoleTotals] = field(default_factory=dict)
    # Distinct tee names in first-seen order, from rounds of any length
    tee_names: list[str] = field(default_factory=list)

    def add_round(self, round_: Round) -> None:
        """Fold one round into the running totals."""
        if self.rating is None and round_.course_rating:
            self.rating = round_.course_rating
        if self.slope is None and round_.slope_rating:
            self.slope = round_.slope_rating
        if round_.tee_name and round_.tee_name not in self.tee_names:
            self.tee_names.append(round_.tee_name)

        if round_.hole_count == 18:
            self.rounds_18 += 1
            self.total_score_18 += round_.score
            self.best_score_18 = _min(self.best_score_18, round_.score)
            self.worst_score_18 = _max(self.worst_score_18, round_.score)
            if round_.has_differential:
                self.differentials_18.append(round_.differential)
            if round_.statistics is not None:
                self._add_statistics(round_.statistics)
            self._add_holes(round_)
        elif round_.hole_count == 9:
            self.rounds_9 += 1
            self.total_score_9 += round_.score
            self.best_score_9 = _min(self.best_score_9, round_.score)
            self.worst_score_9 = _max(self.worst_score_9, round_.score)
            if round_.has_differential:
                self.differentials_9.append(round_.differential)
        else:
            logger.debug(f"Skipping {round_.hole_count}-hole round at {self.name}")

    def _add_statistics(self, stats: RoundStatistics) -> None:
        pairs = (
            (stats.par3_average, self.par3_averages),
            (stats.par4_average, self.par4_averages),
            (stats.par5_average, self.par5_averages),
            (stats.birdies_or_better_percent, self.birdie_percentages),
            (stats.pars_percent, self.par_percentages),
            (stats.bogeys_percent, self.bogey_percentages),
            (stats.double_bogeys_percent, self.double_bogey_percentages),
            (stats.triple_bogeys_or_worse_percent, self.triple_bogey_percentages),
            (stats.putts_total, self.putts_totals),
            (stats.fairway_hits_percent, self.fairway_hit_percentages),
            (stats.gir_percent, self.gir_percentages),
        )
        for value, target in pairs:
            if value is not None:
                target.append(value)

    def _add_holes(self, round_: Round) -> None:
        for hole in round_.completed_holes:
            # Par is taken from the first recorded result for the hole
            totals = self.holes.setdefault(hole.hole_number, HoleTotals(par=hole.par))
            totals.scores.append(hole.score)

    # -----------------------------
    # Derived views
    # -----------------------------

    @property
    def total_rounds(self) -> int:
        return self.rounds_18 + self.rounds_9

    @property
    def average_score_18(self) -> float | None:
        return self.total_score_18 / self.rounds_18 if self.rounds_18 else None

    @property
    def average_score_9(self) -> float | None:
        return self.total_score_9 / self.rounds_9 if self.rounds_9 else None

    @property
    def average_differential_18(self) -> float | None:
        return average(self.differentials_18)

    @property
    def average_differential_9(self) -> float | None:
        return average(self.differentials_9)

    def par_type_averages(self) -> dict[int, float | None]:
        return {
            3: average(self.par3_averages),
            4: average(self.par4_averages),
            5: average(self.par5_averages),
        }

    def par_type_vs_par(self) -> dict[int, float | None]:
        return {par: _vs_par(avg, par) for par, avg in self.par_type_averages().items()}

    def scoring_distribution(self) -> dict[str, float | None]:
        double = average(self.double_bogey_percentages)
        triple = average(self.triple_bogey_percentages)
        double_plus = None if double is None and triple is None else (double or 0.0) + (triple or 0.0)
        return {
            "birdie": average(self.birdie_percentages),
            "par": average(self.par_percentages),
            "bogey": average(self.bogey_percentages),
            "double": double,
            "triple": triple,
            "double_plus": double_plus,
        }

    def formatted_scores(self, *, eighteen: bool = True) -> tuple[str, str]:
        """(best, worst) for display, "-" where no round of that class exists."""
        if eighteen:
            return format_extremum(self.best_score_18), format_extremum(self.worst_score_18)
        return format_extremum(self.best_score_9), format_extremum(self.worst_score_9)

    def performance_level(self) -> PerformanceLevel | None:
        """Coarse classification on the 18-hole average; None without 18-hole rounds."""
        avg = self.average_score_18
        if avg is None:
            return None
        return score_performance_level(avg, 18)

    def hole_averages(self) -> list[HoleAverage]:
        result = []
        for number in sorted(self.holes):
            totals = self.holes[number]
            avg = average(totals.scores)
            over_under = avg - totals.par
            result.append(
                HoleAverage(
                    hole_number=number,
                    par=totals.par,
                    average_score=avg,
                    over_under_par=over_under,
                    rounds_played=len(totals.scores),
                    best_score=min(totals.scores),
                    worst_score=max(totals.scores),
                    difficulty=hole_difficulty(over_under),
                )
            )
        return result

    def summary(self) -> CourseSummary:
        par_avgs = self.par_type_averages()
        vs_par = self.par_type_vs_par()
        dist = self.scoring_distribution()
        best_18, worst_18 = self.formatted_scores(eighteen=True)
        best_9, worst_9 = self.formatted_scores(eighteen=False)

        return CourseSummary(
            name=self.name,
            rating=self.rating,
            slope=self.slope,
            total_rounds=self.total_rounds,
            rounds_18=self.rounds_18,
            rounds_9=self.rounds_9,
            average_score_18=self.average_score_18,
            average_score_9=self.average_score_9,
            average_differential_18=self.average_differential_18,
            average_differential_9=self.average_differential_9,
            best_score_18=self.best_score_18,
            worst_score_18=self.worst_score_18,
            best_score_9=self.best_score_9,
            worst_score_9=self.worst_score_9,
            best_score_18_display=best_18,
            worst_score_18_display=worst_18,
            best_score_9_display=best_9,
            worst_score_9_display=worst_9,
            par3_average=par_avgs[3],
            par4_average=par_avgs[4],
            par5_average=par_avgs[5],
            par3_vs_par=vs_par[3],
            par4_vs_par=vs_par[4],
            par5_vs_par=vs_par[5],
            birdie_percent=dist["birdie"],
            par_percent=dist["par"],
            bogey_percent=dist["bogey"],
            double_bogey_percent=dist["double"],
            triple_bogey_percent=dist["triple"],
            double_plus_percent=dist["double_plus"],
            average_putts=average(self.putts_totals),
            average_fairway_hit_percent=average(self.fairway_hit_percentages),
            average_gir_percent=average(self.gir_percentages),
            performance_level=self.performance_level(),
            hole_averages=self.hole_averages(),
            tee_names=list(self.tee_names),
        )


def build_course_aggregates(rounds_by_course: Mapping[str, Sequence[Round]]) -> list[CourseAggregate]:
    """Build one fresh aggregate per course, most-played first.

    Each aggregate is seeded with the rating/slope of the course's first round.
    Courses with no rounds are skipped. Ties keep the mapping's order.
    """
    aggregates = []
    for course_name, rounds in rounds_by_course.items():
        if not rounds:
            continue
        first = rounds[0]
        aggregate = CourseAggregate(name=course_name, rating=first.course_rating, slope=first.slope_rating)
        for round_ in rounds:
            aggregate.add_round(round_)
        aggregates.append(aggregate)

    logger.debug(f"Built {len(aggregates)} course aggregates")
    return sorted(aggregates, key=lambda a: a.total_rounds, reverse=True)


def aggregate_courses(rounds: Iterable[Round]) -> list[CourseAggregate]:
    """Group rounds by course name, then build aggregates."""
    grouped: dict[str, list[Round]] = defaultdict(list)
    for round_ in rounds:
        grouped[round_.course_name].append(round_)
    return build_course_aggregates(grouped)
