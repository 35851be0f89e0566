from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from golfstats.aggregation.course import aggregate_courses
from golfstats.aggregation.year import aggregate_years
from golfstats.analysis.detailed_stats import calculate_detailed_statistics
from golfstats.analysis.hole_stats import hole_scoring_distribution, par_type_hole_performance, rounds_overview
from golfstats.config.settings import Settings
from golfstats.config.settings import settings as default_settings
from golfstats.metrics.handicap import get_handicap_details, get_handicap_trend
from golfstats.models.results import (
    CourseSummary,
    DetailedStatistics,
    HandicapCalculationResult,
    HandicapTrendPoint,
    HoleScoringDistribution,
    ParTypeHoleStats,
    RoundsOverview,
    YearSummary,
)
from golfstats.models.round import Round

# -------------------------------------------------------------------
# Report Model
# -------------------------------------------------------------------


@dataclass
class ScoringReport:
    """Everything the analytics views need for one golfer."""

    handicap: HandicapCalculationResult
    handicap_trend: list[HandicapTrendPoint] = field(default_factory=list)
    courses: list[CourseSummary] = field(default_factory=list)
    years: list[YearSummary] = field(default_factory=list)
    detailed: DetailedStatistics | None = None
    overview: RoundsOverview | None = None
    hole_scoring: HoleScoringDistribution | None = None
    par_type_holes: list[ParTypeHoleStats] = field(default_factory=list)

    @property
    def handicap_index(self) -> float | None:
        return self.handicap.index


# -------------------------------------------------------------------
# Pipeline
# -------------------------------------------------------------------


def run_scoring_pipeline(
    *,
    rounds: Sequence[Round],
    settings: Settings | None = None,
) -> ScoringReport:
    """End-to-end scoring pipeline.

    Rounds → Handicap / Courses / Years / Detailed statistics / Hole statistics

    Every aggregate is built fresh from the given rounds; nothing is carried
    over between calls.
    """
    settings = settings or default_settings
    logger.info(f"Running scoring pipeline over {len(rounds)} rounds")

    handicap = get_handicap_details(rounds)
    trend = get_handicap_trend(rounds, window_size=settings.handicap_trend_window)
    courses = [aggregate.summary() for aggregate in aggregate_courses(rounds)]
    years = [aggregate.summary() for aggregate in aggregate_years(rounds)]
    detailed = calculate_detailed_statistics(
        rounds,
        recent_window=settings.recent_rounds_window,
        exclude_overlap=settings.exclude_recent_overlap,
    )
    overview = rounds_overview(rounds)
    hole_scoring = hole_scoring_distribution(rounds)
    par_type_holes = par_type_hole_performance(rounds)

    logger.info(
        f"Scoring pipeline complete: index={handicap.index}, courses={len(courses)}, years={len(years)}, trend_points={len(trend)}"
    )

    return ScoringReport(
        handicap=handicap,
        handicap_trend=trend,
        courses=courses,
        years=years,
        detailed=detailed,
        overview=overview,
        hole_scoring=hole_scoring,
        par_type_holes=par_type_holes,
    )
