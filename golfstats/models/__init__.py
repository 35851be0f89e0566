"""Round records and the result models computed from them."""

from golfstats.models.results import (
    CourseSummary,
    DetailedStatistics,
    HandicapCalculationResult,
    HandicapTrendPoint,
    YearSummary,
)
from golfstats.models.round import HoleDetail, Round, RoundStatistics

__all__ = [
    "CourseSummary",
    "DetailedStatistics",
    "HandicapCalculationResult",
    "HandicapTrendPoint",
    "HoleDetail",
    "Round",
    "RoundStatistics",
    "YearSummary",
]
