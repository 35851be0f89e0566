"""Golf scoring analytics and Handicap Index engine."""

from golfstats.core.logger import configure_logging, setup_logger
from golfstats.metrics.handicap import calculate_handicap_index, get_handicap_details, get_handicap_trend
from golfstats.models.round import HoleDetail, Round, RoundStatistics
from golfstats.pipeline.scoring_pipeline import ScoringReport, run_scoring_pipeline

__all__ = [
    "HoleDetail",
    "Round",
    "RoundStatistics",
    "ScoringReport",
    "calculate_handicap_index",
    "configure_logging",
    "get_handicap_details",
    "get_handicap_trend",
    "run_scoring_pipeline",
    "setup_logger",
]
