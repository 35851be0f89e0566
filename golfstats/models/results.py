"""Output models produced by the scoring engine.

Every model here is a plain, serializable snapshot. Numeric fields that can
lack data are nullable; None always means "insufficient data", never zero.
"""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field

from golfstats.models.round import Round

ConsistencyLevel = Literal["excellent", "good", "average", "below-average", "poor"]
PerformanceLevel = Literal["excellent", "good", "average", "needs-improvement"]
Difficulty = Literal["Easy", "Moderate", "Difficult", "Very Difficult"]
ImprovementDirection = Literal["improving", "declining", "stable", "insufficient-data"]


# --- Handicap ---


class HandicapCalculationResult(BaseModel):
    """Audit of one Handicap Index computation."""

    index: float | None = Field(default=None, ge=0)
    differentials_used: list[float] = Field(default_factory=list)
    count_used: int = 0
    adjustment: float = 0.0
    average_of_used: float | None = None
    total_eligible_rounds: int = 0
    rounds_used: list[Round] = Field(default_factory=list)
    message: str


class HandicapTrendPoint(BaseModel):
    date_played: dt.date
    index: float = Field(..., ge=0)
    rounds_used_in_window: int = Field(..., ge=1)


# --- Course ---


class HoleAverage(BaseModel):
    hole_number: int
    par: int
    average_score: float
    over_under_par: float
    rounds_played: int
    best_score: int
    worst_score: int
    difficulty: Difficulty


class CourseSummary(BaseModel):
    """Derived view of a CourseAggregate. 18-hole and 9-hole figures never mix."""

    name: str
    rating: float | None
    slope: int | None

    total_rounds: int
    rounds_18: int
    rounds_9: int

    average_score_18: float | None
    average_score_9: float | None
    average_differential_18: float | None
    average_differential_9: float | None

    best_score_18: int | None
    worst_score_18: int | None
    best_score_9: int | None
    worst_score_9: int | None
    best_score_18_display: str
    worst_score_18_display: str
    best_score_9_display: str
    worst_score_9_display: str

    par3_average: float | None
    par4_average: float | None
    par5_average: float | None
    par3_vs_par: float | None
    par4_vs_par: float | None
    par5_vs_par: float | None

    birdie_percent: float | None
    par_percent: float | None
    bogey_percent: float | None
    double_bogey_percent: float | None
    triple_bogey_percent: float | None
    double_plus_percent: float | None

    average_putts: float | None
    average_fairway_hit_percent: float | None
    average_gir_percent: float | None

    performance_level: PerformanceLevel | None
    hole_averages: list[HoleAverage] = Field(default_factory=list)
    tee_names: list[str] = Field(default_factory=list)


# --- Year ---


class MonthlyScore(BaseModel):
    month: str
    month_index: int = Field(..., ge=0, le=11)
    average_score: float
    rounds: int = Field(..., ge=1)


class CourseCount(BaseModel):
    course: str
    rounds: int


class ScoringDistributionTotals(BaseModel):
    pars: int = 0
    bogeys: int = 0
    double_plus: int = 0

    @property
    def total(self) -> int:
        return self.pars + self.bogeys + self.double_plus


class DistributionSlice(BaseModel):
    name: str
    value: int
    color: str


class YearSummary(BaseModel):
    year: int
    rounds: int
    average_score: float | None
    best_score: int | None
    worst_score: int | None
    average_differential: float | None
    par3_average: float | None
    par4_average: float | None
    par5_average: float | None
    monthly: list[MonthlyScore] = Field(default_factory=list)
    course_breakdown: list[CourseCount] = Field(default_factory=list)
    scoring_distribution: ScoringDistributionTotals = Field(default_factory=ScoringDistributionTotals)
    scoring_distribution_data: list[DistributionSlice] = Field(default_factory=list)


# --- Detailed statistics ---


class ConsistencyRating(BaseModel):
    rating: ConsistencyLevel
    description: str
    color: str


class ScoreRangeBucket(BaseModel):
    key: str
    label: str
    count: int
    percentage: float


class RecentImprovement(BaseModel):
    """Recent-vs-older comparison. Positive improvement means recent scores are lower."""

    recent_average: float | None
    older_average: float | None = None
    improvement: float | None = None
    direction: ImprovementDirection = "insufficient-data"
    recent_rounds: int = 0
    comparison_rounds: int = 0


class ParTypePerformance(BaseModel):
    par3_average: float | None
    par4_average: float | None
    par5_average: float | None
    par3_vs_par: float | None
    par4_vs_par: float | None
    par5_vs_par: float | None


class DetailedStatistics(BaseModel):
    score_distribution: list[ScoreRangeBucket]
    recent: RecentImprovement
    consistency: float
    consistency_rating: ConsistencyRating
    par_types: ParTypePerformance | None
    total_rounds: int


# --- Hole statistics ---


class HoleScoringDistribution(BaseModel):
    """Completed holes across many rounds, counted by result relative to par."""

    eagles: int = 0
    birdies: int = 0
    pars: int = 0
    bogeys: int = 0
    doubles: int = 0
    triples: int = 0
    total_holes: int = 0
    # Share of each result, one decimal; all 0.0 when no hole was recorded
    percentages: dict[str, float] = Field(default_factory=dict)


class ParTypeHoleStats(BaseModel):
    par: Literal[3, 4, 5]
    holes_played: int
    total_score: int
    total_par: int
    average_score: float
    average_to_par: float


class RoundsOverview(BaseModel):
    """Headline figures over a set of rounds."""

    total_rounds: int
    average_score: float
    best_score: int
    worst_score: int
    average_differential: float | None
    best_differential: float | None
    worst_differential: float | None
    standard_deviation: float
    improvement_trend: float
    score_ranges: list[ScoreRangeBucket]
    consistency: ConsistencyRating
