from __future__ import annotations

import math
from datetime import date
from statistics import mean
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PerformanceName = Literal["eagle", "birdie", "par", "bogey", "double", "triple+"]

PERCENT_FIELDS = (
    "birdies_or_better_percent",
    "pars_percent",
    "bogeys_percent",
    "double_bogeys_percent",
    "triple_bogeys_or_worse_percent",
    "fairway_hits_percent",
    "gir_percent",
)

PAR_AVERAGE_FIELDS = ("par3_average", "par4_average", "par5_average")


def parse_stat_value(value: Any, *, is_percent: bool = False) -> float | None:
    """Parse a stored statistic into a float.

    Storage keeps most statistics as text ("45%", "0.45", "", "null").
    Unparsable or non-finite values become None. With is_percent, a value
    strictly between 0 and 1 is read as a fraction and scaled to 0-100.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        clean = str(value).replace("%", "").strip()
        if not clean or clean.lower() == "null":
            return None
        try:
            parsed = float(clean)
        except ValueError:
            return None

    if not math.isfinite(parsed):
        return None

    if is_percent and 0 < parsed < 1:
        return parsed * 100
    return parsed


class RoundStatistics(BaseModel):
    """Per-round statistic summary joined from storage.

    Percentages are on the 0-100 scale. Values outside their plausible range
    are dropped to None so they never feed an average.
    """

    model_config = ConfigDict(frozen=True)

    par3_average: float | None = None
    par4_average: float | None = None
    par5_average: float | None = None

    birdies_or_better_percent: float | None = None
    pars_percent: float | None = None
    bogeys_percent: float | None = None
    double_bogeys_percent: float | None = None
    triple_bogeys_or_worse_percent: float | None = None

    putts_total: float | None = None
    fairway_hits_percent: float | None = None
    gir_percent: float | None = None

    @field_validator(*PAR_AVERAGE_FIELDS, mode="before")
    @classmethod
    def parse_par_average(cls, value: Any) -> float | None:
        parsed = parse_stat_value(value)
        if parsed is None or not 0 < parsed <= 10:
            return None
        return parsed

    @field_validator(*PERCENT_FIELDS, mode="before")
    @classmethod
    def parse_percent(cls, value: Any) -> float | None:
        parsed = parse_stat_value(value, is_percent=True)
        if parsed is None or not 0 <= parsed <= 100:
            return None
        return parsed

    @field_validator("putts_total", mode="before")
    @classmethod
    def parse_putts_total(cls, value: Any) -> float | None:
        parsed = parse_stat_value(value)
        if parsed is None or not 0 < parsed <= 72:
            return None
        return parsed


class HoleDetail(BaseModel):
    """One hole's result within a round. A score of 0 marks an incomplete hole."""

    model_config = ConfigDict(frozen=True)

    hole_number: int = Field(..., ge=1)
    par: int = Field(..., ge=3, le=5)
    stroke_index: int | None = None
    score: int = Field(..., ge=0)
    putts: int | None = Field(default=None, ge=0)
    fairway_hit: bool | None = None
    green_in_regulation: bool | None = None

    @property
    def is_complete(self) -> bool:
        return self.score > 0

    @property
    def score_to_par(self) -> int:
        return self.score - self.par

    @property
    def is_front_nine(self) -> bool:
        return self.hole_number <= 9

    @property
    def performance_name(self) -> PerformanceName:
        return performance_name(self.score_to_par)


def performance_name(score_to_par: int) -> PerformanceName:
    if score_to_par <= -2:
        return "eagle"
    if score_to_par == -1:
        return "birdie"
    if score_to_par == 0:
        return "par"
    if score_to_par == 1:
        return "bogey"
    if score_to_par == 2:
        return "double"
    return "triple+"


class Round(BaseModel):
    """One completed round of golf, as supplied by the data-access layer."""

    model_config = ConfigDict(frozen=True)

    round_id: str | None = None
    score: int
    differential: float | None = None
    date_played: date
    hole_count: int = 18
    course_name: str
    tee_name: str | None = None
    course_rating: float | None = None
    slope_rating: int | None = None
    statistics: RoundStatistics | None = None
    holes: list[HoleDetail] = Field(default_factory=list)

    @property
    def has_differential(self) -> bool:
        return self.differential is not None and math.isfinite(self.differential)

    @property
    def completed_holes(self) -> list[HoleDetail]:
        return [h for h in self.holes if h.is_complete]

    @property
    def has_complete_hole_data(self) -> bool:
        return len(self.completed_holes) == self.hole_count

    def front_nine_score(self) -> int:
        return sum(h.score for h in self.completed_holes if h.is_front_nine)

    def back_nine_score(self) -> int:
        return sum(h.score for h in self.completed_holes if not h.is_front_nine)

    def front_nine_par(self) -> int:
        return sum(h.par for h in self.completed_holes if h.is_front_nine)

    def back_nine_par(self) -> int:
        return sum(h.par for h in self.completed_holes if not h.is_front_nine)

    def performance_counts(self) -> dict[PerformanceName, int]:
        """Count completed holes by result relative to par."""
        counts: dict[PerformanceName, int] = {
            "eagle": 0,
            "birdie": 0,
            "par": 0,
            "bogey": 0,
            "double": 0,
            "triple+": 0,
        }
        for hole in self.completed_holes:
            counts[hole.performance_name] += 1
        return counts

    def averages_by_par_type(self) -> dict[int, float | None]:
        """Average hole score per par type, None where no completed hole of that par exists."""
        result: dict[int, float | None] = {}
        for par in (3, 4, 5):
            scores = [h.score for h in self.completed_holes if h.par == par]
            result[par] = mean(scores) if scores else None
        return result
