"""Handicap Index computation.

Implements the USGA-style selection rule: average the lowest N score
differentials, apply the low-volume adjustment, multiply by 0.96.

Eligibility:
- Only 18-hole rounds carrying a differential count
- Fewer than 3 eligible rounds yields None ("not enough history"), never 0

Properties:
- Deterministic: same rounds, same result
- Pure: rounds are never mutated, no module state
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import NamedTuple

from loguru import logger

from golfstats.metrics.scoring import average, round_half_up
from golfstats.models.results import HandicapCalculationResult, HandicapTrendPoint
from golfstats.models.round import Round

MIN_ELIGIBLE_ROUNDS = 3
HANDICAP_MULTIPLIER = 0.96
DEFAULT_TREND_WINDOW = 20


class HandicapRule(NamedTuple):
    min_count: int
    max_count: int | None  # None = open-ended
    num_differentials: int
    adjustment: float


# Scanned top to bottom; first matching row wins.
HANDICAP_TABLE: tuple[HandicapRule, ...] = (
    HandicapRule(3, 3, 1, -2.0),
    HandicapRule(4, 4, 1, -1.0),
    HandicapRule(5, 5, 1, 0.0),
    HandicapRule(6, 6, 2, -1.0),
    HandicapRule(7, 8, 2, 0.0),
    HandicapRule(9, 11, 3, 0.0),
    HandicapRule(12, 14, 4, 0.0),
    HandicapRule(15, 16, 5, 0.0),
    HandicapRule(17, 18, 6, 0.0),
    HandicapRule(19, 19, 7, 0.0),
    HandicapRule(20, None, 8, 0.0),
)


def select_rule(eligible_count: int) -> HandicapRule | None:
    """Return the table row for a number of eligible rounds, None below the minimum."""
    for rule in HANDICAP_TABLE:
        if eligible_count < rule.min_count:
            continue
        if rule.max_count is None or eligible_count <= rule.max_count:
            return rule
    return None


def eligible_rounds(rounds: Iterable[Round]) -> list[Round]:
    """18-hole rounds with a usable differential."""
    return [r for r in rounds if r.has_differential and r.hole_count == 18]


def _index_from(differentials: Sequence[float], adjustment: float) -> float:
    avg = average(differentials)
    return max(0.0, round_half_up((avg + adjustment) * HANDICAP_MULTIPLIER, 1))


def calculate_handicap_index(rounds: Iterable[Round]) -> float | None:
    """Compute the Handicap Index.

    Args:
        rounds: Any rounds; ineligible ones are skipped silently.

    Returns:
        Index rounded to one decimal (floor 0.0), or None with fewer than
        3 eligible rounds.

    Example:
        differentials [10.0, 12.0, 14.0] -> lowest 1, adjustment -2.0
        -> (10.0 - 2.0) * 0.96 = 7.68 -> 7.7
    """
    eligible = eligible_rounds(rounds)
    rule = select_rule(len(eligible))
    if rule is None:
        return None

    lowest = sorted(r.differential for r in eligible)[: rule.num_differentials]
    return _index_from(lowest, rule.adjustment)


def get_handicap_details(rounds: Iterable[Round]) -> HandicapCalculationResult:
    """Same selection as calculate_handicap_index, with the full audit trail."""
    eligible = eligible_rounds(rounds)
    total = len(eligible)
    rule = select_rule(total)

    if rule is None:
        return HandicapCalculationResult(
            index=None,
            total_eligible_rounds=total,
            message=f"Need at least {MIN_ELIGIBLE_ROUNDS} rounds to calculate handicap. Currently have {total} valid rounds.",
        )

    # Stable sort keeps storage order among equal differentials
    used = sorted(eligible, key=lambda r: r.differential)[: rule.num_differentials]
    differentials = [r.differential for r in used]
    index = _index_from(differentials, rule.adjustment)

    logger.debug(
        f"Handicap index {index}: lowest {rule.num_differentials} of {total} differentials, adjustment {rule.adjustment:+.1f}"
    )

    return HandicapCalculationResult(
        index=index,
        differentials_used=differentials,
        count_used=rule.num_differentials,
        adjustment=rule.adjustment,
        average_of_used=average(differentials),
        total_eligible_rounds=total,
        rounds_used=used,
        message=f"Using lowest {rule.num_differentials} of {total} rounds with {rule.adjustment:+.1f} adjustment",
    )


def get_handicap_trend(
    rounds: Iterable[Round],
    window_size: int = DEFAULT_TREND_WINDOW,
) -> list[HandicapTrendPoint]:
    """Rolling Handicap Index over time.

    Starting at the third round chronologically, compute the index over the
    trailing window of up to window_size rounds. Points where the window holds
    fewer than 3 eligible rounds are skipped.

    Args:
        rounds: Rounds in any order
        window_size: Maximum rounds per window (default 20)

    Returns:
        Points ordered by date, at most one per round
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")

    ordered = sorted(rounds, key=lambda r: r.date_played)
    points: list[HandicapTrendPoint] = []

    for i in range(2, len(ordered)):
        window = ordered[max(0, i - window_size + 1) : i + 1]
        index = calculate_handicap_index(window)
        if index is not None:
            points.append(
                HandicapTrendPoint(
                    date_played=ordered[i].date_played,
                    index=index,
                    rounds_used_in_window=len(window),
                )
            )

    logger.debug(f"Handicap trend: {len(points)} points from {len(ordered)} rounds (window={window_size})")
    return points
