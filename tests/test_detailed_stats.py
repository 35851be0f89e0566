import datetime as dt

import pytest

from golfstats.analysis.detailed_stats import (
    calculate_detailed_statistics,
    comparison_slices,
    format_detailed_statistics,
    par_type_performance,
    recent_improvement,
    score_distribution,
)
from golfstats.models.round import Round, RoundStatistics


def make_rounds(scores: list[int], statistics: RoundStatistics | None = None) -> list[Round]:
    """Rounds one day apart, oldest first."""
    return [
        Round(
            round_id=f"r-{i}",
            score=score,
            date_played=dt.date(2024, 1, 1) + dt.timedelta(days=i),
            course_name="Torrey Pines",
            statistics=statistics,
        )
        for i, score in enumerate(scores)
    ]


# ============================================================================
# Score distribution
# ============================================================================


def test_score_distribution_buckets():
    buckets = score_distribution(make_rounds([85, 89, 90, 94, 95, 99, 100, 110]))

    assert [(b.key, b.label, b.count, b.percentage) for b in buckets] == [
        ("under90", "< 90", 2, 25.0),
        ("range90to94", "90-94", 2, 25.0),
        ("range95to99", "95-99", 2, 25.0),
        ("over100", "100+", 2, 25.0),
    ]


def test_score_distribution_percentages_one_decimal():
    buckets = score_distribution(make_rounds([85, 92, 92]))

    assert [b.percentage for b in buckets] == [33.3, 66.7, 0.0, 0.0]


# ============================================================================
# Recent vs older
# ============================================================================


def test_recent_improvement_below_window_reports_average_only():
    recent = recent_improvement(make_rounds([90, 92, 94, 96, 98]))

    assert recent.recent_average == 94.0
    assert recent.older_average is None
    assert recent.improvement is None
    assert recent.direction == "insufficient-data"


def test_exactly_one_window_compares_rounds_with_themselves():
    rounds = make_rounds([100, 98, 96, 94, 92, 90, 88, 86, 84, 82])

    recent, older = comparison_slices(rounds)
    result = recent_improvement(rounds)

    assert {r.round_id for r in recent} == {r.round_id for r in older}
    assert result.improvement == 0.0
    assert result.direction == "stable"


def test_two_full_windows_do_not_overlap():
    rounds = make_rounds([100] * 10 + [90] * 10)

    result = recent_improvement(rounds)

    assert result.recent_average == 90.0
    assert result.older_average == 100.0
    assert result.improvement == 10.0
    assert result.direction == "improving"
    assert (result.recent_rounds, result.comparison_rounds) == (10, 10)


def test_partial_overlap_by_default():
    rounds = make_rounds([100] * 5 + [90] * 10)

    result = recent_improvement(rounds)

    # Older slice: the 5 oldest rounds plus 5 that are also in the recent slice
    assert result.older_average == 95.0
    assert result.improvement == 5.0


def test_exclude_overlap_uses_only_older_rounds():
    rounds = make_rounds([100] * 5 + [90] * 10)

    result = recent_improvement(rounds, exclude_overlap=True)

    assert result.older_average == 100.0
    assert result.improvement == 10.0
    assert result.comparison_rounds == 5


def test_exclude_overlap_without_older_rounds():
    result = recent_improvement(make_rounds([90] * 10), exclude_overlap=True)

    assert result.recent_average == 90.0
    assert result.improvement is None
    assert result.direction == "insufficient-data"


def test_declining_direction():
    result = recent_improvement(make_rounds([88, 90]), window=1)

    assert result.improvement == -2.0
    assert result.direction == "declining"


def test_comparison_slices_newest_first():
    rounds = make_rounds([100, 95, 90, 85])

    recent, older = comparison_slices(list(reversed(rounds)), window=2)

    assert [r.round_id for r in recent] == ["r-3", "r-2"]
    assert [r.round_id for r in older] == ["r-1", "r-0"]


# ============================================================================
# Par types and full statistics
# ============================================================================


def test_par_type_performance_without_statistics():
    assert par_type_performance(make_rounds([90, 92])) is None


def test_par_type_performance_rounds_to_two_decimals():
    rounds = make_rounds([90], RoundStatistics(par3_average=3.456, par4_average=4.2)) + make_rounds([92])

    perf = par_type_performance(rounds)

    assert perf.par3_average == 3.46
    assert perf.par3_vs_par == 0.46
    assert perf.par4_vs_par == 0.2
    assert perf.par5_average is None
    assert perf.par5_vs_par is None


def test_calculate_detailed_statistics_empty():
    assert calculate_detailed_statistics([]) is None


def test_calculate_detailed_statistics():
    stats = calculate_detailed_statistics(make_rounds([90, 92, 94, 96]))

    assert stats.total_rounds == 4
    assert stats.consistency == 2.2
    assert stats.consistency_rating.rating == "excellent"
    assert stats.recent.direction == "insufficient-data"
    assert stats.par_types is None


def test_calculate_detailed_statistics_respects_window():
    stats = calculate_detailed_statistics(make_rounds([100, 100, 90, 90]), recent_window=2)

    assert stats.recent.improvement == 10.0


# ============================================================================
# Formatting
# ============================================================================


def test_format_detailed_statistics():
    stats = calculate_detailed_statistics(make_rounds([100] * 10 + [90] * 10))

    formatted = format_detailed_statistics(stats)

    assert formatted["score_distribution"][1] == {
        "range": "90-94",
        "count": 10,
        "percentage": 50.0,
        "display_percentage": "50.0%",
    }
    assert formatted["improvement"]["display"] == "-10.0 strokes"
    assert formatted["improvement"]["is_improving"] is True
    assert formatted["recent_average"] == 90.0
    assert formatted["consistency"]["display"] == "±5.0"
    assert formatted["consistency"]["rating"]["rating"] == "average"
    assert formatted["par_type_performance"]["par3"]["display"] == "N/A"
    assert formatted["total_rounds"] == 20


def test_format_detailed_statistics_insufficient_data():
    stats = calculate_detailed_statistics(make_rounds([90, 94], RoundStatistics(par4_average=4.5)))

    formatted = format_detailed_statistics(stats)

    assert formatted["improvement"]["display"] == "N/A"
    assert formatted["improvement"]["is_improving"] is False
    assert formatted["par_type_performance"]["par4"]["display"] == "4.50"
    assert formatted["par_type_performance"]["par4"]["vs_par_display"] == "+0.50"
    assert formatted["par_type_performance"]["par5"]["vs_par_display"] == "N/A"


def test_format_no_change_shows_plus_zero():
    stats = calculate_detailed_statistics(make_rounds([90] * 10))

    formatted = format_detailed_statistics(stats)

    assert formatted["improvement"]["value"] == 0.0
    assert formatted["improvement"]["display"] == "+0.0 strokes"
    assert formatted["improvement"]["is_improving"] is False


def test_format_declining_shows_plus():
    stats = calculate_detailed_statistics(make_rounds([88, 92]), recent_window=1)

    assert format_detailed_statistics(stats)["improvement"]["display"] == "+4.0 strokes"


@pytest.mark.parametrize("window", [0, -3])
def test_comparison_rejects_invalid_window(window):
    rounds = make_rounds([90, 92, 94])

    with pytest.raises(ValueError):
        comparison_slices(rounds, window=window)
    with pytest.raises(ValueError):
        recent_improvement(rounds, window=window)
