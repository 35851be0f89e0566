import datetime as dt

import pytest

from golfstats.aggregation.year import YearAggregate, aggregate_years
from golfstats.models.round import Round, RoundStatistics


def make_round(
    *,
    played: dt.date,
    score: int = 90,
    differential: float | None = None,
    course: str = "Oak Hill",
    hole_count: int = 18,
    statistics: RoundStatistics | None = None,
) -> Round:
    return Round(
        score=score,
        differential=differential,
        date_played=played,
        hole_count=hole_count,
        course_name=course,
        statistics=statistics,
    )


def fold(rounds: list[Round], year: int = 2024) -> YearAggregate:
    aggregate = YearAggregate(year=year)
    for round_ in rounds:
        aggregate.add_round(round_)
    return aggregate


def test_empty_year():
    aggregate = YearAggregate(year=2024)

    assert aggregate.average_score is None
    assert aggregate.best_score is None
    assert aggregate.average_differential is None
    assert aggregate.monthly_chart_data() == []
    assert aggregate.scoring_distribution_data() == []


def test_scores_and_differentials():
    aggregate = fold(
        [
            make_round(played=dt.date(2024, 1, 5), score=90, differential=18.0),
            make_round(played=dt.date(2024, 1, 20), score=94),
            make_round(played=dt.date(2024, 3, 2), score=100, differential=24.0),
        ]
    )

    assert aggregate.rounds == 3
    assert aggregate.average_score == pytest.approx(94.67, abs=0.01)
    assert aggregate.best_score == 90
    assert aggregate.worst_score == 100
    # Missing differentials are skipped, not counted as zero
    assert aggregate.differentials == [18.0, 24.0]
    assert aggregate.average_differential == 21.0


def test_monthly_chart_data_omits_empty_months():
    aggregate = fold(
        [
            make_round(played=dt.date(2024, 1, 5), score=90),
            make_round(played=dt.date(2024, 1, 20), score=94),
            make_round(played=dt.date(2024, 3, 2), score=100),
        ]
    )

    monthly = aggregate.monthly_chart_data()

    assert [(m.month, m.month_index, m.average_score, m.rounds) for m in monthly] == [
        ("Jan", 0, 92.0, 2),
        ("Mar", 2, 100.0, 1),
    ]


def test_course_breakdown_most_played_first():
    aggregate = fold(
        [
            make_round(played=dt.date(2024, 4, 1), course="Alpha"),
            make_round(played=dt.date(2024, 4, 2), course="Bravo"),
            make_round(played=dt.date(2024, 4, 3), course="Bravo"),
        ]
    )

    assert [(c.course, c.rounds) for c in aggregate.course_breakdown()] == [("Bravo", 2), ("Alpha", 1)]


def test_par_type_averages():
    aggregate = fold(
        [
            make_round(played=dt.date(2024, 4, 1), statistics=RoundStatistics(par3_average=3.0, par5_average=5.5)),
            make_round(played=dt.date(2024, 4, 2), statistics=RoundStatistics(par3_average=4.0)),
            make_round(played=dt.date(2024, 4, 3)),
        ]
    )

    assert aggregate.par_type_averages() == {3: 3.5, 4: None, 5: 5.5}


def test_scoring_distribution_converts_percentages_to_holes():
    stats = RoundStatistics(
        pars_percent=50,
        bogeys_percent=33.3,
        double_bogeys_percent=11.1,
        triple_bogeys_or_worse_percent=5.6,
    )
    aggregate = fold([make_round(played=dt.date(2024, 5, 1), statistics=stats)])

    totals = aggregate.scoring_distribution()

    # 50% of 18 = 9, 33.3% -> 5.994 -> 6, 16.7% -> 3.006 -> 3
    assert (totals.pars, totals.bogeys, totals.double_plus) == (9, 6, 3)
    assert totals.total == 18


def test_scoring_distribution_rounds_half_up_per_round():
    # 25% of 18 = 4.5 per round
    stats = RoundStatistics(pars_percent=25)
    aggregate = fold([make_round(played=dt.date(2024, 5, d), statistics=stats) for d in (1, 2)])

    assert aggregate.scoring_distribution().pars == 10


def test_double_plus_needs_double_and_triple():
    aggregate = fold(
        [
            make_round(played=dt.date(2024, 5, 1), statistics=RoundStatistics(double_bogeys_percent=20)),
            make_round(played=dt.date(2024, 5, 2), statistics=RoundStatistics(triple_bogeys_or_worse_percent=20)),
        ]
    )

    assert aggregate.scoring_distribution().double_plus == 0


def test_only_eighteen_hole_rounds_count_toward_the_year():
    stats = RoundStatistics(pars_percent=50, par3_average=3.0)
    aggregate = fold(
        [
            make_round(played=dt.date(2024, 3, 1), score=90, differential=18.0, course="Alpha"),
            make_round(played=dt.date(2024, 3, 8), score=45, differential=9.0, hole_count=9, course="Bravo", statistics=stats),
            make_round(played=dt.date(2024, 4, 1), score=60, hole_count=12, course="Bravo"),
        ]
    )

    assert aggregate.rounds == 1
    assert aggregate.scores == [90]
    assert aggregate.average_score == 90.0
    assert aggregate.differentials == [18.0]
    assert aggregate.monthly_scores == {2: [90]}
    assert [c.course for c in aggregate.course_breakdown()] == ["Alpha"]
    assert aggregate.par_type_averages()[3] is None
    assert aggregate.scoring_distribution().total == 0


def test_year_with_only_nine_hole_rounds_is_empty():
    (aggregate,) = aggregate_years([make_round(played=dt.date(2024, 5, 1), score=45, hole_count=9)])

    assert aggregate.rounds == 0
    assert aggregate.average_score is None
    assert aggregate.monthly_chart_data() == []


def test_scoring_distribution_data_slices():
    stats = RoundStatistics(pars_percent=50, bogeys_percent=33.3, double_bogeys_percent=11.1, triple_bogeys_or_worse_percent=5.6)
    slices = fold([make_round(played=dt.date(2024, 5, 1), statistics=stats)]).scoring_distribution_data()

    assert [(s.name, s.value, s.color) for s in slices] == [
        ("Pars", 9, "#10b981"),
        ("Bogeys", 6, "#f59e0b"),
        ("Double+", 3, "#ef4444"),
    ]


def test_aggregate_years_groups_by_calendar_year():
    rounds = [
        make_round(played=dt.date(2024, 2, 1), score=88),
        make_round(played=dt.date(2023, 7, 1), score=95),
        make_round(played=dt.date(2024, 8, 1), score=92),
        make_round(played=dt.date(2023, 12, 31), score=99),
    ]

    aggregates = aggregate_years(rounds)

    assert [a.year for a in aggregates] == [2023, 2024]
    assert [a.rounds for a in aggregates] == [2, 2]
    assert aggregates[0].average_score == 97.0
    assert aggregates[1].average_score == 90.0


def test_summary_snapshot():
    summary = fold(
        [
            make_round(played=dt.date(2024, 6, 1), score=90, differential=17.5, course="Alpha"),
            make_round(played=dt.date(2024, 7, 1), score=96, differential=22.5, course="Alpha"),
        ]
    ).summary()

    assert summary.year == 2024
    assert summary.rounds == 2
    assert summary.average_score == 93.0
    assert summary.average_differential == 20.0
    assert [m.month for m in summary.monthly] == ["Jun", "Jul"]
    assert summary.course_breakdown[0].course == "Alpha"
    assert summary.scoring_distribution_data == []
