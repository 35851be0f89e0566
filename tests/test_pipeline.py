import datetime as dt

import pytest
from pydantic import ValidationError

from golfstats.config.settings import Settings
from golfstats.models.round import HoleDetail, Round, RoundStatistics
from golfstats.pipeline.scoring_pipeline import ScoringReport, run_scoring_pipeline


def make_round(
    *,
    days_ago: int,
    score: int = 92,
    differential: float | None = 18.0,
    course: str = "Oak Hill",
    hole_count: int = 18,
) -> Round:
    return Round(
        round_id=f"r-{days_ago}",
        score=score,
        differential=differential,
        date_played=dt.date(2025, 1, 10) - dt.timedelta(days=days_ago),
        hole_count=hole_count,
        course_name=course,
        statistics=RoundStatistics(par3_average=3.5, pars_percent=40, bogeys_percent=40),
    )


def test_pipeline_runs_end_to_end():
    rounds = [make_round(days_ago=i * 20, score=90 + i, differential=15.0 + i) for i in range(12)]
    rounds.append(make_round(days_ago=3, score=44, differential=None, hole_count=9, course="Short Nine"))

    report = run_scoring_pipeline(rounds=rounds)

    assert isinstance(report, ScoringReport)
    # 12 eligible rounds: lowest 4, mean 16.5, * 0.96 = 15.84
    assert report.handicap_index == 15.8
    assert report.handicap.total_eligible_rounds == 12
    assert len(report.handicap_trend) == 11
    assert [c.name for c in report.courses] == ["Oak Hill", "Short Nine"]
    assert report.courses[1].rounds_9 == 1
    assert [y.year for y in report.years] == [2024, 2025]
    # The 9-hole round stays out of the year totals
    assert sum(y.rounds for y in report.years) == 12
    assert report.detailed.total_rounds == 13
    assert report.overview.total_rounds == 13
    assert report.overview.best_score == 44
    assert report.hole_scoring.total_holes == 0
    assert report.par_type_holes == []


def test_pipeline_reads_windows_from_settings():
    rounds = [make_round(days_ago=i, score=100 if i >= 3 else 90) for i in range(6)]
    settings = Settings(handicap_trend_window=3, recent_rounds_window=3)

    report = run_scoring_pipeline(rounds=rounds, settings=settings)

    assert all(p.rounds_used_in_window == 3 for p in report.handicap_trend)
    assert report.detailed.recent.improvement == 10.0


def test_pipeline_overlap_setting():
    rounds = [make_round(days_ago=i, score=90 if i < 4 else 100) for i in range(6)]

    default = run_scoring_pipeline(rounds=rounds, settings=Settings(recent_rounds_window=4))
    excluded = run_scoring_pipeline(
        rounds=rounds,
        settings=Settings(recent_rounds_window=4, exclude_recent_overlap=True),
    )

    assert default.detailed.recent.improvement == 5.0
    assert excluded.detailed.recent.improvement == 10.0


def test_pipeline_with_no_rounds():
    report = run_scoring_pipeline(rounds=[])

    assert report.handicap_index is None
    assert report.handicap.message.startswith("Need at least 3 rounds")
    assert report.handicap_trend == []
    assert report.courses == []
    assert report.years == []
    assert report.detailed is None
    assert report.overview is None
    assert report.hole_scoring.total_holes == 0
    assert report.par_type_holes == []


def test_pipeline_hole_statistics():
    holes = [HoleDetail(hole_number=1, par=4, score=4), HoleDetail(hole_number=2, par=3, score=4)]
    rounds = [
        Round(score=90, date_played=dt.date(2025, 1, 1), course_name="Oak Hill", tee_name="Blue", holes=holes),
        Round(score=94, date_played=dt.date(2025, 1, 8), course_name="Oak Hill", tee_name="White", holes=holes),
    ]

    report = run_scoring_pipeline(rounds=rounds)

    assert (report.hole_scoring.pars, report.hole_scoring.bogeys) == (2, 2)
    assert [s.par for s in report.par_type_holes] == [3, 4]
    assert report.overview.improvement_trend == 4.0
    assert report.courses[0].tee_names == ["Blue", "White"]


# ============================================================================
# Settings
# ============================================================================


def test_settings_defaults():
    settings = Settings()

    assert settings.handicap_trend_window == 20
    assert settings.recent_rounds_window == 10
    assert settings.exclude_recent_overlap is False


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GOLFSTATS_RECENT_ROUNDS_WINDOW", "5")
    monkeypatch.setenv("GOLFSTATS_EXCLUDE_RECENT_OVERLAP", "true")

    settings = Settings()

    assert settings.recent_rounds_window == 5
    assert settings.exclude_recent_overlap is True


def test_settings_log_level_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"
    assert Settings(log_level="chatty").log_level == "INFO"


def test_settings_rejects_non_positive_windows():
    with pytest.raises(ValidationError):
        Settings(handicap_trend_window=0)
