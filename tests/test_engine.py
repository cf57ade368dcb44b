from __future__ import annotations
import pytest
from engine import generate_study_schedule
from planner import round_half_up, time_to_minutes
from models import ScheduleData, StudyData, StudyHabits
from conftest import TODAY, make_subject


def test_generates_four_weeks(study_data):
    schedule = generate_study_schedule(study_data, seed=3, today=TODAY)
    assert len(schedule.weekly_schedules) == 4
    assert all(len(week) == 5 for week in schedule.weekly_schedules)
    assert schedule.weekly_schedules[0][0].date == TODAY
    assert schedule.seed == 3
    assert schedule.locale == "en"


def test_same_seed_same_schedule(study_data):
    first = generate_study_schedule(study_data, seed=42, today=TODAY)
    second = generate_study_schedule(study_data, seed=42, today=TODAY)
    assert first.model_dump() == second.model_dump()


def test_seed_changes_day_selection(study_data):
    layouts = {
        tuple(
            tuple(s.subject for s in day.sessions)
            for week in generate_study_schedule(study_data, seed=seed, today=TODAY).weekly_schedules
            for day in week
        )
        for seed in range(5)
    }
    assert len(layouts) > 1


def test_overall_improvement_is_rounded_mean(study_data):
    schedule = generate_study_schedule(study_data, seed=9, today=TODAY)
    improvements = [a.expected_improvement for a in schedule.subject_analysis]
    assert schedule.overall_improvement == round_half_up(sum(improvements) / len(improvements))


def test_math_scenario():
    data = StudyData(
        name="Kim",
        subjects=[make_subject("Math", (50, 100))],
        study_habits=StudyHabits(preferred_time_of_day="evening", session_duration=90, days_per_week=3),
    )
    schedule = generate_study_schedule(data, seed=1, today=TODAY)
    math = schedule.subject_analysis[0]
    assert (math.current_performance, math.time_allocation, math.expected_improvement) == (50, 4.5, 10)
    assert schedule.overall_improvement == 10
    sessions = [s for week in schedule.weekly_schedules for day in week for s in day.sessions]
    assert len(sessions) == 12
    assert {s.priority for s in sessions} == {"high"}
    assert {s.start_time for s in sessions} == {"18:00"}
    assert "Math" in schedule.recommendation
    assert "50%" in schedule.recommendation


def test_sessions_sorted_and_disjoint(study_data):
    study_data.study_habits.session_duration = 30
    schedule = generate_study_schedule(study_data, seed=21, today=TODAY)
    for week in schedule.weekly_schedules:
        for day in week:
            spans = [(time_to_minutes(s.start_time), time_to_minutes(s.end_time)) for s in day.sessions]
            assert spans == sorted(spans)
            for (a0, a1), (b0, b1) in zip(spans, spans[1:]):
                assert a1 <= b0


def test_japanese_locale(study_data):
    schedule = generate_study_schedule(study_data, seed=2, locale="ja", today=TODAY)
    assert schedule.locale == "ja"
    assert "Math" in schedule.recommendation
    assert "お勧めします" in schedule.recommendation


def test_unknown_locale_rejected(study_data):
    with pytest.raises(ValueError):
        generate_study_schedule(study_data, locale="xx", today=TODAY)


def test_result_survives_json_round_trip(study_data):
    schedule = generate_study_schedule(study_data, seed=5, today=TODAY)
    restored = ScheduleData.model_validate(schedule.model_dump(mode="json"))
    assert restored == schedule
