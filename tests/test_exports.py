from __future__ import annotations
from icalendar import Calendar
from calendar_export import schedule_to_ics
from engine import generate_study_schedule
from pdf_export import schedule_to_pdf
from conftest import TODAY


def test_ics_has_one_event_per_session(study_data):
    schedule = generate_study_schedule(study_data, seed=4, today=TODAY)
    expected = sum(len(day.sessions) for week in schedule.weekly_schedules for day in week)

    cal = Calendar.from_ical(schedule_to_ics(schedule))
    events = [c for c in cal.walk() if c.name == "VEVENT"]
    assert len(events) == expected
    assert len({str(e["UID"]) for e in events}) == expected

    first_day = schedule.weekly_schedules[0][0]
    first = next(e for e in events if e.decoded("DTSTART").date() == first_day.date)
    assert str(first["SUMMARY"]).startswith("Study: ")
    assert "Priority:" in str(first["DESCRIPTION"])


def test_ics_handles_session_ending_at_midnight(study_data):
    study_data.study_habits.preferred_time_of_day = "night"
    study_data.study_habits.session_duration = 240
    schedule = generate_study_schedule(study_data, seed=4, today=TODAY)

    cal = Calendar.from_ical(schedule_to_ics(schedule))
    events = [c for c in cal.walk() if c.name == "VEVENT"]
    assert len(events) == 20
    for e in events:
        assert (e.decoded("DTEND") - e.decoded("DTSTART")).total_seconds() == 240 * 60


def test_pdf_export(study_data):
    study_data.study_habits.session_duration = 360
    schedule = generate_study_schedule(study_data, seed=4, today=TODAY)
    pdf = schedule_to_pdf(schedule, study_data)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_pdf_export_with_empty_weeks(study_data):
    study_data.study_habits.days_per_week = 0
    schedule = generate_study_schedule(study_data, seed=4, today=TODAY)
    assert schedule_to_pdf(schedule, study_data).startswith(b"%PDF")


def test_ics_uses_floating_local_times(study_data):
    schedule = generate_study_schedule(study_data, seed=4, today=TODAY)
    cal = Calendar.from_ical(schedule_to_ics(schedule))
    first = next(c for c in cal.walk() if c.name == "VEVENT")
    assert first.decoded("DTSTART").tzinfo is None
    assert "TZID" not in first["DTSTART"].params


def test_pdf_export_escapes_markup_in_names(study_data):
    study_data.name = "Tom & <b>Jerry"
    study_data.subjects[0].name = "C<D"
    schedule = generate_study_schedule(study_data, seed=4, today=TODAY)
    assert "C<D" in schedule.recommendation
    assert schedule_to_pdf(schedule, study_data).startswith(b"%PDF")


def test_pdf_export_japanese_embeds_cjk_font(study_data):
    schedule = generate_study_schedule(study_data, seed=4, locale="ja", today=TODAY)
    pdf = schedule_to_pdf(schedule, study_data)
    assert pdf.startswith(b"%PDF")
    assert b"HeiseiKakuGo-W5" in pdf
    assert b"HeiseiKakuGo-W5" not in schedule_to_pdf(
        generate_study_schedule(study_data, seed=4, today=TODAY), study_data
    )
