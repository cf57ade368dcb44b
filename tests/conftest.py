from __future__ import annotations
from datetime import date
import pytest
from models import StudyData, StudyHabits, Subject, TestResult


TODAY = date(2024, 3, 4)


def make_subject(name: str, *scores: tuple) -> Subject:
    return Subject(
        name=name,
        test_results=[
            TestResult(score=score, total_possible=total, date=date(2024, 2, 1))
            for score, total in scores
        ],
    )


@pytest.fixture
def habits() -> StudyHabits:
    return StudyHabits(
        preferred_time_of_day="morning",
        session_duration=60,
        days_per_week=5,
        focus_level="medium",
    )


@pytest.fixture
def study_data(habits: StudyHabits) -> StudyData:
    return StudyData(
        name="Alex",
        subjects=[
            make_subject("Math", (50, 100)),
            make_subject("Physics", (70, 100), (80, 100)),
            make_subject("History", (18, 20)),
            make_subject("Chemistry", (30, 50)),
            make_subject("Biology", (100, 100)),
        ],
        study_habits=habits,
    )
