from __future__ import annotations
import logging
import math
import random
from datetime import date, timedelta
from typing import Dict, List, Sequence, Tuple
from models import (
    DaySchedule,
    SessionSlot,
    StudyData,
    StudyHabits,
    Subject,
    SubjectAnalysis,
)

logger = logging.getLogger(__name__)

BASE_START_HOURS: Dict[str, int] = {
    "morning": 8,
    "afternoon": 13,
    "evening": 18,
    "night": 20,
}
DEFAULT_START_HOUR = 9
BREAK_MINUTES = 15
SEARCH_WINDOW_MINUTES = 6 * 60
DAY_END_MINUTES = 24 * 60
WEEKS = 4
DAYS_IN_WEEK = 7
MAX_SUBJECTS_PER_DAY = 4

WEAK_AREA_CANDIDATES = ("concept understanding", "problem solving", "application")
FALLBACK_FOCUS_AREA = "general review"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def time_allocation_for(performance: int) -> float:
    # 2.0h at 100% up to 7.0h at 0%, in half-hour steps
    return 2 + round_half_up((100 - performance) / 10) / 2


def expected_improvement_for(performance: int) -> int:
    return round_half_up(15 - performance / 10)


def priority_for(performance: int) -> str:
    if performance < 60:
        return "high"
    if performance < 80:
        return "medium"
    return "low"


def analyze_subject(subject: Subject, rng: random.Random) -> SubjectAnalysis:
    total_score = sum(t.score for t in subject.test_results)
    total_possible = sum(t.total_possible for t in subject.test_results)
    if total_possible <= 0:
        raise ValueError(f"Subject '{subject.name}' has no scored tests.")

    performance = round_half_up(total_score / total_possible * 100)
    # scores above the maximum would otherwise push the allocation under its floor
    performance = max(0, min(100, performance))

    weak_areas = [area for area in WEAK_AREA_CANDIDATES if rng.random() > 0.5]

    return SubjectAnalysis(
        name=subject.name,
        time_allocation=time_allocation_for(performance),
        current_performance=performance,
        weak_areas=weak_areas,
        expected_improvement=expected_improvement_for(performance),
    )


def has_conflict(placed: Sequence[SessionSlot], start: int, end: int) -> bool:
    for slot in placed:
        slot_start = time_to_minutes(slot.start_time)
        slot_end = time_to_minutes(slot.end_time)
        if start < slot_end and slot_start < end:
            return True
    return False


def place_sessions_for_day(
    subjects_for_day: Sequence[SubjectAnalysis],
    habits: StudyHabits,
    rng: random.Random,
) -> Tuple[List[SessionSlot], List[str]]:
    """
    Greedily give each subject the earliest free slot of the day.

    Every subject searches from the base start of the preferred time of day,
    stepping by session length plus break, until the search window closes.
    Returns the placed sessions (unsorted) and the names of subjects that
    found no room.
    """
    base_start = BASE_START_HOURS.get(habits.preferred_time_of_day, DEFAULT_START_HOUR) * 60
    window_end = base_start + SEARCH_WINDOW_MINUTES
    duration = habits.session_duration

    placed: List[SessionSlot] = []
    unplaced: List[str] = []
    for subject in subjects_for_day:
        start = base_start
        slot = None
        while start < window_end and start + duration <= DAY_END_MINUTES:
            end = start + duration
            if not has_conflict(placed, start, end):
                focus_area = (
                    rng.choice(subject.weak_areas)
                    if subject.weak_areas
                    else FALLBACK_FOCUS_AREA
                )
                slot = SessionSlot(
                    subject=subject.name,
                    start_time=minutes_to_time(start),
                    end_time=minutes_to_time(end),
                    focus_area=focus_area,
                    priority=priority_for(subject.current_performance),
                )
                break
            start += duration + BREAK_MINUTES

        if slot is None:
            unplaced.append(subject.name)
        else:
            placed.append(slot)

    return placed, unplaced


def _subjects_for_day(analysis: List[SubjectAnalysis], rng: random.Random) -> List[SubjectAnalysis]:
    shuffled = list(analysis)
    rng.shuffle(shuffled)
    return shuffled[:1 + min(MAX_SUBJECTS_PER_DAY - 1, len(analysis) - 1)]


def build_schedule(
    study_data: StudyData,
    rng: random.Random,
    today: date,
) -> Tuple[List[List[DaySchedule]], List[SubjectAnalysis]]:
    if not study_data.subjects:
        raise ValueError("At least one subject is required.")

    analysis = [analyze_subject(s, rng) for s in study_data.subjects]
    habits = study_data.study_habits

    weeks: List[List[DaySchedule]] = []
    omitted = 0
    for week in range(WEEKS):
        week_days: List[DaySchedule] = []
        for day in range(DAYS_IN_WEEK):
            if day >= habits.days_per_week:
                continue
            d = today + timedelta(days=week * DAYS_IN_WEEK + day)
            sessions, unplaced = place_sessions_for_day(
                _subjects_for_day(analysis, rng), habits, rng
            )
            sessions.sort(key=lambda s: time_to_minutes(s.start_time))
            if unplaced:
                logger.debug("No free slot on %s for: %s", d.isoformat(), ", ".join(unplaced))
                omitted += len(unplaced)
            week_days.append(DaySchedule(date=d, sessions=sessions, unplaced=unplaced))
        weeks.append(week_days)

    if omitted:
        logger.info("%d subject-days could not be placed in the %d-minute window", omitted, SEARCH_WINDOW_MINUTES)
    return weeks, analysis
