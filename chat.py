from __future__ import annotations
import random
from typing import Iterable
from models import ScheduleData, StudyData
from messages import DEFAULT_LOCALE, get_messages, join_areas
from planner import FALLBACK_FOCUS_AREA


def _mentions(text: str, keywords: Iterable[str]) -> bool:
    return any(k in text for k in keywords)


def respond(
    message: str,
    study_data: StudyData,
    schedule_data: ScheduleData,
    rng: random.Random,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Answer a free-text question about the current plan.

    Rules are checked in order and the first match wins: schedule changes,
    study tips, focus and time management, a named subject, general
    how-to questions, then a random default reply.
    """
    messages = get_messages(locale)
    keywords = messages["chat_keywords"]
    replies = messages["chat"]
    text = message.lower()
    habits = study_data.study_habits
    first = schedule_data.subject_analysis[0]
    time_of_day = messages["time_of_day_labels"][habits.preferred_time_of_day]

    if _mentions(text, keywords["schedule_change"]):
        return replies["schedule_change"].format(learner=study_data.name, subject=first.name)

    if _mentions(text, keywords["study_tips"]):
        return replies["study_tips"].format(
            subject=first.name,
            weak_areas=join_areas(first.weak_areas, locale, FALLBACK_FOCUS_AREA),
        )

    if _mentions(text, keywords["focus"]):
        return replies[f"focus_{habits.focus_level}"].format(time_of_day=time_of_day)

    for subject in study_data.subjects:
        if subject.name.lower() not in text:
            continue
        analysis = next(
            (a for a in schedule_data.subject_analysis if a.name == subject.name), None
        )
        if analysis:
            return replies["subject"].format(
                subject=subject.name,
                performance=analysis.current_performance,
                hours=analysis.time_allocation,
                weak_areas=join_areas(analysis.weak_areas, locale, FALLBACK_FOCUS_AREA, "list_sep"),
                improvement=analysis.expected_improvement,
            )

    if _mentions(text, keywords["how_to"]):
        return replies["how_to"].format(subject=first.name)

    return rng.choice(replies["defaults"]).format(
        time_of_day=time_of_day,
        duration=habits.session_duration,
        subject=first.name,
        days=habits.days_per_week,
        overall=schedule_data.overall_improvement,
    )
