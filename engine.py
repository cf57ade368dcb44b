from __future__ import annotations
import logging
import random
from datetime import date
from models import ScheduleData, StudyData
from messages import DEFAULT_LOCALE, get_messages
from planner import build_schedule
from recommendation import recommend

logger = logging.getLogger(__name__)


def generate_study_schedule(
    study_data: StudyData,
    seed: int | None = None,
    locale: str = DEFAULT_LOCALE,
    today: date | None = None,
) -> ScheduleData:
    """
    Turn test history and study habits into a four-week schedule.

    The same seed, inputs and ``today`` always give the same result.
    """
    get_messages(locale)
    today = today or date.today()
    rng = random.Random(seed)
    logger.info(
        "Generating schedule: %d subjects, %d days/week, seed=%s",
        len(study_data.subjects),
        study_data.study_habits.days_per_week,
        seed,
    )

    weeks, analysis = build_schedule(study_data, rng, today)
    recommendation, overall = recommend(analysis, locale)

    return ScheduleData(
        weekly_schedules=weeks,
        subject_analysis=analysis,
        recommendation=recommendation,
        overall_improvement=overall,
        locale=locale,
        seed=seed,
    )
