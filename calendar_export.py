from __future__ import annotations
from datetime import date, datetime, time, timedelta
from icalendar import Calendar, Event as IcsEvent
from models import ScheduleData
from messages import area_label, get_messages
from planner import time_to_minutes


def _at(day: date, hhmm: str) -> datetime:
    # floating local time; "24:00" is a valid end time
    return datetime.combine(day, time.min) + timedelta(minutes=time_to_minutes(hhmm))


def schedule_to_ics(schedule: ScheduleData) -> bytes:
    cal = Calendar()
    cal.add("PRODID", "-//Study Scheduler//Local//")
    cal.add("version", "2.0")
    cal.add("X-WR-CALNAME", "Study Schedule")

    priority_labels = get_messages(schedule.locale)["priority_labels"]

    for week in schedule.weekly_schedules:
        for day in week:
            for session in day.sessions:
                event = IcsEvent()
                uid = f"{day.date.strftime('%Y%m%d')}T{session.start_time.replace(':', '')}-{session.subject}"
                event.add("uid", f"{uid}@study-scheduler")
                event.add("summary", f"Study: {session.subject}")
                event.add("dtstart", _at(day.date, session.start_time))
                event.add("dtend", _at(day.date, session.end_time))
                event.add(
                    "description",
                    f"Focus: {area_label(session.focus_area, schedule.locale)}. "
                    f"Priority: {priority_labels[session.priority]}.",
                )
                cal.add_component(event)

    return cal.to_ical()
