from __future__ import annotations
import logging
import random
import streamlit as st
import pandas as pd
from datetime import date
from typing import List
from pydantic import ValidationError

from calendar_export import schedule_to_ics
from chat import respond
from config import get_default_locale
from engine import generate_study_schedule
from messages import MESSAGES, area_label, get_messages, join_areas
from models import ScheduleData, StudyData, StudyHabits, Subject, TestResult
from pdf_export import schedule_to_pdf
from planner import FALLBACK_FOCUS_AREA
from storage import JsonStore


STUDY_DATA_KEY = "study_data"
SCHEDULE_DATA_KEY = "schedule_data"
TIMES_OF_DAY = ["morning", "afternoon", "evening", "night"]
FOCUS_LEVELS = ["low", "medium", "high"]
TEST_COLUMNS = ["Subject", "Score", "Total possible", "Date"]

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
st.set_page_config(page_title="Study Scheduler", page_icon="📚", layout="wide")


def _ensure_session_state() -> JsonStore:
    if "store" not in st.session_state:
        st.session_state.store = JsonStore()
    store: JsonStore = st.session_state.store

    if "study_data" not in st.session_state:
        raw = store.get(STUDY_DATA_KEY)
        try:
            st.session_state.study_data = StudyData.model_validate(raw) if raw else None
        except ValidationError:
            st.session_state.study_data = None
    if "schedule_data" not in st.session_state:
        raw = store.get(SCHEDULE_DATA_KEY)
        try:
            st.session_state.schedule_data = ScheduleData.model_validate(raw) if raw else None
        except ValidationError:
            st.session_state.schedule_data = None
    if "chat_history" not in st.session_state:
        st.session_state.chat_history = []
    return store


def _queue_toast(message: str) -> None:
    st.session_state.toast_message = message


def _flush_toast() -> None:
    message = st.session_state.pop("toast_message", None)
    if message:
        st.toast(message)


def _tests_frame(study_data: StudyData | None) -> pd.DataFrame:
    rows = []
    if study_data:
        for subject in study_data.subjects:
            for test in subject.test_results:
                rows.append({
                    "Subject": subject.name,
                    "Score": test.score,
                    "Total possible": test.total_possible,
                    "Date": test.date,
                })
    return pd.DataFrame(rows, columns=TEST_COLUMNS)


def _coerce_date(value: object) -> date | None:
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def _subjects_from_rows(records: List[dict]) -> List[Subject]:
    """
    Group edited test rows into subjects, keeping first-seen subject order.
    Raises ValueError with a user-facing message on invalid rows.
    """
    by_name: dict[str, Subject] = {}
    for row in records:
        name = str(row.get("Subject") or "").strip()
        score = row.get("Score")
        total = row.get("Total possible")
        test_date = _coerce_date(row.get("Date"))
        if not name and (score is None or pd.isna(score)):
            continue
        if not name:
            raise ValueError("Every test needs a subject name.")
        if score is None or pd.isna(score) or float(score) < 0:
            raise ValueError(f"{name}: score must be zero or more.")
        if total is None or pd.isna(total) or float(total) <= 0:
            raise ValueError(f"{name}: total possible must be greater than zero.")
        if test_date is None:
            raise ValueError(f"{name}: every test needs a date.")
        subject = by_name.setdefault(name.lower(), Subject(name=name))
        subject.test_results.append(
            TestResult(score=float(score), total_possible=float(total), date=test_date)
        )
    if not by_name:
        raise ValueError("Add at least one subject with a test result.")
    return list(by_name.values())


def render_input(store: JsonStore, locale: str, seed: int | None) -> None:
    st.header("Your study profile")
    study_data: StudyData | None = st.session_state.study_data
    habits = study_data.study_habits if study_data else StudyHabits()

    learner = st.text_input("Your name", value=study_data.name if study_data else "")

    st.subheader("Test results")
    st.caption("One row per test. Rows with the same subject name are grouped together.")
    edited = st.data_editor(
        _tests_frame(study_data),
        num_rows="dynamic",
        hide_index=True,
        use_container_width=True,
        column_config={
            "Subject": st.column_config.TextColumn("Subject", required=True),
            "Score": st.column_config.NumberColumn("Score", min_value=0.0, step=1.0),
            "Total possible": st.column_config.NumberColumn(
                "Total possible", min_value=1.0, step=1.0
            ),
            "Date": st.column_config.DateColumn("Date", default=date.today()),
        },
        key="tests_editor",
    )

    st.subheader("Study habits")
    col1, col2 = st.columns(2)
    with col1:
        time_of_day = st.selectbox(
            "Preferred time of day",
            TIMES_OF_DAY,
            index=TIMES_OF_DAY.index(habits.preferred_time_of_day),
            format_func=lambda x: x.capitalize(),
        )
        duration = st.slider(
            "Session duration (minutes)", 15, 180, min(180, max(15, habits.session_duration)), 15
        )
    with col2:
        days_per_week = st.slider("Days per week", 1, 7, max(1, habits.days_per_week))
        focus_level = st.selectbox(
            "Focus level",
            FOCUS_LEVELS,
            index=FOCUS_LEVELS.index(habits.focus_level),
            format_func=lambda x: {
                "low": "Low (easily distracted)",
                "medium": "Medium (average focus)",
                "high": "High (good concentration)",
            }[x],
        )

    if st.button("Generate schedule", type="primary"):
        if not learner.strip():
            st.warning("Name is required.")
            return
        try:
            subjects = _subjects_from_rows(edited.to_dict("records"))
        except ValueError as e:
            st.warning(str(e))
            return

        new_data = StudyData(
            name=learner.strip(),
            subjects=subjects,
            study_habits=StudyHabits(
                preferred_time_of_day=time_of_day,
                session_duration=int(duration),
                days_per_week=int(days_per_week),
                focus_level=focus_level,
            ),
        )
        try:
            schedule = generate_study_schedule(new_data, seed=seed, locale=locale)
        except ValueError as e:
            st.error(f"Could not generate a schedule: {e}")
            return

        st.session_state.study_data = new_data
        st.session_state.schedule_data = schedule
        st.session_state.chat_history = []
        st.session_state.pop("chat_rng", None)
        store.put(STUDY_DATA_KEY, new_data.model_dump(mode="json"))
        store.put(SCHEDULE_DATA_KEY, schedule.model_dump(mode="json"))
        st.session_state.next_page = "Schedule"
        _queue_toast("Schedule generated.")
        st.rerun()


def render_performance_chart(schedule: ScheduleData) -> None:
    chart_type = st.radio(
        "Chart", ["Time allocation", "Expected improvement"], horizontal=True
    )
    df = pd.DataFrame(
        [
            {
                "Subject": a.name,
                "Hours/week": a.time_allocation,
                "Performance %": a.current_performance,
                "Improvement %": a.expected_improvement,
            }
            for a in schedule.subject_analysis
        ]
    ).set_index("Subject")

    if chart_type == "Time allocation":
        df = df.sort_values(by="Hours/week", ascending=False)
        total = df["Hours/week"].sum()
        df["Share %"] = (df["Hours/week"] / total * 100).round() if total else 0
        st.bar_chart(df[["Hours/week"]])
        st.dataframe(df[["Hours/week", "Share %"]], use_container_width=True)
    else:
        df["Projected %"] = (df["Performance %"] + df["Improvement %"]).clip(upper=100)
        st.bar_chart(df[["Performance %", "Projected %"]])


def render_schedule(study_data: StudyData, schedule: ScheduleData) -> None:
    st.header("Your study schedule")
    locale = schedule.locale
    messages = get_messages(locale)

    m1, m2, m3 = st.columns(3)
    m1.metric("Overall improvement", f"+{schedule.overall_improvement}%")
    m2.metric("Subjects", len(schedule.subject_analysis))
    m3.metric(
        "Hours/week planned",
        f"{sum(a.time_allocation for a in schedule.subject_analysis):.1f}",
    )
    st.info(schedule.recommendation)

    st.divider()
    st.subheader("Performance")
    render_performance_chart(schedule)

    analysis_rows = [
        {
            "Subject": a.name,
            "Performance %": a.current_performance,
            "Hours/week": a.time_allocation,
            "Weak areas": join_areas(a.weak_areas, locale, FALLBACK_FOCUS_AREA, "list_sep"),
            "Improvement %": a.expected_improvement,
        }
        for a in schedule.subject_analysis
    ]
    st.dataframe(pd.DataFrame(analysis_rows), use_container_width=True, hide_index=True)

    st.divider()
    st.subheader("Calendar")
    week_labels = [f"Week {i + 1}" for i in range(len(schedule.weekly_schedules))]
    week_label = st.radio("Week", week_labels, horizontal=True)
    week = schedule.weekly_schedules[week_labels.index(week_label)]
    if not week:
        st.info("No study days in this week.")
    for day in week:
        st.markdown(f"**{day.date.strftime('%A, %Y-%m-%d')}**")
        if day.sessions:
            st.table([
                {
                    "Time": f"{s.start_time} - {s.end_time}",
                    "Subject": s.subject,
                    "Focus": area_label(s.focus_area, locale),
                    "Priority": messages["priority_labels"][s.priority],
                }
                for s in day.sessions
            ])
        else:
            st.caption("No sessions.")
        if day.unplaced:
            st.caption(f"No free slot for: {', '.join(day.unplaced)}")

    st.divider()
    st.subheader("Exports")
    first_day = next((d.date for w in schedule.weekly_schedules for d in w), date.today())
    col_ics, col_pdf = st.columns(2)
    col_ics.download_button(
        "Download ICS",
        data=schedule_to_ics(schedule),
        file_name=f"study_schedule_{first_day.isoformat()}.ics",
        mime="text/calendar",
    )
    col_pdf.download_button(
        "Download PDF",
        data=schedule_to_pdf(schedule, study_data),
        file_name=f"study_schedule_{first_day.isoformat()}.pdf",
        mime="application/pdf",
    )


def render_chat(study_data: StudyData, schedule: ScheduleData) -> None:
    st.header("Study assistant")
    if "chat_rng" not in st.session_state:
        st.session_state.chat_rng = random.Random(schedule.seed)

    for role, text in st.session_state.chat_history:
        with st.chat_message(role):
            st.write(text)

    prompt = st.chat_input("Ask about your schedule, study tips or a subject")
    if prompt:
        reply = respond(prompt, study_data, schedule, st.session_state.chat_rng, schedule.locale)
        st.session_state.chat_history.append(("user", prompt))
        st.session_state.chat_history.append(("assistant", reply))
        st.rerun()


store = _ensure_session_state()

st.title("Study Scheduler")
st.caption("Turns your test results and study habits into a four-week plan.")
_flush_toast()

if "nav_page" not in st.session_state:
    st.session_state.nav_page = "Input"
if "next_page" in st.session_state:
    st.session_state.nav_page = st.session_state.pop("next_page")
if st.session_state.schedule_data is None:
    st.session_state.nav_page = "Input"

with st.sidebar:
    st.header("Options")
    locales = list(MESSAGES.keys())
    locale = st.selectbox(
        "Language",
        locales,
        index=locales.index(get_default_locale()),
        format_func=lambda x: {"en": "English", "ja": "日本語"}.get(x, x),
    )
    seed_text = st.text_input("Random seed (optional)", placeholder="e.g. 42")
    seed = None
    if seed_text.strip():
        try:
            seed = int(seed_text.strip())
        except ValueError:
            st.warning("Seed must be a whole number.")

    if st.button("Reset data", disabled=st.session_state.schedule_data is None):

        @st.dialog("Reset all data?")
        def _confirm_reset() -> None:
            st.write("This clears your test results, habits and schedule.")
            if st.button("Reset", type="primary"):
                store.delete(STUDY_DATA_KEY)
                store.delete(SCHEDULE_DATA_KEY)
                st.session_state.study_data = None
                st.session_state.schedule_data = None
                st.session_state.chat_history = []
                st.session_state.pop("chat_rng", None)
                _queue_toast("Data reset.")
                st.rerun()

        _confirm_reset()

    st.divider()
    st.header("Navigate")
    pages = ["Input", "Schedule", "Chat"]
    page = st.radio("View", pages, key="nav_page", label_visibility="collapsed")

study_data = st.session_state.study_data
schedule_data = st.session_state.schedule_data

if page == "Input" or schedule_data is None or study_data is None:
    render_input(store, locale, seed)
elif page == "Schedule":
    render_schedule(study_data, schedule_data)
elif page == "Chat":
    render_chat(study_data, schedule_data)
