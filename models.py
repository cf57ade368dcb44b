from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
import datetime
from typing import List, Literal, Optional
from uuid import uuid4


TimeOfDay = Literal["morning", "afternoon", "evening", "night"]
FocusLevel = Literal["low", "medium", "high"]
Priority = Literal["low", "medium", "high"]


def _new_id() -> str:
    return str(uuid4())


class TestResult(BaseModel):
    model_config = ConfigDict(frozen=True)
    __test__ = False  # keep pytest from collecting this model

    id: str = Field(default_factory=_new_id)
    score: float = Field(ge=0)
    total_possible: float = Field(gt=0)
    date: datetime.date


class Subject(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = Field(min_length=1)
    test_results: List[TestResult] = Field(default_factory=list)


class StudyHabits(BaseModel):
    preferred_time_of_day: TimeOfDay = "evening"
    session_duration: int = Field(default=60, gt=0)  # minutes
    days_per_week: int = Field(default=5, ge=0, le=7)
    focus_level: FocusLevel = "medium"


class StudyData(BaseModel):
    name: str = ""
    subjects: List[Subject] = Field(default_factory=list)
    study_habits: StudyHabits = Field(default_factory=StudyHabits)


class SubjectAnalysis(BaseModel):
    name: str
    time_allocation: float  # hours per week
    current_performance: int = Field(ge=0, le=100)
    weak_areas: List[str] = Field(default_factory=list)
    expected_improvement: int  # percentage points


class SessionSlot(BaseModel):
    subject: str
    start_time: str  # "HH:MM"
    end_time: str
    focus_area: str
    priority: Priority


class DaySchedule(BaseModel):
    date: datetime.date
    sessions: List[SessionSlot] = Field(default_factory=list)
    # subjects picked for the day that found no free slot
    unplaced: List[str] = Field(default_factory=list)


class ScheduleData(BaseModel):
    weekly_schedules: List[List[DaySchedule]] = Field(default_factory=list)
    subject_analysis: List[SubjectAnalysis] = Field(default_factory=list)
    recommendation: str = ""
    overall_improvement: int = 0
    locale: str = "en"
    seed: Optional[int] = None
