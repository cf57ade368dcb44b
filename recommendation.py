from __future__ import annotations
from typing import List, Tuple
from models import SubjectAnalysis
from messages import DEFAULT_LOCALE, get_messages, join_areas
from planner import FALLBACK_FOCUS_AREA, round_half_up


def overall_improvement(analysis: List[SubjectAnalysis]) -> int:
    if not analysis:
        raise ValueError("At least one subject analysis is required.")
    mean = sum(a.expected_improvement for a in analysis) / len(analysis)
    return round_half_up(mean)


def weakest_subject(analysis: List[SubjectAnalysis]) -> SubjectAnalysis:
    # min() keeps the first of equal performances, so input order breaks ties
    return min(analysis, key=lambda a: a.current_performance)


def recommend(
    analysis: List[SubjectAnalysis],
    locale: str = DEFAULT_LOCALE,
) -> Tuple[str, int]:
    overall = overall_improvement(analysis)
    target = weakest_subject(analysis)
    template = get_messages(locale)["recommendation"]
    text = template.format(
        name=target.name,
        performance=target.current_performance,
        weak_areas=join_areas(target.weak_areas, locale, FALLBACK_FOCUS_AREA),
        improvement=target.expected_improvement,
    )
    return text, overall
