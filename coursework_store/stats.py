from __future__ import annotations

import math
import typing as t
from datetime import date, datetime, timedelta

from grade_projector.models import GradeItem

from .lifecycle import as_utc, session_minutes
from .models import AssignmentQuery, CourseStats, StudyStats, StudyTally
from .store import CourseworkRepository


def course_stats(store: CourseworkRepository, course_id: str) -> CourseStats:
    """Counts plus an unweighted points-based grade (earned / possible)."""
    store.get_course(course_id)
    assignments = store.list_assignments(AssignmentQuery(course_id=course_id))

    completed = sum(1 for a in assignments if a.completed)
    graded = [a for a in assignments if a.earned_score is not None and a.max_score]

    current = None
    if graded:
        total_earned = sum(a.earned_score for a in graded)
        total_possible = sum(a.max_score for a in graded)
        current = total_earned / total_possible * 100

    return CourseStats(
        total_assignments=len(assignments),
        completed_assignments=completed,
        pending_assignments=len(assignments) - completed,
        current_grade=current,
    )


def grade_items_for_course(store: CourseworkRepository, course_id: str) -> list[GradeItem]:
    """Projector input built from the course's stored assignments."""
    store.get_course(course_id)
    return [
        GradeItem(
            id=a.id,
            name=a.title,
            weight=a.weight,
            score=a.earned_score,
            max_score=a.max_score,
        )
        for a in store.list_assignments(AssignmentQuery(course_id=course_id))
    ]


def day_streaks(days: t.Iterable[date]) -> tuple[int, int]:
    """
    Runs of consecutive study days as ``(current, longest)``.
    The current streak is the run ending on the latest day studied.
    """
    current = longest = 0
    previous: t.Optional[date] = None
    for day in sorted(set(days)):
        if previous is not None and day - previous == timedelta(days=1):
            current += 1
        else:
            current = 1
        longest = max(longest, current)
        previous = day
    return current, longest


def _tally(table: dict[str, StudyTally], key: str, minutes: int) -> None:
    entry = table.setdefault(key, StudyTally())
    entry.count += 1
    entry.total_minutes += minutes


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def study_stats(
    store: CourseworkRepository,
    course_id: t.Optional[str] = None,
    start: t.Optional[datetime] = None,
    end: t.Optional[datetime] = None,
) -> StudyStats:
    """Summarise study sessions, optionally for one course and a start-time window."""
    if course_id is not None:
        store.get_course(course_id)
    sessions = store.list_study_sessions(course_id=course_id, start=start, end=end)

    stats = StudyStats(total_sessions=len(sessions))
    productivity = 0
    for session in sessions:
        minutes = session_minutes(session)
        stats.total_minutes += minutes
        if session.completed:
            stats.completed_sessions += 1
            if session.session_type == "pomodoro":
                stats.pomodoros_completed += 1
        productivity += session.productivity
        stats.total_distractions += session.distractions
        if session.course_id is not None:
            _tally(stats.sessions_by_course, session.course_id, minutes)
        _tally(stats.sessions_by_day, as_utc(session.start_time).date().isoformat(), minutes)

    if sessions:
        stats.average_session_minutes = int(_round_half_up(stats.total_minutes / len(sessions)))
        stats.average_productivity = _round_half_up(productivity / len(sessions), 1)

    stats.current_streak, stats.longest_streak = day_streaks(
        date.fromisoformat(day) for day in stats.sessions_by_day
    )
    return stats
