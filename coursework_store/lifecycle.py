"""Status, priority and duration rules applied whenever coursework is saved or read."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from .models import Assignment, Priority, Status, StudySession

# Hours until due -> priority, checked in order
PRIORITY_THRESHOLDS: tuple[tuple[float, Priority], ...] = (
    (24, "urgent"),
    (72, "high"),
    (168, "medium"),  # 1 week
)


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so comparisons never mix naive and aware."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def derive_status(assignment: Assignment, now: datetime) -> Status:
    if assignment.completed:
        return "completed"
    if as_utc(now) > as_utc(assignment.due_date):
        return "overdue"
    if assignment.actual_minutes > 0:
        return "in-progress"
    return "not-started"


def derive_priority(due_date: datetime, now: datetime) -> Priority:
    hours_until_due = (as_utc(due_date) - as_utc(now)).total_seconds() / 3600
    for limit, priority in PRIORITY_THRESHOLDS:
        if hours_until_due < limit:
            return priority
    return "low"


def grade_percentage(assignment: Assignment) -> Optional[float]:
    """Score as a percentage of max score, or None if ungraded."""
    if assignment.earned_score is not None and assignment.max_score > 0:
        return assignment.earned_score / assignment.max_score * 100
    return None


def rederive(assignment: Assignment, now: datetime) -> Assignment:
    """Re-derive status and priority in place for the given moment."""
    assignment.status = derive_status(assignment, now)
    if not assignment.priority_locked:
        assignment.priority = derive_priority(assignment.due_date, now)
    return assignment


def refresh(assignment: Assignment, now: datetime) -> Assignment:
    """Normalise timestamps, re-derive status and priority, and stamp the write."""
    assignment.due_date = as_utc(assignment.due_date)
    rederive(assignment, now)
    assignment.updated_at = now
    return assignment


def session_minutes(session: StudySession) -> int:
    """Recorded minutes, or the whole minutes between start and end."""
    if session.actual_minutes is not None:
        return session.actual_minutes
    elapsed = as_utc(session.end_time) - as_utc(session.start_time)
    return int(elapsed.total_seconds() // 60)
