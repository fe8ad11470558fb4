"""
Data models for stored courses, assignments and study sessions.

This module contains the dataclasses persisted by the coursework repository,
the typed query used to list assignments and the study statistics.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from syllabus_extractor.models import AssignmentCategory, GradeBreakdownEntry

Priority = Literal["low", "medium", "high", "urgent"]
Status = Literal["not-started", "in-progress", "completed", "overdue"]
StatusFilter = Literal["completed", "pending", "overdue"]
AssignmentOrder = Literal["due_date", "created_at", "title", "weight"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Course:
    """A course the student is enrolled in."""
    name: str
    id: str = ""
    code: str = ""
    professor: str = ""
    semester: str = ""
    year: int = field(default_factory=lambda: utc_now().year)
    credits: int = 3
    target_grade: float = 90.0
    grade_breakdown: List[GradeBreakdownEntry] = field(default_factory=list)
    syllabus_file_name: str = ""
    notes: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass
class Assignment:
    """
    A concrete deliverable with a due date.
    ``status`` and ``priority`` are re-derived by the repository on every write.
    """
    course_id: str
    title: str
    due_date: datetime
    id: str = ""
    description: str = ""
    category: AssignmentCategory = "Other"
    weight: float = 0.0                     # percent of course grade
    max_score: float = 100.0
    earned_score: Optional[float] = None    # None = not graded yet
    completed: bool = False
    priority: Priority = "medium"
    priority_locked: bool = False           # True once the user picks a priority
    status: Status = "not-started"
    estimated_minutes: int = 60
    actual_minutes: int = 0
    notes: str = ""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class AssignmentQuery:
    """Typed filter/sort/limit parameters for listing assignments."""
    course_id: Optional[str] = None
    status: Optional[StatusFilter] = None
    priority: Optional[Priority] = None
    order_by: AssignmentOrder = "due_date"
    ascending: bool = True
    limit: Optional[int] = None


@dataclass
class CourseStats:
    """Progress counters for one course."""
    total_assignments: int = 0
    completed_assignments: int = 0
    pending_assignments: int = 0
    current_grade: Optional[float] = None


SessionType = Literal["pomodoro", "break", "long-break", "custom"]


@dataclass
class StudySession:
    """
    A timed block of study, optionally tied to a course and an assignment.
    Completing a session linked to an assignment adds its minutes to the
    assignment's ``actual_minutes``.
    """
    start_time: datetime
    end_time: datetime
    id: str = ""
    course_id: Optional[str] = None
    assignment_id: Optional[str] = None
    session_type: SessionType = "pomodoro"
    planned_minutes: int = 25
    actual_minutes: Optional[int] = None    # None = whole minutes between start and end
    completed: bool = False
    interrupted: bool = False
    productivity: int = 3                   # 1 (poor) to 5 (excellent)
    distractions: int = 0
    notes: str = ""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass
class StudyTally:
    count: int = 0
    total_minutes: int = 0


@dataclass
class StudyStats:
    """Totals, averages, breakdowns and day streaks over a set of sessions."""
    total_sessions: int = 0
    total_minutes: int = 0
    completed_sessions: int = 0
    pomodoros_completed: int = 0
    average_session_minutes: int = 0
    average_productivity: float = 0.0
    total_distractions: int = 0
    sessions_by_course: Dict[str, StudyTally] = field(default_factory=dict)   # keyed by course id
    sessions_by_day: Dict[str, StudyTally] = field(default_factory=dict)      # keyed by ISO date (UTC)
    current_streak: int = 0
    longest_streak: int = 0
