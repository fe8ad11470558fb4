"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
syllabus_extractor, grade_projector and coursework_store (study sessions
included), plus the request bodies of the syllabus and coursework services.
"""
from __future__ import annotations

import typing as t
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from services.shared.config import DEFAULT_TARGET_GRADE


# Type literals for commonly used values
AssignmentCategory = t.Literal[
    "Assignment",
    "Quiz",
    "Exam",
    "Project",
    "Lab",
    "Paper",
    "Discussion",
    "Other",
]
Priority = t.Literal["low", "medium", "high", "urgent"]
Status = t.Literal["not-started", "in-progress", "completed", "overdue"]
GradeBadge = t.Literal["success", "info", "warning", "danger"]


# Syllabus extraction models
class AssignmentCandidate(BaseModel):
    """
    A line of syllabus text that looks like a deliverable.
    Any field may be missing and must be reviewed before import.
    """
    model_config = ConfigDict(from_attributes=True)

    title: str = ""
    due_date: t.Optional[date] = None
    weight: t.Optional[float] = None    # percent; None if no weight was found
    category: AssignmentCategory = "Other"
    description: str = ""


class GradeBreakdownEntry(BaseModel):
    """One row of a grading table, e.g. "Exams: 40%"."""
    model_config = ConfigDict(from_attributes=True)

    category: str
    weight: float


class SyllabusExtraction(BaseModel):
    """Everything pulled out of one syllabus."""
    model_config = ConfigDict(from_attributes=True)

    assignments: list[AssignmentCandidate] = Field(default_factory=list)
    grade_breakdown: list[GradeBreakdownEntry] = Field(default_factory=list)
    raw_text_preview: str = ""


# Grade projection models
class GradeItem(BaseModel):
    """Projector input; score None means not graded yet."""
    id: str
    name: str = ""
    weight: float
    score: t.Optional[float] = None
    max_score: float = 100.0


class WhatIfScenario(BaseModel):
    name: str
    multiplier: float
    projected_grade: float
    description: str = ""
    letter_grade: str


class RequiredGrade(BaseModel):
    item_id: str
    name: str
    required_grade: float


class GradeProjection(BaseModel):
    """
    A grade snapshot with letter grades and badge classes attached.
    """
    target_grade: float
    current_grade: t.Optional[float] = None
    projected_grade: t.Optional[float] = None
    required_grade_on_remaining: t.Optional[float] = None
    required_grade_unclamped: t.Optional[float] = None
    target_achievable: t.Optional[bool] = None
    earned_points: float = 0.0
    completed_weight: float = 0.0
    remaining_weight: float = 100.0
    total_weight: float = 0.0
    weights_balanced: bool = True
    scenarios: list[WhatIfScenario] = Field(default_factory=list)
    required_by_item: list[RequiredGrade] = Field(default_factory=list)
    current_letter: t.Optional[str] = None
    projected_letter: t.Optional[str] = None
    current_badge: t.Optional[GradeBadge] = None
    projected_badge: t.Optional[GradeBadge] = None


# Coursework models
class Course(BaseModel):
    """Represents a stored course."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str = ""
    professor: str = ""
    semester: str = ""
    year: int
    credits: int = 3
    target_grade: float = 90.0
    grade_breakdown: list[GradeBreakdownEntry] = Field(default_factory=list)
    syllabus_file_name: str = ""
    notes: str = ""
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class Assignment(BaseModel):
    """Represents a stored assignment with derived status and priority."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    title: str
    due_date: datetime
    description: str = ""
    category: AssignmentCategory = "Other"
    weight: float = 0.0
    max_score: float = 100.0
    earned_score: t.Optional[float] = None
    completed: bool = False
    priority: Priority = "medium"
    priority_locked: bool = False
    status: Status = "not-started"
    estimated_minutes: int = 60
    actual_minutes: int = 0
    notes: str = ""
    created_at: datetime
    updated_at: datetime


class CourseStats(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_assignments: int = 0
    completed_assignments: int = 0
    pending_assignments: int = 0
    current_grade: t.Optional[float] = None


# Request/Response Models for API endpoints
class ParseSyllabusTextRequest(BaseModel):
    """Request model for parsing pasted syllabus text."""
    text: str


class ParseSyllabusRequest(BaseModel):
    """Request model for parsing a syllabus PDF by path/URL or inline content."""
    pdf_path_or_url: t.Optional[str] = None
    pdf_content_base64: t.Optional[str] = None


class ProjectGradesRequest(BaseModel):
    """Request model for projecting grades from a list of items."""
    items: list[GradeItem]
    target_grade: float = DEFAULT_TARGET_GRADE


class CreateCourseRequest(BaseModel):
    """Request model for creating a course."""
    name: str
    code: str = ""
    professor: str = ""
    semester: str = ""
    year: t.Optional[int] = None
    credits: int = Field(default=3, ge=0)
    target_grade: float = Field(default=DEFAULT_TARGET_GRADE, ge=0, le=100)
    grade_breakdown: list[GradeBreakdownEntry] = Field(default_factory=list)
    notes: str = ""
    is_active: bool = True


class UpdateCourseRequest(BaseModel):
    """
    Partial course update; only fields that are sent are changed.
    Sending null for a field that must have a value is rejected.
    """
    name: t.Optional[str] = None
    code: t.Optional[str] = None
    professor: t.Optional[str] = None
    semester: t.Optional[str] = None
    year: t.Optional[int] = None
    credits: t.Optional[int] = Field(default=None, ge=0)
    target_grade: t.Optional[float] = Field(default=None, ge=0, le=100)
    grade_breakdown: t.Optional[list[GradeBreakdownEntry]] = None
    notes: t.Optional[str] = None
    is_active: t.Optional[bool] = None


class CreateAssignmentRequest(BaseModel):
    """Request model for creating an assignment."""
    course_id: str
    title: str
    due_date: datetime
    description: str = ""
    category: AssignmentCategory = "Other"
    weight: float = Field(default=0.0, ge=0, le=100)
    max_score: float = Field(default=100.0, gt=0)
    earned_score: t.Optional[float] = Field(default=None, ge=0)
    completed: bool = False
    priority: t.Optional[Priority] = None   # derived from the due date unless given
    estimated_minutes: int = Field(default=60, ge=0)
    actual_minutes: int = Field(default=0, ge=0)
    notes: str = ""


class UpdateAssignmentRequest(BaseModel):
    """
    Partial assignment update; only fields that are sent are changed.
    ``earned_score`` may be sent as null to clear a grade; null for any other
    field is rejected.
    """
    course_id: t.Optional[str] = None
    title: t.Optional[str] = None
    due_date: t.Optional[datetime] = None
    description: t.Optional[str] = None
    category: t.Optional[AssignmentCategory] = None
    weight: t.Optional[float] = Field(default=None, ge=0, le=100)
    max_score: t.Optional[float] = Field(default=None, gt=0)
    earned_score: t.Optional[float] = Field(default=None, ge=0)
    completed: t.Optional[bool] = None
    priority: t.Optional[Priority] = None
    estimated_minutes: t.Optional[int] = Field(default=None, ge=0)
    actual_minutes: t.Optional[int] = Field(default=None, ge=0)
    notes: t.Optional[str] = None


class CreateAssignmentsBulkRequest(BaseModel):
    """Request model for creating multiple assignments at once."""
    assignments: list[CreateAssignmentRequest]


class ConfirmSyllabusRequest(BaseModel):
    """Reviewed extraction results to store on a course."""
    assignments: list[AssignmentCandidate] = Field(default_factory=list)
    grade_breakdown: list[GradeBreakdownEntry] = Field(default_factory=list)
    syllabus_file_name: str = ""


# Study session models
SessionType = t.Literal["pomodoro", "break", "long-break", "custom"]


class StudySession(BaseModel):
    """Represents a stored study session."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    start_time: datetime
    end_time: datetime
    course_id: t.Optional[str] = None
    assignment_id: t.Optional[str] = None
    session_type: SessionType = "pomodoro"
    planned_minutes: int = 25
    actual_minutes: int = 0
    completed: bool = False
    interrupted: bool = False
    productivity: int = 3
    distractions: int = 0
    notes: str = ""
    created_at: datetime
    updated_at: datetime


class StudyTally(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    count: int = 0
    total_minutes: int = 0


class StudyStats(BaseModel):
    """Study totals, averages, per-course and per-day breakdowns and streaks."""
    model_config = ConfigDict(from_attributes=True)

    total_sessions: int = 0
    total_minutes: int = 0
    completed_sessions: int = 0
    pomodoros_completed: int = 0
    average_session_minutes: int = 0
    average_productivity: float = 0.0
    total_distractions: int = 0
    sessions_by_course: dict[str, StudyTally] = Field(default_factory=dict)
    sessions_by_day: dict[str, StudyTally] = Field(default_factory=dict)
    current_streak: int = 0
    longest_streak: int = 0


class CreateStudySessionRequest(BaseModel):
    """
    Request model for logging a study session.
    ``actual_minutes`` defaults to the whole minutes between start and end.
    """
    start_time: datetime
    end_time: datetime
    course_id: t.Optional[str] = None
    assignment_id: t.Optional[str] = None
    session_type: SessionType = "pomodoro"
    planned_minutes: int = Field(default=25, gt=0)
    actual_minutes: t.Optional[int] = Field(default=None, ge=0)
    completed: bool = False
    interrupted: bool = False
    productivity: int = Field(default=3, ge=1, le=5)
    distractions: int = Field(default=0, ge=0)
    notes: str = ""


class UpdateStudySessionRequest(BaseModel):
    """
    Partial study session update; only fields that are sent are changed.
    ``course_id`` and ``assignment_id`` may be sent as null to unlink them.
    """
    start_time: t.Optional[datetime] = None
    end_time: t.Optional[datetime] = None
    course_id: t.Optional[str] = None
    assignment_id: t.Optional[str] = None
    session_type: t.Optional[SessionType] = None
    planned_minutes: t.Optional[int] = Field(default=None, gt=0)
    actual_minutes: t.Optional[int] = Field(default=None, ge=0)
    completed: t.Optional[bool] = None
    interrupted: t.Optional[bool] = None
    productivity: t.Optional[int] = Field(default=None, ge=1, le=5)
    distractions: t.Optional[int] = Field(default=None, ge=0)
    notes: t.Optional[str] = None
