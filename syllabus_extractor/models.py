"""
Data models for heuristic syllabus extraction.

This module contains the dataclasses produced when scanning raw syllabus text
for assignments, due dates and grading tables.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional


# Type literals for commonly used values
AssignmentCategory = Literal[
    "Assignment",
    "Quiz",
    "Exam",
    "Project",
    "Lab",
    "Paper",
    "Discussion",
    "Other",
]

ASSIGNMENT_CATEGORIES: tuple[str, ...] = (
    "Assignment",
    "Quiz",
    "Exam",
    "Project",
    "Lab",
    "Paper",
    "Discussion",
    "Other",
)


@dataclass(frozen=True)
class DateCandidate:
    """
    One date found in a block of text, e.g. "Sept 14, 2024".
    Transient: only used while choosing a due date.
    """
    original_text: str
    parsed_date: date
    context_window: str = ""


@dataclass
class AssignmentCandidate:
    """
    A best-effort assignment guessed from one syllabus line.
    The reviewer may edit, add or remove candidates before import.
    """
    title: str = ""                             # <= 100 chars
    due_date: Optional[date] = None
    weight: Optional[float] = None              # percent, 0-100
    category: AssignmentCategory = "Other"
    description: str = ""                       # <= 200 chars


@dataclass
class GradeBreakdownEntry:
    """One row of a grading table, e.g. "Homework: 30%"."""
    category: str
    weight: float


@dataclass
class SyllabusExtraction:
    """
    Everything pulled out of a single syllabus.
    """
    assignments: List[AssignmentCandidate] = field(default_factory=list)
    grade_breakdown: List[GradeBreakdownEntry] = field(default_factory=list)
    raw_text_preview: str = ""                  # first 1000 chars of the text
