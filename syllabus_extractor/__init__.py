"""Heuristic extraction of assignments and grading tables from syllabus text."""

from .breakdown import extract_grade_breakdown
from .dates import extract_dates
from .extractor import extract_assignments
from .models import AssignmentCandidate, DateCandidate, GradeBreakdownEntry, SyllabusExtraction
from .parser import parse_syllabus_pdf, parse_syllabus_text

__all__ = [
    "AssignmentCandidate",
    "DateCandidate",
    "GradeBreakdownEntry",
    "SyllabusExtraction",
    "extract_assignments",
    "extract_dates",
    "extract_grade_breakdown",
    "parse_syllabus_pdf",
    "parse_syllabus_text",
]
