"""Grade-breakdown (grading table) extraction."""
from __future__ import annotations

import logging
import re

from services.shared.errors import InvalidInputError

from .models import GradeBreakdownEntry

logger = logging.getLogger(__name__)

SECTION_MARKERS: tuple[str, ...] = ("grading", "grade breakdown", "assessment")
SECTION_SCAN_LINES = 20

SECTION_ROW_RE = re.compile(r"(.+?)\s*[:=\-]\s*(\d+(?:\.\d+)?)\s*%")
DOCUMENT_ROW_RE = re.compile(r"(.{5,50}?)\s*[:=\-]?\s*(\d+(?:\.\d+)?)\s*%")

YEAR_RE = re.compile(r"\d{4}")
EXCLUDED_LABEL_WORDS: tuple[str, ...] = ("student", "attendance")
MIN_LABEL_CHARS = 3


def find_grading_section(lines: list[str]) -> int:
    """Index of the first line that looks like a grading heading, or -1."""
    for index, line in enumerate(lines):
        lower = line.lower()
        if any(marker in lower for marker in SECTION_MARKERS):
            return index
    return -1


def _scan_section(lines: list[str], start: int) -> list[GradeBreakdownEntry]:
    entries: list[GradeBreakdownEntry] = []
    for line in lines[start:start + SECTION_SCAN_LINES]:
        match = SECTION_ROW_RE.search(line)
        if match:
            entries.append(
                GradeBreakdownEntry(category=match.group(1).strip(), weight=float(match.group(2)))
            )
    return entries


def _looks_like_grade_label(label: str) -> bool:
    lower = label.lower()
    if YEAR_RE.search(label):
        return False
    if any(word in lower for word in EXCLUDED_LABEL_WORDS):
        return False
    return len(label) > MIN_LABEL_CHARS


def _scan_document(text: str) -> list[GradeBreakdownEntry]:
    entries: list[GradeBreakdownEntry] = []
    for match in DOCUMENT_ROW_RE.finditer(text):
        label = match.group(1).strip()
        if _looks_like_grade_label(label):
            entries.append(GradeBreakdownEntry(category=label, weight=float(match.group(2))))
    return entries


def extract_grade_breakdown(text: str) -> list[GradeBreakdownEntry]:
    """
    Find ``<label>: <n>%`` rows describing how the course grade is weighted.

    The 20 lines starting at the first grading/assessment heading are scanned
    first. When that yields nothing the whole document is scanned instead,
    skipping labels that mention a year, students or attendance.

    :raises InvalidInputError: If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"Syllabus text must be a string, got {type(text).__name__}")

    lines = text.splitlines()
    section = find_grading_section(lines)

    entries: list[GradeBreakdownEntry] = []
    if section != -1:
        entries = _scan_section(lines, section)

    if not entries:
        entries = _scan_document(text)
        logger.debug("No grading section rows found; document scan produced %d entries", len(entries))

    return entries
