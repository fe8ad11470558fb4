"""
Heuristic assignment extraction from raw syllabus text.

The extractor favours recall: any line mentioning an assignment-like keyword
becomes a candidate, and the reviewer prunes duplicates and noise before the
candidates are imported as real assignments.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from services.shared.errors import InvalidInputError

from .dates import first_date
from .models import AssignmentCandidate, AssignmentCategory

logger = logging.getLogger(__name__)

ASSIGNMENT_KEYWORDS: tuple[str, ...] = (
    "assignment",
    "homework",
    "hw",
    "quiz",
    "exam",
    "midterm",
    "final",
    "project",
    "paper",
    "presentation",
    "lab",
    "test",
    "due",
)

# First matching rule wins; a line mentioning both "quiz" and "exam" is a Quiz.
CATEGORY_RULES: tuple[tuple[tuple[str, ...], AssignmentCategory], ...] = (
    (("homework", "hw"), "Assignment"),
    (("quiz",), "Quiz"),
    (("exam", "midterm", "final"), "Exam"),
    (("project",), "Project"),
    (("lab",), "Lab"),
    (("paper",), "Paper"),
    (("discussion", "participation"), "Discussion"),
)
DEFAULT_CATEGORY: AssignmentCategory = "Other"

PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*%")
POINTS_RE = re.compile(r"(\d+)\s*(?:points|pts)", re.IGNORECASE)

WINDOW_RADIUS = 2
MIN_TITLE_CHARS = 3
MAX_TITLE_CHARS = 100
MAX_DESCRIPTION_CHARS = 200


def is_candidate_line(line: str) -> bool:
    """True when the line mentions any assignment keyword (case-insensitive)."""
    lower = line.lower()
    return any(keyword in lower for keyword in ASSIGNMENT_KEYWORDS)


def classify_line(line: str) -> AssignmentCategory:
    """Map a line to a category using the ordered keyword rules."""
    lower = line.lower()
    for keywords, category in CATEGORY_RULES:
        if any(keyword in lower for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def extract_weight(line: str) -> Optional[float]:
    """
    Read at most one grade weight from a single line.

    A percentage wins over a point value. Values outside 0-100 are
    returned as None so the reviewer fills them in.
    """
    match = PERCENT_RE.search(line)
    if match:
        value = float(match.group(1))
    else:
        match = POINTS_RE.search(line)
        if not match:
            return None
        value = float(int(match.group(1)))
    if value < 0 or value > 100:
        return None
    return value


def context_window(lines: list[str], index: int, radius: int = WINDOW_RADIUS) -> str:
    """Join the lines within ``radius`` of ``index`` with single spaces."""
    start = max(0, index - radius)
    end = min(len(lines), index + radius + 1)
    return " ".join(lines[start:end])


def extract_assignments(text: str) -> list[AssignmentCandidate]:
    """
    Turn syllabus text into a list of assignment candidates.

    Every line containing an assignment keyword yields one candidate. The due
    date is the first valid date in the surrounding five-line window, the
    weight and category come from the line itself. Repeated lines produce
    repeated candidates.

    :param text: Raw text, typically extracted from a syllabus PDF.
    :return: Candidates in document order; possibly empty.
    :raises InvalidInputError: If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"Syllabus text must be a string, got {type(text).__name__}")

    lines = text.splitlines()
    candidates: list[AssignmentCandidate] = []

    for index, line in enumerate(lines):
        if not is_candidate_line(line):
            continue

        title = line.strip()
        if len(title) <= MIN_TITLE_CHARS:
            continue

        window = context_window(lines, index)
        candidates.append(
            AssignmentCandidate(
                title=title[:MAX_TITLE_CHARS],
                due_date=first_date(window),
                weight=extract_weight(line),
                category=classify_line(line),
                description=window[:MAX_DESCRIPTION_CHARS],
            )
        )

    logger.debug("Extracted %d assignment candidates from %d lines", len(candidates), len(lines))
    return candidates
