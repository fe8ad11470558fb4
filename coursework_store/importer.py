"""Turn reviewed syllabus candidates into stored assignments."""
from __future__ import annotations

import logging
import typing as t
from datetime import date, datetime, time, timezone

from syllabus_extractor.models import ASSIGNMENT_CATEGORIES, AssignmentCandidate, GradeBreakdownEntry

from .models import Assignment
from .store import CourseworkRepository

logger = logging.getLogger(__name__)

# Candidates carry a calendar date only; stored due dates are end of day UTC.
DEFAULT_DUE_TIME = time(23, 59, tzinfo=timezone.utc)
DEFAULT_MAX_SCORE = 100.0


def due_datetime(due: t.Union[date, datetime]) -> datetime:
    if isinstance(due, datetime):
        return due if due.tzinfo else due.replace(tzinfo=timezone.utc)
    return datetime.combine(due, DEFAULT_DUE_TIME)


def candidate_to_assignment(course_id: str, candidate: AssignmentCandidate) -> Assignment:
    category = candidate.category if candidate.category in ASSIGNMENT_CATEGORIES else "Other"
    return Assignment(
        course_id=course_id,
        title=candidate.title.strip(),
        due_date=due_datetime(candidate.due_date),
        description=candidate.description or "",
        category=category,
        weight=candidate.weight or 0.0,
        max_score=DEFAULT_MAX_SCORE,
    )


def import_candidates(
    store: CourseworkRepository,
    course_id: str,
    candidates: t.Iterable[AssignmentCandidate],
    grade_breakdown: t.Optional[t.Sequence[GradeBreakdownEntry]] = None,
    syllabus_file_name: str = "",
) -> list[Assignment]:
    """
    Store the reviewed candidates for a course.

    Candidates without a title or a due date still need human input and are
    skipped. A non-empty grade breakdown replaces the course's breakdown.

    :return: The assignments that were created.
    :raises NotFoundError: If the course does not exist.
    """
    store.get_course(course_id)

    ready: list[Assignment] = []
    skipped = 0
    for candidate in candidates:
        if not candidate.title.strip() or candidate.due_date is None:
            skipped += 1
            continue
        ready.append(candidate_to_assignment(course_id, candidate))

    created = store.add_assignments(ready)

    course_changes: dict[str, t.Any] = {}
    if grade_breakdown:
        course_changes["grade_breakdown"] = list(grade_breakdown)
    if syllabus_file_name:
        course_changes["syllabus_file_name"] = syllabus_file_name
    if course_changes:
        store.update_course(course_id, **course_changes)

    logger.info(
        "Imported %d assignment(s) into course %s (%d candidate(s) skipped)",
        len(created), course_id, skipped,
    )
    return created
