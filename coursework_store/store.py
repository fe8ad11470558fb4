# -*- coding: utf-8 -*-
"""
Coursework repository: an explicit interface plus an in-memory implementation.

A persistent backend only has to implement ``CourseworkRepository``; the
services and the syllabus import flow depend on the protocol, not on the
in-memory store.

Every write is validated as a whole record, so a partial update can never
leave a course, assignment or study session in a state the rest of the
system cannot read back.
"""
from __future__ import annotations

import logging
import threading
import typing as t
import uuid
from dataclasses import fields, replace
from datetime import datetime

from services.shared.errors import InvalidInputError, NotFoundError
from syllabus_extractor.models import ASSIGNMENT_CATEGORIES

from .lifecycle import as_utc, refresh, rederive, session_minutes
from .models import (
    Assignment,
    AssignmentQuery,
    Course,
    Priority,
    SessionType,
    StudySession,
    utc_now,
)

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})
_COURSE_FIELDS = frozenset(f.name for f in fields(Course)) - _IMMUTABLE_FIELDS
_ASSIGNMENT_FIELDS = frozenset(f.name for f in fields(Assignment)) - _IMMUTABLE_FIELDS - {"status"}
_SESSION_FIELDS = frozenset(f.name for f in fields(StudySession)) - _IMMUTABLE_FIELDS

_COURSE_TEXT_FIELDS = ("code", "professor", "semester", "syllabus_file_name", "notes")
_PRIORITIES = frozenset(t.get_args(Priority))
_SESSION_TYPES = frozenset(t.get_args(SessionType))


class CourseworkRepository(t.Protocol):
    """Storage operations needed by the services and the import flow."""

    def add_course(self, course: Course) -> Course: ...

    def get_course(self, course_id: str) -> Course: ...

    def list_courses(self, active_only: bool = False) -> list[Course]: ...

    def update_course(self, course_id: str, **changes: t.Any) -> Course: ...

    def delete_course(self, course_id: str) -> None: ...

    def add_assignment(self, assignment: Assignment) -> Assignment: ...

    def add_assignments(self, assignments: t.Iterable[Assignment]) -> list[Assignment]: ...

    def get_assignment(self, assignment_id: str) -> Assignment: ...

    def list_assignments(self, query: AssignmentQuery = AssignmentQuery()) -> list[Assignment]: ...

    def update_assignment(self, assignment_id: str, **changes: t.Any) -> Assignment: ...

    def delete_assignment(self, assignment_id: str) -> None: ...

    def add_study_session(self, session: StudySession) -> StudySession: ...

    def get_study_session(self, session_id: str) -> StudySession: ...

    def list_study_sessions(
        self,
        course_id: t.Optional[str] = None,
        assignment_id: t.Optional[str] = None,
        start: t.Optional[datetime] = None,
        end: t.Optional[datetime] = None,
    ) -> list[StudySession]: ...

    def update_study_session(self, session_id: str, **changes: t.Any) -> StudySession: ...

    def delete_study_session(self, session_id: str) -> None: ...


def _new_id() -> str:
    return uuid.uuid4().hex


def _check_changes(changes: dict[str, t.Any], allowed: frozenset[str], kind: str) -> None:
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise InvalidInputError(f"Cannot update {kind} field(s): {', '.join(unknown)}")


def _is_number(value: t.Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_count(value: t.Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _validate_course(course: Course) -> None:
    if not isinstance(course.name, str) or not course.name.strip():
        raise InvalidInputError("Course name is required")
    for name in _COURSE_TEXT_FIELDS:
        if not isinstance(getattr(course, name), str):
            raise InvalidInputError(f"Course {name} must be a string")
    if not isinstance(course.year, int) or isinstance(course.year, bool):
        raise InvalidInputError("Course year must be an integer")
    if not _is_count(course.credits):
        raise InvalidInputError("Course credits must be a non-negative integer")
    if not _is_number(course.target_grade) or not 0 <= course.target_grade <= 100:
        raise InvalidInputError("Course target_grade must be between 0 and 100")
    if not isinstance(course.grade_breakdown, list):
        raise InvalidInputError("Course grade_breakdown must be a list")
    if not isinstance(course.is_active, bool):
        raise InvalidInputError("Course is_active must be true or false")


def _validate_assignment(assignment: Assignment) -> None:
    if not isinstance(assignment.course_id, str) or not assignment.course_id:
        raise InvalidInputError("Assignment course_id is required")
    if not isinstance(assignment.title, str) or not assignment.title.strip():
        raise InvalidInputError("Assignment title is required")
    if not isinstance(assignment.due_date, datetime):
        raise InvalidInputError("Assignment due_date must be a date and time")
    if assignment.category not in ASSIGNMENT_CATEGORIES:
        raise InvalidInputError(f"Unknown assignment category: {assignment.category!r}")
    if not _is_number(assignment.weight) or not 0 <= assignment.weight <= 100:
        raise InvalidInputError("Assignment weight must be between 0 and 100")
    if not _is_number(assignment.max_score) or not assignment.max_score > 0:
        raise InvalidInputError("Assignment max_score must be greater than 0")
    if assignment.earned_score is not None and (
        not _is_number(assignment.earned_score) or not assignment.earned_score >= 0
    ):
        raise InvalidInputError("Assignment earned_score must be a non-negative number")
    for name in ("estimated_minutes", "actual_minutes"):
        if not _is_count(getattr(assignment, name)):
            raise InvalidInputError(f"Assignment {name} must be a non-negative integer")
    for name in ("description", "notes"):
        if not isinstance(getattr(assignment, name), str):
            raise InvalidInputError(f"Assignment {name} must be a string")
    if not isinstance(assignment.completed, bool) or not isinstance(assignment.priority_locked, bool):
        raise InvalidInputError("Assignment completed must be true or false")
    if assignment.priority not in _PRIORITIES:
        raise InvalidInputError(f"Unknown priority: {assignment.priority!r}")


def _validate_session(session: StudySession) -> None:
    if not isinstance(session.start_time, datetime) or not isinstance(session.end_time, datetime):
        raise InvalidInputError("Study session start_time and end_time must be dates and times")
    if as_utc(session.end_time) < as_utc(session.start_time):
        raise InvalidInputError("Study session cannot end before it starts")
    if session.session_type not in _SESSION_TYPES:
        raise InvalidInputError(f"Unknown session type: {session.session_type!r}")
    if not _is_count(session.planned_minutes) or session.planned_minutes == 0:
        raise InvalidInputError("Study session planned_minutes must be a positive integer")
    if session.actual_minutes is not None and not _is_count(session.actual_minutes):
        raise InvalidInputError("Study session actual_minutes must be a non-negative integer")
    if not _is_count(session.distractions):
        raise InvalidInputError("Study session distractions must be a non-negative integer")
    if not _is_count(session.productivity) or not 1 <= session.productivity <= 5:
        raise InvalidInputError("Study session productivity must be between 1 and 5")
    if not isinstance(session.completed, bool) or not isinstance(session.interrupted, bool):
        raise InvalidInputError("Study session completed and interrupted must be true or false")
    if not isinstance(session.notes, str):
        raise InvalidInputError("Study session notes must be a string")


def _sort_key(order_by: str) -> t.Callable[[Assignment], t.Any]:
    if order_by == "title":
        return lambda a: a.title.lower()
    if order_by == "weight":
        return lambda a: a.weight
    if order_by == "created_at":
        return lambda a: a.created_at
    if order_by == "due_date":
        return lambda a: a.due_date
    raise InvalidInputError(f"Cannot order assignments by {order_by!r}")


class InMemoryCourseworkStore:
    """
    Thread-safe in-memory repository.
    In a real deployment this would be replaced with a persistent database.

    Assignments are returned as copies whose status and priority are
    re-derived for the current clock, so reads never report a state that
    time has already moved past.
    """

    def __init__(self, clock: t.Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._courses: dict[str, Course] = {}
        self._assignments: dict[str, Assignment] = {}
        self._sessions: dict[str, StudySession] = {}

    # -----------------------------
    # Courses
    # -----------------------------

    def add_course(self, course: Course) -> Course:
        _validate_course(course)
        with self._lock:
            if course.id and course.id in self._courses:
                raise InvalidInputError(f"Course id already exists: {course.id}")
            now = self._clock()
            stored = replace(course, id=course.id or _new_id(), created_at=now, updated_at=now)
            self._courses[stored.id] = stored
            logger.debug("Added course %s (%s)", stored.id, stored.name)
            return stored

    def get_course(self, course_id: str) -> Course:
        with self._lock:
            try:
                return self._courses[course_id]
            except KeyError:
                raise NotFoundError("Course", course_id)

    def list_courses(self, active_only: bool = False) -> list[Course]:
        with self._lock:
            courses = list(self._courses.values())
        if active_only:
            courses = [c for c in courses if c.is_active]
        return sorted(courses, key=lambda c: c.created_at)

    def update_course(self, course_id: str, **changes: t.Any) -> Course:
        _check_changes(changes, _COURSE_FIELDS, "course")
        with self._lock:
            course = self.get_course(course_id)
            updated = replace(course, **changes, updated_at=self._clock())
            _validate_course(updated)
            self._courses[course_id] = updated
            return updated

    def delete_course(self, course_id: str) -> None:
        """Delete a course with its assignments and study sessions."""
        with self._lock:
            self.get_course(course_id)
            del self._courses[course_id]
            orphaned = [a.id for a in self._assignments.values() if a.course_id == course_id]
            for assignment_id in orphaned:
                del self._assignments[assignment_id]
            sessions = [s.id for s in self._sessions.values() if s.course_id == course_id]
            for session_id in sessions:
                del self._sessions[session_id]
            logger.debug(
                "Deleted course %s, %d assignment(s) and %d study session(s)",
                course_id, len(orphaned), len(sessions),
            )

    # -----------------------------
    # Assignments
    # -----------------------------

    def _stored_assignment(self, assignment_id: str) -> Assignment:
        try:
            return self._assignments[assignment_id]
        except KeyError:
            raise NotFoundError("Assignment", assignment_id)

    def _store_new(self, assignment: Assignment, now: datetime) -> Assignment:
        _validate_assignment(assignment)
        if assignment.id and assignment.id in self._assignments:
            raise InvalidInputError(f"Assignment id already exists: {assignment.id}")
        self.get_course(assignment.course_id)
        stored = replace(assignment, id=assignment.id or _new_id(), created_at=now)
        refresh(stored, now)
        self._assignments[stored.id] = stored
        return replace(stored)

    def add_assignment(self, assignment: Assignment) -> Assignment:
        with self._lock:
            return self._store_new(assignment, self._clock())

    def add_assignments(self, assignments: t.Iterable[Assignment]) -> list[Assignment]:
        """Add several assignments; nothing is stored if any of them is invalid."""
        with self._lock:
            now = self._clock()
            snapshot = dict(self._assignments)
            try:
                return [self._store_new(a, now) for a in assignments]
            except Exception:
                self._assignments = snapshot
                raise

    def get_assignment(self, assignment_id: str) -> Assignment:
        with self._lock:
            stored = self._stored_assignment(assignment_id)
            return rederive(replace(stored), self._clock())

    def list_assignments(self, query: AssignmentQuery = AssignmentQuery()) -> list[Assignment]:
        now = self._clock()
        with self._lock:
            items = [rederive(replace(a), now) for a in self._assignments.values()]

        if query.course_id is not None:
            items = [a for a in items if a.course_id == query.course_id]
        if query.status == "completed":
            items = [a for a in items if a.completed]
        elif query.status == "pending":
            items = [a for a in items if not a.completed]
        elif query.status == "overdue":
            items = [a for a in items if a.status == "overdue"]
        if query.priority is not None:
            items = [a for a in items if a.priority == query.priority]

        items.sort(key=_sort_key(query.order_by), reverse=not query.ascending)
        if query.limit is not None:
            items = items[: max(0, query.limit)]
        return items

    def update_assignment(self, assignment_id: str, **changes: t.Any) -> Assignment:
        _check_changes(changes, _ASSIGNMENT_FIELDS, "assignment")
        if "priority" in changes:
            changes.setdefault("priority_locked", True)
        with self._lock:
            current = self._stored_assignment(assignment_id)
            updated = replace(current, **changes)
            _validate_assignment(updated)
            if updated.course_id != current.course_id:
                self.get_course(updated.course_id)
                for session in self._sessions.values():
                    if session.assignment_id == assignment_id:
                        session.course_id = updated.course_id
            refresh(updated, self._clock())
            self._assignments[assignment_id] = updated
            return replace(updated)

    def delete_assignment(self, assignment_id: str) -> None:
        """Delete an assignment; its study sessions stay with the course."""
        with self._lock:
            self._stored_assignment(assignment_id)
            del self._assignments[assignment_id]
            for session in self._sessions.values():
                if session.assignment_id == assignment_id:
                    session.assignment_id = None

    # -----------------------------
    # Study sessions
    # -----------------------------

    def _link_session(self, session: StudySession) -> None:
        """Check the course and assignment references, filling in the course from the assignment."""
        if session.assignment_id is not None:
            assignment = self._stored_assignment(session.assignment_id)
            if session.course_id is None:
                session.course_id = assignment.course_id
            elif session.course_id != assignment.course_id:
                raise InvalidInputError(
                    f"Assignment {assignment.id} belongs to course {assignment.course_id}, "
                    f"not {session.course_id}"
                )
        elif session.course_id is not None:
            self.get_course(session.course_id)

    def _credit_assignment(self, session: StudySession, now: datetime) -> None:
        if session.assignment_id is None:
            return
        credited = replace(self._stored_assignment(session.assignment_id))
        credited.actual_minutes += session.actual_minutes
        self._assignments[credited.id] = refresh(credited, now)
        logger.debug(
            "Credited %d minute(s) from session %s to assignment %s",
            session.actual_minutes, session.id, credited.id,
        )

    def add_study_session(self, session: StudySession) -> StudySession:
        """Store a session; a completed one is credited to its assignment."""
        _validate_session(session)
        with self._lock:
            if session.id and session.id in self._sessions:
                raise InvalidInputError(f"Study session id already exists: {session.id}")
            now = self._clock()
            stored = replace(session, id=session.id or _new_id(), created_at=now, updated_at=now)
            stored.start_time = as_utc(stored.start_time)
            stored.end_time = as_utc(stored.end_time)
            stored.actual_minutes = session_minutes(stored)
            self._link_session(stored)
            if stored.completed:
                self._credit_assignment(stored, now)
            self._sessions[stored.id] = stored
            return replace(stored)

    def get_study_session(self, session_id: str) -> StudySession:
        with self._lock:
            try:
                return replace(self._sessions[session_id])
            except KeyError:
                raise NotFoundError("Study session", session_id)

    def list_study_sessions(
        self,
        course_id: t.Optional[str] = None,
        assignment_id: t.Optional[str] = None,
        start: t.Optional[datetime] = None,
        end: t.Optional[datetime] = None,
    ) -> list[StudySession]:
        """Sessions ordered by start time; ``start``/``end`` bound the start time inclusively."""
        with self._lock:
            sessions = [replace(s) for s in self._sessions.values()]

        if course_id is not None:
            sessions = [s for s in sessions if s.course_id == course_id]
        if assignment_id is not None:
            sessions = [s for s in sessions if s.assignment_id == assignment_id]
        if start is not None:
            sessions = [s for s in sessions if s.start_time >= as_utc(start)]
        if end is not None:
            sessions = [s for s in sessions if s.start_time <= as_utc(end)]
        return sorted(sessions, key=lambda s: s.start_time)

    def update_study_session(self, session_id: str, **changes: t.Any) -> StudySession:
        """
        Update a session. Moving its start or end recomputes the minutes
        unless new minutes are given. Minutes are credited to the assignment
        once, when the session changes to completed.
        """
        _check_changes(changes, _SESSION_FIELDS, "study session")
        if {"start_time", "end_time"} & set(changes):
            changes.setdefault("actual_minutes", None)
        with self._lock:
            current = self.get_study_session(session_id)
            updated = replace(current, **changes)
            _validate_session(updated)
            now = self._clock()
            updated.start_time = as_utc(updated.start_time)
            updated.end_time = as_utc(updated.end_time)
            updated.actual_minutes = session_minutes(updated)
            updated.updated_at = now
            if "assignment_id" in changes and "course_id" not in changes:
                updated.course_id = None if updated.assignment_id else current.course_id
            self._link_session(updated)
            if updated.completed and not current.completed:
                self._credit_assignment(updated, now)
            self._sessions[session_id] = updated
            return replace(updated)

    def delete_study_session(self, session_id: str) -> None:
        with self._lock:
            self.get_study_session(session_id)
            del self._sessions[session_id]
