# -*- coding: utf-8 -*-
"""Tests for study session storage and study statistics."""
from datetime import date, datetime, timedelta, timezone

import pytest

from coursework_store import (
    Assignment,
    Course,
    InMemoryCourseworkStore,
    StudySession,
    StudyTally,
    day_streaks,
    study_stats,
)
from services.shared.errors import InvalidInputError, NotFoundError

from conftest import NOW


def _session(start: datetime, minutes: int = 25, **fields) -> StudySession:
    return StudySession(start_time=start, end_time=start + timedelta(minutes=minutes), **fields)


@pytest.fixture
def assignment(store: InMemoryCourseworkStore, course: Course) -> Assignment:
    return store.add_assignment(
        Assignment(course_id=course.id, title="Homework 1", due_date=NOW + timedelta(days=3))
    )


def test_minutes_default_to_elapsed_time(store: InMemoryCourseworkStore) -> None:
    stored = store.add_study_session(_session(NOW, minutes=50))
    assert stored.id
    assert stored.actual_minutes == 50
    assert stored.created_at == NOW


def test_recorded_minutes_win(store: InMemoryCourseworkStore) -> None:
    assert store.add_study_session(_session(NOW, minutes=50, actual_minutes=40)).actual_minutes == 40


def test_course_comes_from_assignment(store: InMemoryCourseworkStore, course: Course, assignment: Assignment) -> None:
    stored = store.add_study_session(_session(NOW, assignment_id=assignment.id))
    assert stored.course_id == course.id


def test_assignment_must_belong_to_course(store: InMemoryCourseworkStore, assignment: Assignment) -> None:
    other = store.add_course(Course(name="History"))
    with pytest.raises(InvalidInputError, match="belongs to course"):
        store.add_study_session(_session(NOW, course_id=other.id, assignment_id=assignment.id))


def test_unknown_references(store: InMemoryCourseworkStore) -> None:
    with pytest.raises(NotFoundError):
        store.add_study_session(_session(NOW, course_id="missing"))
    with pytest.raises(NotFoundError):
        store.add_study_session(_session(NOW, assignment_id="missing"))
    assert store.list_study_sessions() == []


@pytest.mark.parametrize(
    "fields",
    [
        {"end_time": NOW - timedelta(minutes=1)},
        {"productivity": 0},
        {"productivity": 6},
        {"planned_minutes": 0},
        {"actual_minutes": -1},
        {"distractions": -1},
        {"session_type": "nap"},
    ],
)
def test_invalid_sessions(store: InMemoryCourseworkStore, fields: dict) -> None:
    session = _session(NOW)
    for name, value in fields.items():
        setattr(session, name, value)
    with pytest.raises(InvalidInputError):
        store.add_study_session(session)


def test_completed_session_credits_assignment(store: InMemoryCourseworkStore, assignment: Assignment) -> None:
    store.add_study_session(_session(NOW, minutes=30, assignment_id=assignment.id, completed=True))
    credited = store.get_assignment(assignment.id)
    assert credited.actual_minutes == 30
    assert credited.status == "in-progress"


def test_unfinished_session_is_not_credited(store: InMemoryCourseworkStore, assignment: Assignment) -> None:
    store.add_study_session(_session(NOW, minutes=30, assignment_id=assignment.id))
    assert store.get_assignment(assignment.id).actual_minutes == 0


def test_completing_later_credits_once(store: InMemoryCourseworkStore, assignment: Assignment) -> None:
    session = store.add_study_session(_session(NOW, minutes=20, assignment_id=assignment.id))

    store.update_study_session(session.id, completed=True)
    store.update_study_session(session.id, notes="finished the proofs")
    store.update_study_session(session.id, completed=True)

    assert store.get_assignment(assignment.id).actual_minutes == 20


def test_moving_end_time_recomputes_minutes(store: InMemoryCourseworkStore) -> None:
    session = store.add_study_session(_session(NOW, minutes=25))
    updated = store.update_study_session(session.id, end_time=NOW + timedelta(minutes=45))
    assert updated.actual_minutes == 45
    assert updated.updated_at == NOW


def test_update_rejects_unknown_and_bad_fields(store: InMemoryCourseworkStore) -> None:
    session = store.add_study_session(_session(NOW))
    with pytest.raises(InvalidInputError):
        store.update_study_session(session.id, mood="great")
    with pytest.raises(InvalidInputError):
        store.update_study_session(session.id, start_time=None)
    assert store.get_study_session(session.id).start_time == NOW


def test_list_filters_and_orders(store: InMemoryCourseworkStore, course: Course, assignment: Assignment) -> None:
    later = store.add_study_session(_session(NOW + timedelta(days=2), course_id=course.id))
    earlier = store.add_study_session(_session(NOW, assignment_id=assignment.id))
    loose = store.add_study_session(_session(NOW + timedelta(days=1)))

    def ids(**query) -> list[str]:
        return [s.id for s in store.list_study_sessions(**query)]

    assert ids() == [earlier.id, loose.id, later.id]
    assert ids(course_id=course.id) == [earlier.id, later.id]
    assert ids(assignment_id=assignment.id) == [earlier.id]
    assert ids(start=NOW + timedelta(days=1), end=NOW + timedelta(days=1)) == [loose.id]


def test_deleting_assignment_keeps_its_sessions(
    store: InMemoryCourseworkStore, course: Course, assignment: Assignment
) -> None:
    session = store.add_study_session(_session(NOW, assignment_id=assignment.id))
    store.delete_assignment(assignment.id)

    kept = store.get_study_session(session.id)
    assert kept.assignment_id is None
    assert kept.course_id == course.id


def test_deleting_course_removes_its_sessions(store: InMemoryCourseworkStore, course: Course) -> None:
    session = store.add_study_session(_session(NOW, course_id=course.id))
    store.delete_course(course.id)
    with pytest.raises(NotFoundError):
        store.get_study_session(session.id)


def test_moving_assignment_moves_its_sessions(
    store: InMemoryCourseworkStore, assignment: Assignment
) -> None:
    other = store.add_course(Course(name="History"))
    session = store.add_study_session(_session(NOW, assignment_id=assignment.id))
    store.update_assignment(assignment.id, course_id=other.id)
    assert store.get_study_session(session.id).course_id == other.id


def test_delete_session(store: InMemoryCourseworkStore) -> None:
    session = store.add_study_session(_session(NOW))
    store.delete_study_session(session.id)
    with pytest.raises(NotFoundError):
        store.delete_study_session(session.id)


@pytest.mark.parametrize(
    ("days", "streaks"),
    [
        ([], (0, 0)),
        ([1], (1, 1)),
        ([1, 2, 3, 5, 6], (2, 3)),
        ([1, 3, 4, 5, 6], (4, 4)),
        ([2, 1, 2], (2, 2)),
    ],
)
def test_day_streaks(days: list[int], streaks: tuple[int, int]) -> None:
    assert day_streaks(date(2024, 9, day) for day in days) == streaks


def test_study_stats(store: InMemoryCourseworkStore, course: Course) -> None:
    day = timedelta(days=1)
    store.add_study_session(_session(NOW, minutes=25, course_id=course.id, completed=True, productivity=4))
    store.add_study_session(_session(NOW + timedelta(hours=2), minutes=5, session_type="break", completed=True))
    store.add_study_session(_session(NOW + day, minutes=50, course_id=course.id, productivity=2, distractions=3))
    store.add_study_session(_session(NOW + 3 * day, minutes=30, course_id=course.id, completed=True))

    stats = study_stats(store)

    assert stats.total_sessions == 4
    assert stats.total_minutes == 110
    assert stats.completed_sessions == 3
    assert stats.pomodoros_completed == 2
    assert stats.average_session_minutes == 28
    assert stats.average_productivity == 3.0
    assert stats.total_distractions == 3
    assert stats.sessions_by_course == {course.id: StudyTally(count=3, total_minutes=105)}
    assert stats.sessions_by_day == {
        "2024-09-01": StudyTally(count=2, total_minutes=30),
        "2024-09-02": StudyTally(count=1, total_minutes=50),
        "2024-09-04": StudyTally(count=1, total_minutes=30),
    }
    assert (stats.current_streak, stats.longest_streak) == (1, 2)


def test_study_stats_window_and_course(store: InMemoryCourseworkStore, course: Course) -> None:
    store.add_study_session(_session(NOW, minutes=25, course_id=course.id))
    store.add_study_session(_session(NOW + timedelta(days=7), minutes=45, course_id=course.id))
    store.add_study_session(_session(NOW, minutes=60))

    assert study_stats(store, course_id=course.id).total_minutes == 70
    assert study_stats(store, start=NOW + timedelta(days=1)).total_minutes == 45
    with pytest.raises(NotFoundError):
        study_stats(store, course_id="missing")


def test_study_stats_empty(store: InMemoryCourseworkStore) -> None:
    stats = study_stats(store)
    assert (stats.total_sessions, stats.average_session_minutes, stats.current_streak) == (0, 0, 0)


def test_day_is_taken_in_utc(store: InMemoryCourseworkStore) -> None:
    late_evening = datetime(2024, 9, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    store.add_study_session(_session(late_evening))
    assert list(study_stats(store).sessions_by_day) == ["2024-09-02"]
