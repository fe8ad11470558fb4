"""
FastAPI service for course and assignment management.

Wraps the coursework repository with REST endpoints: CRUD for courses,
assignments and study sessions, confirmation of reviewed syllabus extractions,
course and study statistics, and grade projections built from stored
assignments.
"""
from __future__ import annotations

import logging
import typing as t
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, Query, Response

from coursework_store import (
    AssignmentQuery,
    CourseworkRepository,
    InMemoryCourseworkStore,
    course_stats,
    grade_items_for_course,
    import_candidates,
    study_stats,
)
from coursework_store.models import Assignment, Course, StudySession
from grade_projector import project, snapshot_to_dict
from services.shared.config import COURSEWORK_SERVICE_PORT, HOST, configure_logging
from services.shared.errors import InvalidInputError, NotFoundError
from services.shared.models import (
    Assignment as PydanticAssignment,
    ConfirmSyllabusRequest,
    Course as PydanticCourse,
    CourseStats as PydanticCourseStats,
    CreateAssignmentRequest,
    CreateAssignmentsBulkRequest,
    CreateCourseRequest,
    CreateStudySessionRequest,
    GradeProjection,
    Priority,
    StudySession as PydanticStudySession,
    StudyStats as PydanticStudyStats,
    UpdateAssignmentRequest,
    UpdateCourseRequest,
    UpdateStudySessionRequest,
)
from syllabus_extractor.models import AssignmentCandidate, GradeBreakdownEntry

logger = logging.getLogger(__name__)

# In a distributed system, this would be replaced with a persistent database
store: CourseworkRepository = InMemoryCourseworkStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    configure_logging()
    logger.info("Coursework service starting")
    yield


app = FastAPI(
    title="Coursework Service",
    description="REST API for courses, assignments and grade tracking",
    version="1.0.0",
    lifespan=lifespan,
)


def _raise_http(error: Exception, action: str) -> t.NoReturn:
    """Translate a core error into the matching HTTP status."""
    if isinstance(error, NotFoundError):
        raise HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidInputError):
        raise HTTPException(status_code=400, detail=str(error))
    raise HTTPException(status_code=500, detail=f"Error {action}: {str(error)}")


def _breakdown(entries: t.Iterable[t.Any]) -> list[GradeBreakdownEntry]:
    return [GradeBreakdownEntry(category=e.category, weight=e.weight) for e in entries]


def _new_assignment(request: CreateAssignmentRequest) -> Assignment:
    fields = request.model_dump(exclude={"priority"})
    if request.priority is not None:
        return Assignment(**fields, priority=request.priority, priority_locked=True)
    return Assignment(**fields)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "coursework-service"}


# -----------------------------
# Courses
# -----------------------------

@app.post("/courses", response_model=PydanticCourse, status_code=201)
async def create_course(request: CreateCourseRequest) -> PydanticCourse:
    try:
        fields = request.model_dump(exclude={"year", "grade_breakdown"})
        course = Course(**fields, grade_breakdown=_breakdown(request.grade_breakdown))
        if request.year is not None:
            course.year = request.year
        return PydanticCourse.model_validate(store.add_course(course))

    except Exception as e:
        _raise_http(e, "creating course")


@app.get("/courses", response_model=list[PydanticCourse])
async def list_courses(active_only: bool = False) -> list[PydanticCourse]:
    return [PydanticCourse.model_validate(c) for c in store.list_courses(active_only=active_only)]


@app.get("/courses/{course_id}", response_model=PydanticCourse)
async def get_course(course_id: str) -> PydanticCourse:
    try:
        return PydanticCourse.model_validate(store.get_course(course_id))
    except Exception as e:
        _raise_http(e, "fetching course")


@app.patch("/courses/{course_id}", response_model=PydanticCourse)
async def update_course(course_id: str, request: UpdateCourseRequest) -> PydanticCourse:
    """
    Update a course. Fields that are sent replace the stored ones; a null
    for a field that needs a value is rejected with 400 and nothing changes.
    """
    try:
        changes = request.model_dump(exclude_unset=True, exclude={"grade_breakdown"})
        if "grade_breakdown" in request.model_fields_set:
            entries = request.grade_breakdown
            changes["grade_breakdown"] = None if entries is None else _breakdown(entries)
        return PydanticCourse.model_validate(store.update_course(course_id, **changes))

    except Exception as e:
        _raise_http(e, "updating course")


@app.delete("/courses/{course_id}", status_code=204)
async def delete_course(course_id: str) -> Response:
    """Delete a course together with its assignments."""
    try:
        store.delete_course(course_id)
    except Exception as e:
        _raise_http(e, "deleting course")
    return Response(status_code=204)


@app.post("/courses/{course_id}/syllabus:confirm", response_model=list[PydanticAssignment])
async def confirm_syllabus(course_id: str, request: ConfirmSyllabusRequest) -> list[PydanticAssignment]:
    """
    Store reviewed syllabus candidates as assignments of a course.

    Candidates still missing a title or due date are skipped. A non-empty
    grade breakdown replaces the one stored on the course.
    """
    try:
        candidates = [AssignmentCandidate(**c.model_dump()) for c in request.assignments]
        created = import_candidates(
            store,
            course_id,
            candidates,
            grade_breakdown=_breakdown(request.grade_breakdown),
            syllabus_file_name=request.syllabus_file_name,
        )
        return [PydanticAssignment.model_validate(a) for a in created]

    except Exception as e:
        _raise_http(e, "importing syllabus")


@app.get("/courses/{course_id}/stats", response_model=PydanticCourseStats)
async def get_course_stats(course_id: str) -> PydanticCourseStats:
    try:
        return PydanticCourseStats.model_validate(course_stats(store, course_id))
    except Exception as e:
        _raise_http(e, "computing course stats")


@app.get("/courses/{course_id}/grades", response_model=GradeProjection)
async def get_course_grades(course_id: str, target_grade: t.Optional[float] = None) -> GradeProjection:
    """
    Project the course grade from its stored assignments.
    The target defaults to the course's own target grade.
    """
    try:
        course = store.get_course(course_id)
        target = course.target_grade if target_grade is None else target_grade
        snapshot = project(grade_items_for_course(store, course_id), target_grade=target)
        return GradeProjection(**snapshot_to_dict(snapshot))

    except Exception as e:
        _raise_http(e, "projecting course grades")


# -----------------------------
# Assignments
# -----------------------------

@app.post("/assignments", response_model=PydanticAssignment, status_code=201)
async def create_assignment(request: CreateAssignmentRequest) -> PydanticAssignment:
    try:
        return PydanticAssignment.model_validate(store.add_assignment(_new_assignment(request)))
    except Exception as e:
        _raise_http(e, "creating assignment")


@app.post("/assignments/bulk", response_model=list[PydanticAssignment], status_code=201)
async def create_assignments_bulk(request: CreateAssignmentsBulkRequest) -> list[PydanticAssignment]:
    """
    Create multiple assignments at once; nothing is stored if any one fails.
    """
    try:
        created = store.add_assignments(_new_assignment(a) for a in request.assignments)
        return [PydanticAssignment.model_validate(a) for a in created]

    except Exception as e:
        _raise_http(e, "creating assignments in bulk")


@app.get("/assignments", response_model=list[PydanticAssignment])
async def list_assignments(
    course_id: t.Optional[str] = None,
    status: t.Optional[t.Literal["completed", "pending", "overdue"]] = None,
    priority: t.Optional[Priority] = None,
    order_by: t.Literal["due_date", "created_at", "title", "weight"] = "due_date",
    ascending: bool = True,
    limit: t.Optional[int] = Query(default=None, ge=0),
) -> list[PydanticAssignment]:
    """
    List assignments, filtered by course, status and priority.
    """
    query = AssignmentQuery(
        course_id=course_id,
        status=status,
        priority=priority,
        order_by=order_by,
        ascending=ascending,
        limit=limit,
    )
    try:
        return [PydanticAssignment.model_validate(a) for a in store.list_assignments(query)]
    except Exception as e:
        _raise_http(e, "listing assignments")


@app.get("/assignments/{assignment_id}", response_model=PydanticAssignment)
async def get_assignment(assignment_id: str) -> PydanticAssignment:
    try:
        return PydanticAssignment.model_validate(store.get_assignment(assignment_id))
    except Exception as e:
        _raise_http(e, "fetching assignment")


@app.patch("/assignments/{assignment_id}", response_model=PydanticAssignment)
async def update_assignment(assignment_id: str, request: UpdateAssignmentRequest) -> PydanticAssignment:
    """
    Update an assignment. Status and priority are re-derived afterwards;
    an explicit priority is kept from then on. Null clears ``earned_score``
    and is rejected with 400 for fields that need a value.
    """
    try:
        changes = request.model_dump(exclude_unset=True)
        return PydanticAssignment.model_validate(store.update_assignment(assignment_id, **changes))
    except Exception as e:
        _raise_http(e, "updating assignment")


@app.delete("/assignments/{assignment_id}", status_code=204)
async def delete_assignment(assignment_id: str) -> Response:
    try:
        store.delete_assignment(assignment_id)
    except Exception as e:
        _raise_http(e, "deleting assignment")
    return Response(status_code=204)


# -----------------------------
# Study sessions
# -----------------------------

@app.post("/study-sessions", response_model=PydanticStudySession, status_code=201)
async def create_study_session(request: CreateStudySessionRequest) -> PydanticStudySession:
    """
    Log a study session. The course is taken from the assignment when only
    the assignment is given; a completed session adds its minutes to the
    assignment's actual_minutes.
    """
    try:
        session = StudySession(**request.model_dump())
        return PydanticStudySession.model_validate(store.add_study_session(session))
    except Exception as e:
        _raise_http(e, "creating study session")


@app.get("/study-sessions", response_model=list[PydanticStudySession])
async def list_study_sessions(
    course_id: t.Optional[str] = None,
    assignment_id: t.Optional[str] = None,
    start: t.Optional[datetime] = None,
    end: t.Optional[datetime] = None,
) -> list[PydanticStudySession]:
    """List study sessions by start time, optionally within [start, end]."""
    try:
        sessions = store.list_study_sessions(
            course_id=course_id, assignment_id=assignment_id, start=start, end=end
        )
        return [PydanticStudySession.model_validate(s) for s in sessions]
    except Exception as e:
        _raise_http(e, "listing study sessions")


@app.get("/study-sessions/stats", response_model=PydanticStudyStats)
async def get_study_stats(
    course_id: t.Optional[str] = None,
    start: t.Optional[datetime] = None,
    end: t.Optional[datetime] = None,
) -> PydanticStudyStats:
    try:
        return PydanticStudyStats.model_validate(study_stats(store, course_id=course_id, start=start, end=end))
    except Exception as e:
        _raise_http(e, "computing study stats")


@app.get("/study-sessions/{session_id}", response_model=PydanticStudySession)
async def get_study_session(session_id: str) -> PydanticStudySession:
    try:
        return PydanticStudySession.model_validate(store.get_study_session(session_id))
    except Exception as e:
        _raise_http(e, "fetching study session")


@app.patch("/study-sessions/{session_id}", response_model=PydanticStudySession)
async def update_study_session(session_id: str, request: UpdateStudySessionRequest) -> PydanticStudySession:
    try:
        changes = request.model_dump(exclude_unset=True)
        return PydanticStudySession.model_validate(store.update_study_session(session_id, **changes))
    except Exception as e:
        _raise_http(e, "updating study session")


@app.delete("/study-sessions/{session_id}", status_code=204)
async def delete_study_session(session_id: str) -> Response:
    try:
        store.delete_study_session(session_id)
    except Exception as e:
        _raise_http(e, "deleting study session")
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=COURSEWORK_SERVICE_PORT)
