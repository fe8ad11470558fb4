"""Course, assignment and study session storage, lifecycle rules and syllabus import."""

from .importer import import_candidates
from .models import Assignment, AssignmentQuery, Course, CourseStats, StudySession, StudyStats, StudyTally
from .stats import course_stats, day_streaks, grade_items_for_course, study_stats
from .store import CourseworkRepository, InMemoryCourseworkStore

__all__ = [
    "Assignment",
    "AssignmentQuery",
    "Course",
    "CourseStats",
    "CourseworkRepository",
    "InMemoryCourseworkStore",
    "StudySession",
    "StudyStats",
    "StudyTally",
    "course_stats",
    "day_streaks",
    "grade_items_for_course",
    "import_candidates",
    "study_stats",
]
