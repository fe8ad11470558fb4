"""Current/projected/required grade calculation and letter-grade mapping."""

from .letters import grade_badge, letter_grade
from .models import GradeItem, GradeSnapshot, RequiredGrade, ScenarioSpec, WhatIfScenario
from .projector import DEFAULT_SCENARIOS, project
from .report import snapshot_to_dict, summary_rows

__all__ = [
    "DEFAULT_SCENARIOS",
    "GradeItem",
    "GradeSnapshot",
    "RequiredGrade",
    "ScenarioSpec",
    "WhatIfScenario",
    "grade_badge",
    "letter_grade",
    "project",
    "snapshot_to_dict",
    "summary_rows",
]
