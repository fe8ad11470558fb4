"""
Data models for grade projection.

GradeItem is the input; GradeSnapshot is recomputed from scratch on every
change and has no lifecycle of its own.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GradeItem:
    """
    One weighted, gradable piece of coursework.
    """
    id: str
    name: str
    weight: float                   # percent of the course grade
    score: Optional[float] = None   # None = not graded yet
    max_score: float = 100.0

    @property
    def graded(self) -> bool:
        return self.score is not None


@dataclass(frozen=True)
class ScenarioSpec:
    """A fixed performance level to try on all remaining work."""
    name: str
    multiplier: float
    description: str = ""


@dataclass
class WhatIfScenario:
    """Projected course grade if remaining work scores ``multiplier`` x 100%."""
    name: str
    multiplier: float
    projected_grade: float
    description: str = ""


@dataclass
class RequiredGrade:
    """Average needed on an ungraded item to reach the target."""
    item_id: str
    name: str
    required_grade: float


@dataclass
class GradeSnapshot:
    """
    Display-ready summary of a course's grade position.
    """
    target_grade: float
    current_grade: Optional[float] = None
    projected_grade: Optional[float] = None
    required_grade_on_remaining: Optional[float] = None   # clamped to [0, 100]
    required_grade_unclamped: Optional[float] = None      # > 100 means unreachable
    target_achievable: Optional[bool] = None
    earned_points: float = 0.0
    completed_weight: float = 0.0
    remaining_weight: float = 100.0
    total_weight: float = 0.0
    weights_balanced: bool = True
    scenarios: List[WhatIfScenario] = field(default_factory=list)
    required_by_item: List[RequiredGrade] = field(default_factory=list)
