"""
Grade projection and what-if calculation.

All percentages are on a 0-100 scale. Weights are percent of the course grade
and are expected to sum to 100; a different sum is logged and flagged on the
snapshot but never rejected.
"""
from __future__ import annotations

import logging
import math
import typing as t
from collections.abc import Mapping

from services.shared.errors import InvalidInputError

from .models import GradeItem, GradeSnapshot, RequiredGrade, ScenarioSpec, WhatIfScenario

logger = logging.getLogger(__name__)

FULL_WEIGHT = 100.0

DEFAULT_SCENARIOS: tuple[ScenarioSpec, ...] = (
    ScenarioSpec("Perfect Scores", 1.00, "If you get 100% on all remaining assignments"),
    ScenarioSpec("Good Performance", 0.85, "If you maintain 85% on remaining work"),
    ScenarioSpec("Average Performance", 0.75, "If you maintain 75% on remaining work"),
    ScenarioSpec("Minimum Passing", 0.60, "If you get 60% on remaining work"),
)


def _number(value: t.Any, label: str) -> float:
    if isinstance(value, bool):
        raise InvalidInputError(f"{label} must be a number, got a boolean")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{label} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise InvalidInputError(f"{label} must be finite, got {value!r}")
    return number


def _coerce_item(raw: t.Any, index: int) -> GradeItem:
    """Accept a GradeItem or a mapping with the same keys."""
    if isinstance(raw, GradeItem):
        item = raw
    elif isinstance(raw, Mapping):
        if "weight" not in raw:
            raise InvalidInputError(f"Grade item {index} has no weight")
        item = GradeItem(
            id=str(raw.get("id", index)),
            name=str(raw.get("name", "") or ""),
            weight=raw["weight"],
            score=raw.get("score"),
            max_score=raw.get("max_score", 100.0),
        )
    else:
        raise InvalidInputError(f"Grade item {index} must be a GradeItem or mapping, got {type(raw).__name__}")

    weight = _number(item.weight, f"weight of grade item {index}")
    max_score = _number(item.max_score, f"max_score of grade item {index}")
    score = None if item.score is None else _number(item.score, f"score of grade item {index}")

    if weight < 0:
        raise InvalidInputError(f"Grade item {index} has a negative weight")
    if max_score <= 0:
        raise InvalidInputError(f"Grade item {index} must have a positive max_score")

    return GradeItem(id=item.id, name=item.name, weight=weight, score=score, max_score=max_score)


def validate_items(items: t.Any) -> list[GradeItem]:
    """Check and normalise the projector input."""
    if not isinstance(items, (list, tuple)):
        raise InvalidInputError(f"Grade items must be a list, got {type(items).__name__}")
    return [_coerce_item(raw, index) for index, raw in enumerate(items)]


def earned_points(items: t.Iterable[GradeItem]) -> float:
    """Weighted percentage points already banked by graded items."""
    return sum(item.score * item.weight / item.max_score for item in items if item.score is not None)


def current_grade(earned: float, completed_weight: float) -> t.Optional[float]:
    """Average on graded work only; None until something is graded."""
    if completed_weight <= 0:
        return None
    return earned * FULL_WEIGHT / completed_weight


def build_scenarios(
    earned: float,
    remaining_weight: float,
    specs: t.Iterable[ScenarioSpec] = DEFAULT_SCENARIOS,
) -> list[WhatIfScenario]:
    """Projected grades for fixed performance levels on the remaining weight."""
    return [
        WhatIfScenario(
            name=spec.name,
            multiplier=spec.multiplier,
            projected_grade=earned + spec.multiplier * FULL_WEIGHT * (remaining_weight / FULL_WEIGHT),
            description=spec.description,
        )
        for spec in specs
    ]


def project(
    items: t.Sequence[GradeItem],
    target_grade: float = 90.0,
    scenarios: t.Iterable[ScenarioSpec] = DEFAULT_SCENARIOS,
) -> GradeSnapshot:
    """
    Compute current, projected and required grades for a course.

    The current grade is normalised by the weight graded so far. The remaining
    weight is ``100 - completed weight``. A required grade, per-item
    requirements and scenarios are only produced when at least one item is
    still ungraded and some weight remains.

    :param items: Grade items (GradeItem instances or equivalent mappings).
    :param target_grade: Desired final course percentage.
    :param scenarios: Performance levels to project.
    :return: A fresh GradeSnapshot.
    :raises InvalidInputError: On non-list input, negative weights,
        non-positive max scores or non-numeric values.
    """
    checked = validate_items(items)
    target = _number(target_grade, "target_grade")

    graded = [item for item in checked if item.graded]
    ungraded = [item for item in checked if not item.graded]

    earned = earned_points(graded)
    completed_weight = sum(item.weight for item in graded)
    total_weight = sum(item.weight for item in checked)
    remaining_weight = FULL_WEIGHT - completed_weight

    weights_balanced = not checked or math.isclose(total_weight, FULL_WEIGHT, abs_tol=1e-9)
    if not weights_balanced:
        logger.warning("Grade weights sum to %.2f%%, not 100%%; projections are skewed", total_weight)

    current = current_grade(earned, completed_weight)
    projected = None if current is None else earned + (current / FULL_WEIGHT) * remaining_weight

    snapshot = GradeSnapshot(
        target_grade=target,
        current_grade=current,
        projected_grade=projected,
        earned_points=earned,
        completed_weight=completed_weight,
        remaining_weight=remaining_weight,
        total_weight=total_weight,
        weights_balanced=weights_balanced,
    )

    if ungraded and remaining_weight > 0:
        raw_required = (target - earned) * FULL_WEIGHT / remaining_weight
        required = min(FULL_WEIGHT, max(0.0, raw_required))
        snapshot.required_grade_unclamped = raw_required
        snapshot.required_grade_on_remaining = required
        snapshot.target_achievable = raw_required <= FULL_WEIGHT
        snapshot.required_by_item = [
            RequiredGrade(item_id=item.id, name=item.name, required_grade=required)
            for item in ungraded
            if item.weight > 0
        ]
        snapshot.scenarios = build_scenarios(earned, remaining_weight, scenarios)

    return snapshot
