# -*- coding: utf-8 -*-
"""Tests for grade projection."""
import logging

import pytest

from grade_projector import GradeItem, RequiredGrade, ScenarioSpec, project, snapshot_to_dict, summary_rows
from services.shared.errors import InvalidInputError


def _items() -> list[dict]:
    return [
        {"id": "hw", "name": "Homework", "weight": 40, "score": 90},
        {"id": "final", "name": "Final Exam", "weight": 60},
    ]


def test_half_graded_course() -> None:
    snapshot = project(_items(), target_grade=90)

    assert snapshot.earned_points == pytest.approx(36.0)
    assert snapshot.completed_weight == pytest.approx(40.0)
    assert snapshot.remaining_weight == pytest.approx(60.0)
    assert snapshot.current_grade == pytest.approx(90.0)
    assert snapshot.projected_grade == pytest.approx(90.0)
    assert snapshot.required_grade_on_remaining == pytest.approx(90.0)
    assert snapshot.target_achievable is True
    assert snapshot.weights_balanced is True
    assert snapshot.required_by_item == [RequiredGrade("final", "Final Exam", pytest.approx(90.0))]


def test_evenly_split_course() -> None:
    items = [
        GradeItem(id="a", name="Midterm", weight=50, score=90),
        GradeItem(id="b", name="Final", weight=50),
    ]
    snapshot = project(items, target_grade=90)

    assert snapshot.current_grade == pytest.approx(90.0)
    assert snapshot.remaining_weight == pytest.approx(50.0)
    assert snapshot.required_grade_on_remaining == pytest.approx(90.0)


def test_default_scenarios() -> None:
    snapshot = project(_items(), target_grade=90)
    assert [(s.name, s.projected_grade) for s in snapshot.scenarios] == [
        ("Perfect Scores", pytest.approx(96.0)),
        ("Good Performance", pytest.approx(87.0)),
        ("Average Performance", pytest.approx(81.0)),
        ("Minimum Passing", pytest.approx(72.0)),
    ]


def test_custom_scenarios() -> None:
    snapshot = project(_items(), scenarios=[ScenarioSpec("Half effort", 0.5)])
    [scenario] = snapshot.scenarios
    assert scenario.projected_grade == pytest.approx(66.0)


def test_unreachable_target_is_clamped() -> None:
    items = [
        GradeItem(id="a", name="Essay", weight=50, score=50),
        GradeItem(id="b", name="Exam", weight=50),
    ]
    snapshot = project(items, target_grade=90)

    assert snapshot.required_grade_unclamped == pytest.approx(130.0)
    assert snapshot.required_grade_on_remaining == 100.0
    assert snapshot.target_achievable is False


def test_target_already_secured_requires_zero() -> None:
    items = [
        GradeItem(id="a", name="Project", weight=95, score=100),
        GradeItem(id="b", name="Quiz", weight=5),
    ]
    snapshot = project(items, target_grade=90)
    assert snapshot.required_grade_on_remaining == 0.0
    assert snapshot.target_achievable is True


def test_scores_are_scaled_by_max_score() -> None:
    items = [
        GradeItem(id="a", name="Quiz", weight=20, score=45, max_score=50),
        GradeItem(id="b", name="Final", weight=80),
    ]
    snapshot = project(items)
    assert snapshot.earned_points == pytest.approx(18.0)
    assert snapshot.current_grade == pytest.approx(90.0)


def test_no_items() -> None:
    snapshot = project([])
    assert snapshot.current_grade is None
    assert snapshot.projected_grade is None
    assert snapshot.required_grade_on_remaining is None
    assert snapshot.target_achievable is None
    assert snapshot.scenarios == []
    assert snapshot.remaining_weight == 100.0
    assert snapshot.weights_balanced is True


def test_nothing_graded_yet() -> None:
    snapshot = project([GradeItem(id="a", name="Final", weight=100)], target_grade=85)
    assert snapshot.current_grade is None
    assert snapshot.projected_grade is None
    assert snapshot.required_grade_on_remaining == pytest.approx(85.0)
    assert len(snapshot.scenarios) == 4


def test_everything_graded() -> None:
    items = [
        GradeItem(id="a", name="Midterm", weight=50, score=80),
        GradeItem(id="b", name="Final", weight=50, score=100),
    ]
    snapshot = project(items)
    assert snapshot.current_grade == pytest.approx(90.0)
    assert snapshot.projected_grade == pytest.approx(90.0)
    assert snapshot.remaining_weight == pytest.approx(0.0)
    assert snapshot.required_grade_on_remaining is None
    assert snapshot.required_by_item == []
    assert snapshot.scenarios == []


def test_zero_weight_items_need_no_grade() -> None:
    items = [
        GradeItem(id="a", name="Survey", weight=0),
        GradeItem(id="b", name="Final", weight=100),
    ]
    snapshot = project(items)
    assert [r.item_id for r in snapshot.required_by_item] == ["b"]


def test_unbalanced_weights_are_flagged(caplog: pytest.LogCaptureFixture) -> None:
    items = [GradeItem(id="a", name="Midterm", weight=30, score=80), GradeItem(id="b", name="Final", weight=30)]
    with caplog.at_level(logging.WARNING, logger="grade_projector.projector"):
        snapshot = project(items)

    assert snapshot.weights_balanced is False
    assert snapshot.total_weight == pytest.approx(60.0)
    assert "not 100%" in caplog.text


@pytest.mark.parametrize(
    "items",
    [
        "not a list",
        [{"id": "a", "name": "x"}],
        [{"id": "a", "weight": -5}],
        [{"id": "a", "weight": 10, "max_score": 0}],
        [{"id": "a", "weight": True}],
        [{"id": "a", "weight": 10, "score": "ninety"}],
        [{"id": "a", "weight": float("nan")}],
        [42],
    ],
)
def test_invalid_items(items) -> None:
    with pytest.raises(InvalidInputError):
        project(items)


def test_invalid_target() -> None:
    with pytest.raises(InvalidInputError):
        project(_items(), target_grade="A")


def test_snapshot_to_dict_adds_letters() -> None:
    data = snapshot_to_dict(project(_items(), target_grade=90))
    assert data["current_letter"] == "A-"
    assert data["current_badge"] == "success"
    assert data["projected_letter"] == "A-"
    assert [s["letter_grade"] for s in data["scenarios"]] == ["A", "B+", "B-", "C-"]


def test_snapshot_to_dict_without_grades() -> None:
    data = snapshot_to_dict(project([]))
    assert data["current_letter"] is None
    assert data["current_badge"] is None


def test_summary_rows() -> None:
    rows = dict(summary_rows(project(_items(), target_grade=95)))
    assert rows["Current grade"] == "90.0% (A-)"
    assert rows["Needed on remaining"] == "98.3%"
