"""Display-oriented view of a GradeSnapshot: plain dicts with letters and badges."""
from __future__ import annotations

import typing as t
from dataclasses import asdict

from .letters import grade_badge, letter_grade, optional_letter
from .models import GradeSnapshot


def snapshot_to_dict(snapshot: GradeSnapshot) -> dict[str, t.Any]:
    """
    Flatten a snapshot to JSON-friendly data, adding letter grades and badge
    classes for the current and projected grades and for every scenario.
    """
    data = asdict(snapshot)
    data["current_letter"] = optional_letter(snapshot.current_grade)
    data["projected_letter"] = optional_letter(snapshot.projected_grade)
    data["current_badge"] = None if snapshot.current_grade is None else grade_badge(snapshot.current_grade)
    data["projected_badge"] = None if snapshot.projected_grade is None else grade_badge(snapshot.projected_grade)
    for scenario in data["scenarios"]:
        scenario["letter_grade"] = letter_grade(scenario["projected_grade"])
    return data


def _fmt(value: t.Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.1f}%"


def summary_rows(snapshot: GradeSnapshot) -> list[tuple[str, str]]:
    """Label/value pairs for a compact text or table rendering."""
    rows = [
        ("Current grade", _fmt(snapshot.current_grade)),
        ("Projected grade", _fmt(snapshot.projected_grade)),
        ("Target", _fmt(snapshot.target_grade)),
        ("Completed weight", _fmt(snapshot.completed_weight)),
        ("Remaining weight", _fmt(snapshot.remaining_weight)),
    ]
    if snapshot.current_grade is not None:
        rows[0] = ("Current grade", f"{_fmt(snapshot.current_grade)} ({letter_grade(snapshot.current_grade)})")
    if snapshot.required_grade_on_remaining is not None:
        needed = _fmt(snapshot.required_grade_on_remaining)
        if not snapshot.target_achievable:
            needed += " (target not reachable)"
        rows.append(("Needed on remaining", needed))
    if not snapshot.weights_balanced:
        rows.append(("Warning", f"weights sum to {snapshot.total_weight:.1f}%, not 100%"))
    return rows
