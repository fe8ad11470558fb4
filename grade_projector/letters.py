from __future__ import annotations

from typing import List, Literal, Optional, Tuple

GradeBadge = Literal["success", "info", "warning", "danger"]

# (minimum percentage, letter), highest first
LETTER_SCALE: List[Tuple[float, str]] = [
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (67, "D+"),
    (63, "D"),
    (60, "D-"),
]
FAILING_LETTER = "F"

BADGE_SCALE: List[Tuple[float, GradeBadge]] = [
    (90, "success"),
    (80, "info"),
    (70, "warning"),
]


def letter_grade(percentage: float) -> str:
    """Map a percentage to a letter grade using fixed breakpoints."""
    for minimum, letter in LETTER_SCALE:
        if percentage >= minimum:
            return letter
    return FAILING_LETTER


def grade_badge(percentage: float) -> GradeBadge:
    """Colour class used when displaying a percentage."""
    for minimum, badge in BADGE_SCALE:
        if percentage >= minimum:
            return badge
    return "danger"


def optional_letter(percentage: Optional[float]) -> Optional[str]:
    return None if percentage is None else letter_grade(percentage)
