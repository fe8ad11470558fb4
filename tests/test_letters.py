# -*- coding: utf-8 -*-
import pytest

from grade_projector import grade_badge, letter_grade
from grade_projector.letters import FAILING_LETTER, LETTER_SCALE


@pytest.mark.parametrize(
    ("percentage", "letter"),
    [
        (100, "A"),
        (93, "A"),
        (92.99, "A-"),
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
        (59.9, "F"),
        (0, "F"),
        (105, "A"),
    ],
)
def test_letter_grade(percentage: float, letter: str) -> None:
    assert letter_grade(percentage) == letter


@pytest.mark.parametrize(
    ("percentage", "badge"),
    [(95, "success"), (90, "success"), (85, "info"), (75, "warning"), (69.9, "danger")],
)
def test_grade_badge(percentage: float, badge: str) -> None:
    assert grade_badge(percentage) == badge


def test_letters_never_drop_as_percentage_rises() -> None:
    order = [letter for _, letter in LETTER_SCALE] + [FAILING_LETTER]
    ranks = [order.index(letter_grade(step / 10)) for step in range(0, 1001)]
    assert all(later <= earlier for earlier, later in zip(ranks, ranks[1:]))
