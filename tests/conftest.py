# -*- coding: utf-8 -*-
"""Shared fixtures for the taskflow test suite."""
from __future__ import annotations

import typing as t
from datetime import datetime, timezone

import pytest

from coursework_store import Course, InMemoryCourseworkStore

NOW = datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)

SAMPLE_SYLLABUS = """\
CS 101: Introduction to Computing
Instructor: Dr. Ada Lovelace
Fall 2024

Homework 1 due 09/10/2024 worth 10%

Office hours are on Tuesdays.
Reading list is posted online.

Midterm Exam on October 15, 2024 (25%)

Reading week has no classes.
There is no class on Thanksgiving.

Term Project due 12 December 2024 - 40 points

Grading
Homework: 30%
Midterm Exam: 30%
Final Project: 40%
"""


class FakePage:
    def __init__(self, text: t.Optional[str]) -> None:
        self._text = text

    def extract_text(self) -> t.Optional[str]:
        return self._text


class FakePDF:
    """Stands in for the object returned by pdfplumber.open()."""

    def __init__(self, page_texts: list[t.Optional[str]]) -> None:
        self.pages = [FakePage(text) for text in page_texts]

    def __enter__(self) -> "FakePDF":
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        return None


@pytest.fixture
def sample_syllabus() -> str:
    return SAMPLE_SYLLABUS


@pytest.fixture
def fake_pdfplumber(monkeypatch: pytest.MonkeyPatch) -> t.Callable[[list[t.Optional[str]]], None]:
    """Patch pdfplumber.open so any %PDF bytes yield the given page texts."""
    from syllabus_extractor import pdf_utils

    def install(page_texts: list[t.Optional[str]]) -> None:
        monkeypatch.setattr(pdf_utils.pdfplumber, "open", lambda stream: FakePDF(page_texts))

    return install


@pytest.fixture
def store() -> InMemoryCourseworkStore:
    return InMemoryCourseworkStore(clock=lambda: NOW)


@pytest.fixture
def course(store: InMemoryCourseworkStore) -> Course:
    return store.add_course(Course(name="Introduction to Computing", code="CS 101"))
