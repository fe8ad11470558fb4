"""Date recognition for free-form syllabus text."""
from __future__ import annotations

import re
from datetime import date
from typing import Iterator, Optional

from .models import DateCandidate

# Pattern families, tried in this order. Within a family, matches are
# reported left to right.
NUMERIC_DATE_RE = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{2,4})")          # MM/DD/YYYY or MM-DD-YYYY
MONTH_FIRST_DATE_RE = re.compile(r"\b([A-Za-z]+)\.?\s+(\d{1,2}),?\s+(\d{4})")    # Month DD, YYYY
DAY_FIRST_DATE_RE = re.compile(r"\b(\d{1,2})\s+([A-Za-z]+)\.?,?\s+(\d{4})")      # DD Month YYYY

CONTEXT_CHARS = 50

MONTHS: dict[str, int] = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}


def _expand_year(raw: str) -> Optional[int]:
    """Two-digit years pivot at 50 (24 -> 2024, 97 -> 1997)."""
    if len(raw) == 2:
        yy = int(raw)
        return 2000 + yy if yy < 50 else 1900 + yy
    if len(raw) == 4:
        return int(raw)
    return None


def _month_number(word: str) -> Optional[int]:
    return MONTHS.get(word.lower())


def _build_date(year: Optional[int], month: Optional[int], day: int) -> Optional[date]:
    if year is None or month is None:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _numeric(match: re.Match) -> Optional[date]:
    month, day, year = match.groups()
    return _build_date(_expand_year(year), int(month), int(day))


def _month_first(match: re.Match) -> Optional[date]:
    month, day, year = match.groups()
    return _build_date(int(year), _month_number(month), int(day))


def _day_first(match: re.Match) -> Optional[date]:
    day, month, year = match.groups()
    return _build_date(int(year), _month_number(month), int(day))


_PATTERNS = (
    (NUMERIC_DATE_RE, _numeric),
    (MONTH_FIRST_DATE_RE, _month_first),
    (DAY_FIRST_DATE_RE, _day_first),
)


def iter_dates(text: str) -> Iterator[DateCandidate]:
    """Yield every valid date in ``text`` in pattern-then-position order.

    Matches that do not form a real calendar date (month 13, Feb 30,
    an ordinary word in the month slot) are skipped.
    """
    for pattern, build in _PATTERNS:
        for match in pattern.finditer(text):
            parsed = build(match)
            if parsed is None:
                continue
            start = max(0, match.start() - CONTEXT_CHARS)
            end = min(len(text), match.end() + CONTEXT_CHARS)
            yield DateCandidate(
                original_text=match.group(0),
                parsed_date=parsed,
                context_window=text[start:end],
            )


def extract_dates(text: str) -> list[DateCandidate]:
    """Return all valid dates found in ``text``."""
    return list(iter_dates(text))


def first_date(text: str) -> Optional[date]:
    """Return the first valid date in ``text``, or None."""
    for candidate in iter_dates(text):
        return candidate.parsed_date
    return None
