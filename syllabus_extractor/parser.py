"""
Entry points that combine PDF text extraction with the heuristic extractors.
"""
from __future__ import annotations

import logging
import typing as t

from services.shared.errors import InvalidInputError

from .breakdown import extract_grade_breakdown
from .extractor import extract_assignments
from .models import SyllabusExtraction
from .pdf_utils import extract_pdf_pages, extract_pdf_pages_from_content

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 1000


def parse_syllabus_text(text: str) -> SyllabusExtraction:
    """
    Extract assignment candidates and the grading table from syllabus text.

    Args:
        text: Raw syllabus text (pasted, or pulled from a PDF)

    Returns:
        SyllabusExtraction with candidates, breakdown rows and a text preview
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"Syllabus text must be a string, got {type(text).__name__}")

    extraction = SyllabusExtraction(
        assignments=extract_assignments(text),
        grade_breakdown=extract_grade_breakdown(text),
        raw_text_preview=text[:PREVIEW_CHARS],
    )
    logger.info(
        "Parsed syllabus text: %d assignment candidate(s), %d breakdown row(s)",
        len(extraction.assignments),
        len(extraction.grade_breakdown),
    )
    return extraction


def parse_syllabus_pdf(source: t.Union[str, bytes]) -> SyllabusExtraction:
    """
    Parse a syllabus PDF given as a path, a URL or raw bytes.
    """
    if isinstance(source, (bytes, bytearray)):
        pages = extract_pdf_pages_from_content(bytes(source))
    elif isinstance(source, str):
        pages = extract_pdf_pages(source)
    else:
        raise InvalidInputError(f"Expected a path, URL or PDF bytes, got {type(source).__name__}")

    # Join all pages for line scanning
    return parse_syllabus_text("\n\n".join(pages))
