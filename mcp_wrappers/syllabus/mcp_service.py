"""
MCP wrapper for the syllabus service.

The raw ``_`` functions make HTTP calls to the syllabus service and convert
the JSON responses into the shared Pydantic models. They are registered as
tools here and again by the gateway.
"""
from __future__ import annotations

import base64
import typing as t
from pathlib import Path

import requests
from fastmcp import FastMCP

from services.shared.config import DEFAULT_TARGET_GRADE, SERVICE_TIMEOUT, SYLLABUS_SERVICE_URL
from services.shared.models import (
    GradeBreakdownEntry,
    GradeItem,
    GradeProjection,
    ParseSyllabusRequest,
    ParseSyllabusTextRequest,
    ProjectGradesRequest,
    SyllabusExtraction,
)


mcp = FastMCP("SyllabusMCPWrapper")


def _post(path: str, payload: dict[str, t.Any]) -> dict[str, t.Any]:
    """POST to the syllabus service and return the decoded JSON body."""
    try:
        response = requests.post(
            f"{SYLLABUS_SERVICE_URL}{path}",
            json=payload,
            timeout=SERVICE_TIMEOUT,
        )
        response.raise_for_status()
        return response.json()

    except requests.Timeout:
        raise RuntimeError(f"Syllabus service timed out after {SERVICE_TIMEOUT} seconds")
    except requests.HTTPError as e:
        raise RuntimeError(f"HTTP error from syllabus service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling syllabus service: {str(e)}")


def _parse_syllabus_text(text: str) -> SyllabusExtraction:
    """Extract assignment candidates and the grade breakdown from syllabus text."""
    request = ParseSyllabusTextRequest(text=text)
    return SyllabusExtraction(**_post("/syllabus:parse-text", request.model_dump()))


def _parse_syllabus_pdf(pdf_path_or_url: str) -> SyllabusExtraction:
    """
    Parse a syllabus PDF.

    URLs are downloaded by the service; local files are read here and sent
    inline, since the service may not share this machine's filesystem.
    """
    if pdf_path_or_url.startswith('http://') or pdf_path_or_url.startswith('https://'):
        request = ParseSyllabusRequest(pdf_path_or_url=pdf_path_or_url)
    else:
        pdf_path = Path(pdf_path_or_url)
        if not pdf_path.is_file():
            raise FileNotFoundError(f"PDF file not found: {pdf_path_or_url}")
        pdf_content_base64 = base64.b64encode(pdf_path.read_bytes()).decode('utf-8')
        request = ParseSyllabusRequest(pdf_content_base64=pdf_content_base64)

    return SyllabusExtraction(**_post("/syllabus:parse", request.model_dump(exclude_none=True)))


def _extract_grade_breakdown(text: str) -> list[GradeBreakdownEntry]:
    """Only the grading table rows of a syllabus text."""
    return _parse_syllabus_text(text).grade_breakdown


def _project_grades(items: list[GradeItem], target_grade: float = DEFAULT_TARGET_GRADE) -> GradeProjection:
    """Current, projected and required grades plus what-if scenarios."""
    request = ProjectGradesRequest(items=items, target_grade=target_grade)
    return GradeProjection(**_post("/grades:project", request.model_dump()))


@mcp.tool()
def parse_syllabus_text(text: str) -> SyllabusExtraction:
    """Extract assignment candidates and the grade breakdown from syllabus text."""
    return _parse_syllabus_text(text)


@mcp.tool()
def parse_syllabus_pdf(pdf_path_or_url: str) -> SyllabusExtraction:
    """Parse a syllabus PDF (local path or URL)."""
    return _parse_syllabus_pdf(pdf_path_or_url)


@mcp.tool()
def project_grades(items: list[GradeItem], target_grade: float = DEFAULT_TARGET_GRADE) -> GradeProjection:
    """Project a course grade from weighted, optionally graded items."""
    return _project_grades(items, target_grade)


if __name__ == "__main__":
    mcp.run()
