"""
MCP Gateway Server - Unified entry point for the taskflow tools.

Syllabus extraction and grade projection tools are routed to the syllabus
service over HTTP through the wrapper's raw functions. Letter-grade lookup is
a pure table lookup and is answered locally.
"""
from __future__ import annotations

from fastmcp import FastMCP

# Import the raw functions from the MCP wrapper (not the decorated versions)
# so they can be registered with this FastMCP instance
from mcp_wrappers.syllabus.mcp_service import (
    _extract_grade_breakdown,
    _parse_syllabus_pdf,
    _parse_syllabus_text,
    _project_grades,
)
from grade_projector import grade_badge
from grade_projector import letter_grade as _letter_grade
from services.shared.config import COURSEWORK_SERVICE_URL, DEFAULT_TARGET_GRADE, SYLLABUS_SERVICE_URL
from services.shared.models import GradeBreakdownEntry, GradeItem, GradeProjection, SyllabusExtraction

mcp = FastMCP("TaskflowGateway")


def get_service_status() -> dict[str, str]:
    """Configured service URLs, for debugging and service discovery."""
    return {
        "syllabus_service": SYLLABUS_SERVICE_URL,
        "coursework_service": COURSEWORK_SERVICE_URL,
        "gateway_status": "running",
    }


def _letter_grade_info(percentage: float) -> dict[str, str]:
    return {"letter": _letter_grade(percentage), "badge": grade_badge(percentage)}


# Syllabus tools
@mcp.tool()
def parse_syllabus_text(text: str) -> SyllabusExtraction:
    """Extract assignment candidates and the grade breakdown from syllabus text."""
    return _parse_syllabus_text(text)


@mcp.tool()
def parse_syllabus_pdf(pdf_path_or_url: str) -> SyllabusExtraction:
    """Parse a syllabus PDF (local path or URL) into assignment candidates."""
    return _parse_syllabus_pdf(pdf_path_or_url)


@mcp.tool()
def extract_grade_breakdown(text: str) -> list[GradeBreakdownEntry]:
    """Find the grading table (category: weight%) in syllabus text."""
    return _extract_grade_breakdown(text)


# Grade tools
@mcp.tool()
def project_grades(items: list[GradeItem], target_grade: float = DEFAULT_TARGET_GRADE) -> GradeProjection:
    """
    Project a course grade.

    Each item has an id, a name, a weight (percent of the course) and an
    optional score out of max_score. Returns current, projected and required
    grades with letter grades and what-if scenarios.
    """
    return _project_grades(items, target_grade)


@mcp.tool()
def letter_grade(percentage: float) -> dict[str, str]:
    """Letter grade and display badge for a percentage."""
    return _letter_grade_info(percentage)


@mcp.tool()
def get_gateway_info() -> dict[str, str]:
    """Gateway status and the URLs of the services it connects to."""
    return get_service_status()


@mcp.tool()
def list_available_tools() -> dict[str, list[str]]:
    """
    List all available tools organized by service.
    """
    return {
        "syllabus_service": [
            "parse_syllabus_text - Extract assignments and grade breakdown from text",
            "parse_syllabus_pdf - Extract assignments and grade breakdown from a PDF path/URL",
            "extract_grade_breakdown - Extract only the grading table from text",
            "project_grades - Current, projected and required grades with scenarios",
        ],
        "gateway_tools": [
            "letter_grade - Map a percentage to a letter grade and badge",
            "get_gateway_info - Get gateway and service status information",
            "list_available_tools - List all available tools by service",
        ],
    }


if __name__ == "__main__":
    print("Starting taskflow MCP gateway")
    for service_name, service_url in get_service_status().items():
        if service_name != "gateway_status":
            print(f"  • {service_name}: {service_url}")
    mcp.run()
