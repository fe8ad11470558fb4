"""
FastAPI service for syllabus parsing and grade projection.

This service exposes syllabus_extractor and grade_projector as REST API
endpoints. Extraction is pure text heuristics, so every call is fast and
deterministic; PDF downloads are the only network I/O.
"""
from __future__ import annotations

import base64
import binascii
import logging
from contextlib import asynccontextmanager

import requests
from fastapi import FastAPI, HTTPException

from grade_projector import project, snapshot_to_dict
from services.shared.config import HOST, SYLLABUS_SERVICE_PORT, configure_logging
from services.shared.errors import InvalidInputError
from services.shared.models import (
    GradeProjection,
    ParseSyllabusRequest,
    ParseSyllabusTextRequest,
    ProjectGradesRequest,
    SyllabusExtraction as PydanticSyllabusExtraction,
)
from syllabus_extractor import parse_syllabus_pdf, parse_syllabus_text

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    configure_logging()
    logger.info("Syllabus service starting")
    yield


app = FastAPI(
    title="Syllabus Service",
    description="REST API for syllabus extraction and grade projection",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "syllabus-service"}


@app.post("/syllabus:parse-text", response_model=PydanticSyllabusExtraction)
async def parse_text(request: ParseSyllabusTextRequest) -> PydanticSyllabusExtraction:
    """
    Extract assignment candidates and the grading table from pasted text.
    """
    try:
        extraction = parse_syllabus_text(request.text)
        return PydanticSyllabusExtraction.model_validate(extraction)

    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error parsing syllabus text: {str(e)}")


@app.post("/syllabus:parse", response_model=PydanticSyllabusExtraction)
async def parse_pdf(request: ParseSyllabusRequest) -> PydanticSyllabusExtraction:
    """
    Parse a syllabus PDF given by local path, URL or base64 content.
    """
    if bool(request.pdf_path_or_url) == bool(request.pdf_content_base64):
        raise HTTPException(
            status_code=400,
            detail="Provide exactly one of pdf_path_or_url or pdf_content_base64",
        )

    try:
        if request.pdf_content_base64:
            source = base64.b64decode(request.pdf_content_base64, validate=True)
        else:
            source = request.pdf_path_or_url
        extraction = parse_syllabus_pdf(source)
        return PydanticSyllabusExtraction.model_validate(extraction)

    except binascii.Error as e:
        raise HTTPException(status_code=400, detail=f"Invalid base64 PDF content: {str(e)}")
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except requests.RequestException as e:
        raise HTTPException(status_code=502, detail=f"Error downloading PDF: {str(e)}")
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error parsing syllabus: {str(e)}")


@app.post("/grades:project", response_model=GradeProjection)
async def project_grades(request: ProjectGradesRequest) -> GradeProjection:
    """
    Compute current, projected and required grades plus what-if scenarios.
    """
    try:
        snapshot = project(
            [item.model_dump() for item in request.items],
            target_grade=request.target_grade,
        )
        return GradeProjection(**snapshot_to_dict(snapshot))

    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error projecting grades: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=SYLLABUS_SERVICE_PORT)
