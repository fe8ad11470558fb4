"""Environment-driven settings for the taskflow services and helpers."""
from __future__ import annotations

import logging
import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}")


LOG_LEVEL = os.getenv("TASKFLOW_LOG_LEVEL", "INFO").upper()

HOST = os.getenv("TASKFLOW_HOST", "0.0.0.0")
SYLLABUS_SERVICE_PORT = _int_env("SYLLABUS_SERVICE_PORT", 8001)
COURSEWORK_SERVICE_PORT = _int_env("COURSEWORK_SERVICE_PORT", 8003)

# Where the MCP wrappers reach the REST services
SYLLABUS_SERVICE_URL = os.getenv("SYLLABUS_SERVICE_URL", f"http://localhost:{SYLLABUS_SERVICE_PORT}")
COURSEWORK_SERVICE_URL = os.getenv("COURSEWORK_SERVICE_URL", f"http://localhost:{COURSEWORK_SERVICE_PORT}")
SERVICE_TIMEOUT = _float_env("TASKFLOW_SERVICE_TIMEOUT", 60.0)

# Upload limit for syllabus PDFs (10 MiB)
MAX_PDF_BYTES = _int_env("TASKFLOW_MAX_PDF_BYTES", 10 * 1024 * 1024)
PDF_DOWNLOAD_TIMEOUT = _float_env("TASKFLOW_PDF_DOWNLOAD_TIMEOUT", 30.0)

DEFAULT_TARGET_GRADE = _float_env("TASKFLOW_DEFAULT_TARGET_GRADE", 90.0)


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger for a service process."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
