"""
Error types shared by the extraction, projection and coursework layers.

Absence of data (no date, no weight) is never an error: those fields are
returned as ``None``. These exceptions cover malformed caller input and
unknown identifiers only.
"""
from __future__ import annotations


class TaskflowError(Exception):
    """Base class for every error raised by the taskflow core."""


class InvalidInputError(TaskflowError, ValueError):
    """Raised when a caller passes input of the wrong type or range."""


class NotFoundError(TaskflowError, LookupError):
    """Raised when a course or assignment id does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier
