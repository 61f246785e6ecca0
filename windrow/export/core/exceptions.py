"""Custom exception hierarchy."""

from __future__ import annotations


class ExportError(Exception):
    """Base exception for all library errors."""

    pass


class SegmenterConfigError(ExportError):
    """Segmenter parameters are invalid.

    Raised at construction time so that a bad window (negative offset,
    zero page size, missing callbacks) never surfaces as a silent no-op
    halfway through an export.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
