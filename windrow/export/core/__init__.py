"""Core components."""

from .exceptions import ExportError, SegmenterConfigError

__all__ = [
    "ExportError",
    "SegmenterConfigError",
]
