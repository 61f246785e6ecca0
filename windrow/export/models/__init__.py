"""Data models for export windowing.

All models are immutable (frozen=True): a window is fixed for the life of
the segmenter that owns it.
"""

from .window import ExportWindow

__all__ = [
    "ExportWindow",
]
