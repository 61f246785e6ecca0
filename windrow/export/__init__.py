"""Windrow Export - memory-bounded, segmented export of large record sets."""

from .config import DEFAULT_PAGE_SIZE, ExportProfile
from .core import ExportError, SegmenterConfigError
from .models import ExportWindow
from .runtime.segmenting import (
    BatchHook,
    ExportSegmenter,
    HasIdentity,
    OutputUnit,
    PageLoader,
    Projector,
    SegmentConsumer,
    SegmentStats,
    drain,
    iter_segments,
)

__version__ = "0.1.0"

__all__ = [
    # Segmenting
    "ExportSegmenter",
    "SegmentConsumer",
    "SegmentStats",
    "iter_segments",
    "drain",
    # Callback contracts
    "HasIdentity",
    "PageLoader",
    "BatchHook",
    "Projector",
    "OutputUnit",
    # Models and settings
    "ExportWindow",
    "ExportProfile",
    "DEFAULT_PAGE_SIZE",
    # Exceptions
    "ExportError",
    "SegmenterConfigError",
]
