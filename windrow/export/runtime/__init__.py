"""Runtime orchestration components."""

from .segmenting import ExportSegmenter, SegmentStats, drain, iter_segments

__all__ = [
    "ExportSegmenter",
    "SegmentStats",
    "iter_segments",
    "drain",
]
