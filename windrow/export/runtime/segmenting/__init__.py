"""Segmenting layer for memory-bounded exports.

This module provides a pull-based segmenter that walks a windowed subset of
a large record set page by page and re-chunks it into writer-sized segments.

Architecture:
    The segmenting layer consists of:
    - definitions.py: Callback contracts (PageLoader, BatchHook, Projector) and SegmentStats
    - segmenter.py: ExportSegmenter (cursor, buffer and segment quotas)
    - driver.py: iter_segments/drain, the fetch/drain loop a job runner needs
    - telemetry.py: Structured logging

Usage:
    segmenter = ExportSegmenter(
        load=lambda skip: repo.page(skip, 100),
        on_batch_loaded=None,
        project=lambda product: [product.to_row()],
        offset=0,
        take=100,
        limit=0,
        records_per_segment=5000,
        total_records=repo.count(),
    )
    for rows in iter_segments(segmenter):
        writer.write_file(rows)
"""

from __future__ import annotations

from .definitions import (
    BatchHook,
    HasIdentity,
    OutputUnit,
    PageLoader,
    Projector,
    SegmentConsumer,
    SegmentStats,
)
from .driver import drain, iter_segments
from .segmenter import ExportSegmenter

__all__ = [
    "ExportSegmenter",
    "SegmentConsumer",
    "SegmentStats",
    "HasIdentity",
    "PageLoader",
    "BatchHook",
    "Projector",
    "OutputUnit",
    "iter_segments",
    "drain",
]
