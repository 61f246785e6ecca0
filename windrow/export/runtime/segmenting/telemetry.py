"""Structured logging for segmenting operations.

This module provides telemetry hooks for the segmenter, emitting
structured logs for observability of long-running exports.
"""

from __future__ import annotations

import logging

from .definitions import SegmentStats

logger = logging.getLogger(__name__)


def log_page_loaded(*, skip: int, page_size: int, stats: SegmentStats) -> None:
    """Log a completed physical fetch.

    Args:
        skip: Offset passed to the loader
        page_size: Number of records the loader returned
        stats: Segmenter state after the page was merged into the buffer
    """
    logger.info(
        "segment_page_loaded",
        extra={
            "skip": skip,
            "page_size": page_size,
            "buffered": stats.buffered,
            "pages_loaded": stats.pages_loaded,
            "record_total": stats.record_total,
        },
    )


def log_page_skipped(*, skip: int, total_records: int, buffered: int) -> None:
    """Log a fetch that was not issued because the cursor passed the source end.

    Args:
        skip: Advanced cursor position
        total_records: Size of the full source set
        buffered: Leftover records still waiting to be projected
    """
    logger.debug(
        "segment_page_skipped",
        extra={
            "skip": skip,
            "total_records": total_records,
            "buffered": buffered,
        },
    )


def log_segment_drained(*, records: int, units: int, stats: SegmentStats) -> None:
    """Log one current_segment() pass.

    Args:
        records: Source records consumed by this pass
        units: Output units produced by this pass
        stats: Segmenter state after the pass
    """
    logger.debug(
        "segment_drained",
        extra={
            "records": records,
            "units": units,
            "record_count": stats.record_count,
            "record_per_segment_count": stats.record_per_segment_count,
            "buffered": stats.buffered,
        },
    )


def log_segmenter_reset(*, offset: int) -> None:
    logger.debug("segmenter_reset", extra={"offset": offset})


def log_segmenter_error(
    *,
    stage: str,
    skip: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failure raised by one of the segmenter's callbacks.

    Args:
        stage: Callback that failed ("load", "on_batch_loaded" or "project")
        skip: Cursor position at the time of failure
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "segmenter_error",
        extra={
            "stage": stage,
            "skip": skip,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_segment_completed(*, segment_index: int, records: int, units: int) -> None:
    """Log a closed segment handed to the writer.

    Args:
        segment_index: Zero-based index of the segment within the export
        records: Source records in the segment
        units: Output units in the segment
    """
    logger.info(
        "segment_completed",
        extra={
            "segment_index": segment_index,
            "records": records,
            "units": units,
        },
    )
