"""Pull-based export segmenter.

This module provides the ExportSegmenter class that walks a windowed,
limited subset of a large record set page by page and re-chunks it into
segments whose size is independent of the physical page size.

Control flow:
    The owning job runner repeatedly calls next_batch_available() to decide
    whether to continue (fetching a page only when the buffer cannot satisfy
    the current segment), then current_segment() to drain a bounded chunk of
    projected output. Only next_batch_available() performs I/O.
"""

from __future__ import annotations

from collections import deque
from types import TracebackType
from typing import TYPE_CHECKING, Generic

from pydantic import ValidationError

from ...core.exceptions import SegmenterConfigError
from ...models.window import ExportWindow
from .definitions import (
    BatchHook,
    OutputUnit,
    PageLoader,
    Projector,
    RecordT,
    SegmentStats,
)
from .telemetry import (
    log_page_loaded,
    log_page_skipped,
    log_segment_drained,
    log_segmenter_error,
    log_segmenter_reset,
)

if TYPE_CHECKING:
    from ...config import ExportProfile


class ExportSegmenter(Generic[RecordT]):
    """Memory-bounded, in-order iteration over a windowed record set.

    The segmenter decouples three independently configured sizes: the page
    size fetched from the store (take), the number of records exposed per
    segment (records_per_segment) and the overall window (offset, limit).
    It buffers at most one segment plus one page of over-fetch.

    Not thread-safe. Use one instance per export job.
    """

    def __init__(
        self,
        *,
        load: PageLoader[RecordT],
        on_batch_loaded: BatchHook[RecordT] | None,
        project: Projector[RecordT],
        offset: int,
        take: int,
        limit: int,
        records_per_segment: int,
        total_records: int,
    ) -> None:
        """Initialize export segmenter.

        Args:
            load: Returns the page of records starting at the given skip offset
            on_batch_loaded: Optional hook observing the buffer after each fetch
            project: Expands one record into zero or more output units
            offset: Records to skip before the export window starts
            take: Page size requested per physical fetch
            limit: Maximum records to process overall (0 = unlimited)
            records_per_segment: Maximum records per segment (0 = unlimited)
            total_records: Size of the full source set

        Raises:
            SegmenterConfigError: If a parameter or callback is invalid
        """
        try:
            window = ExportWindow(
                offset=offset,
                take=take,
                limit=limit,
                records_per_segment=records_per_segment,
                total_records=total_records,
            )
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise SegmenterConfigError(
                f"Invalid export window: {'; '.join(errors)}", errors=errors
            ) from e

        if not callable(load):
            raise SegmenterConfigError("load must be callable")
        if not callable(project):
            raise SegmenterConfigError("project must be callable")
        if on_batch_loaded is not None and not callable(on_batch_loaded):
            raise SegmenterConfigError("on_batch_loaded must be callable or None")

        self._window = window
        self._load = load
        self._on_batch_loaded = on_batch_loaded
        self._project = project

        self._skip = window.offset
        self._record_count = 0
        self._record_per_segment_count = 0
        self._pages_loaded = 0
        self._fetched = False
        self._buffer: deque[RecordT] = deque()

    @classmethod
    def from_window(
        cls,
        window: ExportWindow,
        *,
        load: PageLoader[RecordT],
        project: Projector[RecordT],
        on_batch_loaded: BatchHook[RecordT] | None = None,
    ) -> ExportSegmenter[RecordT]:
        """Create a segmenter over an already validated window."""
        return cls(
            load=load,
            on_batch_loaded=on_batch_loaded,
            project=project,
            **window.model_dump(),
        )

    @classmethod
    def from_profile(
        cls,
        profile: ExportProfile,
        *,
        total_records: int,
        load: PageLoader[RecordT],
        project: Projector[RecordT],
        on_batch_loaded: BatchHook[RecordT] | None = None,
    ) -> ExportSegmenter[RecordT]:
        """Create a segmenter from export job settings.

        Args:
            profile: Export job settings (offset, limit, batch and page size)
            total_records: Size of the full source set
            load: Page loader
            project: Record projector
            on_batch_loaded: Optional batch hook

        Returns:
            Configured segmenter
        """
        return cls(
            load=load,
            on_batch_loaded=on_batch_loaded,
            project=project,
            offset=profile.offset,
            take=profile.page_size,
            limit=profile.limit,
            records_per_segment=profile.batch_size,
            total_records=total_records,
        )

    @property
    def window(self) -> ExportWindow:
        return self._window

    @property
    def record_total(self) -> int:
        """Total number of records this segmenter will process."""
        return self._window.record_total

    @property
    def record_count(self) -> int:
        """Number of processed records."""
        return self._record_count

    @property
    def record_per_segment_count(self) -> int:
        """Records processed in the current segment."""
        return self._record_per_segment_count

    @record_per_segment_count.setter
    def record_per_segment_count(self, value: int) -> None:
        if value < 0:
            raise ValueError("record_per_segment_count cannot be negative")
        self._record_per_segment_count = value

    @property
    def has_more(self) -> bool:
        """Whether there is data available, without performing any I/O.

        Before the first fetch this answers optimistically; the first
        next_batch_available() call gives the authoritative answer.
        """
        window = self._window
        if window.is_limited and self._record_count >= window.limit:
            return False

        if self._buffer:
            return True

        if self._skip >= window.total_records:
            return False

        if not self._fetched and self._skip == window.offset:
            return True

        return False

    def next_batch_available(self) -> bool:
        """Decide whether the caller should continue, fetching one page if needed.

        Returns:
            True if buffered records are ready for current_segment()

        Raises:
            Exception: Whatever the loader or batch hook raised. Cursor and
                buffer are left untouched in that case.
        """
        window = self._window

        if window.is_limited and self._record_count >= window.limit:
            return False

        # Caller has to drain and close the current segment first
        if window.is_segmented and self._record_per_segment_count >= window.records_per_segment:
            return False

        # Do not make the queue longer than necessary
        if window.is_segmented and len(self._buffer) >= window.records_per_segment:
            return True

        if self._skip >= window.total_records:
            return False

        return self._fetch_page()

    def current_segment(self) -> list[OutputUnit]:
        """Project buffered records into output units.

        Stops early once the overall limit or the per-segment quota is
        reached; records not consumed stay buffered for the next call.
        Never fetches.

        Returns:
            Flattened output units of the consumed records, in buffer order

        Raises:
            Exception: Whatever the projector raised. No record is consumed
                and no counter changes in that case.
        """
        window = self._window
        units: list[OutputUnit] = []

        if window.is_limited and self._record_count >= window.limit:
            return units
        if window.is_segmented and self._record_per_segment_count >= window.records_per_segment:
            return units

        consumed = 0
        record_count = self._record_count
        per_segment = self._record_per_segment_count

        for record in self._buffer:
            try:
                units.extend(self._project(record))
            except Exception as e:
                log_segmenter_error(
                    stage="project",
                    skip=self._skip,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            consumed += 1
            record_count += 1
            per_segment += 1

            if window.is_limited and record_count >= window.limit:
                break
            if window.is_segmented and per_segment >= window.records_per_segment:
                break

        for _ in range(consumed):
            self._buffer.popleft()
        self._record_count = record_count
        self._record_per_segment_count = per_segment

        if consumed:
            log_segment_drained(records=consumed, units=len(units), stats=self.stats())

        return units

    def start_new_segment(self) -> None:
        """Mark a segment boundary so the next segment can be filled."""
        self._record_per_segment_count = 0

    def reset(self) -> None:
        """Clear the buffer and rewind the cursor to the window offset.

        Window parameters and callbacks are kept, so the same instance can
        replay the export from scratch.
        """
        self._buffer.clear()
        self._skip = self._window.offset
        self._record_count = 0
        self._record_per_segment_count = 0
        self._pages_loaded = 0
        self._fetched = False
        log_segmenter_reset(offset=self._window.offset)

    def stats(self) -> SegmentStats:
        return SegmentStats(
            skip=self._skip,
            record_count=self._record_count,
            record_per_segment_count=self._record_per_segment_count,
            buffered=len(self._buffer),
            pages_loaded=self._pages_loaded,
            record_total=self.record_total,
        )

    def _fetch_page(self) -> bool:
        """Perform one physical fetch and merge it behind any leftovers.

        The first fetch reads at the window offset; later fetches advance the
        cursor by one page first. State is committed only after the loader and
        the batch hook have both returned.
        """
        window = self._window
        skip = self._skip + window.take if self._fetched else self._skip

        if self._fetched and skip >= window.total_records:
            self._skip = skip
            log_page_skipped(
                skip=skip, total_records=window.total_records, buffered=len(self._buffer)
            )
            return len(self._buffer) > 0

        try:
            page = self._load(skip)
        except Exception as e:
            log_segmenter_error(
                stage="load",
                skip=skip,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        merged = (*self._buffer, *page)

        # Give the caller the opportunity to record identities of what will be exported
        if self._on_batch_loaded is not None:
            try:
                self._on_batch_loaded(merged)
            except Exception as e:
                log_segmenter_error(
                    stage="on_batch_loaded",
                    skip=skip,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

        self._skip = skip
        self._buffer = deque(merged)
        self._fetched = True
        self._pages_loaded += 1

        log_page_loaded(skip=skip, page_size=len(page), stats=self.stats())

        return len(self._buffer) > 0

    def __enter__(self) -> ExportSegmenter[RecordT]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.reset()
