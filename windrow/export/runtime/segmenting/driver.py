"""Job-runner loop over an export segmenter.

Writers usually want one list of output units per segment (for example one
file per segment). These helpers run the fetch/drain cycle and close a
segment whenever the segmenter reports its per-segment quota as met.
"""

from __future__ import annotations

from collections.abc import Iterator

from .definitions import OutputUnit
from .segmenter import ExportSegmenter
from .telemetry import log_segment_completed


def iter_segments(segmenter: ExportSegmenter) -> Iterator[list[OutputUnit]]:
    """Yield the projected output of each segment in order.

    A segment may span several pages and several current_segment() calls.
    Iteration ends at the first segment that consumes no records.

    Args:
        segmenter: Segmenter to drive; it is not reset beforehand

    Yields:
        Output units of one segment
    """
    segment_index = 0
    while True:
        segmenter.start_new_segment()
        units: list[OutputUnit] = []
        records = 0

        while segmenter.next_batch_available():
            before = segmenter.record_count
            units.extend(segmenter.current_segment())
            records += segmenter.record_count - before

        if not records:
            return

        log_segment_completed(segment_index=segment_index, records=records, units=len(units))
        yield units
        segment_index += 1


def drain(segmenter: ExportSegmenter) -> list[OutputUnit]:
    """Run the segmenter to exhaustion and return all output units."""
    units: list[OutputUnit] = []
    for segment in iter_segments(segmenter):
        units.extend(segment)
    return units
