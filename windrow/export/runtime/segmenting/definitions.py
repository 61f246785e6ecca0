"""Segmenting callback contracts and state snapshots.

This module defines the callable shapes the segmenter consumes at its
boundary (page loader, batch hook, projector) and the snapshot structure
it reports for progress and logging.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable


class HasIdentity(Protocol):
    """Anything exported must carry a stable identity."""

    @property
    def id(self) -> Hashable: ...


RecordT = TypeVar("RecordT", bound=HasIdentity)

# One projected row/field bag. Writers decide how to encode it.
OutputUnit = Any

# load(skip) -> records starting at position `skip` of the ordered source set.
# Must be deterministic for a fixed skip within one job so replays are stable.
PageLoader = Callable[[int], Sequence[RecordT]]

# on_batch_loaded(records) -> None. Receives the merged buffer after each
# physical fetch, including carried-over leftovers. Must not mutate it.
BatchHook = Callable[[Sequence[RecordT]], None]

# project(record) -> zero or more output units.
Projector = Callable[[RecordT], Sequence[OutputUnit]]


@dataclass(frozen=True)
class SegmentStats:
    """Point-in-time view of a segmenter's cursor.

    Attributes:
        skip: Offset of the most recent (or next, before the first) fetch
        record_count: Records projected so far
        record_per_segment_count: Records projected in the current segment
        buffered: Records loaded but not yet projected
        pages_loaded: Physical fetches performed since construction or reset
        record_total: Records the segmenter will process in total
    """

    skip: int
    record_count: int
    record_per_segment_count: int
    buffered: int
    pages_loaded: int
    record_total: int

    @property
    def remaining(self) -> int:
        """Records still to be projected."""
        return max(self.record_total - self.record_count, 0)


@runtime_checkable
class SegmentConsumer(Protocol):
    """Read side of a segmenter, as seen by an output writer."""

    @property
    def record_total(self) -> int: ...

    @property
    def has_more(self) -> bool: ...

    def next_batch_available(self) -> bool: ...

    def current_segment(self) -> list[OutputUnit]: ...
