"""Unit tests for the segment driver loop."""

from __future__ import annotations

import itertools
import logging

import pytest

from windrow.export.runtime.segmenting import drain, iter_segments

GRID = list(
    itertools.product(
        [0, 1, 9, 10, 11, 25],  # total
        [0, 3, 30],  # offset
        [1, 4, 10],  # take
        [0, 1, 7, 100],  # limit
        [0, 1, 3, 7],  # records_per_segment
    )
)


class TestIterSegments:
    """Test segment iteration."""

    def test_segment_sizes_follow_records_per_segment(self, make_segmenter):
        segmenter, store = make_segmenter(total=25, take=10, records_per_segment=7)

        segments = list(iter_segments(segmenter))

        assert [len(segment) for segment in segments] == [7, 7, 7, 4]
        assert store.loads == [0, 10, 20]

    def test_unsegmented_export_is_one_segment(self, make_segmenter):
        segmenter, store = make_segmenter(total=25, take=10, offset=5, limit=12)

        segments = list(iter_segments(segmenter))

        assert len(segments) == 1
        assert [row["id"] for row in segments[0]] == list(range(5, 17))

    def test_segment_spanning_several_pages(self, make_segmenter):
        segmenter, store = make_segmenter(total=30, take=5, records_per_segment=12)

        first = next(iter_segments(segmenter))

        assert len(first) == 12
        assert store.loads == [0, 5, 10]

    def test_empty_source_yields_nothing(self, make_segmenter):
        segmenter, store = make_segmenter(total=0, take=10)

        assert list(iter_segments(segmenter)) == []
        assert store.loads == []

    def test_empty_first_page_yields_nothing(self, make_segmenter, catalog_store):
        """Test a source that reports records but returns none."""
        segmenter, store = make_segmenter(total=10, take=10)
        segmenter._load = catalog_store(total=0, take=10).load

        assert segmenter.has_more is True
        assert list(iter_segments(segmenter)) == []
        assert segmenter.has_more is False

    def test_units_counted_per_record(self, make_segmenter):
        """Test that segment bounds count records, not projected units."""
        segmenter, _ = make_segmenter(
            total=10,
            take=4,
            records_per_segment=3,
            project=lambda p: [{"id": p.id, "n": n} for n in range(p.id % 3)],
        )

        segments = list(iter_segments(segmenter))

        assert segmenter.record_count == 10
        assert len(segments) == 4
        assert [{row["id"] for row in segment} for segment in segments] == [
            {1, 2},
            {4, 5},
            {7, 8},
            set(),
        ]

    def test_segment_completed_logged(self, make_segmenter, caplog):
        caplog.set_level(logging.INFO, logger="windrow.export")
        segmenter, _ = make_segmenter(total=10, take=10, records_per_segment=6)

        list(iter_segments(segmenter))

        records = [r for r in caplog.records if r.getMessage() == "segment_completed"]
        assert [(r.segment_index, r.records) for r in records] == [(0, 6), (1, 4)]


class TestDrainProperties:
    """Test whole-export properties across window combinations."""

    @pytest.mark.parametrize("total,offset,take,limit,records_per_segment", GRID)
    def test_full_drain(self, make_segmenter, total, offset, take, limit, records_per_segment):
        consumed = []
        segment_sizes = []
        segmenter, _ = make_segmenter(
            total=total,
            take=take,
            offset=offset,
            limit=limit,
            records_per_segment=records_per_segment,
        )

        for segment in iter_segments(segmenter):
            segment_sizes.append(len(segment))
            consumed.extend(row["id"] for row in segment)

        assert len(consumed) == segmenter.record_total
        assert consumed == list(range(offset, offset + segmenter.record_total))
        if records_per_segment:
            assert all(size <= records_per_segment for size in segment_sizes)

    def test_reset_replays_identically(self, make_segmenter):
        segmenter, store = make_segmenter(total=25, take=4, offset=2, limit=20, records_per_segment=6)

        first = list(iter_segments(segmenter))
        first_loads = list(store.loads)
        segmenter.reset()
        second = list(iter_segments(segmenter))

        assert first == second
        assert store.loads == first_loads + first_loads

    def test_drain_concatenates_segments(self, make_segmenter):
        segmenter, _ = make_segmenter(total=25, take=10, records_per_segment=7)

        rows = drain(segmenter)

        assert [row["id"] for row in rows] == list(range(25))
        assert segmenter.has_more is False
