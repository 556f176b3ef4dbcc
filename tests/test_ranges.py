"""Tests for resolving attribute records into per-line distance ranges."""

import pytest

from dynamic_segmentation import NO_DATA_VALUE, Range, group_records, ranges_for_line, resolve_ranges


def _triples(ranges):
    return [(r.start, r.end, r.value) for r in ranges]


class TestResolveRanges:
    def test_no_records_gives_single_default_range(self, record):
        ranges = resolve_ranges([record("B", 0, 4, "x")], "A", 10.0)
        assert ranges == [Range(start=0, end=10.0, value=NO_DATA_VALUE)]
        assert NO_DATA_VALUE == 0

    def test_trailing_gap_filled_with_last_value(self, record):
        ranges = resolve_ranges([record("A", 0, 5, "v")], "A", 10.0)
        assert _triples(ranges) == [(0, 5, "v"), (5, 10.0, "v")]

    def test_full_cover_adds_nothing(self, record):
        ranges = resolve_ranges([record("A", 0, 4, "x"), record("A", 4, 10, "y")], "A", 10.0)
        assert _triples(ranges) == [(0, 4, "x"), (4, 10, "y")]

    def test_record_past_length_adds_nothing(self, record):
        ranges = resolve_ranges([record("A", 0, 12, "x")], "A", 10.0)
        assert _triples(ranges) == [(0, 12, "x")]

    def test_leading_gap_not_filled(self, record):
        ranges = resolve_ranges([record("A", 2, 5, "x")], "A", 10.0)
        assert _triples(ranges) == [(2, 5, "x"), (5, 10.0, "x")]

    def test_interior_gap_not_filled(self, record):
        ranges = resolve_ranges([record("A", 0, 3, "x"), record("A", 6, 8, "y")], "A", 10.0)
        assert _triples(ranges) == [(0, 3, "x"), (6, 8, "y"), (8, 10.0, "y")]

    def test_input_order_kept(self, record):
        ranges = resolve_ranges([record("A", 5, 10, "late"), record("A", 0, 5, "early")], "A", 10.0)
        # the last supplied record decides the trailing fill, even if it is not the furthest
        assert _triples(ranges) == [(5, 10, "late"), (0, 5, "early"), (5, 10.0, "early")]

    def test_ids_matched_by_equality_not_type_coercion(self, record):
        ranges = resolve_ranges([record("1", 0, 5, "x")], 1, 10.0)
        assert _triples(ranges) == [(0, 10.0, NO_DATA_VALUE)]


class TestGroupedRecords:
    def test_group_keeps_order_per_id(self, record):
        records = [record("A", 0, 1, "a1"), record("B", 0, 1, "b1"), record("A", 1, 2, "a2")]
        grouped = group_records(records)
        assert list(grouped) == ["A", "B"]
        assert [r.value for r in grouped["A"]] == ["a1", "a2"]

    def test_ranges_for_line_matches_resolve(self, record):
        records = [record("A", 0, 3, "x"), record("B", 0, 9, "y"), record("A", 3, 7, "z")]
        grouped = group_records(records)
        assert ranges_for_line(grouped, "A", 10.0) == resolve_ranges(records, "A", 10.0)
        assert ranges_for_line(grouped, "missing", 2.5) == [Range(start=0, end=2.5, value=0)]

    def test_zero_length_line_without_records(self):
        assert _triples(ranges_for_line({}, "A", 0.0)) == [(0, 0.0, 0)]

    def test_last_value_zero_still_fills(self, record):
        ranges = resolve_ranges([record("A", 0, 5, 0)], "A", 10.0)
        assert _triples(ranges)[-1] == (5, pytest.approx(10.0), 0)
