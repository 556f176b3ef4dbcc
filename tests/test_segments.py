"""Tests for slicing polylines into sub-lines along distance ranges."""

import logging

from dynamic_segmentation import Range, build_segments, line_length


def _is_contiguous_slice(part, whole):
    n = len(part)
    return any(whole[i : i + n] == part for i in range(len(whole) - n + 1))


class TestBuildSegments:
    def test_snaps_outward_to_vertices(self, straight_line):
        length = line_length(straight_line)
        ranges = [Range(start=0, end=6, value="A"), Range(start=6, end=length, value="A")]
        segments = build_segments(straight_line, ranges, line_id="road")

        assert [len(s.geometry) for s in segments] == [3, 2]
        assert segments[0].geometry == straight_line
        assert segments[1].geometry == straight_line[1:]
        assert all(s.line_id == "road" for s in segments)
        assert [(s.start, s.end, s.value) for s in segments] == [(0, 6, "A"), (6, length, "A")]

    def test_slices_are_contiguous_subsequences(self, equator_line):
        points = equator_line(0, 1, 2, 3, 4, 5, 6)
        ranges = [Range(start=0.5, end=1.5, value=1), Range(start=2.2, end=4.8, value=2), Range(start=5.5, end=6, value=3)]
        segments = build_segments(points, ranges)

        assert len(segments) == 3
        for seg in segments:
            assert len(seg.geometry) >= 2
            assert _is_contiguous_slice(seg.geometry, points)

    def test_zero_length_range_keeps_one_edge(self, straight_line):
        segments = build_segments(straight_line, [Range(start=3, end=3, value="x")])
        assert len(segments) == 1
        assert segments[0].geometry == straight_line[:2]

    def test_range_past_end_clamps(self, straight_line):
        segments = build_segments(straight_line, [Range(start=8, end=50, value="x")])
        assert segments[0].geometry == straight_line[1:]

    def test_inverted_range_is_dropped(self, straight_line, caplog):
        with caplog.at_level(logging.DEBUG, logger="dynamic_segmentation.segments"):
            segments = build_segments(straight_line, [Range(start=9, end=1, value="x")], line_id="A")
        assert segments == []
        assert "Dropping degenerate range" in caplog.text

    def test_single_point_line_yields_nothing(self):
        assert build_segments([(1.0, 1.0)], [Range(start=0, end=0, value=0)]) == []
        assert build_segments([], [Range(start=0, end=0, value=0)]) == []

    def test_input_not_mutated(self, straight_line):
        before = list(straight_line)
        build_segments(straight_line, [Range(start=0, end=4, value=1), Range(start=4, end=10, value=2)])
        assert straight_line == before

    def test_altitude_carried_through(self, equator_line):
        points = [(lon, lat, float(i)) for i, (lon, lat) in enumerate(equator_line(0, 5, 10))]
        segments = build_segments(points, [Range(start=6, end=10, value=1)])
        assert segments[0].geometry == points[1:]
