"""Slice polylines into sub-lines along distance ranges."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .distance import index_for_distance
from .models import Position, Range, SegmentFeature

_LOG = logging.getLogger(__name__)


def build_segments(
    points: Sequence[Position],
    ranges: Iterable[Range],
    line_id: Any = None,
) -> list[SegmentFeature]:
    """Cut ``points`` into one sub-line per range.

    Boundaries snap outward to existing vertices; no points are interpolated.
    A range whose slice holds fewer than two points is dropped.
    """
    segments: list[SegmentFeature] = []
    last_index = len(points) - 1

    for rng in ranges:
        start_idx = index_for_distance(points, rng.start)
        end_idx = min(index_for_distance(points, rng.end), last_index)
        # slice start must not wrap around for lines shorter than two points
        coords = list(points[max(start_idx, 0) : end_idx + 2])

        if len(coords) < 2:
            _LOG.debug(
                "Dropping degenerate range %.3f-%.3f km on line %r (%d point(s))",
                rng.start,
                rng.end,
                line_id,
                len(coords),
            )
            continue

        segments.append(
            SegmentFeature(
                line_id=line_id,
                geometry=coords,
                start=rng.start,
                end=rng.end,
                value=rng.value,
            )
        )

    return segments
