"""Segmentation pipeline: ranges -> sub-lines -> styles for every base line."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .config import LayerOptions
from .distance import line_length
from .models import AttributeRecord, LineGeometry, SegmentFeature, StyledSegment, StyleRuleSet
from .ranges import group_records, ranges_for_line
from .segments import build_segments
from .styles import DEFAULT_WEIGHT, parse_style_config, style_for

_LOG = logging.getLogger(__name__)


def build(
    base_geometries: Iterable[LineGeometry],
    attribute_records: Iterable[AttributeRecord],
    rules: StyleRuleSet,
    weight: int = DEFAULT_WEIGHT,
) -> list[StyledSegment]:
    """Segment every base line by its attribute records and style the result.

    Parts of a multi-line geometry are segmented independently but all draw
    on the records of the shared line id. Returns a new list on every call.
    """
    grouped = group_records(attribute_records)
    styled: list[StyledSegment] = []
    geometry_count = line_count = 0

    for geometry in base_geometries:
        geometry_count += 1
        for points in geometry.parts:
            line_count += 1
            ranges = ranges_for_line(grouped, geometry.line_id, line_length(points))
            for segment in build_segments(points, ranges, line_id=geometry.line_id):
                styled.append(_with_style(segment, rules, weight))

    _LOG.info(
        "Built %d segment(s) from %d line(s) in %d geometr%s",
        len(styled),
        line_count,
        geometry_count,
        "y" if geometry_count == 1 else "ies",
    )
    return styled


def restyle(
    segments: Iterable[SegmentFeature],
    rules: StyleRuleSet,
    weight: int = DEFAULT_WEIGHT,
) -> list[StyledSegment]:
    """Re-resolve styles for existing segments; geometry is left as is."""
    return [_with_style(segment, rules, weight) for segment in segments]


def _with_style(segment: SegmentFeature, rules: StyleRuleSet, weight: int) -> StyledSegment:
    return StyledSegment(
        line_id=segment.line_id,
        geometry=segment.geometry,
        start=segment.start,
        end=segment.end,
        value=segment.value,
        style=style_for(segment.value, rules, weight),
    )


class SegmentationLayer:
    """Holds base lines, the current rule set and the latest segment output.

    Every attribute update rebuilds the output and replaces it wholesale; a
    style update only re-resolves colors. Callers that can trigger updates
    concurrently must serialize them.
    """

    def __init__(
        self,
        base_geometries: Iterable[LineGeometry],
        style_config: Mapping[str, str] | None = None,
        options: LayerOptions | None = None,
    ):
        self.options = options or LayerOptions()
        self.base_geometries = list(base_geometries)
        self.rules = parse_style_config(style_config or {}, fallback=self.options.fallback_color)
        self._segments: list[StyledSegment] = []

    @property
    def segments(self) -> list[StyledSegment]:
        return self._segments

    def update_attributes(self, records: Iterable[AttributeRecord]) -> list[StyledSegment]:
        self._segments = build(self.base_geometries, records, self.rules, weight=self.options.weight)
        return self._segments

    def update_style(self, style_config: Mapping[str, str]) -> list[StyledSegment]:
        self.rules = parse_style_config(style_config, fallback=self.options.fallback_color)
        self._segments = restyle(self._segments, self.rules, weight=self.options.weight)
        return self._segments

    def clear(self) -> None:
        self._segments = []
