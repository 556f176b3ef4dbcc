"""Dynamic segmentation of polylines by distance-indexed attribute records."""

from .config import LayerOptions
from .distance import cumulative_distances, haversine_km, index_for_distance, line_length
from .errors import SegmentationError, StyleConfigError, ValidationError
from .geojson import (
    read_attribute_records,
    read_base_geometries,
    segments_from_feature_collection,
    segments_to_feature_collection,
)
from .kml_reader import read_kmz
from .models import (
    AttributeRecord,
    ExactRule,
    IntervalRule,
    LineGeometry,
    Range,
    SegmentFeature,
    SegmentStyle,
    StyledSegment,
    StyleRuleSet,
)
from .pipeline import SegmentationLayer, build, restyle
from .ranges import NO_DATA_VALUE, group_records, ranges_for_line, resolve_ranges
from .reader import check_geographic, read_shapefile
from .segments import build_segments
from .styles import parse_style_config, resolve_style, style_for

__all__ = [
    "AttributeRecord",
    "ExactRule",
    "IntervalRule",
    "LayerOptions",
    "LineGeometry",
    "NO_DATA_VALUE",
    "Range",
    "SegmentFeature",
    "SegmentStyle",
    "SegmentationError",
    "SegmentationLayer",
    "StyleConfigError",
    "StyleRuleSet",
    "StyledSegment",
    "ValidationError",
    "build",
    "build_segments",
    "check_geographic",
    "cumulative_distances",
    "group_records",
    "haversine_km",
    "index_for_distance",
    "line_length",
    "parse_style_config",
    "ranges_for_line",
    "read_attribute_records",
    "read_base_geometries",
    "read_kmz",
    "read_shapefile",
    "resolve_ranges",
    "resolve_style",
    "restyle",
    "segments_from_feature_collection",
    "segments_to_feature_collection",
    "style_for",
]
