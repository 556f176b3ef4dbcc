"""GeoJSON FeatureCollection codecs for base lines, attribute records and segments."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Any

import pydantic

from .config import LayerOptions
from .errors import ValidationError
from .models import AttributeRecord, LineGeometry, SegmentFeature, StyledSegment

_LOG = logging.getLogger(__name__)

LINE_TYPES = ("LineString", "MultiLineString")


def read_base_geometries(doc: Any, options: LayerOptions | None = None) -> list[LineGeometry]:
    """Read LineString/MultiLineString features; other geometry types are skipped."""
    options = options or LayerOptions()
    geometries: list[LineGeometry] = []
    failures: list[str] = []

    for idx, feature in enumerate(_features(doc)):
        geometry = _as_dict(feature.get("geometry"))
        geometry_type = geometry.get("type")
        if geometry_type not in LINE_TYPES:
            _LOG.warning("Skipping base feature %d with geometry type %r", idx, geometry_type)
            continue

        properties = dict(_as_dict(feature.get("properties")))
        coordinates = geometry.get("coordinates") or []
        multi = geometry_type == "MultiLineString"
        try:
            geometries.append(
                LineGeometry(
                    line_id=_line_id(properties.get(options.id_attribute)),
                    parts=coordinates if multi else [coordinates],
                    multi=multi,
                    properties=properties,
                )
            )
        except pydantic.ValidationError as exc:
            failures.append(f"feature {idx}: invalid coordinates ({exc.error_count()} error(s))")

    if failures:
        raise ValidationError("Invalid base geometry data", failures)
    return geometries


def validate_attribute_features(features: Iterable[Any], options: LayerOptions | None = None) -> list[str]:
    """Return one message per failing attribute feature (empty when all pass)."""
    options = options or LayerOptions()
    failures: list[str] = []

    for idx, feature in enumerate(features):
        props = feature.get("properties") if isinstance(feature, dict) else None
        if not isinstance(props, dict):
            failures.append(f"feature {idx}: missing properties")
            continue

        line_id = props.get(options.id_attribute)
        start = props.get(options.start_attribute)
        end = props.get(options.end_attribute)
        value = props.get(options.style_attribute)

        if _is_empty(line_id) or _line_id(line_id) is None:
            failures.append(f"feature {idx}: missing {options.id_attribute!r}")
        if not _is_number(start) or start < 0:
            failures.append(f"feature {idx}: {options.start_attribute!r} must be a number >= 0, got {start!r}")
        elif not _is_number(end) or end < start:
            failures.append(
                f"feature {idx}: {options.end_attribute!r} must be a number >= {options.start_attribute!r}, got {end!r}"
            )
        if _is_empty(value):
            failures.append(f"feature {idx}: missing {options.style_attribute!r}")

    return failures


def read_attribute_records(doc: Any, options: LayerOptions | None = None) -> list[AttributeRecord]:
    """Read attribute records, rejecting the whole collection if any record is invalid."""
    options = options or LayerOptions()
    features = _features(doc)

    failures = validate_attribute_features(features, options)
    if failures:
        raise ValidationError("Invalid attribute data", failures)

    records = []
    for feature in features:
        props = feature["properties"]
        records.append(
            AttributeRecord(
                id=props[options.id_attribute],
                start=props[options.start_attribute],
                end=props[options.end_attribute],
                value=props[options.style_attribute],
            )
        )
    return records


def segments_to_feature_collection(
    segments: Iterable[SegmentFeature],
    options: LayerOptions | None = None,
) -> dict[str, Any]:
    """Serialize segments as LineString features carrying range and style properties."""
    options = options or LayerOptions()
    features = []
    for seg in segments:
        properties: dict[str, Any] = {
            options.id_attribute: seg.line_id,
            options.start_attribute: seg.start,
            options.end_attribute: seg.end,
            options.style_attribute: seg.value,
        }
        if isinstance(seg, StyledSegment):
            properties["color"] = seg.style.color
            properties["weight"] = seg.style.weight
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [list(p) for p in seg.geometry]},
                "properties": properties,
            }
        )
    return {"type": "FeatureCollection", "features": features}


def segments_from_feature_collection(doc: Any, options: LayerOptions | None = None) -> list[SegmentFeature]:
    """Read back segments written by ``segments_to_feature_collection``."""
    options = options or LayerOptions()
    segments: list[SegmentFeature] = []
    failures: list[str] = []

    for idx, feature in enumerate(_features(doc)):
        geometry = _as_dict(feature.get("geometry"))
        props = _as_dict(feature.get("properties"))
        start = props.get(options.start_attribute)
        end = props.get(options.end_attribute)
        if geometry.get("type") != "LineString":
            failures.append(f"feature {idx}: segment geometry must be a LineString")
            continue
        if not (_is_number(start) and _is_number(end)):
            failures.append(
                f"feature {idx}: segment needs numeric {options.start_attribute!r}/{options.end_attribute!r}"
            )
            continue
        try:
            segments.append(
                SegmentFeature(
                    line_id=props.get(options.id_attribute),
                    geometry=geometry.get("coordinates") or [],
                    start=start,
                    end=end,
                    value=props.get(options.style_attribute),
                )
            )
        except pydantic.ValidationError as exc:
            failures.append(f"feature {idx}: invalid coordinates ({exc.error_count()} error(s))")

    if failures:
        raise ValidationError("Invalid segment data", failures)
    return segments


def _features(doc: Any) -> list[Any]:
    if not isinstance(doc, dict) or doc.get("type") != "FeatureCollection":
        raise ValidationError("Expected a GeoJSON FeatureCollection")
    features = doc.get("features")
    if not isinstance(features, list):
        raise ValidationError("FeatureCollection 'features' must be a list")
    bad = [f"feature {i}: not an object" for i, f in enumerate(features) if not isinstance(f, dict)]
    if bad:
        raise ValidationError("Invalid FeatureCollection", bad)
    return features


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _line_id(value: Any) -> Any:
    # Only scalar ids can be matched between geometries and records
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return value
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
