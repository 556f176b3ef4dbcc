"""Pydantic data models for dynamic segmentation."""

from typing import Any

from pydantic import BaseModel, Field

# (lon, lat[, alt...]) in geographic coordinates
Position = tuple[float, ...]
Polyline = list[Position]


class LineGeometry(BaseModel):
    """A base line, single (one part) or multi-line (several parts sharing one id)."""

    line_id: Any = None
    parts: list[Polyline]
    multi: bool = False
    properties: dict[str, Any] = Field(default_factory=dict)


class AttributeRecord(BaseModel):
    """One distance-indexed fact about the line identified by ``id``."""

    id: Any
    start: float
    end: float
    value: Any


class Range(BaseModel):
    """A resolved distance interval (km) with its attribute value."""

    start: float
    end: float
    value: Any


class IntervalRule(BaseModel):
    """Colors values within ``[min, max]``, both bounds inclusive."""

    min: float
    max: float
    color: str


class ExactRule(BaseModel):
    """Colors values whose string form equals ``key``."""

    key: str
    color: str


class StyleRuleSet(BaseModel):
    """Parsed style configuration: ordered interval rules, then exact matches."""

    intervals: list[IntervalRule] = Field(default_factory=list)
    exact: dict[str, ExactRule] = Field(default_factory=dict)
    fallback: str = "grey"


class SegmentStyle(BaseModel):
    """Display style of one segment: line color and stroke weight."""

    color: str
    weight: int = 4


class SegmentFeature(BaseModel):
    """A sub-line of a base polyline covering one distance range."""

    line_id: Any = None
    geometry: Polyline = Field(min_length=2)
    start: float
    end: float
    value: Any


class StyledSegment(SegmentFeature):
    """A segment with its resolved style attached."""

    style: SegmentStyle
