import math

import pytest

from dynamic_segmentation.distance import EARTH_RADIUS_KM
from dynamic_segmentation.models import AttributeRecord, LineGeometry


def _equator_line(*km_marks: float) -> list[tuple[float, float]]:
    """Points on the equator at the given distances (km) east of lon 0."""
    return [(math.degrees(km / EARTH_RADIUS_KM), 0.0) for km in km_marks]


@pytest.fixture
def equator_line():
    return _equator_line


@pytest.fixture
def straight_line():
    """A straight 3-point line of 10 km total, vertices at km 0, 5 and 10."""
    return _equator_line(0, 5, 10)


@pytest.fixture
def road_a(straight_line):
    return LineGeometry(line_id="A", parts=[straight_line], properties={"id": "A", "name": "Road A"})


@pytest.fixture
def record():
    def make(line_id, start, end, value):
        return AttributeRecord(id=line_id, start=start, end=end, value=value)

    return make


@pytest.fixture
def base_collection(equator_line):
    """GeoJSON base lines: one LineString and one two-part MultiLineString."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [list(p) for p in equator_line(0, 5, 10)]},
                "properties": {"id": "A"},
            },
            {
                "type": "Feature",
                "geometry": {
                    "type": "MultiLineString",
                    "coordinates": [
                        [list(p) for p in equator_line(20, 24, 28)],
                        [list(p) for p in equator_line(40, 42, 44, 46)],
                    ],
                },
                "properties": {"id": "B"},
            },
        ],
    }


@pytest.fixture
def attribute_collection():
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": None, "properties": {"id": "A", "start": 0, "end": 6, "value": 5}},
            {"type": "Feature", "geometry": None, "properties": {"id": "B", "start": 0, "end": 3, "value": 15}},
        ],
    }


@pytest.fixture
def style_config():
    return {"0-10": "green", "10-20": "yellow", "NA": "black"}
