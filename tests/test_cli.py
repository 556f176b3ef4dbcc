"""Tests for the segment_lines command-line script."""

import csv
import json

import pytest

import segment_lines


@pytest.fixture
def inputs(tmp_path, base_collection, attribute_collection, style_config):
    paths = {
        "base": tmp_path / "roads.geojson",
        "attributes": tmp_path / "condition.geojson",
        "style": tmp_path / "style.json",
    }
    paths["base"].write_text(json.dumps(base_collection))
    paths["attributes"].write_text(json.dumps(attribute_collection))
    paths["style"].write_text(json.dumps(style_config))
    return paths


def test_writes_geojson_csv_and_plot(tmp_path, inputs, capsys):
    output = tmp_path / "out.geojson"
    csv_path = tmp_path / "out.csv"
    plot_path = tmp_path / "out.png"

    segment_lines.main(
        [
            "--base", str(inputs["base"]),
            "--attributes", str(inputs["attributes"]),
            "--style", str(inputs["style"]),
            "--output", str(output),
            "--csv", str(csv_path),
            "--plot", str(plot_path),
        ]
    )

    doc = json.loads(output.read_text())
    assert len(doc["features"]) == 6

    with open(csv_path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 6
    assert rows[0]["line_id"] == "A"
    assert rows[0]["color"] == "green"
    assert rows[0]["num_points"] == "3"
    assert float(rows[0]["slice_km"]) == pytest.approx(10.0)

    assert plot_path.stat().st_size > 0
    assert "Segments:        6" in capsys.readouterr().out


def test_id_attribute_override(tmp_path, inputs, base_collection, attribute_collection):
    for collection in (base_collection, attribute_collection):
        for feature in collection["features"]:
            props = feature["properties"]
            props["road"] = props.pop("id")
    inputs["base"].write_text(json.dumps(base_collection))
    inputs["attributes"].write_text(json.dumps(attribute_collection))
    output = tmp_path / "out.geojson"

    segment_lines.main(
        [
            "--base", str(inputs["base"]),
            "--attributes", str(inputs["attributes"]),
            "--output", str(output),
            "--id-attribute", "road",
        ]
    )

    features = json.loads(output.read_text())["features"]
    assert len(features) == 6
    assert [f["properties"]["road"] for f in features] == ["A", "A", "B", "B", "B", "B"]
    # no --style given, so everything falls back
    assert {f["properties"]["color"] for f in features} == {"grey"}
