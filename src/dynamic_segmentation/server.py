"""FastAPI server for dynamic segmentation."""

from __future__ import annotations

import csv
import io
import json
import logging
import zipfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import shapefile
from fastapi import FastAPI, Form, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from .config import LayerOptions
from .errors import SegmentationError
from .geojson import (
    read_attribute_records,
    read_base_geometries,
    segments_from_feature_collection,
    segments_to_feature_collection,
)
from .kml_reader import read_kmz
from .models import LineGeometry, StyledSegment
from .pipeline import build, restyle
from .reader import read_shapefile
from .styles import parse_style_config

_LOG = logging.getLogger(__name__)

app = FastAPI(title="Dynamic Segmentation", version="0.1.0")

DEFAULT_OPTIONS = LayerOptions.from_env()
COMPANION_EXTS = {".shp", ".shx", ".dbf", ".prj"}
GEOJSON_EXTS = (".geojson", ".json")


class SegmentationRequest(BaseModel):
    base: dict[str, Any]
    attributes: dict[str, Any]
    style: dict[str, str] = Field(default_factory=dict)
    options: LayerOptions | None = None


class RestyleRequest(BaseModel):
    segments: dict[str, Any]
    style: dict[str, str] = Field(default_factory=dict)
    options: LayerOptions | None = None


@app.post("/segments")
def segment_lines(request: SegmentationRequest):
    """Segment GeoJSON base lines by GeoJSON attribute records and style the result."""
    options = request.options or DEFAULT_OPTIONS
    try:
        base = read_base_geometries(request.base, options)
        records = read_attribute_records(request.attributes, options)
        rules = parse_style_config(request.style, fallback=options.fallback_color)
    except SegmentationError as exc:
        _LOG.warning("Rejected request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))

    segments = build(base, records, rules, weight=options.weight)
    return segments_to_feature_collection(segments, options)


@app.post("/restyle")
def restyle_segments(request: RestyleRequest):
    """Re-color previously built segments with a new style configuration."""
    options = request.options or DEFAULT_OPTIONS
    try:
        segments = segments_from_feature_collection(request.segments, options)
        rules = parse_style_config(request.style, fallback=options.fallback_color)
    except SegmentationError as exc:
        _LOG.warning("Rejected request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))

    return segments_to_feature_collection(restyle(segments, rules, weight=options.weight), options)


@app.post("/process")
async def process_upload(
    files: list[UploadFile],
    attributes: UploadFile,
    style: str = Form("{}"),
    format: str = Query("geojson", pattern="^(geojson|csv)$"),
):
    """Segment uploaded base lines by an uploaded attribute GeoJSON.

    Base lines may be:
    - A single .geojson/.json FeatureCollection
    - A single .kmz or .kml file
    - A single .zip containing shapefile components
    - Multiple files (.shp, .shx, .dbf, and optionally .prj)
    """
    options = DEFAULT_OPTIONS
    filename = (files[0].filename or "").lower() if len(files) == 1 else ""

    try:
        if filename.endswith(GEOJSON_EXTS):
            base = read_base_geometries(_load_json(await files[0].read(), "base"), options)
        elif filename.endswith((".kmz", ".kml")):
            base = read_kmz(await files[0].read(), id_attribute=options.id_attribute)
        elif filename.endswith(".zip"):
            base = _read_zip(await files[0].read(), options)
        else:
            base = await _read_multi_file(files, options)

        records = read_attribute_records(_load_json(await attributes.read(), "attributes"), options)
        style_config = _load_json(style.encode(), "style")
        if not isinstance(style_config, dict):
            raise HTTPException(status_code=400, detail="Style must be a JSON object")
        rules = parse_style_config(style_config, fallback=options.fallback_color)
    except (ValueError, ET.ParseError, shapefile.ShapefileException, zipfile.BadZipFile) as exc:
        # SegmentationError subclasses are ValueErrors too
        _LOG.warning("Rejected upload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))

    segments = build(base, records, rules, weight=options.weight)

    if format == "csv":
        return _segments_to_csv_response(segments)
    return segments_to_feature_collection(segments, options)


def _load_json(content: bytes, label: str) -> Any:
    try:
        return json.loads(content.decode("utf-8", errors="replace"))
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {label} JSON: {exc}")


def _read_zip(content: bytes, options: LayerOptions) -> list[LineGeometry]:
    """Read shapefile components straight out of a zip archive."""
    members: dict[str, bytes] = {}
    with zipfile.ZipFile(io.BytesIO(content)) as zf:
        for name in zf.namelist():
            ext = Path(name).suffix.lower()
            if ext in COMPANION_EXTS and ext not in members:
                members[ext] = zf.read(name)

    if ".shp" not in members:
        raise HTTPException(status_code=400, detail="No .shp file found in zip archive")
    return _read_members(members, options)


async def _read_multi_file(files: list[UploadFile], options: LayerOptions) -> list[LineGeometry]:
    """Read a shapefile from multiple uploaded component files."""
    members: dict[str, bytes] = {}
    for f in files:
        ext = Path(f.filename or "").suffix.lower()
        if ext in COMPANION_EXTS:
            members[ext] = await f.read()

    if ".shp" not in members:
        raise HTTPException(status_code=400, detail="Missing required .shp file")
    return _read_members(members, options)


def _read_members(members: dict[str, bytes], options: LayerOptions) -> list[LineGeometry]:
    return read_shapefile(
        shp_file=io.BytesIO(members[".shp"]),
        shx_file=io.BytesIO(members[".shx"]) if ".shx" in members else None,
        dbf_file=io.BytesIO(members[".dbf"]) if ".dbf" in members else None,
        prj_wkt=members[".prj"].decode("utf-8", errors="replace") if ".prj" in members else None,
        id_attribute=options.id_attribute,
    )


def _segments_to_csv_response(segments: list[StyledSegment]) -> StreamingResponse:
    """Convert segments to a streaming CSV response, one row per segment."""
    fieldnames = ["line_id", "start_km", "end_km", "value", "color", "weight", "num_points"]

    def generate():
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=fieldnames)
        writer.writeheader()
        yield buf.getvalue()
        buf.seek(0)
        buf.truncate(0)

        for seg in segments:
            writer.writerow(
                {
                    "line_id": seg.line_id,
                    "start_km": seg.start,
                    "end_km": seg.end,
                    "value": seg.value,
                    "color": seg.style.color,
                    "weight": seg.style.weight,
                    "num_points": len(seg.geometry),
                }
            )
            yield buf.getvalue()
            buf.seek(0)
            buf.truncate(0)

    return StreamingResponse(
        generate(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=segments.csv"},
    )
