"""Shapefile reader for base line geometries (POLYLINE / POLYLINEZ / POLYLINEM)."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import shapefile
from pyproj import CRS
from pyproj.exceptions import CRSError

from .models import LineGeometry


def check_geographic(prj_source: str | Path | None) -> str | None:
    """Return the CRS name from a .prj WKT string or path, rejecting projected CRSs.

    A missing or unreadable .prj is assumed to be geographic (WGS84) and
    returns None. Projected CRSs raise ValueError since lines are not
    reprojected.
    """
    if prj_source is None:
        return None

    if isinstance(prj_source, Path):
        if not prj_source.exists():
            return None
        wkt = prj_source.read_text()
    else:
        wkt = prj_source

    if not wkt.strip():
        return None

    try:
        crs = CRS.from_wkt(wkt)
    except CRSError:
        return None

    if crs.is_projected:
        raise ValueError(f"Projected CRS {crs.name!r} is not supported; supply lon/lat coordinates.")
    return crs.name


def read_shapefile(
    shp_path: str | Path | None = None,
    *,
    shp_file: BinaryIO | None = None,
    shx_file: BinaryIO | None = None,
    dbf_file: BinaryIO | None = None,
    prj_wkt: str | None = None,
    id_attribute: str = "id",
) -> list[LineGeometry]:
    """Read a polyline shapefile into base line geometries.

    Supports two modes:
    - File path: pass ``shp_path`` (the .prj is auto-discovered)
    - File objects: pass ``shp_file``, ``shx_file``, ``dbf_file``, and optionally ``prj_wkt``

    Shapes with one part become single lines, shapes with several parts
    become multi-lines sharing the record's ``id_attribute`` value.
    """
    if shp_path is not None:
        shp_path = Path(shp_path)
        sf = shapefile.Reader(str(shp_path))
        prj_path = shp_path.with_suffix(".prj")
        if shp_path.suffix.lower() != ".shp":
            # pyshp accepts paths without an extension
            prj_path = Path(str(shp_path) + ".prj")
        check_geographic(prj_path)
    elif shp_file is not None:
        sf = shapefile.Reader(shp=shp_file, shx=shx_file, dbf=dbf_file)
        check_geographic(prj_wkt)
    else:
        raise ValueError("Provide either shp_path or shp_file")

    upper = sf.shapeTypeName.upper()
    if "POLYLINE" not in upper and upper not in ("ARC", "ARCZ", "ARCM"):
        raise ValueError(f"Unsupported shape type: {sf.shapeTypeName}. Only POLYLINE shapes are supported.")

    has_z = "Z" in upper
    has_dbf = sf.dbf is not None
    geometries: list[LineGeometry] = []

    for i, shape in enumerate(sf.shapes()):
        properties = sf.record(i).as_dict() if has_dbf else {}
        parts = _split_parts(shape, has_z)
        if not parts:
            continue
        geometries.append(
            LineGeometry(
                line_id=properties.get(id_attribute),
                parts=parts,
                multi=len(parts) > 1,
                properties=properties,
            )
        )

    return geometries


def _split_parts(shape: shapefile.Shape, has_z: bool) -> list[list[tuple[float, ...]]]:
    """Split a shape's flat vertex list into one coordinate list per part."""
    parts: list[list[tuple[float, ...]]] = []
    part_starts = list(shape.parts)
    z_values = getattr(shape, "z", None) if has_z else None

    for part_idx, start in enumerate(part_starts):
        end = part_starts[part_idx + 1] if part_idx + 1 < len(part_starts) else len(shape.points)
        coords = []
        for v in range(start, end):
            x, y = shape.points[v][:2]
            if z_values is not None and len(z_values) > v:
                coords.append((x, y, z_values[v]))
            else:
                coords.append((x, y))
        parts.append(coords)

    return parts
