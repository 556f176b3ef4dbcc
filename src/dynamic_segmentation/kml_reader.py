"""KMZ/KML reader — extracts base line geometries from Placemarks.

KMZ is a ZIP archive containing KML. KML coordinates are always WGS84 (EPSG:4326)
in ``longitude,latitude,altitude`` format, which is what the distance model
expects, so no transformation is needed.
"""

from __future__ import annotations

import io
import zipfile
import xml.etree.ElementTree as ET
from typing import Any, BinaryIO

from .models import LineGeometry

KML_NS = "{http://www.opengis.net/kml/2.2}"


def read_kmz(file: str | bytes | BinaryIO, id_attribute: str = "id") -> list[LineGeometry]:
    """Read a KMZ (or plain KML) file and return its line Placemarks.

    A Placemark with one ``LineString`` is a single line; a ``MultiGeometry``
    holding several is a multi-line. The line id is the ``id_attribute``
    entry of the Placemark's ExtendedData, falling back to its ``<name>``.

    Args:
        file: Path to a .kmz/.kml file, raw bytes, or a file-like object.
        id_attribute: ExtendedData field holding the line id.
    """
    data = _read_bytes(file)

    # KMZ is a ZIP; plain KML is XML text
    if _is_zip(data):
        kml_text = _extract_kml_from_kmz(data)
    else:
        kml_text = data.decode("utf-8", errors="replace")

    root = ET.fromstring(kml_text)
    geometries: list[LineGeometry] = []

    for placemark in root.iter(f"{KML_NS}Placemark"):
        parts = []
        for line in placemark.iter(f"{KML_NS}LineString"):
            coords = _parse_coordinates_text(line.findtext(f"{KML_NS}coordinates") or "")
            if coords:
                parts.append(coords)
        if not parts:
            continue

        properties = _placemark_properties(placemark)
        line_id = properties.get(id_attribute, properties.get("name"))
        geometries.append(
            LineGeometry(line_id=line_id, parts=parts, multi=len(parts) > 1, properties=properties)
        )

    return geometries


def _read_bytes(file: str | bytes | BinaryIO) -> bytes:
    if isinstance(file, bytes):
        return file
    if isinstance(file, str):
        with open(file, "rb") as f:
            return f.read()
    return file.read()


def _is_zip(data: bytes) -> bool:
    return data[:4] == b"PK\x03\x04"


def _extract_kml_from_kmz(data: bytes) -> str:
    """Extract the first .kml file from a KMZ (ZIP) archive."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        # Prefer doc.kml, fall back to any .kml
        names = zf.namelist()
        kml_name = next((n for n in names if n.lower() == "doc.kml"), None)
        if kml_name is None:
            kml_name = next((n for n in names if n.lower().endswith(".kml")), None)
        if kml_name is None:
            raise ValueError("No .kml file found in KMZ archive")
        return zf.read(kml_name).decode("utf-8", errors="replace")


def _placemark_properties(placemark: ET.Element) -> dict[str, Any]:
    """Collect ``name`` plus ExtendedData ``Data`` and ``SimpleData`` entries."""
    properties: dict[str, Any] = {}
    name = placemark.findtext(f"{KML_NS}name")
    if name is not None:
        properties["name"] = name.strip()

    extended = placemark.find(f"{KML_NS}ExtendedData")
    if extended is None:
        return properties

    for data in extended.iter(f"{KML_NS}Data"):
        key = data.get("name")
        if key:
            properties[key] = (data.findtext(f"{KML_NS}value") or "").strip()
    for simple in extended.iter(f"{KML_NS}SimpleData"):
        key = simple.get("name")
        if key:
            properties[key] = (simple.text or "").strip()
    return properties


def _parse_coordinates_text(text: str) -> list[tuple[float, ...]]:
    """Parse a KML ``<coordinates>`` text block.

    Format: ``lon,lat[,alt] lon,lat[,alt] ...`` (whitespace-separated tuples).
    """
    coords: list[tuple[float, ...]] = []
    for token in text.strip().split():
        parts = token.split(",")
        if len(parts) < 2:
            continue
        coords.append(tuple(float(p) for p in parts[:3]))
    return coords
