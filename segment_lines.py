"""Segment base lines by attribute records from local files: export GeoJSON, CSV, and a preview plot.

This script uses the dynamic_segmentation library for reading, segmentation and
styling, and adds file output on top.

Usage:

    python segment_lines.py --base roads.geojson --attributes condition.geojson \
        --style style.json --output segments.geojson --csv segments.csv --plot segments.png
"""

import argparse
import csv
import json
import logging
from pathlib import Path

import matplotlib.pyplot as plt

from dynamic_segmentation import (
    LayerOptions,
    LineGeometry,
    StyledSegment,
    build,
    cumulative_distances,
    parse_style_config,
    read_attribute_records,
    read_base_geometries,
    read_kmz,
    read_shapefile,
    segments_to_feature_collection,
)


def load_base(path: Path, options: LayerOptions) -> list[LineGeometry]:
    """Read base lines from GeoJSON, KML/KMZ, or a shapefile, chosen by extension."""
    suffix = path.suffix.lower()
    if suffix in (".geojson", ".json"):
        return read_base_geometries(json.loads(path.read_text()), options)
    if suffix in (".kmz", ".kml"):
        return read_kmz(str(path), id_attribute=options.id_attribute)
    return read_shapefile(path, id_attribute=options.id_attribute)


def export_csv(segments: list[StyledSegment], path: Path) -> None:
    """Write one row per segment."""
    fieldnames = ["line_id", "start_km", "end_km", "value", "color", "num_points", "slice_km"]
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for seg in segments:
            writer.writerow(
                {
                    "line_id": seg.line_id,
                    "start_km": seg.start,
                    "end_km": seg.end,
                    "value": seg.value,
                    "color": seg.style.color,
                    "num_points": len(seg.geometry),
                    # geometric length of the snapped slice, may exceed end - start
                    "slice_km": round(cumulative_distances(seg.geometry)[-1], 6),
                }
            )
    print(f"CSV exported: {path}")


def plot_segments(segments: list[StyledSegment], path: Path, title: str = "Dynamic Segmentation") -> None:
    """Draw every segment in its resolved color."""
    fig, ax = plt.subplots(figsize=(10, 10))
    for seg in segments:
        lons = [p[0] for p in seg.geometry]
        lats = [p[1] for p in seg.geometry]
        ax.plot(lons, lats, color=seg.style.color, linewidth=seg.style.weight / 2, solid_capstyle="butt")

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(title)
    ax.set_aspect("equal", adjustable="datalim")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    print(f"Plot saved: {path}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--base", type=Path, required=True, help="Base lines (.geojson, .kml/.kmz, .shp)")
    parser.add_argument("--attributes", type=Path, required=True, help="Attribute records GeoJSON")
    parser.add_argument("--style", type=Path, help="Style JSON object mapping values or 'min-max' keys to colors")
    parser.add_argument("--output", type=Path, default=Path("segments.geojson"), help="Output GeoJSON path")
    parser.add_argument("--csv", type=Path, help="Optional per-segment CSV summary")
    parser.add_argument("--plot", type=Path, help="Optional PNG preview")
    parser.add_argument("--id-attribute", help="Property holding the line id (default from DYNSEG_ID_ATTRIBUTE)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )
    args = parse_args(argv)

    options = LayerOptions.from_env()
    if args.id_attribute:
        options = options.model_copy(update={"id_attribute": args.id_attribute})

    print(f"Reading base lines: {args.base}")
    base = load_base(args.base, options)
    records = read_attribute_records(json.loads(args.attributes.read_text()), options)
    style_config = json.loads(args.style.read_text()) if args.style else {}
    rules = parse_style_config(style_config, fallback=options.fallback_color)

    segments = build(base, records, rules, weight=options.weight)

    print(f"Base geometries: {len(base):,}")
    print(f"Lines:           {sum(len(g.parts) for g in base):,}")
    print(f"Records:         {len(records):,}")
    print(f"Segments:        {len(segments):,}")
    print()

    args.output.write_text(json.dumps(segments_to_feature_collection(segments, options)))
    print(f"GeoJSON exported: {args.output}")

    if args.csv:
        export_csv(segments, args.csv)
    if args.plot:
        plot_segments(segments, args.plot, title=f"Dynamic Segmentation: {args.base.name}")


if __name__ == "__main__":
    main()
