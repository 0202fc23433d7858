#!/usr/bin/env python3
"""
Check the rings of a GeoJSON polygon before uploading it.

Usage:
    python scripts/check_polygon.py polygon.geojson
    python scripts/check_polygon.py --close polygon.geojson

Or run without arguments to check the built-in examples.
Accepts a bare Polygon geometry, a Feature, or a FeatureCollection.
"""

import json
import sys
import os

# Add parent directory to path so we can import partymap_admin modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from partymap_admin.exceptions import GeometryError
from partymap_admin.services.geometry import (
    Geometry,
    close_ring,
    from_geojson,
    ring_bounds,
    to_geojson,
    validate_geometry,
)

EXAMPLE_RING = [
    [-74.006, 40.7128],
    [-74.005, 40.7128],
    [-74.005, 40.7138],
    [-74.006, 40.7138],
    [-74.006, 40.7128],
]


def _geometries(data: dict) -> list[tuple[str, dict]]:
    if data.get("type") == "FeatureCollection":
        return [
            (str(feature.get("properties", {}).get("name", i)), feature.get("geometry") or {})
            for i, feature in enumerate(data.get("features", []))
        ]
    if data.get("type") == "Feature":
        return [(str(data.get("properties", {}).get("name", 0)), data.get("geometry") or {})]
    return [("polygon", data)]


def check_geometry(name: str, data: dict, close: bool = False) -> bool:
    """Check one polygon and print the result. Returns True when valid."""
    print(f"\n{'='*60}")
    print(f"POLYGON: {name}")
    print(f"{'='*60}")

    try:
        geometry = from_geojson(data)
        if close:
            geometry = Geometry(
                outer=tuple(close_ring(geometry.outer)),
                holes=tuple(tuple(close_ring(hole)) for hole in geometry.holes),
            )
    except GeometryError as e:
        print(f"  ✗ {e.message}")
        return False

    print(f"  Rings:           {len(geometry.rings)} (outer + {len(geometry.holes)} holes)")
    print(f"  Outer vertices:  {len(geometry.outer)}")

    errors = validate_geometry(geometry)
    for ring_index, error in errors:
        label = "outer ring" if ring_index == 0 else f"hole {ring_index}"
        print(f"  ✗ {label}: {error.message}")

    if errors:
        return False

    bounds = ring_bounds(geometry.outer)
    print(f"  Bounds:          [{bounds.min_longitude}, {bounds.min_latitude}] - "
          f"[{bounds.max_longitude}, {bounds.max_latitude}]")
    print("  ✓ Valid")
    if close:
        print(json.dumps(to_geojson(geometry)))
    return True


def main():
    args = sys.argv[1:]
    close = "--close" in args
    paths = [arg for arg in args if arg != "--close"]

    if not paths:
        print("=" * 60)
        print("CHECKING EXAMPLE POLYGONS")
        print("=" * 60)
        examples = [
            ("closed square", {"type": "Polygon", "coordinates": [EXAMPLE_RING]}),
            ("open square", {"type": "Polygon", "coordinates": [EXAMPLE_RING[:-1]]}),
            ("triangle", {"type": "Polygon", "coordinates": [EXAMPLE_RING[:3]]}),
            ("off the map", {"type": "Polygon", "coordinates": [[[200, 0], [1, 0], [1, 1], [200, 0]]]}),
        ]
        for name, data in examples:
            check_geometry(name, data, close=close)
        return

    all_valid = True
    for path in paths:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        for name, geometry in _geometries(data):
            all_valid = check_geometry(f"{path}:{name}", geometry, close=close) and all_valid

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
