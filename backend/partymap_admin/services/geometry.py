"""
Polygon geometry service.

Validates polygon rings and keeps them closed while they are edited, and
converts between the editable coordinate objects used by the admin forms and
the GeoJSON arrays the backend stores:

    {"type": "Polygon", "coordinates": [[[lon, lat], ...], ...]}

The first ring is the outer boundary, any further rings are holes.

All functions are pure: they take a full ring and return a new one.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Iterable, Mapping, Optional, Sequence

from partymap_admin.exceptions import (
    CoordinateOutOfBounds,
    GeometryError,
    MalformedCoordinate,
    MalformedGeometry,
    RingNotClosed,
    TooFewVertices,
)

MIN_RING_VERTICES = 4
MIN_OPEN_VERTICES = 3  # distinct points needed before the closing point

LONGITUDE_RANGE = (-180.0, 180.0)
LATITUDE_RANGE = (-90.0, 90.0)


@dataclass(frozen=True)
class Coordinate:
    """A (longitude, latitude) pair. Edits produce a new Coordinate."""
    longitude: float
    latitude: float

    @property
    def in_bounds(self) -> bool:
        return (
            LONGITUDE_RANGE[0] <= self.longitude <= LONGITUDE_RANGE[1]
            and LATITUDE_RANGE[0] <= self.latitude <= LATITUDE_RANGE[1]
        )

    def to_dict(self) -> dict:
        return {"longitude": self.longitude, "latitude": self.latitude}

    def to_pair(self) -> list[float]:
        return [self.longitude, self.latitude]


@dataclass(frozen=True)
class Geometry:
    """Outer ring plus zero or more holes."""
    outer: tuple[Coordinate, ...]
    holes: tuple[tuple[Coordinate, ...], ...] = ()

    @property
    def rings(self) -> list[tuple[Coordinate, ...]]:
        return [self.outer, *self.holes]


@dataclass(frozen=True)
class Bounds:
    """Bounding box of a ring."""
    min_longitude: float
    min_latitude: float
    max_longitude: float
    max_latitude: float

    def to_dict(self) -> dict:
        return {
            "southWest": [self.min_longitude, self.min_latitude],
            "northEast": [self.max_longitude, self.max_latitude],
        }


@dataclass
class ValidationResult:
    """Outcome of `validate_ring`."""
    valid: bool
    error: Optional[GeometryError] = None
    coordinates: list[Coordinate] = field(default_factory=list)

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


# =============================================================================
# Coercion
# =============================================================================

def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate component
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def to_coordinate(value: Any, index: int = 0) -> Coordinate:
    """
    Coerce one ring element into a Coordinate.

    Accepts a Coordinate, a [longitude, latitude] pair, or a mapping with
    `longitude` and `latitude` keys.

    Raises:
        MalformedCoordinate: value is none of the above, or not numeric
    """
    if isinstance(value, Coordinate):
        return value

    if isinstance(value, Mapping):
        lon, lat = value.get("longitude"), value.get("latitude")
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and len(value) == 2:
        lon, lat = value[0], value[1]
    else:
        raise MalformedCoordinate(index, value)

    if not (_is_number(lon) and _is_number(lat)):
        raise MalformedCoordinate(index, value)
    return Coordinate(longitude=float(lon), latitude=float(lat))


def _coerce_ring(coordinates: Iterable[Any]) -> list[Coordinate]:
    if isinstance(coordinates, (str, bytes, Mapping)):
        raise MalformedCoordinate(0, coordinates)
    return [to_coordinate(value, i) for i, value in enumerate(coordinates)]


def _is_closed(ring: Sequence[Coordinate]) -> bool:
    return len(ring) >= 2 and ring[0] == ring[-1]


# =============================================================================
# Validation
# =============================================================================

def validate_ring(coordinates: Iterable[Any]) -> ValidationResult:
    """
    Validate a polygon ring.

    Checks run in a fixed order so the reported error is deterministic:
    shape of every element, vertex count, bounds of every element, closure.

    Returns:
        ValidationResult with `valid=True` and the coerced coordinates, or
        `valid=False` and the first error found
    """
    try:
        ring = require_valid_ring(coordinates)
    except GeometryError as e:
        return ValidationResult(valid=False, error=e)
    return ValidationResult(valid=True, coordinates=ring)


def require_valid_ring(coordinates: Iterable[Any]) -> list[Coordinate]:
    """Raising variant of `validate_ring`; returns the coerced ring."""
    ring = _coerce_ring(coordinates)

    if len(ring) < MIN_RING_VERTICES:
        raise TooFewVertices(len(ring), MIN_RING_VERTICES)

    for i, coord in enumerate(ring):
        if not coord.in_bounds:
            raise CoordinateOutOfBounds(i, coord.longitude, coord.latitude)

    if not _is_closed(ring):
        raise RingNotClosed()

    return ring


def validate_geometry(geometry: Geometry) -> list[tuple[int, GeometryError]]:
    """
    Validate every ring of a geometry.

    Returns:
        List of (ring_index, error) tuples; ring 0 is the outer ring.
        Empty when the geometry is valid.
    """
    errors = []
    for ring_index, ring in enumerate(geometry.rings):
        result = validate_ring(ring)
        if not result.valid:
            errors.append((ring_index, result.error))
    return errors


# =============================================================================
# Wire format
# =============================================================================

def to_wire_format(coordinates: Iterable[Any]) -> list[list[float]]:
    """Convert coordinate objects to [longitude, latitude] pairs."""
    return [coord.to_pair() for coord in _coerce_ring(coordinates)]


def from_wire_format(pairs: Iterable[Any]) -> list[Coordinate]:
    """Convert [longitude, latitude] pairs back to Coordinates."""
    return _coerce_ring(pairs)


def to_geojson(geometry: Geometry) -> dict:
    """Encode a Geometry as a GeoJSON Polygon."""
    return {
        "type": "Polygon",
        "coordinates": [to_wire_format(ring) for ring in geometry.rings],
    }


def from_geojson(data: Any) -> Geometry:
    """
    Decode a GeoJSON Polygon.

    Only the envelope and coordinate shapes are checked here; ring validity
    is left to `validate_geometry` so invalid stored shapes can still be
    loaded and fixed.

    Raises:
        MalformedGeometry: not a Polygon, or no rings
        MalformedCoordinate: a ring element is not a numeric pair
    """
    if not isinstance(data, Mapping) or data.get("type") != "Polygon":
        raise MalformedGeometry("Geometry must be a GeoJSON Polygon")

    rings = data.get("coordinates")
    if not isinstance(rings, Sequence) or isinstance(rings, str) or not rings:
        raise MalformedGeometry("Polygon must have at least an outer ring")

    decoded = []
    for ring in rings:
        if not isinstance(ring, Sequence) or isinstance(ring, str):
            raise MalformedGeometry("Polygon rings must be coordinate arrays")
        decoded.append(tuple(from_wire_format(ring)))

    return Geometry(outer=decoded[0], holes=tuple(decoded[1:]))


def ring_bounds(coordinates: Iterable[Any]) -> Bounds:
    """Bounding box of a ring."""
    ring = _coerce_ring(coordinates)
    if not ring:
        raise TooFewVertices(0, 1)
    lons = [c.longitude for c in ring]
    lats = [c.latitude for c in ring]
    return Bounds(min(lons), min(lats), max(lons), max(lats))


# =============================================================================
# Editing
# =============================================================================

def close_ring(coordinates: Iterable[Any]) -> list[Coordinate]:
    """
    Return a copy of the ring whose last point equals its first.

    Raises:
        TooFewVertices: fewer than 3 points, or an already closed ring with
            fewer than 3 points before its closing point
    """
    ring = _coerce_ring(coordinates)
    if len(ring) < MIN_OPEN_VERTICES:
        raise TooFewVertices(len(ring), MIN_OPEN_VERTICES)
    if _is_closed(ring):
        if len(ring) < MIN_RING_VERTICES:
            raise TooFewVertices(len(ring), MIN_RING_VERTICES)
        return ring
    return [*ring, ring[0]]


def insert_vertex(coordinates: Iterable[Any], at_index: int, vertex: Any) -> list[Coordinate]:
    """
    Insert a vertex without breaking closure.

    On a closed ring, inserting at the closing position (or past it) goes
    immediately before the closing point, and inserting at 0 makes the new
    vertex both the first and the closing point.
    """
    ring = _coerce_ring(coordinates)
    new_vertex = to_coordinate(vertex, at_index)

    if at_index < 0 or at_index > len(ring):
        raise IndexError(f"Vertex index {at_index} out of range for ring of {len(ring)}")

    if not _is_closed(ring):
        return [*ring[:at_index], new_vertex, *ring[at_index:]]

    if at_index == 0:
        return [new_vertex, *ring[:-1], new_vertex]

    at_index = min(at_index, len(ring) - 1)
    return [*ring[:at_index], new_vertex, *ring[at_index:]]


def remove_vertex(coordinates: Iterable[Any], at_index: int) -> list[Coordinate]:
    """
    Remove a vertex.

    Removing the first or last point of a closed ring removes that vertex
    from both ends and closes the ring on the new first point.

    Raises:
        TooFewVertices: the ring would drop below 4 points
    """
    ring = _coerce_ring(coordinates)

    if at_index < 0 or at_index >= len(ring):
        raise IndexError(f"Vertex index {at_index} out of range for ring of {len(ring)}")
    if len(ring) - 1 < MIN_RING_VERTICES:
        raise TooFewVertices(len(ring) - 1, MIN_RING_VERTICES)

    if _is_closed(ring) and at_index in (0, len(ring) - 1):
        inner = ring[1:-1]
        return [*inner, inner[0]]

    return [*ring[:at_index], *ring[at_index + 1:]]


def move_vertex(coordinates: Iterable[Any], at_index: int, vertex: Any) -> list[Coordinate]:
    """
    Replace a vertex. Moving the first or last point of a closed ring moves both.
    """
    ring = _coerce_ring(coordinates)
    new_vertex = to_coordinate(vertex, at_index)

    if at_index < 0 or at_index >= len(ring):
        raise IndexError(f"Vertex index {at_index} out of range for ring of {len(ring)}")

    edited = list(ring)
    if _is_closed(ring) and at_index in (0, len(ring) - 1):
        edited[0] = edited[-1] = new_vertex
    else:
        edited[at_index] = new_vertex
    return edited
