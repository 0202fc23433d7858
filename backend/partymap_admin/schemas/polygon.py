"""Polygon schemas - 3D building/zone shapes drawn on the map."""

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator

from partymap_admin.schemas.common import ApiModel
from partymap_admin.services.geometry import (
    Coordinate,
    Geometry,
    from_geojson,
    require_valid_ring,
    to_wire_format,
)

MAX_ZOOM = 24


class PolygonType(str, Enum):
    """Kinds of area a polygon can represent."""
    BUILDING = "building"
    AREA = "area"
    ZONE = "zone"
    BOUNDARY = "boundary"
    VENUE = "venue"
    PARK = "park"
    PARKING = "parking"
    OTHER = "other"


class PolygonStyle(ApiModel):
    fill_color: str = Field("#0000FF", alias="fillColor")
    fill_opacity: float = Field(0.8, ge=0, le=1, alias="fillOpacity")
    stroke_color: str = Field("#000000", alias="strokeColor")
    stroke_width: float = Field(1, ge=0, alias="strokeWidth")
    stroke_opacity: float = Field(1, ge=0, le=1, alias="strokeOpacity")


class Extrusion(ApiModel):
    """3D extrusion of the polygon footprint, in meters."""
    height: float = Field(50, ge=0)
    base: float = Field(0, ge=0)
    color: str = "#0000FF"
    opacity: float = Field(0.8, ge=0, le=1)


class PolygonGeometry(ApiModel):
    """GeoJSON Polygon: first ring is the outer boundary, the rest are holes."""
    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[list[float]]]

    @field_validator("coordinates")
    @classmethod
    def _check_shape(cls, rings):
        if not rings:
            raise ValueError("Polygon must have at least an outer ring")
        for ring in rings:
            for pair in ring:
                if len(pair) != 2:
                    raise ValueError("Coordinates must be [longitude, latitude] pairs")
        return rings

    @classmethod
    def from_rings(cls, outer: list[Coordinate], holes: Optional[list[list[Coordinate]]] = None) -> "PolygonGeometry":
        rings = [outer, *(holes or [])]
        return cls(coordinates=[to_wire_format(ring) for ring in rings])

    def to_geometry(self) -> Geometry:
        return from_geojson(self.model_dump())

    @property
    def outer_ring(self) -> list[Coordinate]:
        return list(self.to_geometry().outer)


class Polygon(ApiModel):
    """
    Polygon record as returned by the backend.

    Ring shapes are checked on load, but not closure or bounds: a stored
    polygon with a broken ring can still be opened and fixed.
    """
    id: Optional[str] = Field(None, alias="_id")
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    polygon_type: PolygonType = Field(..., alias="polygonType")
    geometry: PolygonGeometry
    style: PolygonStyle = Field(default_factory=PolygonStyle)
    extrusion: Extrusion = Field(default_factory=Extrusion)
    marker: Optional[str] = None
    is_visible: bool = Field(True, alias="isVisible")
    is_interactive: bool = Field(True, alias="isInteractive")
    min_zoom: int = Field(0, ge=0, le=MAX_ZOOM, alias="minZoom")
    max_zoom: int = Field(MAX_ZOOM, ge=0, le=MAX_ZOOM, alias="maxZoom")

    @field_validator("marker", mode="before")
    @classmethod
    def _marker_id(cls, value: Any):
        # populated marker documents come back as objects
        if isinstance(value, dict):
            return value.get("_id")
        return value

    @model_validator(mode="after")
    def _check_zoom_range(self):
        if self.min_zoom > self.max_zoom:
            raise ValueError("minZoom cannot be greater than maxZoom")
        return self


class PolygonWrite(Polygon):
    """
    Create/update payload. Every ring must be a valid closed ring before it
    is sent; the first bad ring raises its GeometryError as-is.
    """

    @field_validator("geometry")
    @classmethod
    def _check_rings(cls, geometry: PolygonGeometry):
        for ring in geometry.coordinates:
            require_valid_ring(ring)
        return geometry

    def to_api(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude={"id"})
