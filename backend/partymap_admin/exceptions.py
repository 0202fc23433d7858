"""
Error taxonomy for the admin core.

Geometry, patch and record errors are local validation failures raised
synchronously before anything is sent to the backend. `ApiError` wraps
failures reported by the REST backend.
"""

from typing import Any, Optional


class PartyMapError(Exception):
    """Base class for all admin core errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


# --- Geometry ---

class GeometryError(PartyMapError):
    """Polygon ring data violates a geometry invariant."""


class TooFewVertices(GeometryError):
    def __init__(self, count: int, minimum: int = 4):
        super().__init__(f"Ring must have at least {minimum} coordinates (got {count})")
        self.count = count
        self.minimum = minimum


class RingNotClosed(GeometryError):
    def __init__(self):
        super().__init__("Ring must be closed (first and last coordinates must match)")


class CoordinateOutOfBounds(GeometryError):
    def __init__(self, index: int, longitude: float, latitude: float):
        super().__init__(
            f"Coordinate {index} is out of bounds "
            f"(longitude {longitude}, latitude {latitude})"
        )
        self.index = index


class MalformedCoordinate(GeometryError):
    def __init__(self, index: int, value: Any = None):
        super().__init__(f"Coordinate {index} is not a [longitude, latitude] pair", details=value)
        self.index = index


class MalformedGeometry(GeometryError):
    """GeoJSON envelope is not a Polygon with ring arrays."""


# --- Query building ---

class InvalidPatch(PartyMapError):
    """Filter patch is not a mapping or carries out-of-domain values."""


# --- Records ---

class MalformedRecord(PartyMapError):
    """API payload does not match the expected record shape."""

    def __init__(self, record_type: str, errors: Optional[list] = None):
        super().__init__(f"Malformed {record_type} record", details=errors)
        self.record_type = record_type
        self.errors = errors or []


# --- Transport ---

class ApiError(PartyMapError):
    """Backend responded with an error, or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.status_code = status_code


class AuthExpired(ApiError):
    """Session is no longer valid; the caller must log in again."""

    def __init__(self, message: str = "Session expired. Please log in again."):
        super().__init__(message, status_code=401)
