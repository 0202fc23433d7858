"""
Polygon service - polygon endpoints of the backend.

Payloads are `PolygonWrite` records, so ring closure and bounds are checked
locally before anything is sent.
"""

import logging
from typing import Any, Iterable, Optional

from partymap_admin.client import ApiClient
from partymap_admin.schemas.common import ListResponse, parse_record, unwrap_data
from partymap_admin.schemas.polygon import Polygon, PolygonGeometry, PolygonWrite
from partymap_admin.services.geometry import Bounds
from partymap_admin.services.query_builder import QueryFilter, to_request_params

logger = logging.getLogger(__name__)


def _params(query: Optional[QueryFilter]) -> Optional[dict]:
    return to_request_params(query) if query is not None else None


def _polygon_list(data: Any) -> list[Polygon]:
    # list endpoints without paging answer a bare array or {"data": [...]}
    records = data.get("data") if isinstance(data, dict) else data
    return parse_record(ListResponse[Polygon], {"data": records or []}).data


# =============================================================================
# Queries
# =============================================================================

async def list_polygons(client: ApiClient, query: QueryFilter) -> ListResponse[Polygon]:
    """Fetch one page of polygons."""
    data = await client.get("/polygons", params=_params(query))
    return parse_record(ListResponse[Polygon], data)


async def list_all_polygons(client: ApiClient, query: Optional[QueryFilter] = None) -> list[Polygon]:
    data = await client.get("/polygons/all", params=_params(query))
    return _polygon_list(data)


async def get_polygons_geojson(client: ApiClient, query: Optional[QueryFilter] = None) -> dict:
    """Polygons as a GeoJSON FeatureCollection, as the map renders them."""
    return await client.get("/polygons/geojson", params=_params(query))


async def get_polygon(client: ApiClient, polygon_id: str) -> Polygon:
    data = await client.get(f"/polygons/{polygon_id}")
    return parse_record(Polygon, unwrap_data(data))


async def get_polygons_by_marker(client: ApiClient, marker_id: str) -> list[Polygon]:
    data = await client.get(f"/polygons/marker/{marker_id}")
    return _polygon_list(data)


async def get_polygons_within_bounds(client: ApiClient, bounds: Bounds) -> list[Polygon]:
    data = await client.post("/polygons/within-bounds", json={"bounds": bounds.to_dict()})
    return _polygon_list(data)


async def get_polygons_intersecting(client: ApiClient, geometry: PolygonGeometry) -> list[Polygon]:
    data = await client.post("/polygons/intersects", json={"geometry": geometry.to_api()})
    return _polygon_list(data)


# =============================================================================
# Mutations
# =============================================================================

async def create_polygon(client: ApiClient, polygon: PolygonWrite) -> Any:
    result = await client.post("/polygons", json=polygon.to_api())
    logger.info(f"Created polygon {polygon.name!r}")
    return result


async def create_polygons(client: ApiClient, polygons: Iterable[PolygonWrite]) -> Any:
    payload = [polygon.to_api() for polygon in polygons]
    result = await client.post("/polygons/bulk", json={"polygons": payload})
    logger.info(f"Created {len(payload)} polygons")
    return result


async def update_polygon(client: ApiClient, polygon_id: str, polygon: PolygonWrite) -> Any:
    """Replace all mutable fields of a polygon."""
    result = await client.put(f"/polygons/{polygon_id}", json=polygon.to_api())
    logger.info(f"Updated polygon {polygon_id}")
    return result


async def bulk_update_polygons(client: ApiClient, polygon_ids: Iterable[str], update_data: dict) -> Any:
    """
    Apply the same partial update (e.g. `{"isVisible": False}`) to many polygons.
    """
    ids = list(polygon_ids)
    return await client.put("/polygons/bulk-update", json={"ids": ids, "updateData": update_data})


async def delete_polygon(client: ApiClient, polygon_id: str) -> Any:
    result = await client.delete(f"/polygons/{polygon_id}")
    logger.info(f"Deleted polygon {polygon_id}")
    return result


async def delete_polygons(client: ApiClient, polygon_ids: Iterable[str]) -> Any:
    ids = list(polygon_ids)
    result = await client.post("/polygons/delete-multiple", json={"ids": ids})
    logger.info(f"Deleted {len(ids)} polygons")
    return result


async def delete_all_polygons(client: ApiClient) -> Any:
    result = await client.delete("/polygons")
    logger.warning("Deleted all polygons")
    return result


# =============================================================================
# Marker association
# =============================================================================

async def associate_marker(client: ApiClient, polygon_id: str, marker_id: str) -> Any:
    return await client.post(f"/polygons/{polygon_id}/associate-marker", json={"markerId": marker_id})


async def dissociate_marker(client: ApiClient, polygon_id: str) -> Any:
    return await client.delete(f"/polygons/{polygon_id}/dissociate-marker")
