"""
Marker service - marker endpoints of the backend.

Create/update go out as multipart forms because the admin forms attach
venue images; the image files themselves are passed through untouched.
"""

import logging
from typing import Any, Iterable, Optional

from partymap_admin.client import ApiClient
from partymap_admin.config import get_settings
from partymap_admin.schemas.common import ListResponse, parse_record, unwrap_data
from partymap_admin.schemas.marker import Marker
from partymap_admin.services.query_builder import QueryFilter, to_request_params

logger = logging.getLogger(__name__)


def _multipart(marker: Marker, files: Optional[list] = None) -> list:
    # (None, value) tuples make httpx send plain form fields as multipart parts
    parts = [(key, (None, value.encode("utf-8"))) for key, value in marker.to_form_fields()]
    return parts + list(files or [])


async def list_markers(client: ApiClient, query: QueryFilter) -> ListResponse[Marker]:
    """Fetch one page of markers."""
    data = await client.get("/markers", params=to_request_params(query))
    return parse_record(ListResponse[Marker], data)


async def list_all_markers(client: ApiClient) -> list[Marker]:
    """Fetch markers for pickers, without paging through the table."""
    page = await list_markers(client, QueryFilter(limit=get_settings().max_page_size))
    return page.data


async def get_marker(client: ApiClient, marker_id: str) -> Marker:
    data = await client.get(f"/markers/{marker_id}")
    return parse_record(Marker, unwrap_data(data))


async def create_marker(client: ApiClient, marker: Marker, files: Optional[list] = None) -> Any:
    """
    Create a marker.

    Args:
        client: API client
        marker: Validated marker
        files: Optional httpx file tuples, e.g.
            [("placeImage", ("club.jpg", fileobj, "image/jpeg"))]
    """
    result = await client.post("/markers", files=_multipart(marker, files))
    logger.info(f"Created marker {marker.marker_label!r}")
    return result


async def update_marker(client: ApiClient, marker_id: str, marker: Marker, files: Optional[list] = None) -> Any:
    result = await client.put(f"/markers/{marker_id}", files=_multipart(marker, files))
    logger.info(f"Updated marker {marker_id}")
    return result


async def delete_marker(client: ApiClient, marker_id: str) -> Any:
    result = await client.delete(f"/markers/{marker_id}")
    logger.info(f"Deleted marker {marker_id}")
    return result


async def delete_markers(client: ApiClient, marker_ids: Iterable[str]) -> Any:
    ids = list(marker_ids)
    result = await client.post("/markers/bulk-delete", json={"ids": ids})
    logger.info(f"Deleted {len(ids)} markers")
    return result
