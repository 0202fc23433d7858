"""
List-view query building.

Turns raw UI state (search text, filter chips, sort key, page cursor) into the
canonical `QueryFilter` sent to the listing endpoints, and encodes it as
query-string parameters. Used identically for markers and polygons.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from partymap_admin.exceptions import InvalidPatch

logger = logging.getLogger(__name__)

PAGINATION_KEYS = frozenset({"page", "limit"})


class QueryFilter(BaseModel):
    """
    Search/sort/page state of a list view.

    Frozen: every change goes through `apply_filter_patch` or
    `apply_pagination`, which return a new filter. Extra keys are kept as
    filter chips (e.g. `markerType`, `polygonType`).
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    search: str = ""
    page: int = Field(1, ge=1)
    limit: int = Field(10, gt=0)
    sort_by: Optional[str] = Field(None, alias="sortBy")
    type: Optional[str] = None
    status: Optional[str] = None
    is_archive: Optional[bool] = Field(None, alias="isArchive")
    is_draft: Optional[bool] = Field(None, alias="isDraft")

    def to_wire(self) -> dict[str, Any]:
        """All fields under their wire (camelCase) names."""
        return self.model_dump(by_alias=True)


def _rebuild(data: dict[str, Any]) -> QueryFilter:
    try:
        return QueryFilter.model_validate(data)
    except ValidationError as e:
        raise InvalidPatch("Filter values are out of range", details=e.errors()) from e


def _wire_key(key: str) -> str:
    # accept python names in patches too
    field = QueryFilter.model_fields.get(key)
    if field is not None and field.alias:
        return field.alias
    return key


def apply_filter_patch(current: QueryFilter, patch: Mapping[str, Any]) -> QueryFilter:
    """
    Merge a patch into the filter.

    Any change other than page/limit sends the view back to page 1. A patch
    touching only page/limit sets them directly.

    Raises:
        InvalidPatch: patch is not a mapping, or yields out-of-range values
    """
    if not isinstance(patch, Mapping):
        raise InvalidPatch(f"Filter patch must be a mapping, got {type(patch).__name__}")
    if not patch:
        return current

    patch = {_wire_key(key): value for key, value in patch.items()}
    data = current.to_wire()
    data.update(patch)

    if not set(patch) <= PAGINATION_KEYS:
        data["page"] = 1

    return _rebuild(data)


def apply_pagination(current: QueryFilter, page: int, limit: int) -> QueryFilter:
    """Set page and limit directly; no other field changes."""
    data = current.to_wire()
    data.update(page=page, limit=limit)
    return _rebuild(data)


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def to_request_params(query: QueryFilter) -> dict[str, str]:
    """
    Encode a filter as query-string parameters.

    Empty strings and None are left out. The result is sorted by key, so two
    equal filters always produce the same mapping.
    """
    params = {}
    for key, value in query.to_wire().items():
        if value is None or value == "":
            continue
        params[key] = _param_value(value)
    return dict(sorted(params.items()))
