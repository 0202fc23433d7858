"""
List view state.

One `ListView` per markers/polygons table: it owns the current filter and the
selected row ids. Every filter change clears the selection, since the rows it
pointed at may no longer be on screen.
"""

import asyncio
import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from partymap_admin.config import get_settings
from partymap_admin.services.query_builder import (
    QueryFilter,
    apply_filter_patch,
    apply_pagination,
)
from partymap_admin.utils.debounce import debounce

logger = logging.getLogger(__name__)


class ListView:
    """
    Filter + selection state of a list screen.

    Args:
        initial: Starting filter (default: page 1, configured page size)
        on_change: Called with each new filter (e.g. to trigger a fetch)
        search_delay_ms: Debounce delay for `search` (default from settings)
        loop: Event loop for the search debounce timer
    """

    def __init__(
        self,
        initial: Optional[QueryFilter] = None,
        on_change: Optional[Callable[[QueryFilter], Any]] = None,
        search_delay_ms: Optional[int] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        settings = get_settings()
        self.filter = initial or QueryFilter(limit=settings.default_page_size)
        self.selected_ids: list[str] = []
        self._on_change = on_change
        delay = settings.search_debounce_ms if search_delay_ms is None else search_delay_ms
        self.search = debounce(self._apply_search, delay, loop=loop)

    def _set_filter(self, new_filter: QueryFilter) -> QueryFilter:
        self.selected_ids = []
        if new_filter == self.filter:
            return new_filter
        self.filter = new_filter
        logger.debug("List filter changed: %s", new_filter.to_wire())
        if self._on_change is not None:
            self._on_change(new_filter)
        return new_filter

    def _apply_search(self, text: str) -> None:
        self.apply_filter({"search": text})

    def apply_filter(self, patch: Mapping[str, Any]) -> QueryFilter:
        """Merge a filter patch (chips, sort, search) and clear the selection."""
        return self._set_filter(apply_filter_patch(self.filter, patch))

    def paginate(self, page: int, limit: int) -> QueryFilter:
        """Move to another page / page size and clear the selection."""
        return self._set_filter(apply_pagination(self.filter, page, limit))

    def select(self, ids: Iterable[str]) -> None:
        self.selected_ids = list(ids)

    def close(self) -> None:
        """Drop any pending debounced search."""
        self.search.cancel()
