"""Pagination helpers for list views."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageInfo:
    total_pages: int
    start_record: int
    end_record: int
    has_next_page: bool
    has_previous_page: bool


def calculate_pagination(current_page: int, page_size: int, total_records: int) -> PageInfo:
    """
    Work out the "1-10 of 42" numbers for a page.

    An empty result set gives 0 pages and a 0-0 range.
    """
    if page_size <= 0:
        raise ValueError("page_size must be > 0")

    total_pages = math.ceil(total_records / page_size)
    if total_records == 0:
        start_record = end_record = 0
    else:
        start_record = (current_page - 1) * page_size + 1
        end_record = min(current_page * page_size, total_records)

    return PageInfo(
        total_pages=total_pages,
        start_record=start_record,
        end_record=end_record,
        has_next_page=current_page < total_pages,
        has_previous_page=current_page > 1,
    )
