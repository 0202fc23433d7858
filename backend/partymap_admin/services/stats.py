"""
Dashboard statistics computed from the records already loaded in a list view,
without another round trip to the backend.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

from partymap_admin.schemas.marker import MarkerType, PartyTime
from partymap_admin.schemas.polygon import PolygonType
from partymap_admin.utils.formatting import parse_ticket_hour

MARKER_COUNTABLE_FIELDS = {
    "markerType": [t.value for t in MarkerType],
    "partyTime": [t.value for t in PartyTime],
}
POLYGON_COUNTABLE_FIELDS = {
    "polygonType": [t.value for t in PolygonType],
}


@dataclass
class StatsResult:
    """Counts per field value, plus the numeric sum/average when requested."""
    total: int = 0
    counts: dict[str, dict[str, int]] = field(default_factory=dict)
    numeric_total: int = 0
    numeric_average: int = 0

    def count(self, field_name: str, value: str) -> int:
        return self.counts.get(field_name, {}).get(value, 0)

    def flat(self) -> dict[str, int]:
        """Dashboard-card shape: {"total": 3, "party": 1, "bar": 1, ...}"""
        result = {"total": self.total}
        for values in self.counts.values():
            result.update(values)
        return result


def _as_mapping(record: Any) -> Mapping:
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True, mode="json")
    if isinstance(record, Mapping):
        return record
    return vars(record)


def _get(record: Any, name: str) -> Any:
    return _as_mapping(record).get(name)


def _ticket_count(entry: Any) -> int:
    # counts come back as strings after a multipart round trip
    if not isinstance(entry, (Mapping, BaseModel)):
        return 0
    value = _get(entry, "availableTickets")
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def aggregate(
    records: Iterable[Any],
    countable_fields: Mapping[str, Iterable[str]],
    numeric_field: Optional[str] = None,
) -> StatsResult:
    """
    Count records by the values of enumerated fields.

    Every enumeration member starts at 0. A record value that is not a member
    of its field's enumeration is skipped without error.

    Args:
        records: Dicts (API JSON) or objects with the named attributes
        countable_fields: Field name -> enumeration members
        numeric_field: Optional field holding a list of
            {"availableTickets": n} entries to sum and average per record

    Returns:
        StatsResult
    """
    records = [_as_mapping(r) for r in records]
    counts = {name: {member: 0 for member in members} for name, members in countable_fields.items()}
    numeric_total = 0

    for record in records:
        for name, field_counts in counts.items():
            value = _get(record, name)
            if isinstance(value, str) and value.lower() in field_counts:
                field_counts[value.lower()] += 1

        if numeric_field:
            entries = _get(record, numeric_field)
            if isinstance(entries, list):
                numeric_total += sum(_ticket_count(entry) for entry in entries)

    average = _round_half_up(numeric_total / len(records)) if records else 0
    return StatsResult(
        total=len(records),
        counts=counts,
        numeric_total=numeric_total,
        numeric_average=average,
    )


def marker_stats(markers: Iterable[Any]) -> dict[str, int]:
    """
    Marker dashboard cards: totals by type, party time and status, plus
    ticket sum/average. Markers without a status count as active.
    """
    markers = [_as_mapping(m) for m in markers]
    result = aggregate(markers, MARKER_COUNTABLE_FIELDS, numeric_field="tickets")

    active = sum(1 for m in markers if (_get(m, "status") or "active") == "active")

    stats = result.flat()
    stats.update(
        active=active,
        inactive=len(markers) - active,
        totalTickets=result.numeric_total,
        avgTicketsPerMarker=result.numeric_average,
    )
    return stats


def polygon_stats(polygons: Iterable[Any]) -> dict[str, int]:
    """Polygon dashboard cards: totals by type and visible count."""
    polygons = [_as_mapping(p) for p in polygons]
    stats = aggregate(polygons, POLYGON_COUNTABLE_FIELDS).flat()
    stats["visible"] = sum(1 for p in polygons if _get(p, "isVisible"))
    return stats


def peak_hours(tickets: Iterable[Any], top: int = 3) -> list[tuple[int, int]]:
    """
    Hours with the most available tickets.

    Returns:
        Up to `top` (hour, available_tickets) tuples, busiest first;
        hours without tickets are left out
    """
    slots = []
    for ticket in tickets:
        available = _ticket_count(ticket)
        if available > 0:
            slots.append((parse_ticket_hour(_get(ticket, "hour")), available))
    slots.sort(key=lambda slot: slot[1], reverse=True)
    return slots[:top]
