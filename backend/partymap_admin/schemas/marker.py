"""Marker schemas - party/bar/restaurant venues shown as map pins."""

import re
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from partymap_admin.schemas.common import ApiModel
from partymap_admin.services.geometry import Coordinate
from partymap_admin.utils.formatting import parse_ticket_hour

HOURS_PER_DAY = 24
MAX_TICKETS_PER_HOUR = 9999

_WEBSITE_PATTERN = re.compile(r"^https?://.+", re.IGNORECASE)


class MarkerType(str, Enum):
    """Kinds of venue a marker can represent."""
    PARTY = "party"
    BAR = "bar"
    RESTAURANT = "restaurant"
    CLUB = "club"
    EVENT_HALL = "event_hall"


class PartyTime(str, Enum):
    """Time of day a party runs."""
    MORNING = "morning"          # 6 AM - 12 PM
    AFTERNOON = "afternoon"      # 12 PM - 6 PM
    EVENING = "evening"          # 6 PM - 10 PM
    NIGHT = "night"              # 10 PM - 2 AM
    LATE_NIGHT = "late_night"    # 2 AM - 6 AM


class TicketSlot(ApiModel):
    """Available tickets for one hour of the day."""
    hour: int
    available_tickets: int = Field(0, ge=0, le=MAX_TICKETS_PER_HOUR, alias="availableTickets")

    @field_validator("hour", mode="before")
    @classmethod
    def _parse_hour(cls, value):
        return parse_ticket_hour(value)


class Marker(ApiModel):
    """
    Venue marker.

    The backend stores latitude/longitude as separate (often string) fields;
    they are parsed to floats here and exposed as a `Coordinate`, the same
    type polygon rings use.
    """
    id: Optional[str] = Field(None, alias="_id")
    marker_type: MarkerType = Field(..., alias="markerType")
    marker_label: str = Field(..., min_length=2, max_length=100, alias="markerLabel")
    place_name: str = Field(..., min_length=2, max_length=200, alias="placeName")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    website: Optional[str] = None
    party_time: Optional[PartyTime] = Field(None, alias="partyTime")
    party_description: Optional[str] = Field(None, max_length=500, alias="partyDescription")
    status: str = "active"
    tickets: list[TicketSlot] = []

    @field_validator("website", mode="before")
    @classmethod
    def _check_website(cls, value):
        if value in (None, ""):
            return None
        if not isinstance(value, str) or not _WEBSITE_PATTERN.match(value):
            raise ValueError("Website must be a valid URL (e.g., https://example.com)")
        return value

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(longitude=self.longitude, latitude=self.latitude)

    def ticket_table(self) -> list[int]:
        """Available tickets per hour, index 0-23. Missing hours are 0."""
        table = [0] * HOURS_PER_DAY
        for slot in self.tickets:
            table[slot.hour] = slot.available_tickets
        return table

    def to_form_fields(self) -> list[tuple[str, str]]:
        """
        Multipart form fields for create/update.

        The hourly table is sent as `tickets[0]` ... `tickets[23]`.
        """
        fields = []
        for key, value in self.model_dump(by_alias=True, mode="json", exclude={"id", "tickets"}).items():
            if value is None:
                continue
            fields.append((key, str(value)))
        for hour, available in enumerate(self.ticket_table()):
            fields.append((f"tickets[{hour}]", str(available)))
        return fields
