"""
Display formatting for marker fields.
"""

import re
from typing import Optional, Union

# "10:00 PM", "9:00am"
_TWELVE_HOUR_PATTERN = re.compile(r"(\d+):00\s*(AM|PM)", re.IGNORECASE)


def _title_words(value: Optional[str]) -> str:
    if not value:
        return ""
    return value.replace("_", " ").title()


def format_marker_type(marker_type: Optional[str]) -> str:
    """'event_hall' -> 'Event Hall'"""
    return _title_words(marker_type)


def format_party_time(party_time: Optional[str]) -> str:
    """'late_night' -> 'Late Night'"""
    return _title_words(party_time)


def format_coordinate(value: Union[str, float, None], decimals: int = 4) -> str:
    if value in (None, ""):
        return f"{0:.{decimals}f}"
    return f"{float(value):.{decimals}f}"


def parse_ticket_hour(hour: Union[int, str]) -> int:
    """
    Normalise a ticket slot hour to 0-23.

    The backend has returned both plain hours (22, "22") and 12-hour strings
    ("10:00 PM").

    Raises:
        ValueError: hour cannot be parsed or is outside 0-23
    """
    if isinstance(hour, bool):
        raise ValueError(f"Invalid ticket hour: {hour!r}")

    if isinstance(hour, int):
        value = hour
    else:
        text = str(hour).strip()
        match = _TWELVE_HOUR_PATTERN.search(text)
        if match:
            value = int(match.group(1))
            meridiem = match.group(2).upper()
            if meridiem == "PM" and value != 12:
                value += 12
            elif meridiem == "AM" and value == 12:
                value = 0
        else:
            digits = re.sub(r"[^\d]", "", text)
            if not digits:
                raise ValueError(f"Invalid ticket hour: {hour!r}")
            value = int(digits)

    if not 0 <= value <= 23:
        raise ValueError(f"Ticket hour out of range: {hour!r}")
    return value
