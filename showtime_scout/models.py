"""
Data model shared by the extractors, the grouping step and the API.

A ShowtimeRecord is one screening at one location. Records are frozen so the
grouped index can hold the same objects the extractor produced.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_SCREEN_TYPE = "Standard"
BOOKING_LINK_SENTINEL = "#"


def normalize_screen_type(screen_type: Optional[str]) -> str:
    """Returns the trimmed screen type, or 'Standard' when it is missing or blank."""
    if not isinstance(screen_type, str):
        return DEFAULT_SCREEN_TYPE
    screen_type = screen_type.strip()
    return screen_type or DEFAULT_SCREEN_TYPE


@dataclass(frozen=True)
class ShowtimeRecord:
    place: str
    showtime: str
    booking_link: str = BOOKING_LINK_SENTINEL
    screen_type: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "place": self.place,
            "showtime": self.showtime,
            "bookingLink": self.booking_link,
            "screenType": self.screen_type,
        }


def make_record(place, showtime, booking_link=None, screen_type=None) -> Optional[ShowtimeRecord]:
    """
    Builds a record from raw captured text, or None if place or showtime is blank.
    Every extractor goes through here so the non-empty invariant lives in one spot.
    """
    place = (place or "").strip()
    showtime = (showtime or "").strip()
    if not place or not showtime:
        return None
    booking_link = (booking_link or "").strip() or BOOKING_LINK_SENTINEL
    if screen_type is not None:
        screen_type = screen_type.strip() or None
    return ShowtimeRecord(place, showtime, booking_link, screen_type)


# place -> screen type -> showtimes in extraction order
GroupedIndex = Dict[str, Dict[str, List[ShowtimeRecord]]]
