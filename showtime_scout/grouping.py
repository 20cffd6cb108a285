"""
Folds a flat list of showtimes into the place -> screen type -> showtimes
index the results view is built from.
"""

from dataclasses import replace
from typing import Iterable, List

from showtime_scout.models import GroupedIndex, ShowtimeRecord, normalize_screen_type


def group_showtimes(showtimes: Iterable[ShowtimeRecord]) -> GroupedIndex:
    """
    Groups showtimes by place, then by screen type.

    Input order is kept inside every leaf list and duplicates are kept.
    A missing or blank screen type is filed, and rewritten, as 'Standard'.
    """
    grouped: GroupedIndex = {}
    for showtime in showtimes:
        screen_type = normalize_screen_type(showtime.screen_type)
        if showtime.screen_type != screen_type:
            showtime = replace(showtime, screen_type=screen_type)
        grouped.setdefault(showtime.place, {}).setdefault(screen_type, []).append(showtime)
    return grouped


def flatten_grouped(grouped: GroupedIndex) -> List[ShowtimeRecord]:
    return [
        showtime
        for screens in grouped.values()
        for showtimes in screens.values()
        for showtime in showtimes
    ]


def count_locations(grouped: GroupedIndex) -> int:
    return len(grouped)


def format_summary(showtimes: List[ShowtimeRecord], grouped: GroupedIndex) -> str:
    """e.g. 'Found 12 showtimes across 3 locations'."""
    return f"Found {len(showtimes)} showtimes across {count_locations(grouped)} locations"
