"""
Showtime recognizers, one per cinema-chain document shape.

Every recognizer takes the crawled markdown as a string and returns a list of
ShowtimeRecord objects in document order. A recognizer that does not find its
shape returns an empty list; the cascade in extractor.py decides which one wins.

Supported shapes:
- Cine Royal: fixed mall names, a STANDARD marker, then
  "7:30PMAvailable: 42" tokens (glued, or split by whitespace or newlines)
  and one shared VIEW SHOWTIMES link.
- Novo: "[Location\\\\" anchors, each followed by "- [time](https://...) 2D" items.
- Heading sections: "### Location" blocks with optional "1. **IMAX**" sub-sections.
- Vox: location line, experience line, then one "h:mm AM/PM" line per showing.
- Free text: "Word Word -" headed blocks of location / language / time / type lines.
"""

import logging
import re
from typing import List, Optional

from showtime_scout.models import (
    BOOKING_LINK_SENTINEL,
    DEFAULT_SCREEN_TYPE,
    ShowtimeRecord,
    make_record,
    normalize_screen_type,
)

logger = logging.getLogger(__name__)


def _alternation(names) -> str:
    # Longest first so "IMAX with Laser" wins over "IMAX".
    return "|".join(re.escape(name) for name in sorted(names, key=len, reverse=True))


# ============================================================================
# CINE ROYAL
# ============================================================================

CINE_ROYAL_LOCATIONS = ("Khalidiyah Mall", "Dalma Mall", "Al Dhannah Mall", "Deerfields Mall")
CINE_ROYAL_SCREEN_TYPE = "STANDARD"

_CINE_ROYAL_LINK_RE = re.compile(
    r"\[VIEW SHOWTIMES\]\((https://cineroyal\.ae/home/chooseScreen/.*?#showTimeContainer)\)"
)

# Hour is restricted to 1-12 and the seat count is lazy so "Available: 1212:30PM"
# splits as 12 seats + 12:30PM rather than 121 seats + 2:30PM.
_CR_TIME = r"(?:1[0-2]|0?\d):\d{2}[AP]M"
_CR_AVAILABILITY = rf"Available: ?\d+?(?={_CR_TIME}|\D|$)"
_CR_TOKEN_RE = re.compile(rf"({_CR_TIME}){_CR_AVAILABILITY}")
_CR_NOT_LOCATION = rf"(?:(?!{_alternation(CINE_ROYAL_LOCATIONS)})[\s\S])*?"
_CINE_ROYAL_BLOCK_RE = re.compile(
    rf"({_alternation(CINE_ROYAL_LOCATIONS)}){_CR_NOT_LOCATION}STANDARD{_CR_NOT_LOCATION}"
    rf"((?:{_CR_TIME}{_CR_AVAILABILITY}\s*)+)"
)


def extract_cine_royal(markdown: str) -> List[ShowtimeRecord]:
    """
    Extracts Cine Royal showtimes.

    The whole page carries a single booking link, shared by every record.
    A mall whose STANDARD section has no time tokens is skipped.
    """
    link_match = _CINE_ROYAL_LINK_RE.search(markdown)
    booking_link = link_match.group(1) if link_match else BOOKING_LINK_SENTINEL

    showtimes = []
    for block_match in _CINE_ROYAL_BLOCK_RE.finditer(markdown):
        place = block_match.group(1).strip()
        logger.debug(f"Found Cine Royal location: {place}")
        for token in _CR_TOKEN_RE.finditer(block_match.group(2)):
            record = make_record(place, token.group(1), booking_link, CINE_ROYAL_SCREEN_TYPE)
            if record:
                showtimes.append(record)
    return showtimes


# ============================================================================
# NOVO
# ============================================================================

_NOVO_LOCATION_RE = re.compile(r"\[(.*?)\\\\")
_NOVO_LANGUAGE_RE = re.compile(r"^\s*([A-Za-z]+)\s*$", re.MULTILINE)
_NOVO_SHOWTIME_RE = re.compile(r"- \[(.*?)\]\((https://.*?)\)(?:[ \t]+([^-\n]+))?")


def extract_novo(markdown: str) -> List[ShowtimeRecord]:
    """Extracts Novo showtimes: each location anchor owns the text up to the next one."""
    anchors = sorted(_NOVO_LOCATION_RE.finditer(markdown), key=lambda m: m.start())
    if not anchors:
        return []

    logger.debug(f"Found {len(anchors)} Novo cinema locations")
    showtimes = []
    for i, anchor in enumerate(anchors):
        place = anchor.group(1).strip()
        end_index = anchors[i + 1].start() if i + 1 < len(anchors) else len(markdown)
        block = markdown[anchor.end():end_index]

        language_match = _NOVO_LANGUAGE_RE.search(block)
        language = language_match.group(1) if language_match else None
        logger.debug(f"Processing location: {place} (language: {language}), content length: {len(block)}")

        for match in _NOVO_SHOWTIME_RE.finditer(block):
            screen_type = normalize_screen_type(match.group(3))
            record = make_record(place, match.group(1), match.group(2), screen_type)
            if record:
                showtimes.append(record)
    return showtimes


# ============================================================================
# HEADING SECTIONS
# ============================================================================

_HEADING_BLOCK_RE = re.compile(
    r"(?<!#)### ([^#\n]+)[\s\n]+([\s\S]*?)(?=\n\n### |\n\n\*\*|\n\*\*\*|^### |\Z)",
    re.MULTILINE,
)
_SCREEN_SECTION_SPLIT_RE = re.compile(r"\d+\.\s+\*\*")
_SCREEN_NAME_RE = re.compile(r"^(.*?)\*\*")
_LINKED_TIME_RE = re.compile(r"\[(\d{1,2}:\d{2}(?:\s?[ap]m)?)\]\((https://.*?)\)", re.IGNORECASE)


def _linked_times(block: str, place: str, screen_type: str) -> List[ShowtimeRecord]:
    records = []
    for match in _LINKED_TIME_RE.finditer(block):
        record = make_record(place, match.group(1), match.group(2), screen_type)
        if record:
            records.append(record)
    return records


def extract_heading_sections(markdown: str) -> List[ShowtimeRecord]:
    """
    Extracts showtimes from '### Location' blocks.

    Inside a block, '1. **IMAX**' style markers start one section per screen
    type; links before the first marker are ignored. Blocks without markers
    are read whole and tagged 'Standard'.
    """
    showtimes = []
    for block_match in _HEADING_BLOCK_RE.finditer(markdown):
        place = block_match.group(1).strip()
        block = block_match.group(2)
        logger.debug(f"Found heading location: {place}, block length: {len(block)}")

        sections = _SCREEN_SECTION_SPLIT_RE.split(block)
        if len(sections) == 1:
            showtimes.extend(_linked_times(block, place, DEFAULT_SCREEN_TYPE))
            continue

        for section in sections[1:]:
            name_match = _SCREEN_NAME_RE.match(section)
            if not name_match:
                continue
            screen_type = normalize_screen_type(name_match.group(1))
            showtimes.extend(_linked_times(section, place, screen_type))
    return showtimes


# ============================================================================
# VOX
# ============================================================================

VOX_LOCATIONS = (
    "Mall of the Emirates",
    "City Centre Mirdif",
    "City Centre Deira",
    "Yas Mall",
    "The Galleria",
    "BurJuman",
)
VOX_EXPERIENCES = ("IMAX with Laser", "IMAX", "MAX", "GOLD", "KIDS", "VIP", "4DX", "THEATRE by Rhodes", "ScreenX")

_VOX_LINE_BREAK = r"[ \t]*\n(?:[ \t]*\n)*"
_VOX_PLACE = rf"{_alternation(VOX_LOCATIONS)}|[A-Z][\w'&.-]*(?:[ \t]+(?:[A-Z][\w'&.-]*|of|the|at))*"
_VOX_EXPERIENCE = rf"{_alternation(VOX_EXPERIENCES)}|[A-Z0-9][A-Z0-9 +&/-]*"
_VOX_TIME = r"\d{1,2}:\d{2}[ \t]?[AaPp][Mm]"
_VOX_SHOWING_RE = re.compile(
    rf"^[ \t]*(?:(?P<place>{_VOX_PLACE}){_VOX_LINE_BREAK})?"
    rf"[ \t]*(?P<screen>{_VOX_EXPERIENCE}){_VOX_LINE_BREAK}"
    rf"(?P<times>(?:[ \t]*{_VOX_TIME}[ \t]*(?:\n(?:[ \t]*\n)*|\Z))+)",
    re.MULTILINE,
)
_VOX_TIME_RE = re.compile(_VOX_TIME)
_VOX_BOOKING_RE = re.compile(r"\[Book Now\]\((https?://[^)\s]+)\)", re.IGNORECASE)


def extract_vox(markdown: str) -> List[ShowtimeRecord]:
    """
    Extracts Vox location / experience / time-list runs.

    An experience line that directly follows a run of times belongs to the
    location seen last. Times before any location are dropped.
    """
    link_match = _VOX_BOOKING_RE.search(markdown)
    booking_link = link_match.group(1) if link_match else BOOKING_LINK_SENTINEL

    showtimes = []
    current_place: Optional[str] = None
    for match in _VOX_SHOWING_RE.finditer(markdown):
        if match.group("place"):
            current_place = match.group("place").strip()
        if not current_place:
            continue
        screen_type = match.group("screen").strip()
        logger.debug(f"Found Vox experience: {screen_type} at {current_place}")
        for time_match in _VOX_TIME_RE.finditer(match.group("times")):
            record = make_record(current_place, time_match.group(0), booking_link, screen_type)
            if record:
                showtimes.append(record)
    return showtimes


# ============================================================================
# FREE TEXT
# ============================================================================

_FREE_TEXT_HEADER_SPLIT_RE = re.compile(r"\n(?=[A-Za-z]+ [A-Za-z]+ -)")
_BLANK_LINE_SPLIT_RE = re.compile(r"\n\s*\n")
_LANGUAGE_LINE_RE = re.compile(r"[A-Za-z]+")


def _paired_lines(place: str, lines: List[str]) -> List[ShowtimeRecord]:
    # (showtime, screen type) pairs; a trailing odd line is dropped.
    records = []
    for i in range(0, len(lines) - 1, 2):
        showtime, screen_type = lines[i].strip(), lines[i + 1].strip()
        if not showtime or not screen_type:
            continue
        record = make_record(place, showtime, BOOKING_LINK_SENTINEL, screen_type)
        if record:
            records.append(record)
    return records


def extract_free_text(markdown: str) -> List[ShowtimeRecord]:
    """Last resort: positional lines under 'Word Word -' headers, no booking links."""
    showtimes = []
    for block in _FREE_TEXT_HEADER_SPLIT_RE.split(markdown):
        lines = [line.strip() for line in block.split("\n") if line.strip()]
        # location, language and at least one showtime line
        if len(lines) < 3:
            continue
        place, language = lines[0], lines[1]
        logger.debug(f"Processing location from text: {place}, language: {language}")
        showtimes.extend(_paired_lines(place, lines[2:]))
    return showtimes


def parse_pasted_text(text: str) -> List[ShowtimeRecord]:
    """
    Parses showtimes pasted by hand.

    Blocks are separated by blank lines. Each block is a location line, an
    optional single-word language line, then alternating time / screen type
    lines. Never raises; unparseable text gives an empty list.
    """
    if not isinstance(text, str):
        return []

    showtimes = []
    try:
        text = text.replace("\r\n", "\n")
        for block in _BLANK_LINE_SPLIT_RE.split(text):
            lines = block.strip().split("\n")
            if len(lines) < 2:
                continue
            place = lines[0].strip()
            has_language = _LANGUAGE_LINE_RE.fullmatch(lines[1].strip()) is not None
            showtimes.extend(_paired_lines(place, lines[2 if has_language else 1:]))
    except Exception as e:
        logger.exception(f"Error parsing pasted showtimes text: {e}")
        return []
    return showtimes
