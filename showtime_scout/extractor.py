"""
Showtime extraction cascade.

Recognizers are tried from the most chain-specific shape to the most
permissive one. The first recognizer that returns at least one record wins
and the rest are never run, so a page in a known chain's format cannot be
mis-read by the free-text fallback. Keep STRATEGIES in this order.
"""

import logging
from typing import Callable, List, NamedTuple, Optional, Tuple

from showtime_scout.dialects import (
    extract_cine_royal,
    extract_free_text,
    extract_heading_sections,
    extract_novo,
    extract_vox,
)
from showtime_scout.models import ShowtimeRecord

logger = logging.getLogger(__name__)


class Strategy(NamedTuple):
    tag: str
    extract: Callable[[str], List[ShowtimeRecord]]


STRATEGIES: Tuple[Strategy, ...] = (
    Strategy("cine_royal", extract_cine_royal),
    Strategy("novo", extract_novo),
    Strategy("heading_sections", extract_heading_sections),
    Strategy("vox", extract_vox),
    Strategy("free_text", extract_free_text),
)


def run_strategy(strategy: Strategy, document: str) -> List[ShowtimeRecord]:
    """Runs one recognizer; any error it raises counts as 'found nothing'."""
    try:
        return list(strategy.extract(document))
    except Exception as e:
        logger.exception(f"Error in {strategy.tag} pattern parsing: {e}")
        return []


def extract_with_tag(document: str) -> Tuple[Optional[str], List[ShowtimeRecord]]:
    """
    Runs the cascade and reports which recognizer produced the result.

    Returns:
        (tag, records), or (None, []) when no recognizer matched.
    """
    if not isinstance(document, str) or not document.strip():
        return None, []

    document = document.replace("\r\n", "\n")
    logger.debug(f"Processing markdown content, length: {len(document)}")

    for strategy in STRATEGIES:
        showtimes = run_strategy(strategy, document)
        if showtimes:
            logger.info(f"Extracted {len(showtimes)} showtimes using {strategy.tag} pattern")
            return strategy.tag, showtimes

    logger.info("No showtimes extracted from any pattern")
    return None, []


def extract_showtimes(document: str) -> List[ShowtimeRecord]:
    """Extracts showtime records from crawled page text. Never raises."""
    _, showtimes = extract_with_tag(document)
    return showtimes
