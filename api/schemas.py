from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    document: str = Field(..., description="Crawled page text (markdown) to extract showtimes from")


class PastedTextRequest(BaseModel):
    text: str = Field(
        ...,
        description="Blank-line separated blocks: location, optional language, then time / screen type lines",
    )


class ScrapeRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Cinema or movie showtimes page to crawl")


class ShowtimeOut(BaseModel):
    place: str
    showtime: str
    bookingLink: str
    screenType: str


class ShowtimesResponse(BaseModel):
    movie_title: Optional[str] = None
    strategy: Optional[str] = Field(default=None, description="Recognizer that produced the showtimes")
    total: int
    locations: List[str]
    summary: str
    showtimes: List[ShowtimeOut]
    grouped: Dict[str, Dict[str, List[ShowtimeOut]]] = Field(
        default_factory=dict,
        description="Nested dict: place -> screen type -> [showtimes]",
    )
