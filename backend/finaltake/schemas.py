"""
FinalTake — Pydantic Schemas
Filter state, API validation & serialization.
"""

from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional


# ─── Filter Schemas ───────────────────────────────────────

DEFAULT_YEAR_FROM = 1990
DEFAULT_YEAR_TO = 2024

AGE_RATINGS = ("G", "PG", "PG-13", "R", "NC-17")


def _unique(values) -> tuple:
    """Drop repeats, keep first-seen order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return tuple(result)


class FilterSelection(BaseModel):
    """
    The user's discovery criteria.
    Frozen: a change of any control produces a new selection.
    Sequence fields are tuples used as ordered sets.
    """
    genre_ids: tuple[int, ...] = ()
    moods: tuple[str, ...] = ()
    ratings: tuple[str, ...] = ()
    year_from: int = DEFAULT_YEAR_FROM
    year_to: int = DEFAULT_YEAR_TO

    model_config = {"frozen": True}

    @field_validator("genre_ids", "moods", "ratings", mode="after")
    @classmethod
    def dedupe(cls, v):
        return _unique(v)


class EncodeRequest(BaseModel):
    filters: FilterSelection = Field(default_factory=FilterSelection)
    current_query: str = ""


class EncodeResponse(BaseModel):
    query: str
    changed: bool


# ─── Movie Schemas ────────────────────────────────────────

class MovieCard(BaseModel):
    tmdb_id: int
    title: str
    overview: Optional[str] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    genres: list[dict] = Field(default_factory=list)
    release_date: Optional[date] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    popularity: Optional[float] = None
    director: Optional[str] = None
    trailer_key: Optional[str] = None
    mood_score: int = 0

    @field_validator("release_date", mode="before")
    @classmethod
    def parse_release_date(cls, v):
        """Handle TMDB returning dates as strings or empty strings."""
        if v is None or v == "":
            return None
        if isinstance(v, date):
            return v
        if isinstance(v, str):
            try:
                return date.fromisoformat(v)
            except (ValueError, TypeError):
                return None
        return None


class DiscoverPage(BaseModel):
    filters: FilterSelection
    query: str
    results: list[MovieCard]
    page: int
    total_pages: int
    total: int


class TrailerResponse(BaseModel):
    tmdb_id: int
    video_id: str
    embed_url: str
    watch_url: str
    source: str  # 'tmdb' or 'youtube'


# ─── Profile Schemas ──────────────────────────────────────

class ProfileCreate(BaseModel):
    username: str = Field(min_length=3, max_length=40, pattern=r"^[A-Za-z0-9_]+$")


class ProfileResponse(BaseModel):
    username: str
    created_at: Optional[datetime] = None
    liked: list[int] = Field(default_factory=list)
    watch_later: list[int] = Field(default_factory=list)


class ToggleResponse(BaseModel):
    username: str
    list_name: str
    tmdb_id: int
    present: bool


class UsernameSuggestion(BaseModel):
    username: str
    hint: str


class HealthCheck(BaseModel):
    status: str = "ok"
    version: str = "1.0.0"
    database: Optional[str] = None
    tmdb: Optional[str] = None
