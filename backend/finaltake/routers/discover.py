"""
FinalTake — Discover Router
Filtered discovery via TMDB /discover/movie, enriched with directors and
mood scores. Filters travel as the shareable query string:
    /api/discover?genres=28,12&moods=Epic&year_from=2000&year_to=2020
"""

import logging
from fastapi import APIRouter, Query, Request

from finaltake.schemas import (
    AGE_RATINGS, DiscoverPage, EncodeRequest, EncodeResponse, FilterSelection,
)
from finaltake.services import discovery
from finaltake.services.filter_codec import decode_filters, encode_filters, query_if_changed
from finaltake.services.mood_scoring import MOOD_TAGS
from finaltake.services.tmdb import tmdb_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DiscoverPage)
async def discover(
    request: Request,
    page: int = Query(1, ge=1, le=500),
    sort: str = Query("popularity", pattern="^(popularity|mood)$"),
):
    """
    Discover movies matching the filter params.

    Filter params are read straight from the query string so malformed
    values fall back to defaults instead of failing validation.
    `sort=mood` reorders the page by mood score (ties keep TMDB order).
    """
    selection = decode_filters(request.query_params)
    data = await discovery.get_movies(selection, page)

    results = data["results"]
    if sort == "mood":
        results = sorted(results, key=lambda m: m["mood_score"], reverse=True)

    return {
        "filters": selection,
        "query": encode_filters(selection),
        "results": results,
        "page": data["page"],
        "total_pages": data["total_pages"],
        "total": data["total"],
    }


@router.get("/decode", response_model=FilterSelection)
async def decode(request: Request):
    """Parse filter params the same way /api/discover does."""
    return decode_filters(request.query_params)


@router.post("/encode", response_model=EncodeResponse)
async def encode(body: EncodeRequest):
    """
    Canonical query string for a selection.
    `changed` is False when the client's current query already matches,
    so it can skip pushing a new history entry.
    """
    new_query = query_if_changed(body.current_query, body.filters)
    if new_query is None:
        return EncodeResponse(query=encode_filters(body.filters), changed=False)
    return EncodeResponse(query=new_query, changed=True)


@router.get("/moods")
async def get_moods():
    """Mood tags and the genre keywords each one boosts."""
    return [{"mood": mood, "keywords": list(keywords)} for mood, keywords in MOOD_TAGS.items()]


@router.get("/ratings")
async def get_ratings():
    return list(AGE_RATINGS)


@router.get("/genres")
async def get_genres():
    """TMDB genre list for the filter UI."""
    return await tmdb_service.get_genres()
