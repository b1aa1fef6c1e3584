"""
FinalTake — Movies Router
Single-movie lookups: details, similar titles, trailer.
"""

import logging
from fastapi import APIRouter, HTTPException, Query

from finaltake.schemas import MovieCard, TrailerResponse
from finaltake.services import discovery
from finaltake.services.filter_codec import decode_filters
from finaltake.services.youtube import youtube_embed_url, youtube_watch_url

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{tmdb_id}", response_model=MovieCard)
async def get_movie(
    tmdb_id: int,
    moods: str = Query("", description="Comma-separated mood tags to score against"),
):
    """Enriched movie card; pass `moods` to get a mood score."""
    selection = decode_filters({"moods": moods})
    card = await discovery.enrich_movie({"id": tmdb_id}, selection.moods)
    if card["title"] == "Unknown":
        raise HTTPException(status_code=404, detail="Movie not found")
    return card


@router.get("/{tmdb_id}/similar", response_model=list[MovieCard])
async def get_similar(tmdb_id: int):
    return await discovery.get_similar(tmdb_id)


@router.get("/{tmdb_id}/trailer", response_model=TrailerResponse)
async def get_trailer(tmdb_id: int):
    found = await discovery.get_trailer(tmdb_id)
    if not found:
        raise HTTPException(status_code=404, detail="Trailer not available")

    video_id, source = found
    return TrailerResponse(
        tmdb_id=tmdb_id,
        video_id=video_id,
        embed_url=youtube_embed_url(video_id),
        watch_url=youtube_watch_url(video_id),
        source=source,
    )
