"""
FinalTake — Discovery Pipeline
TMDB discover → per-movie enrichment (details, director) → mood score.
Enrichment failures degrade to the bare discover entry; nothing here raises.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Optional

from finaltake.config import get_settings
from finaltake.schemas import FilterSelection
from finaltake.services.mood_scoring import annotate_mood_scores, calculate_mood_score
from finaltake.services.omdb import omdb_service
from finaltake.services.tmdb import tmdb_service
from finaltake.services.youtube import youtube_service

settings = get_settings()
logger = logging.getLogger(__name__)


def release_year(movie: dict) -> Optional[str]:
    """'2021' from a TMDB release_date like '2021-10-22'."""
    release = movie.get("release_date") or ""
    year = release.split("-")[0]
    return year or None


async def _details(tmdb_id: int) -> dict:
    try:
        return await tmdb_service.get_movie_details(tmdb_id)
    except Exception as e:
        logger.warning(f"Details failed for {tmdb_id}: {e}")
        return {}


async def _director(movie: dict) -> Optional[str]:
    title = movie.get("title") or ""
    try:
        return await omdb_service.get_director(title, release_year(movie))
    except Exception as e:
        logger.warning(f"Director lookup failed for '{title}': {e}")
        return None


async def _enrich(movie: dict) -> dict:
    """
    Merge details + director into a discover entry.
    Details and director run concurrently when the entry already has a title;
    a bare {"id": ...} needs the details first.
    """
    if movie.get("title"):
        details, director = await asyncio.gather(_details(movie["id"]), _director(movie))
    else:
        details = await _details(movie["id"])
        director = await _director({**movie, **details})

    merged = {**movie, **details}
    card = tmdb_service.normalize_result(merged)
    card["director"] = director
    card["trailer_key"] = tmdb_service.pick_trailer_key(details)
    return card


async def enrich_movie(movie: dict, moods: Sequence[str]) -> dict:
    """A single enriched card, scored against `moods`."""
    card = await _enrich(movie)
    card["mood_score"] = calculate_mood_score(card["genres"], moods)
    return card


async def get_movies(selection: FilterSelection, page: int = 1) -> dict:
    """
    One enriched discover page.
    Only the first DISCOVER_ENRICH_LIMIT results are enriched and returned.
    """
    try:
        data = await tmdb_service.discover_movies(selection, page)
    except Exception as e:
        logger.error(f"Discover failed: {e}")
        data = {}

    raw_results = data.get("results", [])[: settings.DISCOVER_ENRICH_LIMIT]
    cards = await asyncio.gather(*(_enrich(m) for m in raw_results))
    results = annotate_mood_scores(cards, selection.moods)
    logger.info(f"Discover page {page}: {len(results)} movies enriched")

    return {
        "results": results,
        "page": data.get("page", page),
        "total_pages": data.get("total_pages", 1),
        "total": data.get("total_results", 0),
    }


async def get_similar(tmdb_id: int) -> list[dict]:
    similar = await tmdb_service.get_similar_movies(tmdb_id, limit=settings.SIMILAR_LIMIT)
    return [tmdb_service.normalize_result(m) for m in similar]


async def get_trailer(tmdb_id: int) -> Optional[tuple[str, str]]:
    """
    (video_id, source) for a movie's trailer.
    TMDB's own video list first, YouTube search as fallback.
    """
    details = await tmdb_service.get_movie_details(tmdb_id)
    if not details:
        return None

    key = tmdb_service.pick_trailer_key(details)
    if key:
        return key, "tmdb"

    try:
        video_id = await youtube_service.get_trailer(details.get("title") or "", release_year(details))
    except Exception as e:
        logger.warning(f"Trailer search failed for {tmdb_id}: {e}")
        return None
    return (video_id, "youtube") if video_id else None
