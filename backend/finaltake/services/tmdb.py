"""
FinalTake — TMDB API Service
Discover with filters, movie details, genres, and similar titles.
Free API, ~50 req/sec, no daily limit.
"""

import httpx
import logging
from typing import Optional
from finaltake.config import get_settings
from finaltake.schemas import AGE_RATINGS, FilterSelection
from finaltake.services.retry import RetryExhausted, with_retry

settings = get_settings()
logger = logging.getLogger(__name__)

TMDB_HEADERS = {
    "Authorization": f"Bearer {settings.TMDB_API_KEY}",
    "accept": "application/json",
}


class TMDBService:
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None, retry_delay: float = 1.0):
        self.base = settings.TMDB_BASE_URL
        self.image_base = settings.TMDB_IMAGE_BASE
        self.transport = transport
        self.retry_delay = retry_delay

    async def _request(self, endpoint: str, params: dict) -> dict:
        async with httpx.AsyncClient(timeout=15, transport=self.transport) as client:
            resp = await client.get(f"{self.base}{endpoint}", headers=TMDB_HEADERS, params=params)

        if resp.status_code == 401:
            logger.critical("TMDB API key is invalid!")
            return {}

        if resp.status_code == 404:
            logger.debug(f"TMDB 404: {endpoint}")
            return {}

        if resp.status_code == 429:
            logger.warning(f"TMDB rate limited: {endpoint}")
        elif 400 <= resp.status_code < 500:
            logger.error(f"TMDB rejected {endpoint}: {resp.status_code}")
            return {}

        # 429 and 5xx raise HTTPStatusError, which with_retry retries
        resp.raise_for_status()
        return resp.json()

    async def _get(self, endpoint: str, params: dict = None) -> dict:
        """TMDB GET. Rate limits, server errors and timeouts are retried; a final failure gives {}."""
        request = with_retry(max_retries=2, base_delay=self.retry_delay, timeout=20)(self._request)
        try:
            return await request(endpoint, params or {})
        except RetryExhausted as e:
            logger.error(f"TMDB request failed: {e}")
            return {}
        except ValueError as e:
            logger.error(f"TMDB returned invalid JSON for {endpoint}: {e}")
            return {}

    def build_discover_params(self, selection: FilterSelection, page: int = 1) -> dict:
        """
        Translate a FilterSelection into /discover/movie params.
        An inverted year range is swapped; unknown age ratings are skipped.
        """
        year_from, year_to = selection.year_from, selection.year_to
        if year_from > year_to:
            logger.debug(f"Swapping inverted year range {year_from}-{year_to}")
            year_from, year_to = year_to, year_from

        params = {
            "page": page,
            "sort_by": "popularity.desc",
            "include_adult": "false",
            "primary_release_date.gte": f"{year_from}-01-01",
            "primary_release_date.lte": f"{year_to}-12-31",
        }

        if selection.genre_ids:
            params["with_genres"] = ",".join(str(gid) for gid in selection.genre_ids)

        # TMDB treats "|" as OR for certifications
        ratings = [r for r in selection.ratings if r in AGE_RATINGS]
        if ratings:
            params["certification_country"] = "US"
            params["certification"] = "|".join(ratings)

        return params

    async def discover_movies(self, selection: FilterSelection, page: int = 1) -> dict:
        """Raw /discover/movie page for a selection."""
        return await self._get("/discover/movie", self.build_discover_params(selection, page))

    async def get_movie_details(self, tmdb_id: int) -> dict:
        """Full movie details, with videos appended for trailer lookup."""
        return await self._get(f"/movie/{tmdb_id}", {"append_to_response": "videos"})

    async def get_genres(self) -> list[dict]:
        """Official movie genre list: [{"id": 28, "name": "Action"}, ...]"""
        data = await self._get("/genre/movie/list")
        return data.get("genres", [])

    async def get_similar_movies(self, tmdb_id: int, limit: int = 5) -> list[dict]:
        data = await self._get(f"/movie/{tmdb_id}/similar")
        return data.get("results", [])[:limit]

    def pick_trailer_key(self, details: dict) -> Optional[str]:
        """
        YouTube key of the best trailer among appended videos.
        Prefers an official Trailer, then any Trailer.
        """
        videos = (details.get("videos") or {}).get("results", [])
        trailers = [
            v for v in videos
            if v.get("site") == "YouTube" and v.get("type") == "Trailer" and v.get("key")
        ]
        if not trailers:
            return None
        trailers.sort(key=lambda v: not v.get("official", False))
        return trailers[0]["key"]

    def get_poster_url(self, path: Optional[str], size: str = "w500") -> Optional[str]:
        if not path:
            return None
        return f"{self.image_base}/{size}{path}"

    def get_backdrop_url(self, path: Optional[str], size: str = "w1280") -> Optional[str]:
        if not path:
            return None
        return f"{self.image_base}/{size}{path}"

    def normalize_result(self, item: dict) -> dict:
        """Normalize a TMDB movie (discover entry or details) to our card shape."""
        return {
            "tmdb_id": item["id"],
            "title": item.get("title") or item.get("name") or "Unknown",
            "overview": item.get("overview"),
            "poster_url": self.get_poster_url(item.get("poster_path")),
            "backdrop_url": self.get_backdrop_url(item.get("backdrop_path")),
            "genres": item.get("genres") or [
                {"id": gid} for gid in (item.get("genre_ids") or [])
            ],
            "release_date": item.get("release_date"),
            "runtime": item.get("runtime"),
            "vote_average": item.get("vote_average"),
            "vote_count": item.get("vote_count"),
            "popularity": item.get("popularity"),
        }


tmdb_service = TMDBService()
