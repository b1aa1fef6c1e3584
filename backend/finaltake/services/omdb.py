"""
FinalTake — OMDB API Service
Looks up a movie's director by title and year.
Free tier: 1000 requests/day.
"""

import httpx
import logging
from typing import Optional
from finaltake.config import get_settings
from finaltake.services.retry import with_retry

settings = get_settings()
logger = logging.getLogger(__name__)


def parse_director(data: dict) -> Optional[str]:
    """Director string from an OMDB payload, or None for misses and 'N/A'."""
    if data.get("Response") == "False":
        return None
    director = (data.get("Director") or "").strip()
    if not director or director == "N/A":
        return None
    return director


class OMDBService:
    """OMDB API client for director lookups."""

    BASE_URL = "https://www.omdbapi.com/"

    def __init__(self):
        self.api_key = getattr(settings, "OMDB_API_KEY", "")

    @with_retry(max_retries=2, base_delay=1.0, timeout=10.0)
    async def get_director(self, title: str, year: Optional[str] = None) -> Optional[str]:
        """
        Fetch the director by title search.

        Args:
            title: Movie title
            year: Optional release year for better matching

        Returns:
            Director name(s) as OMDB formats them (e.g. 'Lana Wachowski, Lilly Wachowski'),
            or None when unknown
        """
        if not self.api_key or not title:
            return None

        params = {"apikey": self.api_key, "t": title, "type": "movie"}
        if year:
            params["y"] = year

        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.get(self.BASE_URL, params=params)

                if resp.status_code in (401, 429):
                    logger.warning("OMDB API key invalid or daily limit reached!")
                    return None
                if resp.status_code != 200:
                    logger.debug(f"OMDB returned {resp.status_code}")
                    return None

                data = resp.json()

            return parse_director(data)
        except httpx.TimeoutException:
            logger.debug("OMDB request timed out")
            return None
        except Exception as e:
            logger.error(f"OMDB request failed: {e}")
            return None


# Global service instance
omdb_service = OMDBService()
