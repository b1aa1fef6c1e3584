"""
FinalTake — YouTube Data API Service
Finds an official trailer by searching YouTube.
Search costs 100 quota units; default quota is 10,000/day.
"""

import httpx
import logging
from typing import Optional
from finaltake.config import get_settings
from finaltake.services.retry import with_retry

settings = get_settings()
logger = logging.getLogger(__name__)


def trailer_query(title: str, year: Optional[str] = None) -> str:
    """Search phrase for a movie's trailer, e.g. 'Dune 2021 official trailer'."""
    parts = [title.strip()]
    if year:
        parts.append(str(year))
    parts.append("official trailer")
    return " ".join(parts)


class YouTubeService:
    """YouTube search client for trailer lookups."""

    BASE_URL = "https://www.googleapis.com/youtube/v3"

    def __init__(self):
        self.api_key = getattr(settings, "YOUTUBE_API_KEY", "")

    @with_retry(max_retries=2, base_delay=1.0, timeout=10.0)
    async def get_trailer(self, title: str, year: Optional[str] = None) -> Optional[str]:
        """
        Returns:
            YouTube video ID of the top search hit, or None
        """
        if not self.api_key or not title:
            return None

        params = {
            "part": "snippet",
            "q": trailer_query(title, year),
            "type": "video",
            "maxResults": 1,
            "key": self.api_key,
        }

        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.get(f"{self.BASE_URL}/search", params=params)
                if resp.status_code == 403:
                    logger.warning("YouTube quota exceeded or key rejected!")
                    return None
                resp.raise_for_status()
                data = resp.json()

            items = data.get("items") or []
            if not items:
                return None
            return (items[0].get("id") or {}).get("videoId")

        except httpx.HTTPStatusError as e:
            logger.debug(f"YouTube returned {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"YouTube search failed: {e}")
            return None


def youtube_embed_url(video_id: str) -> str:
    """Convert YouTube video ID to embeddable URL."""
    return f"https://www.youtube.com/embed/{video_id}"


def youtube_watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


# Global service instance
youtube_service = YouTubeService()
