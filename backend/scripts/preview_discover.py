"""
Print one enriched discover page for a filter query string.

    python scripts/preview_discover.py "genres=28,12&moods=Epic&year_from=2000&year_to=2020"
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

# Adjust path to find finaltake
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load env explicitly
env_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env")
load_dotenv(env_path)

from finaltake.services.discovery import get_movies  # noqa: E402
from finaltake.services.filter_codec import decode_filters, encode_filters  # noqa: E402


async def preview(query: str):
    selection = decode_filters(query)
    print(f"Filters: {selection.model_dump()}")
    print(f"Canonical query: {encode_filters(selection)}")

    page = await get_movies(selection)
    print(f"{page['total']} matches, showing {len(page['results'])}\n")
    for movie in page["results"]:
        year = (movie.get("release_date") or "????")[:4]
        genres = ", ".join(g.get("name", "?") for g in movie["genres"])
        print(f"  [{movie['mood_score']:3d}] {movie['title']} ({year}) - {genres}")
        if movie.get("director"):
            print(f"        dir. {movie['director']}")


if __name__ == "__main__":
    asyncio.run(preview(sys.argv[1] if len(sys.argv) > 1 else ""))
