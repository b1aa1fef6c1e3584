"""
FinalTake — Mood Scoring
Scores how well a movie's genres match the moods a user picked.
Display-only: a low score never hides a movie.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any, Optional

POINTS_PER_MATCH = 20
MAX_SCORE = 100

# Mood → genre keywords (lowercase substrings of TMDB genre names)
MOOD_TAGS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Feel-Good": ("comedy", "family", "romance", "music"),
    "Mind-Bending": ("thriller", "science fiction", "mystery"),
    "Dark": ("horror", "crime", "war"),
    "Action-Packed": ("action", "adventure"),
    "Emotional": ("drama", "romance"),
    "Epic": ("fantasy", "adventure", "history"),
})


def _genre_name(genre: Any) -> Optional[str]:
    """TMDB genre dict, object with .name, or a bare string."""
    if isinstance(genre, str):
        return genre
    if isinstance(genre, Mapping):
        name = genre.get("name")
    else:
        name = getattr(genre, "name", None)
    return name if isinstance(name, str) else None


def calculate_mood_score(
    genres: Optional[Iterable[Any]],
    selected_moods: Optional[Sequence[str]],
    mood_table: Mapping[str, Sequence[str]] = MOOD_TAGS,
) -> int:
    """
    20 points per mood keyword found in any of the movie's genre names,
    summed over the selected moods and capped at 100.

    >>> calculate_mood_score([{"name": "Action"}, {"name": "Adventure"}], ["Action-Packed", "Epic"])
    60
    """
    if not selected_moods:
        return 0

    names = [name.lower() for name in map(_genre_name, genres or []) if name]

    score = 0
    for mood in selected_moods:
        keywords = mood_table.get(mood, ())
        matches = sum(1 for keyword in keywords if any(keyword in name for name in names))
        score += matches * POINTS_PER_MATCH

    return min(score, MAX_SCORE)


def annotate_mood_scores(movies: Iterable[dict], selected_moods: Optional[Sequence[str]]) -> list[dict]:
    """Copy each movie dict with a `mood_score` computed from its `genres`."""
    return [
        {**movie, "mood_score": calculate_mood_score(movie.get("genres"), selected_moods)}
        for movie in movies
    ]
