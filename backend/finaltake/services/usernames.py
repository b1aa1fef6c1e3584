"""
FinalTake — Username Suggestions
Movie-themed handles like 'KubrickFrame42': prefix + suffix + two digits.
"""

import random
import re
from typing import Optional

PREFIXES = (
    # Directors
    "Kubrick", "Tarantino", "Hitchcock", "Scorsese", "Nolan", "Spielberg", "Coppola",
    "Lynch", "Fincher", "Cameron", "Burton", "Lucas", "Eastwood", "Zemeckis", "Raimi",
    # Characters
    "Neo", "Trinity", "Morpheus", "Vader", "Solo", "Leia", "Skywalker", "Joker",
    "Bond", "Rocky", "Gandalf", "Frodo", "Aragorn", "Legolas", "Galadriel",
    # Classics
    "Casablanca", "Vertigo", "Psycho", "Godfather", "Goodfellas", "Shawshank",
    "Titanic", "Inception", "Interstellar", "Gladiator", "Braveheart",
    # Genres & styles
    "Noir", "Western", "Thriller", "Comedy", "Drama", "Action", "Horror", "Mystery",
    "Epic", "Classic", "Vintage", "Golden", "Midnight", "Crimson", "Neon",
    # Studios & terms
    "Metro", "Paramount", "Miramax", "Cinema", "Motion", "Screen",
)

PRODUCTION_SUFFIXES = ("Frame", "Scene", "Take", "Cut", "Shot", "Reel", "Edit", "Lens", "Focus", "Zoom")
FAN_SUFFIXES = ("Critic", "Fan", "Buff", "Lover", "Watcher", "Viewer", "Seeker", "Collector", "Curator")
CRAFT_SUFFIXES = (
    "Director", "Editor", "Composer", "Montage", "Sequence", "Fade", "Dissolve",
    "Vision", "Mood", "Twist", "Climax", "Reveal", "Thrill",
)
SUFFIXES = PRODUCTION_SUFFIXES + FAN_SUFFIXES + CRAFT_SUFFIXES

_USERNAME_RE = re.compile(r"^([A-Z][a-z]+)([A-Z][a-z]+)(\d{2})$")


def generate_movie_usernames(count: int = 4, rng: Optional[random.Random] = None) -> list[str]:
    """`count` distinct suggestions, in generation order."""
    rng = rng or random.Random()
    # 10..99 is 90 numbers
    capacity = len(PREFIXES) * len(SUFFIXES) * 90
    if count > capacity:
        raise ValueError(f"Cannot generate {count} unique usernames (max {capacity})")

    usernames: list[str] = []
    seen = set()
    while len(usernames) < count:
        name = f"{rng.choice(PREFIXES)}{rng.choice(SUFFIXES)}{rng.randint(10, 99)}"
        if name not in seen:
            seen.add(name)
            usernames.append(name)
    return usernames


def explain_username(username: str) -> str:
    """Short hint shown next to a suggestion."""
    match = _USERNAME_RE.match(username)
    if not match or match.group(1) not in PREFIXES:
        return "Movie-themed username"

    suffix = match.group(2)
    if suffix in PRODUCTION_SUFFIXES:
        return "Film reference + Production term"
    if suffix in FAN_SUFFIXES:
        return "Movie reference + Cinema enthusiast"
    return "Cinema-inspired + Film industry term"
