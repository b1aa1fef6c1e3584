"""
Shared fixtures: in-memory database, ASGI client, and canned TMDB/OMDB/YouTube
responses so no test touches the network.
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from finaltake.database import Base, get_db
from finaltake.main import app
from finaltake.middleware.rate_limit import reset_rate_limits
from finaltake.services.omdb import omdb_service
from finaltake.services.tmdb import tmdb_service
from finaltake.services.youtube import youtube_service


DISCOVER_PAGE = {
    "page": 1,
    "total_pages": 3,
    "total_results": 42,
    "results": [
        {"id": 101, "title": "Laughs Tonight", "release_date": "2010-06-01", "genre_ids": [35]},
        {"id": 100, "title": "The Long Quest", "release_date": "2003-12-17", "genre_ids": [28, 12]},
        {"id": 102, "title": "Night Shift", "release_date": "2015-10-30", "genre_ids": [27]},
    ],
}

DETAILS = {
    100: {
        "id": 100,
        "title": "The Long Quest",
        "release_date": "2003-12-17",
        "runtime": 201,
        "vote_average": 8.5,
        "poster_path": "/quest.jpg",
        "genres": [{"id": 28, "name": "Action"}, {"id": 12, "name": "Adventure"}],
        "videos": {"results": [
            {"site": "YouTube", "type": "Teaser", "key": "teaser1"},
            {"site": "YouTube", "type": "Trailer", "key": "fanmade", "official": False},
            {"site": "YouTube", "type": "Trailer", "key": "quest-trailer", "official": True},
        ]},
    },
    101: {
        "id": 101,
        "title": "Laughs Tonight",
        "release_date": "2010-06-01",
        "runtime": 95,
        "genres": [{"id": 35, "name": "Comedy"}],
        "videos": {"results": []},
    },
    102: {
        "id": 102,
        "title": "Night Shift",
        "release_date": "2015-10-30",
        "genres": [{"id": 27, "name": "Horror"}, {"id": 80, "name": "Crime"}],
        "videos": {"results": []},
    },
}

DIRECTORS = {"The Long Quest": "Jo Director", "Laughs Tonight": "N. Funny"}

GENRES = [{"id": 28, "name": "Action"}, {"id": 35, "name": "Comedy"}]


class FakeUpstream:
    """Records what the pipeline asked for."""

    def __init__(self):
        self.discover_calls = []
        self.trailer_searches = []
        self.youtube_result = "yt-found"


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()

    async def discover_movies(selection, page=1):
        fake.discover_calls.append((selection, page))
        return DISCOVER_PAGE

    async def get_movie_details(tmdb_id):
        return DETAILS.get(tmdb_id, {})

    async def get_similar_movies(tmdb_id, limit=5):
        return [DISCOVER_PAGE["results"][0]][:limit]

    async def get_genres():
        return GENRES

    async def get_director(title, year=None):
        return DIRECTORS.get(title)

    async def get_trailer(title, year=None):
        fake.trailer_searches.append((title, year))
        return fake.youtube_result

    monkeypatch.setattr(tmdb_service, "discover_movies", discover_movies)
    monkeypatch.setattr(tmdb_service, "get_movie_details", get_movie_details)
    monkeypatch.setattr(tmdb_service, "get_similar_movies", get_similar_movies)
    monkeypatch.setattr(tmdb_service, "get_genres", get_genres)
    monkeypatch.setattr(omdb_service, "get_director", get_director)
    monkeypatch.setattr(youtube_service, "get_trailer", get_trailer)
    return fake


@pytest.fixture
async def db_session():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def client(db_session):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    reset_rate_limits()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
    reset_rate_limits()
