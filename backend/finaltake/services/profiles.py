"""
FinalTake — Profile Store
Per-user liked / watch-later lists. Bound to one AsyncSession; routers get
a fresh store per request through a dependency.
"""

import logging
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finaltake.models import ProfileMovie, UserProfile

logger = logging.getLogger(__name__)

LIST_NAMES = ("liked", "watch_later")


class ProfileExists(Exception):
    """Username already taken."""


class ProfileNotFound(Exception):
    """No profile with that username."""


class ListConflict(Exception):
    """A concurrent toggle already changed this list entry."""


def _check_list(list_name: str) -> None:
    if list_name not in LIST_NAMES:
        raise ValueError(f"Unknown list '{list_name}', expected one of {LIST_NAMES}")


class ProfileStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find(self, username: str):
        result = await self.db.execute(
            select(UserProfile).where(UserProfile.username == username)
        )
        return result.scalar_one_or_none()

    async def _find_entry(self, profile_id: int, list_name: str, tmdb_id: int):
        result = await self.db.execute(
            select(ProfileMovie).where(
                ProfileMovie.profile_id == profile_id,
                ProfileMovie.list_name == list_name,
                ProfileMovie.tmdb_id == tmdb_id,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, username: str) -> UserProfile:
        if await self._find(username) is not None:
            raise ProfileExists(username)
        profile = UserProfile(username=username)
        self.db.add(profile)
        try:
            await self.db.flush()
        except IntegrityError:
            # Lost a race with a concurrent create of the same name
            await self.db.rollback()
            raise ProfileExists(username) from None
        logger.info(f"Created profile '{username}'")
        return profile

    async def get(self, username: str) -> UserProfile:
        profile = await self._find(username)
        if profile is None:
            raise ProfileNotFound(username)
        return profile

    async def delete(self, username: str) -> None:
        profile = await self.get(username)
        # SQLite doesn't enforce ON DELETE CASCADE without a pragma
        await self.db.execute(delete(ProfileMovie).where(ProfileMovie.profile_id == profile.id))
        await self.db.delete(profile)
        await self.db.flush()
        logger.info(f"Deleted profile '{username}'")

    async def list_ids(self, username: str, list_name: str) -> list[int]:
        _check_list(list_name)
        profile = await self.get(username)
        result = await self.db.execute(
            select(ProfileMovie.tmdb_id)
            .where(ProfileMovie.profile_id == profile.id, ProfileMovie.list_name == list_name)
            .order_by(ProfileMovie.tmdb_id)
        )
        return list(result.scalars().all())

    async def toggle(self, username: str, list_name: str, tmdb_id: int) -> bool:
        """Add the movie if absent, remove it if present. Returns True when now present."""
        _check_list(list_name)
        profile = await self.get(username)
        entry = await self._find_entry(profile.id, list_name, tmdb_id)

        if entry is not None:
            await self.db.delete(entry)
            await self.db.flush()
            return False

        self.db.add(ProfileMovie(profile_id=profile.id, list_name=list_name, tmdb_id=tmdb_id))
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise ListConflict(f"{username}/{list_name}/{tmdb_id}") from None
        return True

    async def snapshot(self, username: str) -> dict:
        """Profile plus both lists, shaped for ProfileResponse."""
        profile = await self.get(username)
        return {
            "username": profile.username,
            "created_at": profile.created_at,
            "liked": await self.list_ids(username, "liked"),
            "watch_later": await self.list_ids(username, "watch_later"),
        }
