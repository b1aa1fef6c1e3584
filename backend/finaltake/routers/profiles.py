"""
FinalTake — Profiles Router
Username suggestions and per-user liked / watch-later lists.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from finaltake.database import get_db
from finaltake.middleware.rate_limit import limit_profile_writes
from finaltake.schemas import ProfileCreate, ProfileResponse, ToggleResponse, UsernameSuggestion
from finaltake.services.profiles import LIST_NAMES, ListConflict, ProfileExists, ProfileNotFound, ProfileStore
from finaltake.services.usernames import explain_username, generate_movie_usernames

logger = logging.getLogger(__name__)

router = APIRouter()

LIST_PATTERN = "^(" + "|".join(LIST_NAMES) + ")$"


def get_store(db: AsyncSession = Depends(get_db)) -> ProfileStore:
    return ProfileStore(db)


@router.get("/suggestions", response_model=list[UsernameSuggestion])
async def suggest_usernames(count: int = Query(4, ge=1, le=12)):
    return [
        UsernameSuggestion(username=name, hint=explain_username(name))
        for name in generate_movie_usernames(count)
    ]


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(limit_profile_writes)],
)
async def create_profile(body: ProfileCreate, store: ProfileStore = Depends(get_store)):
    try:
        await store.create(body.username)
    except ProfileExists:
        raise HTTPException(status_code=409, detail="Username already exists")
    return await store.snapshot(body.username)


@router.get("/{username}", response_model=ProfileResponse)
async def get_profile(username: str, store: ProfileStore = Depends(get_store)):
    try:
        return await store.snapshot(username)
    except ProfileNotFound:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.delete(
    "/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(limit_profile_writes)],
)
async def delete_profile(username: str, store: ProfileStore = Depends(get_store)):
    try:
        await store.delete(username)
    except ProfileNotFound:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.post(
    "/{username}/{list_name}/{tmdb_id}",
    response_model=ToggleResponse,
    dependencies=[Depends(limit_profile_writes)],
)
async def toggle_movie(
    username: str,
    tmdb_id: int,
    list_name: str = Path(..., pattern=LIST_PATTERN),
    store: ProfileStore = Depends(get_store),
):
    """Add the movie to the list, or remove it if it's already there."""
    try:
        present = await store.toggle(username, list_name, tmdb_id)
    except ProfileNotFound:
        raise HTTPException(status_code=404, detail="Profile not found")
    except ListConflict:
        raise HTTPException(status_code=409, detail="List changed concurrently, try again")
    return ToggleResponse(username=username, list_name=list_name, tmdb_id=tmdb_id, present=present)
