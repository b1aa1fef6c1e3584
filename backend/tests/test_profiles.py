"""
Profile store and the /api/profiles endpoints, on in-memory SQLite.
"""

import pytest

from finaltake.middleware import rate_limit
from finaltake.services.profiles import ListConflict, ProfileExists, ProfileNotFound, ProfileStore


# ─── Store ────────────────────────────────────────────────

async def test_create_and_get(db_session):
    store = ProfileStore(db_session)
    await store.create("NolanFan10")
    profile = await store.get("NolanFan10")
    assert profile.username == "NolanFan10"
    assert profile.created_at is not None


async def test_duplicate_username(db_session):
    store = ProfileStore(db_session)
    await store.create("NolanFan10")
    with pytest.raises(ProfileExists):
        await store.create("NolanFan10")


async def test_missing_profile(db_session):
    store = ProfileStore(db_session)
    with pytest.raises(ProfileNotFound):
        await store.get("ghost")
    with pytest.raises(ProfileNotFound):
        await store.toggle("ghost", "liked", 1)


async def test_toggle_adds_then_removes(db_session):
    store = ProfileStore(db_session)
    await store.create("KubrickFrame42")

    assert await store.toggle("KubrickFrame42", "liked", 550) is True
    assert await store.toggle("KubrickFrame42", "liked", 13) is True
    assert await store.list_ids("KubrickFrame42", "liked") == [13, 550]

    assert await store.toggle("KubrickFrame42", "liked", 550) is False
    assert await store.list_ids("KubrickFrame42", "liked") == [13]


async def test_lists_are_independent(db_session):
    store = ProfileStore(db_session)
    await store.create("a_user")
    await store.create("b_user")
    await store.toggle("a_user", "watch_later", 7)
    await store.toggle("b_user", "liked", 7)

    snap = await store.snapshot("a_user")
    assert snap["liked"] == []
    assert snap["watch_later"] == [7]
    assert (await store.snapshot("b_user"))["liked"] == [7]


async def test_unknown_list_name(db_session):
    store = ProfileStore(db_session)
    await store.create("a_user")
    with pytest.raises(ValueError):
        await store.toggle("a_user", "favorites", 1)


async def test_delete_removes_entries(db_session):
    store = ProfileStore(db_session)
    await store.create("a_user")
    await store.toggle("a_user", "liked", 1)
    await store.delete("a_user")

    with pytest.raises(ProfileNotFound):
        await store.get("a_user")

    # Same name can be reused with empty lists
    await store.create("a_user")
    assert await store.list_ids("a_user", "liked") == []


async def test_create_losing_a_race_is_profile_exists(db_session, monkeypatch):
    store = ProfileStore(db_session)
    await store.create("NolanFan10")
    await db_session.commit()

    # The existence check misses a row another request just inserted
    async def not_found(username):
        return None

    monkeypatch.setattr(store, "_find", not_found)
    with pytest.raises(ProfileExists):
        await store.create("NolanFan10")

    monkeypatch.undo()
    assert (await store.get("NolanFan10")).username == "NolanFan10"


async def test_toggle_losing_a_race_is_list_conflict(db_session, monkeypatch):
    store = ProfileStore(db_session)
    await store.create("a_user")
    await store.toggle("a_user", "liked", 550)
    await db_session.commit()

    async def no_entry(profile_id, list_name, tmdb_id):
        return None

    monkeypatch.setattr(store, "_find_entry", no_entry)
    with pytest.raises(ListConflict):
        await store.toggle("a_user", "liked", 550)

    monkeypatch.undo()
    assert await store.list_ids("a_user", "liked") == [550]


# ─── API ──────────────────────────────────────────────────

async def test_suggestions(client):
    resp = await client.get("/api/profiles/suggestions", params={"count": 6})
    body = resp.json()
    assert len(body) == 6
    assert len({s["username"] for s in body}) == 6
    assert all(s["hint"] for s in body)


async def test_profile_lifecycle(client):
    resp = await client.post("/api/profiles", json={"username": "NeonVision55"})
    assert resp.status_code == 201
    assert resp.json()["liked"] == []

    resp = await client.post("/api/profiles", json={"username": "NeonVision55"})
    assert resp.status_code == 409

    resp = await client.post("/api/profiles/NeonVision55/watch_later/603")
    assert resp.json() == {"username": "NeonVision55", "list_name": "watch_later", "tmdb_id": 603, "present": True}

    resp = await client.get("/api/profiles/NeonVision55")
    assert resp.json()["watch_later"] == [603]

    resp = await client.delete("/api/profiles/NeonVision55")
    assert resp.status_code == 204
    resp = await client.get("/api/profiles/NeonVision55")
    assert resp.status_code == 404


async def test_concurrent_create_returns_conflict(client, db_session, monkeypatch):
    await ProfileStore(db_session).create("NeonVision55")
    await db_session.commit()

    async def not_found(self, username):
        return None

    monkeypatch.setattr(ProfileStore, "_find", not_found)
    resp = await client.post("/api/profiles", json={"username": "NeonVision55"})
    assert resp.status_code == 409


async def test_invalid_username(client):
    resp = await client.post("/api/profiles", json={"username": "no spaces allowed"})
    assert resp.status_code == 422


async def test_invalid_list_name(client):
    await client.post("/api/profiles", json={"username": "a_user"})
    resp = await client.post("/api/profiles/a_user/favorites/1")
    assert resp.status_code == 422


async def test_toggle_unknown_profile(client):
    resp = await client.post("/api/profiles/ghost/liked/1")
    assert resp.status_code == 404


async def test_profile_writes_are_rate_limited(client, monkeypatch):
    monkeypatch.setattr(rate_limit.settings, "PROFILE_WRITES_PER_IP_PER_HOUR", 2)
    await client.post("/api/profiles", json={"username": "a_user"})
    await client.post("/api/profiles/a_user/liked/1")
    resp = await client.post("/api/profiles/a_user/liked/2")
    assert resp.status_code == 429
