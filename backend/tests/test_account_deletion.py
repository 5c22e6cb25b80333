"""Account deletion: cascade, session invalidation, and partial failure."""

from functools import partial

import anyio
from fastapi.testclient import TestClient


def _seed(client):
    for i in range(3):
        client.post("/api/journals", json={"content": f"# Entry {i}"})
    client.post("/api/entities", json={"name": "Mira", "type": "npc", "properties": {}})
    client.post("/api/entities", json={"name": "Harbor", "type": "location", "properties": {}})


def test_cascade_removes_everything_owned(app, client, other_client, alice, bob):
    _seed(client)
    _seed(other_client)
    storage = app.state.storage

    response = client.delete("/api/user")

    assert response.status_code == 200
    assert anyio.run(storage.get_journals, alice["id"]) == []
    assert anyio.run(partial(storage.get_entities, user_id=alice["id"])) == []
    assert anyio.run(storage.get_user, alice["id"]) is None
    assert len(anyio.run(storage.get_journals, bob["id"])) == 3
    assert len(anyio.run(partial(storage.get_entities, user_id=bob["id"]))) == 2


def test_old_session_is_rejected(app, settings, client, alice):
    _seed(client)
    old_cookie = client.cookies.get(settings.SESSION_COOKIE_NAME)
    assert old_cookie

    client.delete("/api/user")

    assert client.get("/api/journals").status_code == 401
    replay = TestClient(app, cookies={settings.SESSION_COOKIE_NAME: old_cookie})
    assert replay.get("/api/journals").status_code == 401
    assert replay.get("/api/user").status_code == 401


def test_username_free_after_deletion(client, register, alice):
    client.delete("/api/user")

    assert register(client, "alice")["id"] != alice["id"]


def test_partial_failure_reports_500(app, client, alice, monkeypatch):
    _seed(client)
    storage = app.state.storage

    async def broken_delete(entity_id):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(storage, "delete_entity", broken_delete)

    response = client.delete("/api/user")

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to delete account"}
    # No rollback: journals that were deleted stay deleted, the account remains
    assert anyio.run(storage.get_journals, alice["id"]) == []
    assert anyio.run(storage.get_user, alice["id"]) is not None
    assert client.get("/api/user").status_code == 200
