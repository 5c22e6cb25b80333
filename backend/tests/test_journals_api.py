"""Journal endpoint tests: ownership, validation, and title derivation."""

from questlog.markdown import mention_markup
from questlog.models import EntityType


def _create(client, **body):
    body.setdefault("content", "# Session 1\nThe party met in a tavern.")
    response = client.post("/api/journals", json=body)
    assert response.status_code == 200, response.text
    return response.json()


class TestJournalCrud:
    def test_create_then_get(self, client, alice):
        created = _create(client, tags=["session"])

        fetched = client.get(f"/api/journals/{created['id']}")

        assert fetched.status_code == 200
        assert fetched.json() == created
        assert created["title"] == "Session 1"
        assert created["tags"] == ["session"]
        assert created["created"]

    def test_owner_is_forced_to_caller(self, client, alice):
        created = _create(client, user_id=999, id=555)

        assert created["user_id"] == alice["id"]
        assert created["id"] != 555

    def test_list_only_own(self, client, other_client, alice, bob):
        mine = _create(client)
        _create(other_client)

        listed = client.get("/api/journals").json()

        assert [j["id"] for j in listed] == [mine["id"]]

    def test_patch_merges(self, client, alice):
        created = _create(client, title="Custom", tags=["a"])

        response = client.patch(f"/api/journals/{created['id']}", json={"tags": ["a", "b"]})

        assert response.status_code == 200
        assert response.json() == {**created, "tags": ["a", "b"]}

    def test_empty_patch_is_noop(self, client, alice):
        created = _create(client)

        response = client.patch(f"/api/journals/{created['id']}", json={})

        assert response.json() == created
        assert client.get(f"/api/journals/{created['id']}").json() == created

    def test_delete(self, client, alice):
        created = _create(client)

        response = client.delete(f"/api/journals/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/journals/{created['id']}").status_code == 404

    def test_missing_ids(self, client, alice):
        assert client.get("/api/journals/999").status_code == 404
        assert client.patch("/api/journals/999", json={"title": "x", "content": "y"}).status_code == 404
        assert client.delete("/api/journals/999").status_code == 404
        assert client.get("/api/journals").json() == []


class TestTitles:
    def test_no_heading_uses_placeholder(self, client, alice):
        assert _create(client, content="just some notes")["title"] == "Untitled Entry"

    def test_explicit_title_kept(self, client, alice):
        assert _create(client, title="Mine", content="# Heading")["title"] == "Mine"

    def test_blank_title_is_derived(self, client, alice):
        assert _create(client, title="  ", content="## From Content")["title"] == "From Content"

    def test_new_content_retitles(self, client, alice):
        created = _create(client)

        updated = client.patch(
            f"/api/journals/{created['id']}", json={"content": "# Session 2\nDragons."}
        ).json()

        assert updated["title"] == "Session 2"

    def test_content_with_explicit_title(self, client, alice):
        created = _create(client)

        updated = client.patch(
            f"/api/journals/{created['id']}", json={"title": "Kept", "content": "# Ignored"}
        ).json()

        assert updated["title"] == "Kept"
        assert updated["content"] == "# Ignored"


class TestOwnership:
    def test_other_user_is_forbidden(self, client, other_client, alice, bob):
        created = _create(client)
        path = f"/api/journals/{created['id']}"

        assert other_client.get(path).status_code == 403
        assert other_client.patch(path, json={"title": "hijacked"}).status_code == 403
        assert other_client.delete(path).status_code == 403
        assert other_client.get(f"{path}/mentions").status_code == 403
        assert client.get(path).json() == created


class TestValidation:
    def test_missing_content(self, client, alice):
        response = client.post("/api/journals", json={"title": "No body"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "content"

    def test_wrong_tag_shape(self, client, alice):
        response = client.post("/api/journals", json={"content": "x", "tags": "one,two"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "tags"

    def test_patch_rejects_bad_types(self, client, alice):
        created = _create(client)

        response = client.patch(f"/api/journals/{created['id']}", json={"title": 42})

        assert response.status_code == 400
        assert client.get(f"/api/journals/{created['id']}").json() == created

    def test_non_numeric_id(self, client, alice):
        assert client.get("/api/journals/abc").status_code == 400

    def test_malformed_json(self, client, alice):
        response = client.post(
            "/api/journals",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestMentions:
    def test_resolves_own_entities(self, client, other_client, alice, bob):
        mira = client.post(
            "/api/entities", json={"name": "Mira", "type": "npc", "properties": {}}
        ).json()
        foreign = other_client.post(
            "/api/entities", json={"name": "Spy", "type": "npc", "properties": {}}
        ).json()
        content = " ".join([
            "Met", mention_markup("Mira", EntityType.NPC, mira["id"]),
            "saw", mention_markup("Spy", EntityType.NPC, foreign["id"]),
            "and", mention_markup("Wrong", EntityType.LOCATION, mira["id"]),
        ])
        journal = _create(client, content=content)

        mentions = client.get(f"/api/journals/{journal['id']}/mentions").json()

        assert [m["name"] for m in mentions] == ["Mira", "Spy", "Wrong"]
        assert mentions[0]["entity"]["id"] == mira["id"]
        assert mentions[1]["entity"] is None
        assert mentions[2]["entity"] is None
