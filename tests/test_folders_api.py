"""Tests for the folder and user admin endpoints."""

from mediacat.models import MediaFile
from tests.conftest import make_folder


class TestFolderRegistry:

    def test_create_and_get_folder(self, client):
        resp = client.post("/api/folders", json={"path": "/music", "name": "Music"})
        assert resp.status_code == 201
        folder_id = resp.json()["id"]

        get_resp = client.get(f"/api/folders/{folder_id}")
        assert get_resp.status_code == 200
        assert get_resp.json()["path"] == "/music"
        assert get_resp.json()["type"] == "MEDIA"

    def test_duplicate_path_returns_existing(self, client):
        first = client.post("/api/folders", json={"path": "/music"})
        second = client.post("/api/folders", json={"path": "/music"})
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert len(client.get("/api/folders").json()) == 1

    def test_relative_path_rejected(self, client):
        resp = client.post("/api/folders", json={"path": "music"})
        assert resp.status_code == 422

    def test_parent_segment_rejected(self, client):
        resp = client.post("/api/folders", json={"path": "/music/../rock"})
        assert resp.status_code == 422
        assert client.get("/api/folders").json() == []

    def test_missing_folder_returns_structured_404(self, client):
        resp = client.get("/api/folders/999")
        assert resp.status_code == 404
        assert resp.json()["error"] == "FOLDER_NOT_FOUND"

    def test_update_and_delete(self, client):
        folder_id = client.post("/api/folders", json={"path": "/music"}).json()["id"]

        resp = client.put(f"/api/folders/{folder_id}", json={"enabled": False})
        assert resp.status_code == 200
        assert resp.json()["enabled"] is False
        assert client.get("/api/folders", params={"include_disabled": False}).json() == []

        assert client.delete(f"/api/folders/{folder_id}").status_code == 204
        assert client.get(f"/api/folders/{folder_id}").status_code == 404


class TestReassignEndpoint:

    def test_promote_via_api(self, client, db, music_library):
        music, jazz, e = music_library["music"], music_library["jazz"], music_library["entries"]

        resp = client.post("/api/folders/reassign", json={"from_id": music.id, "to_id": jazz.id})

        assert resp.status_code == 200
        body = resp.json()
        assert body["direction"] == "PROMOTE"
        assert body["relative_path"] == "jazz"
        assert body["affected"] == 4
        db.expire_all()
        assert db.get(MediaFile, e["miles"].id).path == "miles.mp3"

    def test_unrelated_folders_return_400(self, client, db):
        music = make_folder(db, "/music")
        other = make_folder(db, "/srv/podcasts")

        resp = client.post("/api/folders/reassign", json={"from_id": music.id, "to_id": other.id})

        assert resp.status_code == 400
        assert resp.json()["error"] == "UNRELATED_FOLDERS"


class TestUserFolders:

    def test_replace_all_via_api(self, client):
        client.post("/api/users", json={"username": "alice"})
        a = client.post("/api/folders", json={"path": "/a"}).json()["id"]
        b = client.post("/api/folders", json={"path": "/b"}).json()["id"]
        c = client.post("/api/folders", json={"path": "/c"}).json()["id"]

        client.put("/api/users/alice/folders", json={"folder_ids": [a, b]})
        resp = client.put("/api/users/alice/folders", json={"folder_ids": [c]})

        assert resp.status_code == 200
        assert [f["id"] for f in resp.json()] == [c]
        assert [f["id"] for f in client.get("/api/users/alice/folders").json()] == [c]

    def test_new_folder_visible_to_existing_user(self, client):
        client.post("/api/users", json={"username": "bob"})
        folder_id = client.post("/api/folders", json={"path": "/music"}).json()["id"]

        assert [f["id"] for f in client.get("/api/users/bob/folders").json()] == [folder_id]

    def test_unknown_user_rejected(self, client):
        folder_id = client.post("/api/folders", json={"path": "/music"}).json()["id"]
        resp = client.put("/api/users/ghost/folders", json={"folder_ids": [folder_id]})
        assert resp.status_code == 404
        assert resp.json()["error"] == "USER_NOT_FOUND"

    def test_list_and_delete_users(self, client):
        client.post("/api/users", json={"username": "alice"})
        assert client.get("/api/users").json() == ["alice"]
        assert client.delete("/api/users/alice").status_code == 204
        missing = client.delete("/api/users/alice")
        assert missing.status_code == 404
        assert missing.json()["error"] == "USER_NOT_FOUND"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert "X-Request-ID" in resp.headers
