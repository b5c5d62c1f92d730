"""Folder registry and catalog store repositories."""

import pytest

from mediacat.exceptions import FolderNotFoundError, MediaFileNotFoundError
from mediacat.models import FolderType, MediaFile, MusicFolder, MusicFolderUser
from mediacat.repositories import MediaFileRepository, MusicFolderRepository, UserRepository
from tests.conftest import make_entry, make_folder, make_user


class TestMusicFolderRepository:

    def test_create_fans_out_grants_and_is_idempotent(self, db):
        make_user(db, "alice")
        make_user(db, "bob")
        repo = MusicFolderRepository(db)

        folder, created = repo.create(MusicFolder(path="/music", name="Music", type=FolderType.MEDIA, enabled=True))
        again, created_again = repo.create(MusicFolder(path="/music", name="Dup", type=FolderType.MEDIA, enabled=True))
        db.commit()

        assert created is True
        assert created_again is False
        assert again.id == folder.id
        assert db.query(MusicFolder).count() == 1
        assert db.query(MusicFolderUser).count() == 2

    def test_delete_returns_row_count(self, db):
        folder = make_folder(db, "/music")
        repo = MusicFolderRepository(db)

        assert repo.delete(folder.id) == 1
        assert repo.delete(folder.id) == 0

    def test_update_writes_full_row(self, db):
        folder = make_folder(db, "/music")
        repo = MusicFolderRepository(db)
        folder.name = "Podcasts"
        folder.path = "/podcasts"
        folder.type = FolderType.PODCAST
        repo.update(folder)
        db.commit()
        db.expire_all()

        stored = repo.get_by_id(folder.id)
        assert (stored.path, stored.name, stored.type) == ("/podcasts", "Podcasts", FolderType.PODCAST)
        assert repo.get_by_path("/music") is None

    def test_get_by_id_raises_for_missing(self, db):
        with pytest.raises(FolderNotFoundError):
            MusicFolderRepository(db).get_by_id(7)

    def test_find_enclosing_picks_deepest_ancestor(self, db):
        make_folder(db, "/music")
        jazz = make_folder(db, "/music/jazz")
        make_folder(db, "/musical")
        repo = MusicFolderRepository(db)

        assert repo.find_enclosing("/music/jazz/live").id == jazz.id
        assert repo.find_enclosing("/music") is None
        assert repo.find_enclosing("/musical/x").path == "/musical"

    def test_list_all_filters_disabled(self, db):
        make_folder(db, "/a")
        make_folder(db, "/b", enabled=False)
        repo = MusicFolderRepository(db)

        assert [f.path for f in repo.list_all()] == ["/a", "/b"]
        assert [f.path for f in repo.list_all(include_disabled=False)] == ["/a"]


class TestMediaFileRepository:

    def test_list_under_matches_whole_segments(self, db):
        folder = make_folder(db, "/music")
        make_entry(db, folder, "jazz", parent_path="")
        under = make_entry(db, folder, "jazz/a.mp3", parent_path="jazz")
        make_entry(db, folder, "jazzfunk/b.mp3", parent_path="jazzfunk")

        assert [m.id for m in MediaFileRepository(db).list_under(folder.id, "jazz")] == [under.id]

    def test_list_under_escapes_like_wildcards(self, db):
        folder = make_folder(db, "/music")
        make_entry(db, folder, "100%_live/x.mp3", parent_path="100%_live")
        make_entry(db, folder, "100ab_live/y.mp3", parent_path="100ab_live")

        found = MediaFileRepository(db).list_under(folder.id, "100%_live")
        assert [m.path for m in found] == ["100%_live/x.mp3"]

    def test_get_root(self, db):
        folder = make_folder(db, "/music")
        root = make_entry(db, folder, "", parent_path=None)
        make_entry(db, folder, "a.mp3")

        assert MediaFileRepository(db).get_root(folder.id).id == root.id

    def test_bulk_update_by_id(self, db):
        folder = make_folder(db, "/music")
        a = make_entry(db, folder, "a.mp3")
        b = make_entry(db, folder, "b.mp3")
        repo = MediaFileRepository(db)

        count = repo.bulk_update([
            {"id": a.id, "path": "x/a.mp3", "parent_path": "x"},
            {"id": b.id, "path": "x/b.mp3", "parent_path": "x"},
        ])
        db.commit()

        assert count == 2
        assert sorted(m.path for m in repo.list_by_folder(folder.id)) == ["x/a.mp3", "x/b.mp3"]
        assert repo.bulk_update([]) == 0

    def test_get_by_id_raises_for_missing(self, db):
        with pytest.raises(MediaFileNotFoundError):
            MediaFileRepository(db).get_by_id(1)


class TestUserRepository:

    def test_create_is_idempotent(self, db):
        repo = UserRepository(db)
        repo.create("alice", email="alice@example.com")
        repo.create("alice")
        db.commit()

        assert repo.list_usernames() == ["alice"]
        assert repo.get("alice").email == "alice@example.com"

    def test_delete(self, db):
        repo = UserRepository(db)
        repo.create("alice")
        assert repo.delete("alice") is True
        assert repo.delete("alice") is False
