"""Tests for the per-table operations classes."""

import sqlite3

import pytest

from mygram.exceptions import DatabaseError, ResourceNotFound


@pytest.fixture
def alice(core):
    return core.user.create("alice", "alice@example.com", "hash-a")


@pytest.fixture
def bob(core):
    return core.user.create("bob", "bob@example.com", "hash-b")


# ============================================================================
# Shared behavior
# ============================================================================


class TestResourceOperations:
    """Behavior every table shares, exercised through photos."""

    def test_create_sets_timestamps(self, core, alice):
        photo_id = core.photo.create(title="t", url="http://x/1.jpg", user_id=alice)
        row = core.photo.get_by_id(photo_id)

        assert row["created_at"] == row["updated_at"]
        assert row["created_at"].endswith("Z")
        assert row["deleted_at"] is None

    def test_get_by_id_missing_raises(self, core):
        with pytest.raises(ResourceNotFound) as exc_info:
            core.photo.get_by_id(999)
        assert exc_info.value.message == "Photo Not Found"

    def test_find_missing_returns_none(self, core):
        assert core.photo.find(999) is None

    def test_owner_of(self, core, alice):
        photo_id = core.photo.create(title="t", url="http://x/1.jpg", user_id=alice)
        assert core.photo.owner_of(photo_id) == alice
        assert core.photo.owner_of(999) is None

    def test_owner_of_wraps_storage_errors(self, core, test_db):
        test_db.close()
        with pytest.raises(DatabaseError):
            core.photo.owner_of(1)

    def test_update_only_touches_editable_columns(self, core, alice, bob):
        photo_id = core.photo.create(title="t", url="http://x/1.jpg", user_id=alice)

        core.photo.update(photo_id, {"title": "new", "user_id": bob, "caption": None})

        row = core.photo.get_by_id(photo_id)
        assert row["title"] == "new"
        assert row["user_id"] == alice
        assert row["caption"] == ""

    def test_update_with_nothing_to_change_is_noop(self, core, alice):
        photo_id = core.photo.create(title="t", url="http://x/1.jpg", user_id=alice)
        before = core.photo.get_by_id(photo_id)["updated_at"]

        core.photo.update(photo_id, {})

        assert core.photo.get_by_id(photo_id)["updated_at"] == before

    def test_soft_delete_hides_row(self, core, test_db, alice):
        photo_id = core.photo.create(title="t", url="http://x/1.jpg", user_id=alice)
        core.photo.delete(photo_id)

        assert core.photo.find(photo_id) is None
        assert core.photo.owner_of(photo_id) is None
        raw = test_db.execute("SELECT deleted_at FROM photos WHERE id = ?", (photo_id,)).fetchone()
        assert raw["deleted_at"] is not None


# ============================================================================
# Users
# ============================================================================


class TestUserOperations:

    def test_user_owns_itself(self, core, alice):
        assert core.user.owner_of(alice) == alice

    def test_duplicate_username_violates_constraint(self, core, alice):
        with pytest.raises(sqlite3.IntegrityError):
            core.user.create("alice", "other@example.com", "hash")

    def test_is_taken(self, core, alice):
        assert core.user.is_taken(username="alice") is True
        assert core.user.is_taken(email="alice@example.com") is True
        assert core.user.is_taken(username="alice", exclude_id=alice) is False
        assert core.user.is_taken(username="carol") is False
        assert core.user.is_taken() is False

    def test_delete_clears_password_hash(self, core, test_db, alice):
        core.user.delete(alice)

        raw = test_db.execute("SELECT password_hash FROM users WHERE id = ?", (alice,)).fetchone()
        assert raw["password_hash"] == ""
        assert core.user.get_by_email("alice@example.com") is None

    def test_list_all_skips_deleted(self, core, alice, bob):
        core.user.delete(alice)
        assert [row["username"] for row in core.user.list_all()] == ["bob"]

    def test_update_ignores_password_hash(self, core, test_db, alice):
        core.user.update(alice, {"password_hash": "x", "age": 20})
        row = core.user.get_by_id(alice)
        assert row["password_hash"] == "hash-a"
        assert row["age"] == 20


# ============================================================================
# Listing with related rows
# ============================================================================


class TestListByUser:

    def test_photos_include_owner(self, core, alice, bob):
        core.photo.create(title="a", url="http://x/a.jpg", user_id=alice)
        core.photo.create(title="b", url="http://x/b.jpg", user_id=bob)

        [row] = core.photo.list_by_user(alice)

        assert row["title"] == "a"
        assert row["user_username"] == "alice"
        assert row["user_email"] == "alice@example.com"

    def test_comments_include_author_and_photo(self, core, alice, bob):
        photo_id = core.photo.create(title="b", url="http://x/b.jpg", user_id=bob)
        core.comment.create(message="nice", photo_id=photo_id, user_id=alice)

        [row] = core.comment.list_by_user(alice)

        assert row["message"] == "nice"
        assert row["user_username"] == "alice"
        assert row["photo_title"] == "b"
        assert row["photo_user_id"] == bob

    def test_social_media_skips_deleted(self, core, alice):
        keep = core.social_media.create(name="ig", url="http://ig/a", user_id=alice)
        gone = core.social_media.create(name="x", url="http://x/a", user_id=alice)
        core.social_media.delete(gone)

        assert [row["id"] for row in core.social_media.list_by_user(alice)] == [keep]

    def test_comment_requires_existing_photo(self, core, alice):
        with pytest.raises(sqlite3.IntegrityError):
            core.comment.create(message="hi", photo_id=999, user_id=alice)
