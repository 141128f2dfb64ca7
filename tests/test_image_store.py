"""Tests for owner-scoped persistence."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import exc as sa_exc

from photovault.errors import NotFound, StoreError, StoreTimeout

ALICE = "alice@example.com"
BOB = "bob@example.com"


def test_round_trip_keeps_bytes(store):
    payload = bytes(range(256)) * 4
    stored = store.add_image(ALICE, "a.jpg", payload)

    fetched = store.get_image(stored.id, ALICE)
    assert fetched.id == stored.id
    assert fetched.name == "a.jpg"
    assert fetched.data == payload


def test_list_images_newest_first(store):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    first = store.add_image(ALICE, "t1.jpg", b"1", uploaded_at=base)
    third = store.add_image(ALICE, "t3.jpg", b"3", uploaded_at=base + timedelta(hours=2))
    second = store.add_image(ALICE, "t2.jpg", b"2", uploaded_at=base + timedelta(hours=1))

    ids = [r.id for r in store.list_images(ALICE)]
    assert ids == [third.id, second.id, first.id]


def test_list_images_ties_broken_by_id(store):
    when = datetime(2026, 1, 1, tzinfo=timezone.utc)
    a = store.add_image(ALICE, "a.jpg", b"a", uploaded_at=when)
    b = store.add_image(ALICE, "b.jpg", b"b", uploaded_at=when)

    assert [r.id for r in store.list_images(ALICE)] == [b.id, a.id]


def test_list_images_only_returns_own(store):
    store.add_image(ALICE, "mine.jpg", b"a")
    store.add_image(BOB, "theirs.jpg", b"b")

    assert [r.name for r in store.list_images(ALICE)] == ["mine.jpg"]
    assert store.list_images("nobody@example.com") == []


def test_get_image_of_other_owner_is_not_found(store):
    stored = store.add_image(ALICE, "a.jpg", b"secret")

    with pytest.raises(NotFound):
        store.get_image(stored.id, BOB)
    assert store.find_image(stored.id, BOB) is None


def test_get_missing_image_is_not_found(store):
    with pytest.raises(NotFound) as excinfo:
        store.get_image(999, ALICE)
    assert excinfo.value.status_code == 404


def test_remove_image_is_owner_scoped(store):
    stored = store.add_image(ALICE, "a.jpg", b"a")

    assert store.remove_image(stored.id, BOB) == 0
    assert store.find_image(stored.id, ALICE) is not None
    assert store.remove_image(stored.id, ALICE) == 1
    assert store.find_image(stored.id, ALICE) is None


def test_archive_and_restore_keep_identity(store):
    stored = store.add_image(ALICE, "a.jpg", b"payload")

    archived = store.archive_image(stored)
    assert archived.id == stored.id
    assert archived.deleted_at is not None
    assert store.get_archived_image(stored.id, ALICE).data == b"payload"
    with pytest.raises(NotFound):
        store.get_archived_image(stored.id, BOB)

    store.remove_image(stored.id, ALICE)
    restored = store.restore_image(archived)
    assert restored.id == stored.id
    assert restored.uploaded_at == archived.uploaded_at


def test_find_duplicates_and_counts(store):
    a = store.add_image(ALICE, "a.jpg", b"a")
    store.add_image(BOB, "b.jpg", b"b")
    store.archive_image(a)

    assert store.find_duplicates() == [(a.id, ALICE)]
    assert store.count_images() == (2, 1)
    assert store.count_images(BOB) == (1, 0)


def test_failed_commit_becomes_store_error(store, db, monkeypatch):
    def boom():
        raise sa_exc.IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(db.session, "commit", boom)

    with pytest.raises(StoreError) as excinfo:
        store.add_image(ALICE, "a.jpg", b"a")
    assert not isinstance(excinfo.value, StoreTimeout)
    assert "UNIQUE" not in excinfo.value.message


def test_lock_timeout_becomes_store_timeout(store, db, monkeypatch):
    def locked():
        raise sa_exc.OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db.session, "commit", locked)

    with pytest.raises(StoreTimeout) as excinfo:
        store.add_image(ALICE, "a.jpg", b"a")
    assert excinfo.value.status_code == 504
