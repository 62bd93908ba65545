"""
Tests for the generic JSON collection against a temporary directory.
"""
from __future__ import annotations

import json
import sys
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Garante que o pacote ummah seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ummah.db.models import Post, User  # noqa: E402
from ummah.repositories import json_storage  # noqa: E402
from ummah.repositories.json_storage import (  # noqa: E402
    CollectionUnavailableError,
    DuplicateEntityError,
    JsonCollection,
)


@pytest.fixture()
def users(tmp_path):
    return JsonCollection(tmp_path / "data", "users", "users.json", User)


@pytest.fixture()
def posts(tmp_path):
    return JsonCollection(tmp_path / "data", "posts", "posts.json", Post)


@pytest.fixture()
def clock(monkeypatch):
    """Relógio controlado: cada chamada avança um minuto."""
    state = {"now": datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)}

    def tick():
        state["now"] += timedelta(minutes=1)
        return state["now"]

    monkeypatch.setattr(json_storage, "utcnow", tick)
    return state


def test_missing_file_reads_as_empty_and_creates_directory(users, tmp_path):
    assert users.all() == []
    assert (tmp_path / "data").is_dir()
    assert not users.path.exists()


def test_create_then_get_returns_same_fields(users):
    created = users.create({"email": "a@example.com", "username": "a", "bio": "hi", "favourite": "dates"})

    assert created.id
    assert created.created_at is not None
    assert created.created_at == created.updated_at

    loaded = users.get(created.id)
    assert loaded is not None
    assert loaded.model_dump() == created.model_dump()
    assert loaded.favourite == "dates"


def test_file_holds_json_array_with_iso_timestamps(users):
    created = users.create({"email": "a@example.com", "username": "a"})
    raw = json.loads(users.path.read_text(encoding="utf-8"))

    assert isinstance(raw, list)
    assert raw[0]["id"] == created.id
    assert datetime.fromisoformat(raw[0]["created_at"].replace("Z", "+00:00")) == created.created_at


def test_generated_ids_are_unique_and_stable(users):
    ids = [users.create({"email": f"u{i}@example.com", "username": f"u{i}"}).id for i in range(25)]

    assert len(set(ids)) == len(ids)
    assert [user.id for user in users.all()] == ids


def test_explicit_id_is_kept_and_duplicates_rejected(users):
    users.create({"id": "fixed", "email": "a@example.com", "username": "a"})
    assert users.get("fixed") is not None

    with pytest.raises(DuplicateEntityError):
        users.create({"id": "fixed", "email": "b@example.com", "username": "b"})
    assert len(users.all()) == 1


def test_update_merges_fields_and_keeps_identity(users, clock):
    created = users.create({"email": "a@example.com", "username": "a", "name": "Old"})

    updated = users.update(created.id, {"name": "New", "id": "hijack", "created_at": "2000-01-01T00:00:00Z"})

    assert updated is not None
    assert updated.id == created.id
    assert updated.name == "New"
    assert updated.email == "a@example.com"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert users.get(created.id).name == "New"


def test_update_and_delete_report_missing_ids(users):
    assert users.update("nope", {"name": "x"}) is None
    assert users.delete("nope") is False


def test_delete_removes_only_target(users):
    first = users.create({"email": "a@example.com", "username": "a"})
    second = users.create({"email": "b@example.com", "username": "b"})

    assert users.delete(first.id) is True
    assert users.get(first.id) is None
    assert [user.id for user in users.all()] == [second.id]


def test_find_and_find_one_filter_with_predicate(users):
    users.create({"email": "a@example.com", "username": "a", "role": "admin"})
    users.create({"email": "b@example.com", "username": "b"})
    users.create({"email": "c@example.com", "username": "c"})

    assert [user.username for user in users.find(lambda user: user.role == "user")] == ["b", "c"]
    assert users.find_one(lambda user: user.username == "c").email == "c@example.com"
    assert users.find_one(lambda user: user.username == "zzz") is None


def test_increment_is_floored(posts):
    post = posts.create({"user_id": "u1", "content": "hello"})

    assert posts.increment(post.id, "likes_count").likes_count == 1
    assert posts.increment(post.id, "likes_count", -5).likes_count == 0
    assert posts.increment("missing", "likes_count") is None


def test_corrupt_file_is_not_mistaken_for_empty(users):
    users.path.parent.mkdir(parents=True, exist_ok=True)
    users.path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CollectionUnavailableError) as excinfo:
        users.all()
    assert excinfo.value.collection == "users"


def test_non_array_file_is_unavailable(users):
    users.path.parent.mkdir(parents=True, exist_ok=True)
    users.path.write_text(json.dumps({"users": []}), encoding="utf-8")

    with pytest.raises(CollectionUnavailableError):
        users.all()


def test_unusable_directory_is_reported_as_unavailable(tmp_path):
    blocker = tmp_path / "data"
    blocker.write_text("not a directory", encoding="utf-8")
    users = JsonCollection(blocker, "users", "users.json", User)

    with pytest.raises(CollectionUnavailableError) as excinfo:
        users.all()
    assert isinstance(excinfo.value.reason, OSError)


def test_concurrent_creates_keep_every_record(users):
    def worker(n):
        users.create({"email": f"t{n}@example.com", "username": f"t{n}"})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = users.all()
    assert len(stored) == 20
    assert len({user.id for user in stored}) == 20
    assert {user.username for user in stored} == {f"t{n}" for n in range(20)}
