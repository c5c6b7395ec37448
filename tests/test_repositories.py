import random
from datetime import datetime, timezone

import pytest

from src.tasks_api.repositories import InMemoryTaskRepository, ListQuery, get_repository, seed_sample_tasks
from src.tasks_api.schemas import TaskCreate, TaskUpdate


def make(repo, title="Task"):
    return repo.create(TaskCreate(title=title))


def test_create_assigns_fresh_id_and_defaults(repo):
    first = make(repo, "one")
    second = make(repo, "two")
    assert first["id"] != second["id"]
    assert int(second["id"]) > int(first["id"])
    assert first["completed"] is False
    assert first["created_at"].tzinfo is not None


def test_ids_unique_when_clock_stands_still(repo, monkeypatch):
    monkeypatch.setattr("src.tasks_api.repositories.time.time", lambda: 1.0)
    repo.add({"id": "1001", "title": "seeded", "completed": False, "created_at": datetime.now(timezone.utc)})
    assert [make(repo)["id"] for _ in range(3)] == ["1000", "1002", "1003"]


def test_add_rejects_duplicate_id(repo):
    seed_sample_tasks(repo)
    with pytest.raises(ValueError):
        repo.add({"id": "1", "title": "again", "completed": False, "created_at": datetime.now(timezone.utc)})


def test_returned_records_are_copies(repo):
    created = make(repo, "original")
    created["title"] = "mutated"
    repo.list()[0]["title"] = "mutated too"
    assert repo.get(created["id"])["title"] == "original"


def test_update_only_touches_supplied_fields(repo):
    created = make(repo, "keep title")
    updated = repo.update(created["id"], TaskUpdate(completed=True))
    assert updated["title"] == "keep title"
    assert updated["completed"] is True
    assert updated["id"] == created["id"]
    assert updated["created_at"] == created["created_at"]


def test_update_type_drops_identity_fields():
    update = TaskUpdate.model_validate({"id": "x", "createdAt": "2000-01-01T00:00:00Z", "title": "t"})
    assert update.model_dump() == {"title": "t", "completed": None}


def test_update_missing_returns_none_and_changes_nothing(repo):
    make(repo)
    before = repo.list()
    assert repo.update("nope", TaskUpdate(title="x")) is None
    assert repo.list() == before


def test_delete_removes_exactly_one(repo):
    a, b, c = make(repo, "a"), make(repo, "b"), make(repo, "c")
    assert repo.delete(b["id"]) is True
    assert [t["id"] for t in repo.list()] == [a["id"], c["id"]]
    assert repo.delete(b["id"]) is False
    assert len(repo) == 2


def test_filter_preserves_order(repo):
    ids = [make(repo, f"t{i}")["id"] for i in range(8)]
    for tid in ids[1::3]:
        repo.update(tid, TaskUpdate(completed=True))
    assert [t["id"] for t in repo.list(ListQuery(completed=True))] == ids[1::3]
    done = {t["id"] for t in repo.list(ListQuery(completed=True))}
    assert [t["id"] for t in repo.list(ListQuery(completed=False))] == [i for i in ids if i not in done]


def test_ids_stay_unique_under_random_operations():
    repo = InMemoryTaskRepository()
    rng = random.Random(7)
    for step in range(300):
        ids = [t["id"] for t in repo.list()]
        op = rng.choice(["create", "create", "update", "delete"])
        if op == "create" or not ids:
            make(repo, f"step {step}")
        elif op == "update":
            repo.update(rng.choice(ids), TaskUpdate(completed=rng.random() < 0.5))
        else:
            repo.delete(rng.choice(ids))
        listed = [t["id"] for t in repo.list()]
        assert len(listed) == len(set(listed))


def test_clear(repo):
    make(repo)
    repo.clear()
    assert repo.list() == []


def test_get_repository_is_a_singleton_and_seeds(monkeypatch):
    monkeypatch.setenv("SEED_SAMPLE_TASKS", "true")
    get_repository.cache_clear()
    try:
        repo = get_repository()
        assert get_repository() is repo
        assert [(t["id"], t["completed"]) for t in repo.list()] == [("1", False), ("2", True)]
    finally:
        get_repository.cache_clear()
