import logging
from datetime import datetime, timezone

from src.tasks_client.cache import LocalCache
from src.tasks_client.models import Task


def test_missing_file_means_no_cache(tmp_path, caplog):
    with caplog.at_level(logging.DEBUG, logger="src.tasks_client.cache"):
        assert LocalCache(tmp_path / "absent.json").load() is None
    assert caplog.text == ""


def test_save_then_load(tmp_path):
    cache = LocalCache(tmp_path / "nested" / "tasks.json")
    task = Task(id="7", title="Call mom", completed=True, created_at=datetime(2025, 5, 1, tzinfo=timezone.utc))
    cache.save([task])
    assert cache.load() == [task]


def test_invalid_json_is_logged_and_ignored(tmp_path, caplog):
    path = tmp_path / "tasks.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.ERROR, logger="src.tasks_client.cache"):
        assert LocalCache(path).load() is None
    assert "Error parsing task cache" in caplog.text


def test_invalid_utf8_is_logged_and_ignored(tmp_path, caplog):
    path = tmp_path / "tasks.json"
    path.write_bytes(b'{"tasks": [\xff\xfe]}')
    with caplog.at_level(logging.ERROR, logger="src.tasks_client.cache"):
        assert LocalCache(path).load() is None
    assert "Error parsing task cache" in caplog.text


def test_unreadable_path_is_logged_and_ignored(tmp_path, caplog):
    # a directory where the file should be
    path = tmp_path / "tasks.json"
    path.mkdir()
    with caplog.at_level(logging.ERROR, logger="src.tasks_client.cache"):
        assert LocalCache(path).load() is None
    assert "Error reading task cache" in caplog.text


def test_wrong_shape_is_ignored(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text('[{"id": "1"}]', encoding="utf-8")
    assert LocalCache(path).load() is None
    path.write_text('{"tasks": [{"id": "1"}]}', encoding="utf-8")
    assert LocalCache(path).load() is None


def test_save_failure_is_not_raised(tmp_path, caplog):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    cache = LocalCache(blocker / "tasks.json")
    with caplog.at_level(logging.WARNING, logger="src.tasks_client.cache"):
        cache.save([])
    assert "Could not write task cache" in caplog.text
