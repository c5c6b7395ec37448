import json
import logging

from src.tasks_api.generate_openapi import build_schema, generate_openapi
from src.tasks_api.settings import get_settings
from src.tasks_client.settings import get_client_settings


def test_server_defaults(monkeypatch):
    for name in ["HOST", "PORT", "CORS_ALLOW_ORIGINS", "SEED_SAMPLE_TASKS", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.host == "0.0.0.0"
    assert s.port == 5001
    assert s.cors_allow_origins == ["*"]
    assert s.seed_sample_tasks is True
    assert s.log_level == logging.INFO


def test_server_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:5173, http://example.com")
    monkeypatch.setenv("SEED_SAMPLE_TASKS", "off")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = get_settings()
    assert s.port == 8080
    assert s.cors_allow_origins == ["http://localhost:5173", "http://example.com"]
    assert s.seed_sample_tasks is False
    assert s.log_level == logging.DEBUG


def test_server_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    s = get_settings()
    assert s.port == 5001
    assert s.log_level == logging.INFO


def test_client_settings(monkeypatch):
    monkeypatch.setenv("TASKS_API_URL", "http://tasks.local:9000/api/")
    monkeypatch.setenv("TASKS_CACHE_PATH", "/tmp/cache.json")
    monkeypatch.setenv("TASKS_API_TIMEOUT", "-3")
    s = get_client_settings()
    assert s.api_url == "http://tasks.local:9000/api"
    assert s.cache_path == "/tmp/cache.json"
    assert s.timeout == 10.0


def test_openapi_schema(tmp_path):
    schema = build_schema()
    assert "/api/tasks" in schema["paths"]
    assert "/api/tasks/{task_id}" in schema["paths"]
    assert {"health", "tasks"} <= {t["name"] for t in schema["tags"]}

    path = generate_openapi(str(tmp_path / "interfaces" / "openapi.json"))
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["info"]["title"] == "Task Tracker"
