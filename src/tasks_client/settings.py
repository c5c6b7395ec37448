from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ClientSettings:
    """
    Task client settings loaded from environment variables.

    Env vars:
    - TASKS_API_URL: base URL of the task API. Default 'http://localhost:5001/api'
    - TASKS_CACHE_PATH: JSON file used as the offline cache. Default '.local/tasks/tasks.json'
    - TASKS_API_TIMEOUT: request timeout in seconds. Default 10
    """

    api_url: str
    cache_path: str
    timeout: float


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _parse_timeout(value: str, default: float = 10.0) -> float:
    try:
        timeout = float(value)
    except ValueError:
        return default
    return timeout if timeout > 0 else default


# PUBLIC_INTERFACE
def get_client_settings() -> ClientSettings:
    """Return client settings loaded from environment variables."""
    return ClientSettings(
        api_url=_get_env("TASKS_API_URL", "http://localhost:5001/api").rstrip("/"),
        cache_path=_get_env("TASKS_CACHE_PATH", ".local/tasks/tasks.json"),
        timeout=_parse_timeout(_get_env("TASKS_API_TIMEOUT", "10")),
    )
