from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import ValidationError

from .errors import ParseFailure
from .models import Task

logger = logging.getLogger(__name__)


class LocalCache:
    """
    Best-effort offline copy of the task mirror, stored as JSON.

    Layout: {"tasks": [<task in wire shape>, ...]}

    The cache is read once at startup and written after every mirror change.
    Nothing read from it is trusted over a successful server fetch.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[List[Task]]:
        """
        Return the cached tasks, or None when there is no usable cache.
        """
        try:
            return self._decode(self._path.read_bytes())
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.error("Error reading task cache %s: %s", self._path, exc)
            return None
        except ParseFailure as exc:
            logger.error("Error parsing task cache %s: %s", self._path, exc)
            return None

    @staticmethod
    def _decode(raw: bytes) -> List[Task]:
        try:
            data = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError too
            raise ParseFailure(f"invalid JSON: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise ParseFailure("expected an object with a 'tasks' array")
        try:
            return [Task.model_validate(item) for item in data["tasks"]]
        except ValidationError as exc:
            raise ParseFailure(str(exc)) from exc

    def save(self, tasks: Iterable[Task]) -> None:
        """Write the tasks; failures are logged and otherwise ignored."""
        payload = {"tasks": [t.to_wire() for t in tasks]}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write task cache %s: %s", self._path, exc)
