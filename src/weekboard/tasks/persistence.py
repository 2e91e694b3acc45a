# src/weekboard/tasks/persistence.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..core.ports import KeyValueStore
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_KEY = "tasks"


class InMemoryKeyValueStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileKeyValueStore:
    """
    Local-storage style string store backed by one JSON object file.

    - missing file -> empty store
    - unreadable / non-object file -> logged, treated as empty
    - writes go to a temp file and are swapped in with os.replace
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Storage file %s is unreadable; treating as empty", self._path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s is not a JSON object; treating as empty", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)


def serialize(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


def deserialize(raw: str) -> list[Task]:
    """
    Decode a stored collection, failing soft.

    Malformed JSON or a non-list payload yields []; bad records are skipped;
    duplicate ids keep the first occurrence.
    """
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Stored tasks are not valid JSON; starting with an empty list")
        return []

    if not isinstance(data, list):
        logger.warning("Stored tasks are not a list (%s); starting with an empty list", type(data).__name__)
        return []

    out: list[Task] = []
    seen: set[int] = set()
    for i, rec in enumerate(data):
        try:
            task = Task.from_record(rec)
        except ValueError as e:
            logger.warning("Skipping stored task #%d: %s", i, e)
            continue
        if task.id in seen:
            logger.warning("Skipping stored task #%d: duplicate id=%s", i, task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out


class TaskPersistence:
    """Mirror of the task collection in a KeyValueStore under a single key."""

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_KEY) -> None:
        self._kv = kv
        self._key = key

    def load(self) -> list[Task]:
        try:
            raw = self._kv.get(self._key)
        except Exception:
            logger.exception("Failed to read key=%s from storage", self._key)
            return []
        if raw is None:
            return []
        tasks = deserialize(raw)
        logger.info("Loaded %d tasks from storage key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        snapshot = list(tasks)
        try:
            self._kv.set(self._key, serialize(snapshot))
        except Exception:
            logger.exception("Failed to write %d tasks to storage key=%s", len(snapshot), self._key)
            return
        logger.debug("Saved %d tasks to storage key=%s", len(snapshot), self._key)
