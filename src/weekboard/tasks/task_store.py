# src/weekboard/tasks/task_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator
from dataclasses import replace
from datetime import datetime

from ..core.ports import Clock, TaskObserver
from .task_models import EditSession, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory ordered task collection.

    This is the only mutation surface for tasks:
    - add / toggle / edit / delete / clear_all
    - begin_edit / save_edit / cancel_edit for the single edit session

    Rejected operations (blank text, unknown id) are silent no-ops.
    Observers are notified with a snapshot after every committed mutation,
    which is how persistence is attached (see cli/bootstrap.py).
    """

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        *,
        clock: Clock = datetime.now,
    ) -> None:
        self._tasks: list[Task] = []
        self._clock = clock
        self._last_id = 0
        self._observers: list[TaskObserver] = []
        self._edit: EditSession | None = None

        seen: set[int] = set()
        for task in tasks or ():
            if task.id in seen:
                logger.warning("Duplicate task id=%s dropped on load", task.id)
                continue
            seen.add(task.id)
            self._tasks.append(replace(task))
            self._last_id = max(self._last_id, task.id)

    # ---- observers ----

    def subscribe(self, observer: TaskObserver) -> None:
        self._observers.append(observer)

    def _commit(self, action: str) -> None:
        snapshot = self.tasks()
        logger.debug("TaskStore %s committed total=%s", action, len(snapshot))
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Task observer failed after %s", action)

    # ---- id management ----

    def _allocate_id(self) -> int:
        # Millisecond clock value, bumped when it would collide with the last id.
        nid = int(time.time() * 1000)
        if nid <= self._last_id:
            nid = self._last_id + 1
        self._last_id = nid
        return nid

    # ---- queries ----

    def tasks(self) -> list[Task]:
        return [replace(t) for t in self._tasks]

    def get(self, task_id: int) -> Task | None:
        found = self._find(task_id)
        return replace(found) if found is not None else None

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks())

    # ---- mutations ----

    def add(self, text: str) -> Task | None:
        clean = (text or "").strip()
        if not clean:
            logger.debug("add rejected: blank text")
            return None

        task = Task(
            id=self._allocate_id(),
            text=clean,
            completed=False,
            created_at=self._clock(),
        )
        self._tasks.append(task)
        self._commit("add")
        return replace(task)

    def toggle(self, task_id: int) -> bool:
        task = self._find(task_id)
        if task is None:
            logger.debug("toggle ignored: unknown id=%s", task_id)
            return False
        task.completed = not task.completed
        self._commit("toggle")
        return True

    def delete(self, task_id: int) -> bool:
        task = self._find(task_id)
        if task is None:
            logger.debug("delete ignored: unknown id=%s", task_id)
            return False
        self._tasks.remove(task)
        if self._edit is not None and self._edit.task_id == task_id:
            self._edit = None
        self._commit("delete")
        return True

    def edit(self, task_id: int, new_text: str) -> bool:
        clean = (new_text or "").strip()
        if not clean:
            logger.debug("edit rejected: blank text id=%s", task_id)
            return False
        task = self._find(task_id)
        if task is None:
            logger.debug("edit ignored: unknown id=%s", task_id)
            return False
        task.text = clean
        self._commit("edit")
        return True

    def clear_all(self) -> None:
        self._tasks.clear()
        self._edit = None
        self._commit("clear_all")

    # ---- edit session ----

    @property
    def edit_session(self) -> EditSession | None:
        return self._edit

    def begin_edit(self, task_id: int) -> EditSession | None:
        task = self._find(task_id)
        if task is None:
            logger.debug("begin_edit ignored: unknown id=%s", task_id)
            return None
        self._edit = EditSession(task_id=task.id, draft=task.text)
        return self._edit

    def update_draft(self, draft: str) -> None:
        if self._edit is None:
            return
        self._edit = replace(self._edit, draft=draft)

    def save_edit(self, draft: str | None = None) -> bool:
        """
        Commit the open edit session.

        A blank draft leaves the session open and the task untouched.
        """
        if self._edit is None:
            return False
        if draft is not None:
            self.update_draft(draft)
        session = self._edit
        if not session.draft.strip():
            logger.debug("save_edit rejected: blank draft id=%s", session.task_id)
            return False
        self._edit = None
        return self.edit(session.task_id, session.draft)

    def cancel_edit(self) -> None:
        self._edit = None
