# src/weekboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires storage, task store, persistence observer and celebration into AppState.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import get_settings
from ..connectors.console_celebration import ConsoleConfetti
from ..core.ports import Clock, KeyValueStore
from ..core.state import AppState
from ..tasks.completion import CelebrationConfig, CelebrationNotifier
from ..tasks.persistence import JsonFileKeyValueStore, TaskPersistence
from ..tasks.reset_scheduler import apply_catch_up_reset
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _no_celebration(config: CelebrationConfig) -> None:
    return None


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueStore | None = None,
    celebration=None,
    clock: Clock | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    `kv`, `celebration` and `clock` are injectable for tests; by default the JSON
    file store, the terminal confetti and datetime.now are used.
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        kv = JsonFileKeyValueStore(settings.storage_path)

    if celebration is None:
        celebration = ConsoleConfetti() if getattr(settings, "celebrate", True) else _no_celebration

    persistence = TaskPersistence(kv, key=getattr(settings, "storage_key", "tasks"))
    now_fn = clock or datetime.now
    store = TaskStore(persistence.load(), clock=now_fn)

    # Persist after every committed mutation.
    store.subscribe(persistence.save)

    state = AppState(
        settings=settings,
        store=store,
        persistence=persistence,
        notifier=CelebrationNotifier(celebration),
        clock=now_fn,
    )

    if getattr(settings, "catch_up_reset", False):
        apply_catch_up_reset(state, state.clock())

    logger.info("State ready: %d tasks loaded", len(store))
    return state
