# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from weekboard.cli.bootstrap import create_initial_state
from weekboard.core.state import AppState
from weekboard.tasks.persistence import InMemoryKeyValueStore

from .fakes import FakeClock, RecordingCelebration


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="weekboard",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_path=tmp_path / "storage.json",
        storage_key="tasks",
        reset_check_interval_seconds=0.01,
        catch_up_reset=False,
        celebrate=True,
        console_color=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def celebration() -> RecordingCelebration:
    return RecordingCelebration()


@pytest.fixture()
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    kv: InMemoryKeyValueStore,
    celebration: RecordingCelebration,
    clock: FakeClock,
) -> AppState:
    """
    AppState wired with deterministic fakes.

    The real TaskStore / TaskPersistence / CelebrationNotifier are used, since
    their interplay is what we want to test; only storage medium, clock and
    celebration effect are faked.
    """
    return create_initial_state(settings=settings, kv=kv, celebration=celebration, clock=clock)
