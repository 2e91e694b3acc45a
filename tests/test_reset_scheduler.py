# tests/test_reset_scheduler.py

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timedelta

import pytest

from weekboard.cli.bootstrap import create_initial_state
from weekboard.tasks.persistence import InMemoryKeyValueStore, TaskPersistence
from weekboard.tasks.reset_scheduler import (
    apply_catch_up_reset,
    apply_weekly_reset,
    run_reset_scheduler,
    start_reset_in_background,
)
from weekboard.tasks.task_models import Task

from .fakes import MONDAY, SUNDAY_RESET, FakeClock


def _seed(state, *texts: str) -> None:
    for text in texts:
        state.store.add(text)


def test_apply_weekly_reset_clears_and_persists(state, kv) -> None:
    _seed(state, "a", "b")

    assert apply_weekly_reset(state, SUNDAY_RESET) is True

    assert len(state.store) == 0
    assert kv.get("tasks") == "[]"


def test_apply_weekly_reset_outside_window_keeps_tasks(state, kv) -> None:
    _seed(state, "a")
    stored = kv.get("tasks")

    assert apply_weekly_reset(state, SUNDAY_RESET + timedelta(minutes=1)) is False

    assert len(state.store) == 1
    assert kv.get("tasks") == stored


@pytest.mark.asyncio
async def test_scheduler_checks_immediately_and_resets_once(state, clock) -> None:
    clock.now = SUNDAY_RESET
    _seed(state, "a")
    commits: list[list[Task]] = []
    state.store.subscribe(commits.append)

    runner = asyncio.create_task(run_reset_scheduler(state, interval_seconds=0.01))

    await asyncio.sleep(0.05)
    # Same minute, new task: must not be cleared again.
    with state.lock:
        state.store.add("added during reset minute")
    await asyncio.sleep(0.05)

    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert [t.text for t in state.store.tasks()] == ["added during reset minute"]
    assert sum(1 for c in commits if c == []) == 1


@pytest.mark.asyncio
async def test_scheduler_ignores_other_times(state, clock) -> None:
    clock.now = SUNDAY_RESET - timedelta(minutes=1)
    _seed(state, "a")

    runner = asyncio.create_task(run_reset_scheduler(state, interval_seconds=0.01))
    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert len(state.store) == 1


@pytest.mark.asyncio
async def test_scheduler_fires_again_next_week(state, clock) -> None:
    clock.now = SUNDAY_RESET
    runner = asyncio.create_task(run_reset_scheduler(state, interval_seconds=0.01))
    await asyncio.sleep(0.03)

    clock.advance(days=1)
    _seed(state, "next week task")
    await asyncio.sleep(0.03)
    assert len(state.store) == 1

    clock.now = SUNDAY_RESET + timedelta(days=7)
    await asyncio.sleep(0.03)

    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert len(state.store) == 0


@pytest.mark.asyncio
async def test_scheduler_calls_on_reset_once_per_reset(state, clock) -> None:
    clock.now = SUNDAY_RESET
    _seed(state, "a")
    resets: list[int] = []

    runner = asyncio.create_task(
        run_reset_scheduler(state, interval_seconds=0.01, on_reset=lambda: resets.append(len(state.store)))
    )
    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert resets == [0]


def test_background_runner_stops_and_joins(state, clock) -> None:
    clock.now = SUNDAY_RESET
    _seed(state, "a")

    runner = start_reset_in_background(state, interval_seconds=0.01)
    assert runner is not None

    deadline = time.monotonic() + 2.0
    while len(state.store) and time.monotonic() < deadline:
        time.sleep(0.01)

    runner.stop()
    runner.join(timeout=2.0)

    assert len(state.store) == 0
    assert not runner.is_alive()


# ---- catch-up reset ----


def _stored(*created: datetime) -> InMemoryKeyValueStore:
    kv = InMemoryKeyValueStore()
    TaskPersistence(kv).save(
        [Task(id=i + 1, text=f"t{i}", completed=False, created_at=c) for i, c in enumerate(created)]
    )
    return kv


def test_catch_up_clears_tasks_from_previous_week(settings, celebration) -> None:
    clock = FakeClock(MONDAY)
    kv = _stored(datetime(2026, 10, 16, 12, 0))  # previous Friday
    settings.catch_up_reset = True

    state = create_initial_state(settings=settings, kv=kv, celebration=celebration, clock=clock)

    assert len(state.store) == 0
    assert kv.get("tasks") == "[]"


def test_catch_up_handles_utc_timestamps(settings, celebration) -> None:
    kv = InMemoryKeyValueStore(
        {
            "tasks": '[{"id": 1729000000000, "text": "legacy", "completed": false, '
            '"createdAt": "2026-10-16T12:00:00.000Z"}]'
        }
    )
    settings.catch_up_reset = True

    state = create_initial_state(settings=settings, kv=kv, celebration=celebration, clock=FakeClock(MONDAY))

    assert len(state.store) == 0
    assert kv.get("tasks") == "[]"


def test_catch_up_keeps_this_weeks_tasks(settings, celebration) -> None:
    clock = FakeClock(MONDAY)
    kv = _stored(datetime(2026, 10, 18, 0, 0), datetime(2026, 10, 19, 8, 0))
    settings.catch_up_reset = True

    state = create_initial_state(settings=settings, kv=kv, celebration=celebration, clock=clock)

    assert len(state.store) == 2


def test_catch_up_disabled_by_default(settings, celebration) -> None:
    kv = _stored(datetime(2026, 10, 1, 12, 0))

    state = create_initial_state(settings=settings, kv=kv, celebration=celebration, clock=FakeClock(MONDAY))

    assert len(state.store) == 1


def test_apply_catch_up_reset_noop_on_empty(state) -> None:
    assert apply_catch_up_reset(state, MONDAY) is False
