# src/weekboard/tasks/reset_scheduler.py

from __future__ import annotations

"""
Weekly reset scheduler.

A small polling loop that:
- checks the clock immediately, then every interval_seconds,
- clears the task list when the Sunday 00:00 minute is observed.

Persistence of the cleared list is done by the store observer, not here.
The loop is a coroutine; it runs in its own thread so the blocking console REPL
can keep the main thread.
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import Clock
from ..core.state import AppState
from .weekly_policy import last_reset_boundary, reset_due

logger = logging.getLogger(__name__)


def _minute_key(now: datetime) -> datetime:
    return now.replace(second=0, microsecond=0)


def apply_weekly_reset(state: AppState, now: datetime) -> bool:
    """Clear all tasks if `now` is the reset minute. Returns True when cleared."""
    if not reset_due(now):
        return False
    with state.lock:
        count = len(state.store)
        state.store.clear_all()
        state.notifier.observe(state.store.tasks())
    logger.warning("Weekly reset at %s: cleared %d tasks", now.isoformat(timespec="minutes"), count)
    return True


def apply_catch_up_reset(state: AppState, now: datetime) -> bool:
    """
    Startup-only reset for a missed Sunday 00:00.

    Clears when any task was created before the most recent reset boundary.
    """
    boundary = last_reset_boundary(now)
    with state.lock:
        stale = [t for t in state.store.tasks() if t.created_at < boundary]
        if not stale:
            return False
        state.store.clear_all()
    logger.warning(
        "Catch-up reset: %d tasks predate %s; list cleared",
        len(stale),
        boundary.isoformat(timespec="minutes"),
    )
    return True


async def run_reset_scheduler(
        state: AppState,
        *,
        interval_seconds: float = 60.0,
        clock: Clock | None = None,
        on_reset: Callable[[], None] | None = None,
) -> None:
    """
    Simple polling scheduler.

    The reset fires at most once per reset minute, even if the interval is short
    enough to observe the same minute several times.

    `on_reset` runs after each reset, e.g. to redraw a waiting console.

    To stop the scheduler, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    now_fn: Clock = clock or state.clock
    fired_minute: datetime | None = None

    while True:
        try:
            now = now_fn()
            minute = _minute_key(now)
            if minute != fired_minute and apply_weekly_reset(state, now):
                fired_minute = minute
                if on_reset is not None:
                    on_reset()
        except Exception:
            logger.exception("Weekly reset check failed")

        await asyncio.sleep(sleep_s)


@dataclass
class ResetBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    task: asyncio.Task

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.task.cancel)
        except RuntimeError:
            # Loop already closed.
            logger.debug("Reset loop already stopped.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)

    def is_alive(self) -> bool:
        return self.thread.is_alive()


def start_reset_in_background(
        state: AppState,
        *,
        interval_seconds: float = 60.0,
        clock: Clock | None = None,
        on_reset: Callable[[], None] | None = None,
) -> ResetBackgroundRunner | None:
    """
    Start the reset loop in a daemon thread with its own event loop.

    Returns None if the thread failed to initialize.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        task = loop.create_task(
            run_reset_scheduler(state, interval_seconds=interval_seconds, clock=clock, on_reset=on_reset)
        )

        holder["loop"] = loop
        holder["task"] = task
        ready.set()

        try:
            with contextlib.suppress(asyncio.CancelledError):
                loop.run_until_complete(task)
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="weekboard-reset", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    task = holder.get("task")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(task, asyncio.Task):
        logger.error("Reset thread did not initialize properly.")
        return None

    logger.info("Reset scheduler started (interval=%ss).", interval_seconds)
    return ResetBackgroundRunner(thread=t, loop=loop, task=task)
