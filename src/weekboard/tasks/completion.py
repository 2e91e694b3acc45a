# src/weekboard/tasks/completion.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.ports import CelebrationTrigger
from .task_models import Task

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CelebrationConfig:
    particle_count: int = 100
    spread: int = 70
    origin_y: float = 0.6


def completion_percentage(tasks: Sequence[Task]) -> int:
    """Rounded (half-up) share of completed tasks; 0 for an empty list."""
    total = len(tasks)
    if total == 0:
        return 0
    done = sum(1 for t in tasks if t.completed)
    # Integer form of floor(100 * done / total + 0.5).
    return (200 * done + total) // (2 * total)


def completion_fingerprint(tasks: Sequence[Task]) -> str:
    return ",".join(str(t.id) for t in tasks)


class CelebrationNotifier:
    """
    Edge-triggered celebration gate.

    Fires the trigger once per distinct fully-completed task set. Dropping below
    100% forgets the last fingerprint, so un-checking and re-checking fires again.
    """

    def __init__(
        self,
        trigger: CelebrationTrigger,
        config: CelebrationConfig | None = None,
    ) -> None:
        self._trigger = trigger
        self._config = config or CelebrationConfig()
        self._last_fired: str | None = None

    @property
    def last_fired(self) -> str | None:
        return self._last_fired

    def observe(self, tasks: Sequence[Task]) -> bool:
        """Return True if this observation fired the celebration."""
        if not tasks or completion_percentage(tasks) < 100:
            self._last_fired = None
            return False

        fingerprint = completion_fingerprint(tasks)
        if fingerprint == self._last_fired:
            return False

        self._last_fired = fingerprint
        try:
            self._trigger(self._config)
        except Exception:
            logger.exception("Celebration trigger failed")
        logger.info("All %d tasks completed; celebration fired", len(tasks))
        return True
