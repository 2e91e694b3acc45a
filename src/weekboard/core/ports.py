# src/weekboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage / celebration / time sources swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.completion import CelebrationConfig
    from ..tasks.task_models import Task

Clock = Callable[[], datetime]
# Local wall-clock provider; polled, never pushed.

TaskObserver = Callable[[list["Task"]], None]
# Called with a snapshot of the collection after each committed mutation.


class KeyValueStore(Protocol):
    """Opaque string store (the local-storage slot)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class CelebrationTrigger(Protocol):
    """Fire-and-forget celebration effect; return value is ignored."""

    def __call__(self, config: CelebrationConfig) -> None: ...
