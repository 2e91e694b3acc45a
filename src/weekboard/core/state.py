# src/weekboard/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime

from ..tasks.completion import CelebrationNotifier
from ..tasks.persistence import TaskPersistence
from ..tasks.task_store import TaskStore
from .ports import Clock


@dataclass
class AppState:
    """
    Runtime state shared by the console loop and the background reset loop.

    Every access to `store` from either thread must hold `lock`; a mutation and the
    persistence write it triggers then run as one step.
    """

    settings: object

    store: TaskStore
    persistence: TaskPersistence
    notifier: CelebrationNotifier

    clock: Clock = datetime.now
    lock: threading.RLock = field(default_factory=threading.RLock)
