# src/weekboard/connectors/console_render.py

"""Plain-text rendering of the weekly board (progress bar, task lines, footer)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..tasks.completion import completion_percentage
from ..tasks.task_models import EditSession, Task
from ..tasks.weekly_policy import format_countdown, next_reset_at, urgent

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
MAGENTA = "\033[35m"

BAR_WIDTH = 30
EMPTY_MESSAGE = "No tasks yet. Add one to get started!"


def color(text: str, *styles: str, enabled: bool = True) -> str:
    if not enabled or not styles:
        return text
    return "".join(styles) + text + RESET


def progress_bar(percent: int, width: int = BAR_WIDTH) -> str:
    filled = width * max(0, min(100, percent)) // 100
    return "[" + "#" * filled + "-" * (width - filled) + f"] {percent:3d}%"


def task_line(
    index: int,
    task: Task,
    *,
    urgent_mode: bool,
    editing: EditSession | None = None,
    color_enabled: bool = True,
) -> str:
    box = "[x]" if task.completed else "[ ]"
    text = task.text
    if editing is not None and editing.task_id == task.id:
        return f"{index:>3}. {box} " + color(f"(editing) {editing.draft}", BOLD, enabled=color_enabled)

    if task.completed:
        return f"{index:>3}. " + color(f"{box} {text}", GREEN, DIM, enabled=color_enabled)
    if urgent_mode:
        return f"{index:>3}. " + color(f"{box} {text} !", RED, BOLD, enabled=color_enabled)
    return f"{index:>3}. {box} {text}"


def render_board(
    tasks: Sequence[Task],
    now: datetime,
    *,
    title: str = "This week",
    editing: EditSession | None = None,
    color_enabled: bool = True,
) -> str:
    urgent_mode = urgent(now)
    percent = completion_percentage(tasks)

    lines = [
        color(progress_bar(percent), MAGENTA, enabled=color_enabled),
        color(title, BOLD, enabled=color_enabled),
    ]
    if urgent_mode:
        left = format_countdown(next_reset_at(now) - now)
        lines.append(color(f"Reset in {left}: finish your tasks!", RED, BOLD, enabled=color_enabled))
    lines.append("")

    if not tasks:
        lines.append(color(EMPTY_MESSAGE, DIM, enabled=color_enabled))
        return "\n".join(lines)

    for i, task in enumerate(tasks, start=1):
        lines.append(
            task_line(i, task, urgent_mode=urgent_mode, editing=editing, color_enabled=color_enabled)
        )

    done = sum(1 for t in tasks if t.completed)
    lines.append("")
    lines.append(f"{done} of {len(tasks)} tasks completed")
    return "\n".join(lines)
