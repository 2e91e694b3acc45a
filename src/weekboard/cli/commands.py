# src/weekboard/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.completion import completion_percentage
from ..tasks.weekly_policy import format_countdown, next_reset_at, urgent

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/add, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Text without a leading / adds a task (or saves the edit in progress).")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_id(state: AppState, ref: str) -> int | None:
    """
    Turn a user reference into a task id.

    "3"   -> id of the 3rd task in list order
    "#id" -> that id, if present
    """
    ref = ref.strip().rstrip(".")
    tasks = state.store.tasks()
    if ref.startswith("#"):
        raw = ref[1:]
        if not raw.isdigit():
            return None
        tid = int(raw)
        return tid if any(t.id == tid for t in tasks) else None
    if not ref.isdigit():
        return None
    idx = int(ref) - 1
    if idx < 0 or idx >= len(tasks):
        return None
    return tasks[idx].id


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task = state.store.add(" ".join(args))
    if task is None:
        return "Usage: /add <text> (text cannot be blank)."
    return f"Added: {task.text}"


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /done <n>"
    tid = resolve_task_id(state, args[0])
    if tid is None or not state.store.toggle(tid):
        return f"No task {args[0]}."
    task = state.store.get(tid)
    mark = "done" if task is not None and task.completed else "not done"
    return f"Marked {mark}: {task.text if task else tid}"


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /rm <n>"
    tid = resolve_task_id(state, args[0])
    if tid is None:
        return f"No task {args[0]}."
    task = state.store.get(tid)
    state.store.delete(tid)
    return f"Removed: {task.text if task else tid}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit <n>         -> start editing, then type the new text (or /save, /cancel)
    /edit <n> <text>  -> replace the text in one step
    """
    if not args:
        return "Usage: /edit <n> [new text]"
    tid = resolve_task_id(state, args[0])
    if tid is None:
        return f"No task {args[0]}."

    if len(args) > 1:
        if not state.store.edit(tid, " ".join(args[1:])):
            return "Text cannot be blank."
        session = state.store.edit_session
        if session is not None and session.task_id == tid:
            state.store.cancel_edit()
        return "Task updated."

    session = state.store.begin_edit(tid)
    if session is None:
        return f"No task {args[0]}."
    return (
        f"Editing: {session.draft}\n"
        "Type the new text and press Enter to save, /save to keep it, /cancel to abort."
    )


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.store.edit_session is None:
        return "Nothing is being edited."
    draft = " ".join(args) if args else None
    if not state.store.save_edit(draft):
        return "Text cannot be blank. Type new text, or /cancel."
    return "Task updated."


def cmd_cancel(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.store.edit_session is None:
        return "Nothing is being edited."
    state.store.cancel_edit()
    return "Edit cancelled."


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    # The console re-renders the board after every command.
    return ""


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    now = state.clock()
    tasks = state.store.tasks()
    left = format_countdown(next_reset_at(now) - now)
    storage = getattr(state.settings, "storage_path", "(memory)")
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({completion_percentage(tasks)}% done)\n"
        f"  Urgent: {'YES' if urgent(now) else 'no'}\n"
        f"  Next reset: {next_reset_at(now):%a %Y-%m-%d %H:%M} (in {left})\n"
        f"  Storage: {storage}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle", "x"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> [text].", aliases=["e"])
registry.register("save", cmd_save, help_text="Save the edit in progress: /save [text].")
registry.register("cancel", cmd_cancel, help_text="Abort the edit in progress.", aliases=["esc"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del", "delete"])
registry.register("list", cmd_list, help_text="Redraw the board.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show progress, urgency and next reset time.")
