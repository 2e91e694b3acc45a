# src/weekboard/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from .console_render import render_board

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

CLEAR_SCREEN = "\033[H\033[2J"


def handle_line(
    state: AppState,
    line: str,
    emit: OutputFn | None = None,
    *,
    celebrate: bool = True,
) -> str | None:
    """
    Apply one line of user input to the state.

    - "/cmd args" goes to the command registry
    - plain text saves the open edit session, or adds a task otherwise
    The celebration gate is evaluated after every line unless `celebrate` is
    False; the console loop checks it itself once the board is on screen.
    """
    with state.lock:
        response = command_registry.handle(state, line, emit=emit)
        if response is None:
            if state.store.edit_session is not None:
                if state.store.save_edit(line):
                    response = "Task updated."
                else:
                    response = "Text cannot be blank. Type new text, or /cancel."
            else:
                state.store.add(line)
        if celebrate:
            state.notifier.observe(state.store.tasks())
    return response


def render(state: AppState) -> str:
    with state.lock:
        tasks = state.store.tasks()
        editing = state.store.edit_session
    settings = state.settings
    return render_board(
        tasks,
        state.clock(),
        title=str(getattr(settings, "app_name", "weekboard")),
        editing=editing,
        color_enabled=bool(getattr(settings, "console_color", True)),
    )


def show_reset(state: AppState, *, output_fn: OutputFn = print, clear_screen: bool = True) -> None:
    """Redraw the board after the background reset; the prompt is still waiting."""
    if clear_screen:
        output_fn(CLEAR_SCREEN)
    output_fn(render(state))
    output_fn("\nNew week: the list was cleared. Type a task to start again.")


def run_console_loop(
    state: AppState,
    *,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
    clear_screen: bool = True,
) -> None:
    logger.info("Console started with %d tasks.", len(state.store))
    output_fn("Type a task and press Enter to add it. Use /help for commands, /exit to quit.\n")

    message: str | None = None
    while True:
        if clear_screen:
            output_fn(CLEAR_SCREEN)
        output_fn(render(state))
        if message:
            output_fn(f"\n{message}")
        message = None

        # After the redraw, so the burst is not wiped by the next clear.
        # A fully completed list loaded from disk celebrates on the first pass.
        with state.lock:
            state.notifier.observe(state.store.tasks())

        prompt = "\nedit> " if state.store.edit_session is not None else "\n> "
        try:
            user_input = input_fn(prompt).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output_fn("")
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input and state.store.edit_session is None:
            continue

        try:
            message = handle_line(state, user_input, emit=output_fn, celebrate=False)
        except Exception:
            logger.exception("Command handler crashed.")
            message = "Internal error while handling a command."

    logger.info("Console finished.")
