# src/weekboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs:
- the weekly reset loop in a background thread,
- the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop, show_reset
from ..logging_setup import level_from_name, setup_logging
from ..tasks.reset_scheduler import start_reset_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # The file always gets DEBUG; LOG_LEVEL only moves the stderr threshold.
    log_file = setup_logging(log_dir=settings.data_dir, console_level=level_from_name(settings.log_level))

    logger.info("Starting %s (log=%s)...", settings.app_name, log_file)

    state = create_initial_state(settings=settings)

    reset_runner = start_reset_in_background(
        state,
        interval_seconds=settings.reset_check_interval_seconds,
        on_reset=lambda: show_reset(state),
    )

    try:
        run_console_loop(state)
    finally:
        if reset_runner is not None:
            reset_runner.stop()
            reset_runner.join(timeout=5.0)
        logger.info("Bye.")
        print("Goodbye.")


if __name__ == "__main__":
    main()
