# src/taskpad/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the stored theme and task list,
then runs the console front-end until EOF, /exit or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state: AppState) -> None:
    """Best-effort shutdown: wait for in-flight saves, then release the store."""
    try:
        await state.flush()
    except Exception:
        logger.exception("Failed to flush pending saves.")

    try:
        state.store.close()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)


async def run_app(state: AppState) -> None:
    try:
        await state.load()
        await run_console_loop(state)
    finally:
        await _shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_dir = getattr(settings, "data_dir", ".local/taskpad")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "taskpad"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        asyncio.run(run_app(state))
    except KeyboardInterrupt:
        print()
        logger.info("Interrupted.")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
