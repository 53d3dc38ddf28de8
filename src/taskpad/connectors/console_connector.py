# src/taskpad/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable

from ..cli.commands import cmd_list
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "> "
EXIT_COMMANDS = ("/exit", "/quit", "/q")

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]


class _LineReader:
    """
    Reads stdin lines in a daemon thread and hands them to the event loop.

    The thread only prompts after the loop asked for the next line, so replies and the
    prompt never interleave. None in the queue means end of input.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, input_func: InputFunc) -> None:
        self._loop = loop
        self._input = input_func
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._wanted = threading.Event()
        self._thread = threading.Thread(target=self._run, name="taskpad-stdin", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _put(self, item: str | None) -> None:
        self._loop.call_soon_threadsafe(self._queue.put_nowait, item)

    def _run(self) -> None:
        while True:
            self._wanted.wait()
            self._wanted.clear()
            try:
                line = self._input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self._put(None)
                return
            except Exception:
                logger.exception("Console input failed.")
                self._put(None)
                return
            self._put(line)

    async def next_line(self) -> str | None:
        self._wanted.set()
        return await self._queue.get()


async def run_console_loop(
    state: AppState,
    *,
    input_func: InputFunc | None = None,
    output: OutputFunc | None = None,
) -> None:
    """
    Interactive front-end: plain text adds a task, /commands do the rest.

    The list is redrawn whenever the task list or theme reports a change.
    """
    input_func = input_func or input
    output = output or print

    if not state.loaded:
        # Controls are only shown once the initial load is done.
        await state.load()

    logger.info("Console connector started (tasks=%d).", state.tasks.total_count)

    dirty = False

    def _mark_dirty() -> None:
        nonlocal dirty
        dirty = True

    state.tasks.subscribe(_mark_dirty)
    state.theme.subscribe(_mark_dirty)

    def emit(text: str) -> None:
        output(text)

    output(cmd_list(state, []))
    output("\nType a task to add it. Use /help for commands, /exit to quit.")

    reader = _LineReader(asyncio.get_running_loop(), input_func)
    reader.start()

    try:
        while True:
            raw = await reader.next_line()
            if raw is None:
                logger.info("Console EOF received, exiting.")
                break

            user_input = raw.strip()
            if not user_input:
                continue

            if user_input.lower() in EXIT_COMMANDS:
                logger.info("Console exit command received.")
                break

            try:
                response = command_registry.handle(state, user_input, emit=emit)
                if response is None:
                    # Plain text is the "add" action.
                    state.tasks.add(user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response:
                output(response)

            if dirty:
                dirty = False
                output("")
                output(cmd_list(state, []))
    finally:
        state.tasks.unsubscribe(_mark_dirty)
        state.theme.unsubscribe(_mark_dirty)

    logger.info("Console connector finished.")
