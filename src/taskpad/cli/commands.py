# src/taskpad/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import sys
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..errors import TaskIndexError
from ..render import render_tasks

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

CONFIRM_WORDS = ("yes", "y")


class CommandRegistry:
    """Simple slash-command registry used by the console front-end (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw: bool = False,
    ) -> None:
        """raw=True hands the handler the rest of the line, unsplit, as args[0]."""
        aliases = aliases or []
        key = name.lower()
        self._help[key] = help_text
        names = [key, *(a.lower() for a in aliases)]
        for n in names:
            self._handlers[n] = handler
        if raw:
            self._raw.update(names)

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

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        if name in self._raw:
            args = [rest] if rest else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)

            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskIndexError as e:
            logger.debug("Command /%s rejected: %s", name, e)
            return f"No task #{e.index + 1}. {_count_hint(state)}"

    def build_help(self) -> str:
        lines = ["Available commands:", "  <text> - add a task"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _count_hint(state: AppState) -> str:
    n = state.tasks.total_count
    if n == 0:
        return "The list is empty."
    return f"Use a number from 1 to {n}."


def _parse_index(args: list[str]) -> int | None:
    """User-facing numbers are 1-based; returns the 0-based index or None if unparsable."""
    if not args:
        return None
    try:
        number = int(args[0].lstrip("#"))
    except ValueError:
        return None
    if number < 1:
        return None
    return number - 1


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    settings = state.settings
    return render_tasks(
        state.tasks.tasks,
        is_dark=state.theme.is_dark,
        color=bool(getattr(settings, "color_enabled", False)) and sys.stdout.isatty(),
        app_name=str(getattr(settings, "app_name", "Task Manager")),
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    text = args[0] if args else ""
    if not state.tasks.add(text):
        return "Nothing to add: the task text is empty."
    return f"Added: {state.tasks.get(0).title}"


def _set_completed(state: AppState, args: list[str], value: bool | None, usage: str) -> str:
    index = _parse_index(args)
    if index is None:
        return usage
    task = state.tasks.get(index)
    if value is None:
        value = not task.completed
    state.tasks.toggle_completed(index, value)
    verb = "Completed" if value else "Reopened"
    return f"{verb}: {task.title}"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, None, "Usage: /toggle N")


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, True, "Usage: /done N")


def cmd_undo(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, False, "Usage: /undo N")


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /del N        -> ask for confirmation (unless confirmation is disabled)
    /del N yes    -> delete task N
    """
    index = _parse_index(args)
    if index is None:
        return "Usage: /del N [yes]"

    task = state.tasks.get(index)
    confirmed = len(args) > 1 and args[1].lower() in CONFIRM_WORDS
    if getattr(state.settings, "confirm_delete", True) and not confirmed:
        return f'Delete task #{index + 1} "{task.title}"? Repeat as /del {index + 1} yes to confirm.'

    removed = state.tasks.delete(index)
    return f"Deleted: {removed.title}"


def cmd_clear(state: AppState, args: list[str]) -> str:
    if not state.tasks.any_completed:
        return "No completed tasks to clear."
    removed = state.tasks.clear_completed()
    noun = "task" if removed == 1 else "tasks"
    return f"Cleared {removed} completed {noun}."


def cmd_theme(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /theme          -> show current theme
    /theme dark     -> switch to dark
    /theme light    -> switch to light
    /theme toggle   -> flip
    """
    if not args:
        return f"Theme is {state.theme.name}. Use /theme dark, /theme light or /theme toggle."

    arg = args[0].lower()
    if arg in ("dark", "on"):
        target = True
    elif arg in ("light", "off"):
        target = False
    elif arg in ("toggle", "switch"):
        target = not state.theme.is_dark
    else:
        return "Usage: /theme dark | /theme light | /theme toggle."

    if target == state.theme.is_dark:
        return f"Theme is already {state.theme.name}."

    state.theme.set_dark(target)
    if emit:
        with contextlib.suppress(Exception):
            emit(f"[THEME] Switched to {state.theme.name}.")
    return f"Theme set to {state.theme.name}."


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    backend = getattr(settings, "store_backend", "?")
    return (
        "Status:\n"
        f"  Tasks: {state.tasks.total_count} ({state.tasks.completed_count} completed)\n"
        f"  Theme: {state.theme.name}\n"
        f"  Store: {backend}\n"
        f"  Pending saves: {state.tasks.pending_saves + state.theme.pending_saves}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add buy milk.", aliases=["a"], raw=True)
registry.register("toggle", cmd_toggle, help_text="Flip task N between open and completed.", aliases=["t"])
registry.register("done", cmd_done, help_text="Mark task N completed.", aliases=["x"])
registry.register("undo", cmd_undo, help_text="Mark task N open again.")
registry.register("del", cmd_delete, help_text="Delete task N: /del N yes.", aliases=["rm", "delete"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("theme", cmd_theme, help_text="Theme: /theme dark | light | toggle.")
registry.register("status", cmd_status, help_text="Show counts, theme and storage backend.")
