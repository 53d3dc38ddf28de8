# src/taskpad/render.py

"""Plain-text rendering of the task screen.

Two palettes (light, dark) of ANSI styles; the theme preference picks one.
With color disabled every style is the empty string, so output is plain text.
"""

from __future__ import annotations

from dataclasses import dataclass

from .tasks.task_models import Task

EMPTY_TEXT = "No tasks yet - add one above!"


def _code(part: str) -> str:
    return f"\033[{part}m"


RESET = _code("0")


@dataclass(frozen=True, slots=True)
class Palette:
    title: str
    summary: str
    index: str
    open_task: str
    done_task: str
    empty: str


LIGHT = Palette(
    title=_code("1;38;5;61"),  # bold indigo
    summary=_code("38;5;240"),
    index=_code("38;5;61"),
    open_task=_code("38;5;16"),
    done_task=_code("2;9;38;5;246"),  # dim + strikethrough
    empty=_code("3;38;5;244"),
)

DARK = Palette(
    title=_code("1;38;5;147"),  # bold light indigo
    summary=_code("38;5;250"),
    index=_code("38;5;147"),
    open_task=_code("38;5;255"),
    done_task=_code("2;9;38;5;242"),
    empty=_code("3;38;5;245"),
)


def palette_for(is_dark: bool) -> Palette:
    return DARK if is_dark else LIGHT


def _paint(text: str, style: str, enabled: bool) -> str:
    if not enabled or not style:
        return text
    return f"{style}{text}{RESET}"


def summary_line(total: int, completed: int) -> str:
    noun = "task" if total == 1 else "tasks"
    return f"{total} {noun}  {completed} completed"


def render_tasks(
    tasks: list[Task],
    *,
    is_dark: bool = False,
    color: bool = True,
    app_name: str = "Task Manager",
) -> str:
    """Render the whole screen. Indices shown to the user are 1-based."""
    pal = palette_for(is_dark)
    completed = sum(1 for t in tasks if t.completed)
    theme_name = "dark" if is_dark else "light"

    lines = [
        _paint(f"{app_name} ({theme_name})", pal.title, color),
        _paint(summary_line(len(tasks), completed), pal.summary, color),
        "",
    ]

    if not tasks:
        lines.append(_paint(EMPTY_TEXT, pal.empty, color))
        return "\n".join(lines)

    width = len(str(len(tasks)))
    for i, task in enumerate(tasks, start=1):
        mark = "[x]" if task.completed else "[ ]"
        style = pal.done_task if task.completed else pal.open_task
        num = _paint(f"{i:>{width}}.", pal.index, color)
        lines.append(f"{num} {mark} {_paint(task.title, style, color)}")

    return "\n".join(lines)
